# In nerkit/evaluation.py
"""Token-level evaluation of predicted labels and the per-token result file."""

import pandas as pd
from sklearn.metrics import accuracy_score, precision_recall_fscore_support
from sklearn_crfsuite.metrics import flat_classification_report

OUTSIDE = 'O'


def entity_sequences(document, entities):
    """Groups predicted NamedEntity values by sentence, in token order."""
    by_begin = {entity.begin: entity.value for entity in entities}
    return [[by_begin[token.begin] for token in sentence.tokens] for sentence in document.sentences]


def results_frame(document, entities):
    """One row per token: token text, gold label and predicted label."""
    gold = {label.begin: label.label for label in document.gold_labels}
    predicted = {entity.begin: entity.value for entity in entities}
    rows = []
    for token in document.tokens:
        rows.append({
            'token': token.text,
            'gold': gold.get(token.begin, OUTSIDE),
            'predicted': predicted.get(token.begin, OUTSIDE),
        })
    return pd.DataFrame(rows, columns=['token', 'gold', 'predicted'])


def write_results(frame, path):
    """Writes the result table as tab-separated lines without a header."""
    frame.to_csv(path, sep='\t', header=False, index=False)


def evaluate(gold_sequences, predicted_sequences, outside=OUTSIDE):
    """
    Precision, recall and F1 over all entity labels (everything but ``outside``)
    plus overall token accuracy and a per-label report.
    """
    y_true = [label for sentence in gold_sequences for label in sentence]
    y_pred = [label for sentence in predicted_sequences for label in sentence]
    if len(y_true) != len(y_pred):
        raise ValueError(f"Got {len(y_true)} gold labels but {len(y_pred)} predictions")

    labels = sorted((set(y_true) | set(y_pred)) - {outside})
    if labels:
        p, r, f1, _ = precision_recall_fscore_support(
            y_true, y_pred, labels=labels, average='micro', zero_division=0
        )
        report = flat_classification_report(gold_sequences, predicted_sequences, labels=labels, digits=4, zero_division=0)
    else:
        p = r = f1 = 0.0
        report = ''

    return {
        'precision': float(p),
        'recall': float(r),
        'f1_score': float(f1),
        'overall_accuracy': float(accuracy_score(y_true, y_pred)) if y_true else 0.0,
        'report': report,
    }
