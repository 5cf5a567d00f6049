# In nerkit/crf_model.py
"""Sentence instances for the CRF, training and labeling.

The sequence learner itself is sklearn_crfsuite's CRF; this module only
turns sentences into per-token feature dicts and back into labels.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path

import joblib
from sklearn_crfsuite import CRF
from tqdm import tqdm

from nerkit.config import DEFAULT_CRF_PARAMS, Config, load_config
from nerkit.evaluation import entity_sequences, evaluate, results_frame, write_results
from nerkit.gazetteer import FreeBaseMatcher
from nerkit.process_data import read_corpus_file
from nerkit.registry import get_features, uses_freebase
from nerkit.resources import LexiconStore
from nerkit.structures import Instance, NamedEntity, Token

logger = logging.getLogger(__name__)


# --- 1. Instances ---

@dataclass(frozen=True)
class ExtractorFailure:
    """An extractor raised while processing one token."""
    extractor: str
    token: Token
    error: Exception


@dataclass
class SentenceInstances:
    instances: list = field(default_factory=list)
    failures: list = field(default_factory=list)


def build_instances(sentence, extractors, gold=None):
    """
    Builds one Instance per token by running every extractor in order.

    ``gold`` holds the token labels when training. An extractor that
    raises contributes no features for that token; the failure is
    logged and returned alongside the instances.
    """
    result = SentenceInstances()
    for index, token in enumerate(sentence.tokens):
        instance = Instance()
        for extractor in extractors:
            try:
                features = extractor.apply(sentence, index)
            except Exception as e:
                logger.warning(
                    "Extractor %s failed on token '%s' [%d, %d): %s",
                    extractor.name, token.text, token.begin, token.end, e,
                )
                result.failures.append(ExtractorFailure(extractor.name, token, e))
                continue
            instance.features.extend(features)
        if gold is not None:
            instance.outcome = gold[index]
        result.instances.append(instance)
    return result


# --- 2. Sequence learner boundary ---

class NERTrainer:
    """Collects training sentences and fits a CRF on them."""

    def __init__(self, **crf_params):
        self.crf_params = dict(DEFAULT_CRF_PARAMS)
        self.crf_params.update(crf_params)
        self.X = []
        self.y = []

    def write(self, instances):
        """Adds one sentence; the sequence is kept whole so transitions can be learned."""
        if any(instance.outcome is None for instance in instances):
            raise ValueError("Every training instance needs an outcome")
        self.X.append([instance.to_dict() for instance in instances])
        self.y.append([instance.outcome for instance in instances])

    def train(self):
        if not self.X:
            raise ValueError("No training sentences were written")
        logger.info("Training CRF on %d sentences", len(self.X))
        crf = CRF(algorithm='lbfgs', **self.crf_params)
        crf.fit(self.X, self.y)
        return crf


def label(instances, model):
    """One predicted label per instance, in order."""
    if not instances:
        return []
    return list(model.predict([[instance.to_dict() for instance in instances]])[0])


def save_model(model, path):
    Path(path).parent.mkdir(parents=True, exist_ok=True)
    joblib.dump(model, path)
    logger.info("Model saved to %s", path)


def load_model(path):
    return joblib.load(path)


# --- 3. Documents ---

class FeaturePipeline:
    """The lexicon store, the active extractors and the FreeBase matcher of one run."""

    def __init__(self, config=None):
        self.config = config if config is not None else Config()
        self.store = LexiconStore(self.config.data_archive)
        self.extractors = get_features(self.config.features, self.store)
        self.freebase = FreeBaseMatcher(self.store) if uses_freebase(self.config.features) else None

    def read(self, path):
        return read_corpus_file(path, freebase=self.freebase)


def write_training_data(document, extractors, trainer):
    """Writes every sentence of a gold document to the trainer; returns the failures."""
    failures = []
    for sentence in tqdm(document.sentences, desc="Extracting training features"):
        result = build_instances(sentence, extractors, gold=document.labels_for(sentence))
        trainer.write(result.instances)
        failures.extend(result.failures)
    return failures


def annotate(document, extractors, model):
    """Labels every token of a document and returns the predicted NamedEntity spans."""
    entities = []
    for sentence in tqdm(document.sentences, desc="Labeling sentences"):
        result = build_instances(sentence, extractors)
        labels = label(result.instances, model)
        for token, value in zip(sentence.tokens, labels):
            entities.append(NamedEntity(token.begin, token.end, value))
    return entities


def train_model(corpus_path, config=None, pipeline=None):
    """Trains a CRF on a gold corpus; pass ``pipeline`` to reuse loaded lexicons."""
    if pipeline is None:
        pipeline = FeaturePipeline(config)
    document = pipeline.read(corpus_path)
    trainer = NERTrainer(**pipeline.config.crf)
    failures = write_training_data(document, pipeline.extractors, trainer)
    if failures:
        logger.warning("%d feature extraction failures while reading %s", len(failures), corpus_path)
    return trainer.train()


def classify_file(corpus_path, model, config=None, pipeline=None):
    if pipeline is None:
        pipeline = FeaturePipeline(config)
    document = pipeline.read(corpus_path)
    return document, annotate(document, pipeline.extractors, model)


# --- 4. Main Execution Block ---
if __name__ == '__main__':
    logging.basicConfig(level=logging.INFO, format='%(asctime)s %(levelname)s %(name)s: %(message)s')

    CONFIG_PATH = 'config.yaml'
    TRAIN_FILE = 'data/train.tsv'
    TEST_FILE = 'data/test.tsv'
    MODEL_PATH = 'saved_models/ner_crf.joblib'
    RESULT_PATH = 'saved_models/res.txt'
    PERFORMANCE_REPORT_PATH = 'saved_models/performance_report.json'

    pipeline = FeaturePipeline(load_config(CONFIG_PATH))

    model = train_model(TRAIN_FILE, pipeline=pipeline)
    save_model(model, MODEL_PATH)

    document, entities = classify_file(TEST_FILE, model, pipeline=pipeline)
    write_results(results_frame(document, entities), RESULT_PATH)

    gold = [document.labels_for(sentence) for sentence in document.sentences]
    scores = evaluate(gold, entity_sequences(document, entities))
    print(scores.pop('report'))
    print(json.dumps(scores, indent=2))
    with open(PERFORMANCE_REPORT_PATH, 'w') as f:
        json.dump(scores, f, indent=4)
