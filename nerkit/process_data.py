# In nerkit/process_data.py
"""Reading tab-separated NER corpora.

Corpus format: one token per line, columns separated by tabs, the first
column is the token and the last column its label. A blank line ends a
sentence.
"""

import logging
import re
from pathlib import Path

from nerkit.exceptions import CorpusFormatError
from nerkit.structures import Document, GoldLabel, Sentence, Token

logger = logging.getLogger(__name__)

LINE_BREAK = re.compile(r'\r?\n')

# Words and punctuation marks as separate tokens.
TOKEN_PATTERN = re.compile(r"[\w'-]+|[.,!?;:()]|\S+")

OUTSIDE = 'O'


def read_corpus(text, freebase=None):
    """
    Rebuilds the document text of a tagged corpus and its spans.

    Tokens are joined by single spaces and every closed sentence is
    followed by a newline, so 'Angela\\tB-PER\\nMerkel\\tI-PER\\n\\n'
    becomes 'Angela Merkel \\n' with tokens [0, 6) and [7, 13).

    When a ``FreeBaseMatcher`` is given, each sentence is tagged as soon
    as it closes and the tags are stored on its tokens.

    Raises CorpusFormatError for a line with fewer than two columns.
    """
    # A sentence always starts after a blank line.
    first_line_number = 1
    if not text.startswith('\n'):
        text = '\n' + text
        first_line_number = 0

    parts = []
    tokens = []
    sentences = []
    gold_labels = []
    current = []
    cursor = 0

    def close_sentence():
        sentence_tokens = freebase.tag_sentence(current) if freebase is not None else list(current)
        sentence = Sentence(sentence_tokens[0].begin, sentence_tokens[-1].end, tuple(sentence_tokens))
        sentences.append(sentence)
        tokens.extend(sentence_tokens)
        logger.debug("Sentence [%d, %d) with %d tokens", sentence.begin, sentence.end, len(sentence))

    for line_number, line in enumerate(LINE_BREAK.split(text), start=first_line_number):
        if not line.strip():
            if current:
                close_sentence()
                current = []
                parts.append('\n')
                cursor += 1
            continue

        fields = line.split('\t')
        if len(fields) < 2:
            raise CorpusFormatError(line_number, line)
        word, label = fields[0], fields[-1]

        token = Token(cursor, cursor + len(word), word)
        current.append(token)
        gold_labels.append(GoldLabel(token.begin, token.end, label))
        parts.append(word)
        parts.append(' ')
        cursor += len(word) + 1
        logger.debug("Token [%s] %d\t%d %s", word, token.begin, token.end, label)

    if current:
        close_sentence()

    return Document(''.join(parts), tokens, sentences, gold_labels)


def read_corpus_file(path, freebase=None):
    return read_corpus(Path(path).read_text(encoding='utf-8'), freebase=freebase)


def tokenize(sentence_text):
    return TOKEN_PATTERN.findall(sentence_text)


def sentences_to_corpus(lines):
    """
    Converts 'id<TAB>hash<TAB>sentence' lines into the corpus format.

    Every token gets the placeholder label 'O' so the result can be
    labeled by a trained model.
    """
    output = []
    for line_number, line in enumerate(lines, start=1):
        line = line.strip()
        if not line:
            continue
        fields = line.split('\t')
        if len(fields) < 3:
            raise CorpusFormatError(line_number, line)
        for token in tokenize(fields[2]):
            output.append(f"{token}\t{OUTSIDE}\n")
        output.append('\n')
    return ''.join(output)
