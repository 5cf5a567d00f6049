# In nerkit/gazetteer.py
"""Gazetteer, distributional and FreeBase features.

All lookups go through a ``LexiconStore``. Keys missing from a lexicon
produce the extractor's own sentinel; the sentinels differ between
extractors ('false', 'NA', 'none') and must stay that way because a
trained model only knows the exact strings it was trained with.
"""

import dataclasses
import logging

from nerkit.feature_extractor import FeatureExtractor
from nerkit.structures import Feature

logger = logging.getLogger(__name__)

NA = 'NA'
FALSE = 'false'
NONE = 'none'


class LexiconLookup(FeatureExtractor):
    """Looks the token text up in one lexicon of the store."""

    def __init__(self, name, store, lexicon, default):
        self.name = name
        self.store = store
        self.lexicon = lexicon
        self.default = default

    def lookup(self, text):
        return self.store.lookup(self.lexicon, text, self.default)

    def apply(self, sentence, index):
        text = sentence.tokens[index].text
        if not text:
            return [Feature(self.name, self.default)]
        return [Feature(self.name, self.lookup(text))]


class SuffixClass(LexiconLookup):
    """Class of the longest token suffix found in the suffix-class list."""

    def lookup(self, text):
        lexicon = self.store.get(self.lexicon)
        for start in range(len(text)):
            value = lexicon.get(text[start:])
            if value is not None:
                return value
        return self.default


def first_names(store):
    return LexiconLookup('DBVorNamen', store, 'first_names', FALSE)


def last_names(store):
    return LexiconLookup('DBNachNamen', store, 'last_names', FALSE)


def dbpedia_persons(store):
    return LexiconLookup('DBPerson', store, 'dbpedia_persons', FALSE)


def dbpedia_locations(store):
    return LexiconLookup('DBLocation', store, 'dbpedia_locations', FALSE)


def suffix_classes(store):
    return SuffixClass('SuffixClass', store, 'suffix_classes', NA)


def clark_pos_induction(store):
    return LexiconLookup('ClarkPosInduction', store, 'clark', NA)


def similar_word(store, column):
    return LexiconLookup(f'SIMWO{column}', store, f'similar_word_{column}', NA)


def topic_class(store, granularity):
    return LexiconLookup(f'TopicClass{granularity}', store, f'topic_class_{granularity}', NA)


def template_lookup(store):
    return LexiconLookup('Lookup', store, 'lookup', NA)


def template_list(store):
    return LexiconLookup('ListMember', store, 'list', FALSE)


# --- FreeBase ---

class FreeBaseMatcher:
    """
    Tags every token of a sentence with the FreeBase entity type of the
    longest n-gram (5 words down to 1) that contains it.

    The tag is 'B-<type>' when the n-gram starts with the token and
    'I-<type>' otherwise; tokens without any matching n-gram get 'none'.
    N-grams are space-joined token texts; containment is plain substring
    containment.
    """

    def __init__(self, store, lexicon='freebase', max_length=5):
        self.store = store
        self.lexicon = lexicon
        self.max_length = max_length

    def match(self, words):
        lexicon = self.store.get(self.lexicon)
        ngrams = {
            length: [' '.join(words[i:i + length]) for i in range(len(words) - length + 1)]
            for length in range(1, self.max_length + 1)
        }
        return [self._tag(word, ngrams, lexicon) for word in words]

    def _tag(self, word, ngrams, lexicon):
        for length in range(self.max_length, 0, -1):
            for ngram in ngrams[length]:
                if word not in ngram:
                    continue
                entity_type = lexicon.get(ngram)
                if entity_type is not None:
                    prefix = 'B-' if ngram.startswith(word) else 'I-'
                    return prefix + entity_type
        return NONE

    def tag_sentence(self, tokens):
        """Returns copies of ``tokens`` with their ``freebase`` field filled in."""
        tags = self.match([token.text for token in tokens])
        logger.debug("FreeBase tags: %s", tags)
        return [dataclasses.replace(token, freebase=tag) for token, tag in zip(tokens, tags)]


class FreeBaseFeature(FeatureExtractor):
    """Emits the FreeBase tag the reader stored on the token."""
    name = 'FreeBase'

    def apply(self, sentence, index):
        tag = sentence.tokens[index].freebase
        return [Feature(self.name, tag if tag is not None else NONE)]
