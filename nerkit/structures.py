# In nerkit/structures.py
"""Span and feature containers shared by the reader, the extractors and the CRF code.

All spans are half-open ``[begin, end)`` character offsets into the
reconstructed document text.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple


@dataclass(frozen=True)
class Token:
    begin: int
    end: int
    text: str
    # Sentence-scoped FreeBase tag, filled in by the reader when the sentence closes.
    freebase: Optional[str] = None


@dataclass(frozen=True)
class Sentence:
    begin: int
    end: int
    tokens: Tuple[Token, ...]

    def __len__(self):
        return len(self.tokens)


@dataclass(frozen=True)
class GoldLabel:
    begin: int
    end: int
    label: str


@dataclass(frozen=True)
class NamedEntity:
    begin: int
    end: int
    value: str


@dataclass(frozen=True)
class Feature:
    name: str
    value: str


@dataclass
class Instance:
    """The ordered features of one token plus its outcome when training."""
    features: List[Feature] = field(default_factory=list)
    outcome: Optional[str] = None

    def to_dict(self):
        """Feature dict in the shape sklearn_crfsuite expects for one token."""
        return {feature.name: feature.value for feature in self.features}


@dataclass
class Document:
    text: str
    tokens: List[Token]
    sentences: List[Sentence]
    gold_labels: List[GoldLabel]
    _gold_by_begin: Dict[int, str] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        self._gold_by_begin = {gold.begin: gold.label for gold in self.gold_labels}

    def covered_text(self, span):
        return self.text[span.begin:span.end]

    def labels_for(self, sentence):
        """Gold labels of a sentence's tokens, in token order."""
        return [self._gold_by_begin[token.begin] for token in sentence.tokens]
