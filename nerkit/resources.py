# In nerkit/resources.py
"""Lexicon resources packed into a single zip archive.

Each lexicon is a tab-separated text entry in the archive. A
``LexiconStore`` is built once per pipeline and handed to every
extractor that needs a lookup table; each table is read from the
archive the first time it is requested and is read-only afterwards.
"""

import io
import logging
import threading
import zipfile
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType

from nerkit.exceptions import LexiconError

logger = logging.getLogger(__name__)

DEFAULT_ARCHIVE = Path(__file__).resolve().parent / 'data' / 'data.zip'

# Value stored for keys of membership lists (no value column).
PRESENT = 'true'


@dataclass(frozen=True)
class LexiconSpec:
    """Where a lexicon lives in the archive and which column holds its value.

    ``value_column=None`` marks a membership list: every key maps to ``"true"``.
    """
    resource: str
    value_column: int = None


LEXICONS = {
    'freebase': LexiconSpec('freebase_2502.txt3', 1),
    'clark': LexiconSpec('clark10m256', -1),
    'first_names': LexiconSpec('vornameList.txt'),
    'last_names': LexiconSpec('nachnamenList.txt'),
    'dbpedia_persons': LexiconSpec('dbpediaPersonList.txt'),
    'dbpedia_locations': LexiconSpec('dbpediaLocationList.txt'),
    'suffix_classes': LexiconSpec('suffixClassList.txt', 1),
    'similar_word_1': LexiconSpec('200k_2d_wordlists', 1),
    'similar_word_2': LexiconSpec('200k_2d_wordlists', 2),
    'similar_word_3': LexiconSpec('200k_2d_wordlists', 3),
    'similar_word_4': LexiconSpec('200k_2d_wordlists', 4),
    'topic_class_50': LexiconSpec('topicCluster50.txt', 1),
    'topic_class_100': LexiconSpec('topicCluster.txt', 1),
    'topic_class_200': LexiconSpec('topicCluster200.txt', 1),
    'topic_class_500': LexiconSpec('topicCluster500.txt', 1),
    'lookup': LexiconSpec('lookUpList.txt', 1),
    'list': LexiconSpec('binaryList.txt'),
}


class Lexicon(Mapping):
    """Read-only string lookup table.

    ``failed`` is set when the resource could not be loaded; such a
    lexicon is empty, so every lookup falls through to the caller's
    sentinel.
    """

    def __init__(self, name, entries, failed=False):
        self.name = name
        self.failed = failed
        self._entries = MappingProxyType(dict(entries))

    def __getitem__(self, key):
        return self._entries[key]

    def __iter__(self):
        return iter(self._entries)

    def __len__(self):
        return len(self._entries)

    def __repr__(self):
        return f"Lexicon({self.name!r}, entries={len(self)}, failed={self.failed})"


def parse_lexicon_lines(lines, spec):
    """Parses tab-separated rows into a dict according to ``spec``.

    Blank lines are skipped. A row without the value column raises
    ``LexiconError`` naming the resource and the line number.
    """
    entries = {}
    for line_number, line in enumerate(lines, start=1):
        line = line.rstrip('\r\n')
        if not line.strip():
            continue
        fields = line.split('\t')
        key = fields[0]
        if spec.value_column is None:
            entries[key] = PRESENT
            continue

        # -1 means "last column", which still requires a key plus a value.
        required = 2 if spec.value_column < 0 else spec.value_column + 1
        if len(fields) < required:
            raise LexiconError(
                spec.resource,
                f"line {line_number} has {len(fields)} column(s), expected at least {required}",
            )
        entries[key] = fields[spec.value_column]
    return entries


def read_lexicon(archive_path, spec):
    """Reads one lexicon from the archive; the entry name must match exactly."""
    try:
        with zipfile.ZipFile(archive_path) as archive:
            if spec.resource not in archive.namelist():
                raise LexiconError(spec.resource, f"no such entry in archive {archive_path}")
            with archive.open(spec.resource) as raw:
                return parse_lexicon_lines(io.TextIOWrapper(raw, encoding='utf-8'), spec)
    except (OSError, zipfile.BadZipFile, UnicodeDecodeError) as e:
        raise LexiconError(spec.resource, f"cannot read archive {archive_path}: {e}") from e


class LexiconStore:
    """Lazily loads and caches the lexicons of one archive."""

    def __init__(self, archive_path=None, specs=None):
        self.archive_path = Path(archive_path) if archive_path else DEFAULT_ARCHIVE
        self.specs = dict(LEXICONS if specs is None else specs)
        self._lexicons = {}
        self._lock = threading.Lock()

    def get(self, name):
        """Returns the named lexicon, loading it on first use.

        Loading failures are logged once and yield an empty lexicon
        flagged as failed.
        """
        lexicon = self._lexicons.get(name)
        if lexicon is not None:
            return lexicon
        with self._lock:
            if name not in self._lexicons:
                self._lexicons[name] = self._load(name)
            return self._lexicons[name]

    def lookup(self, name, key, default):
        return self.get(name).get(key, default)

    def _load(self, name):
        spec = self.specs[name]
        try:
            entries = read_lexicon(self.archive_path, spec)
        except LexiconError as e:
            logger.error("Could not load lexicon '%s': %s", name, e)
            return Lexicon(name, {}, failed=True)
        logger.info("Loaded lexicon '%s' (%d entries) from %s", name, len(entries), spec.resource)
        return Lexicon(name, entries)
