"""Shared fixtures and import path setup for the test suite."""
from __future__ import annotations

import sys
import zipfile
from pathlib import Path

import pytest


def _ensure_project_root_on_path() -> None:
    project_root = Path(__file__).resolve().parents[1]
    if str(project_root) not in sys.path:
        sys.path.insert(0, str(project_root))


_ensure_project_root_on_path()

from nerkit.process_data import read_corpus  # noqa: E402
from nerkit.resources import LexiconStore  # noqa: E402


@pytest.fixture
def make_archive(tmp_path):
    """Builds a zip archive from a mapping of entry name to text."""

    def _make(entries, name="data.zip"):
        path = tmp_path / name
        with zipfile.ZipFile(path, "w") as archive:
            for entry, text in entries.items():
                archive.writestr(entry, text)
        return path

    return _make


@pytest.fixture
def make_store(make_archive):
    def _make(entries):
        return LexiconStore(make_archive(entries))

    return _make


@pytest.fixture
def sentence_of():
    """Turns a list of words into a single Sentence."""

    def _make(*words):
        corpus = "".join(f"{word}\tO\n" for word in words)
        return read_corpus(corpus).sentences[0]

    return _make
