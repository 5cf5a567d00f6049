# In nerkit/exceptions.py


class NerkitError(Exception):
    """Base class for every error raised by nerkit."""


class CorpusFormatError(NerkitError, ValueError):
    """A corpus line could not be parsed into token and label columns."""

    def __init__(self, line_number, line):
        self.line_number = line_number
        self.line = line
        super().__init__(
            f"Line {line_number}: expected at least two tab-separated columns, got {line!r}"
        )


class LexiconError(NerkitError):
    """A bundled lexicon resource is missing or malformed."""

    def __init__(self, resource, message):
        self.resource = resource
        super().__init__(f"{resource}: {message}")


class ConfigError(NerkitError):
    """The configuration file does not have the expected structure."""
