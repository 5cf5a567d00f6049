"""Feature extraction and CRF sequence labeling for named-entity recognition."""

__version__ = '0.1.0'
