# In nerkit/config.py
"""Loads the YAML configuration of a training or labeling run.

Example::

    features:
      useCapitalFeature: 1
      usePrefix3Feature: 1
      useFreeBase: 0
    data_archive: /opt/lexicons/data.zip
    crf:
      c1: 0.1
      c2: 0.1
"""

from dataclasses import dataclass, field
from pathlib import Path

import yaml

from nerkit.exceptions import ConfigError

DEFAULT_CRF_PARAMS = {
    'c1': 0.1,
    'c2': 0.1,
    'max_iterations': 100,
    'all_possible_transitions': True,
}


@dataclass
class Config:
    """
    Settings of one run.

    Attributes:
        features: Flat mapping of feature flag to activation value ("1" is active).
        data_archive: Path of the lexicon archive; None selects the bundled one.
        crf: Keyword arguments for the CRF trainer.
    """
    features: dict = field(default_factory=dict)
    data_archive: str = None
    crf: dict = field(default_factory=lambda: dict(DEFAULT_CRF_PARAMS))


def load_config(path="config.yaml"):
    """
    Reads a configuration file.

    Raises:
        FileNotFoundError: If the file does not exist.
        ConfigError: If the YAML is invalid or has the wrong structure.
    """
    config_path = Path(path)
    if not config_path.is_file():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    try:
        with config_path.open('r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Error parsing {config_path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"{config_path}: the root of the configuration must be a mapping")

    features = data.get('features') or {}
    if not isinstance(features, dict):
        raise ConfigError(f"{config_path}: 'features' must be a mapping of flag to value")

    crf_overrides = data.get('crf') or {}
    if not isinstance(crf_overrides, dict):
        raise ConfigError(f"{config_path}: 'crf' must be a mapping of CRF parameters")
    crf = dict(DEFAULT_CRF_PARAMS)
    crf.update(crf_overrides)

    data_archive = data.get('data_archive')
    if data_archive is not None:
        # Relative archive paths are resolved against the configuration file.
        data_archive = str((config_path.parent / data_archive).resolve())

    return Config(features=features, data_archive=data_archive, crf=crf)
