from pathlib import Path

import pytest

from nerkit.config import DEFAULT_CRF_PARAMS, load_config
from nerkit.exceptions import ConfigError
from nerkit.registry import is_active


def test_load_config_reads_features_and_crf(tmp_path: Path) -> None:
    config_path = tmp_path / "config.yaml"
    config_path.write_text(
        """
features:
  useCapitalFeature: 1
  usePrefix3Feature: "1"
  useFreeBase: true
data_archive: lexicons/data.zip
crf:
  c1: 0.5
""".strip(),
        encoding="utf-8",
    )

    cfg = load_config(str(config_path))

    assert is_active(cfg.features, "useCapitalFeature")
    assert is_active(cfg.features, "usePrefix3Feature")
    assert not is_active(cfg.features, "useFreeBase")
    assert cfg.data_archive == str((tmp_path / "lexicons" / "data.zip").resolve())
    assert cfg.crf["c1"] == 0.5
    assert cfg.crf["c2"] == DEFAULT_CRF_PARAMS["c2"]


def test_empty_file_gives_defaults(tmp_path: Path) -> None:
    config_path = tmp_path / "config.yaml"
    config_path.write_text("", encoding="utf-8")

    cfg = load_config(str(config_path))

    assert cfg.features == {}
    assert cfg.data_archive is None
    assert cfg.crf == DEFAULT_CRF_PARAMS


def test_repository_config_loads() -> None:
    cfg = load_config(Path(__file__).resolve().parents[1] / "config.yaml")

    assert is_active(cfg.features, "useCapitalFeature")
    assert cfg.data_archive is None


def test_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_config(str(tmp_path / "missing.yaml"))


def test_non_mapping_root_is_rejected(tmp_path: Path) -> None:
    config_path = tmp_path / "config.yaml"
    config_path.write_text("- not a mapping", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(str(config_path))


def test_features_must_be_a_mapping(tmp_path: Path) -> None:
    config_path = tmp_path / "config.yaml"
    config_path.write_text("features: [usePosition]", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(str(config_path))


def test_invalid_yaml_is_rejected(tmp_path: Path) -> None:
    config_path = tmp_path / "config.yaml"
    config_path.write_text("features: {usePosition: 1", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(str(config_path))
