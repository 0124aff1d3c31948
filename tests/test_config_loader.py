"""
Unit tests for config_loader.
"""

import json
import logging

import pytest

from filtersplit import config_loader
from filtersplit.models.flags import TraverseFlags


@pytest.fixture
def config_dir(tmp_path):
    path = tmp_path / "config"
    path.mkdir()
    return path


def _write(config_dir, payload):
    (config_dir / "splitter.json").write_text(json.dumps(payload), encoding="utf-8")


def test_load_traverse_flags(config_dir):
    _write(config_dir, {"traverse_flags": {"subFilters": False}})

    flags = config_loader.load_traverse_flags(config_dir=str(config_dir))

    assert flags == TraverseFlags(cross_filters=False, sub_filters=False)


def test_missing_section_uses_defaults(config_dir):
    _write(config_dir, {})
    assert config_loader.load_traverse_flags(config_dir=str(config_dir)) == TraverseFlags()


def test_missing_file_warns_and_uses_defaults(tmp_path, caplog):
    with caplog.at_level(logging.WARNING, logger="filtersplit.config_loader"):
        flags = config_loader.load_traverse_flags(config_dir=str(tmp_path), strict=False)

    assert flags == TraverseFlags()
    assert "not found" in caplog.text


def test_missing_file_strict_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        config_loader.load_splitter_config(config_dir=str(tmp_path), strict=True)


def test_malformed_file_strict_raises(config_dir):
    (config_dir / "splitter.json").write_text("{not json", encoding="utf-8")

    assert config_loader.load_splitter_config(config_dir=str(config_dir), strict=False) == {}
    with pytest.raises(ValueError, match="Malformed"):
        config_loader.load_splitter_config(config_dir=str(config_dir), strict=True)


def test_non_object_section_strict_raises(config_dir):
    _write(config_dir, {"traverse_flags": [1, 2]})

    assert config_loader.load_traverse_flags(config_dir=str(config_dir), strict=False) == TraverseFlags()
    with pytest.raises(ValueError, match="traverse_flags"):
        config_loader.load_traverse_flags(config_dir=str(config_dir), strict=True)


def test_env_config_dir_and_strict(config_dir, tmp_path, monkeypatch):
    _write(config_dir, {"traverse_flags": {"crossFilters": True}})
    monkeypatch.setenv(config_loader.CONFIG_DIR_ENV, str(config_dir))

    assert config_loader.load_traverse_flags().cross_filters is True

    monkeypatch.setenv(config_loader.CONFIG_DIR_ENV, str(tmp_path / "missing"))
    monkeypatch.setenv(config_loader.STRICT_ENV, "yes")
    with pytest.raises(FileNotFoundError):
        config_loader.load_splitter_config()


def test_shipped_config_matches_defaults():
    flags = config_loader.load_traverse_flags(config_dir=str(config_loader.DEFAULT_CONFIG_DIR))
    assert flags == TraverseFlags()
