"""Tests for data dir bootstrapping."""

from pathlib import Path

from memoire.bootstrap import ensure_data_dir
from memoire.config import load_config
from memoire.models import Config


def test_creates_dir_and_config(tmp_path: Path):
    data_dir = tmp_path / "nested" / "memoire"
    created = ensure_data_dir(data_dir)
    assert created == ["config.yaml"]
    assert (data_dir / "config.yaml").exists()


def test_seeded_config_matches_defaults(tmp_path: Path):
    ensure_data_dir(tmp_path)
    assert load_config(tmp_path) == Config()


def test_is_idempotent(tmp_path: Path):
    ensure_data_dir(tmp_path)
    assert ensure_data_dir(tmp_path) == []


def test_keeps_existing_config(tmp_path: Path):
    (tmp_path / "config.yaml").write_text("store:\n  verbose: true\n")
    assert ensure_data_dir(tmp_path) == []
    assert load_config(tmp_path).store.verbose is True


def test_unwritable_location_is_not_fatal(tmp_path: Path):
    blocker = tmp_path / "file"
    blocker.write_text("")
    assert ensure_data_dir(blocker / "memoire") == []
