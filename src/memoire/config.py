from __future__ import annotations

import os
from pathlib import Path

import yaml

from memoire.models import Config

DATA_FILE = "data.txt"


def get_data_dir() -> Path:
    """Directory holding ``data.txt`` and ``config.yaml``.

    ``MEMOIRE_DATA_DIR`` wins, then ``$XDG_CONFIG_HOME/memoire``, then
    ``~/.config/memoire``. Without any of them the current directory is used.
    """
    explicit = os.environ.get("MEMOIRE_DATA_DIR")
    if explicit:
        return Path(explicit).expanduser().resolve()
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config) / "memoire"
    home = os.environ.get("HOME")
    if home:
        return Path(home) / ".config" / "memoire"
    return Path(".").resolve()


def load_config(data_dir: Path | None = None) -> Config:
    data_dir = data_dir or get_data_dir()
    config_path = data_dir / "config.yaml"
    if config_path.exists():
        with open(config_path) as f:
            raw = yaml.safe_load(f) or {}
        return Config.model_validate(raw)
    return Config()


def resolve_data_file(data_dir: Path, config: Config, override: Path | None = None) -> Path:
    """Pick the data file: ``--file`` first, then ``store.file``, then ``data.txt``."""
    if override is not None:
        return override
    if config.store.file:
        configured = Path(config.store.file).expanduser()
        return configured if configured.is_absolute() else data_dir / configured
    return data_dir / DATA_FILE
