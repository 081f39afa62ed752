from __future__ import annotations

from importlib.resources import as_file, files
from pathlib import Path

from loguru import logger

_ASSETS = files("memoire.assets")

_SEED_FILES: list[tuple[str, str]] = [
    ("config.yaml", "config.yaml"),
]


def _copy_asset(asset_path: str, target: Path) -> None:
    source = _ASSETS.joinpath(*asset_path.split("/"))
    with as_file(source) as src:
        target.write_text(src.read_text(encoding="utf-8"), encoding="utf-8")


def ensure_data_dir(data_dir: Path) -> list[str]:
    """Ensure data dir exists and holds a default ``config.yaml``.

    Returns the list of file paths (relative to *data_dir*) that were created.
    Failures are only logged: the data file may still be reachable via ``--file``.
    """
    created: list[str] = []
    try:
        data_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        logger.warning(f"Could not create config directory: {exc}")
        return created

    for asset_name, target_rel in _SEED_FILES:
        target = data_dir / target_rel
        if target.exists():
            continue
        try:
            _copy_asset(asset_name, target)
        except OSError as exc:
            logger.warning(f"Could not write {target}: {exc}")
            continue
        created.append(target_rel)

    return created
