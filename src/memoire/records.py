"""Read and write the ``key:value`` data file.

One record per line. The first ``:`` separates key and value, so values may
contain colons. Whitespace around key and value is dropped on read and not
written back. Lines without a separator or with an empty key are skipped.
Bytes that are not valid UTF-8 survive a load/save cycle unchanged
(``surrogateescape``).
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from loguru import logger

from memoire.atomic import AtomicWriter
from memoire.errors import AccessError, AllocationError, PersistenceError
from memoire.models import Entry

if TYPE_CHECKING:
    from collections.abc import Iterable

SEPARATOR = ":"
# ASCII whitespace only; non-breaking and other Unicode spaces are kept
WHITESPACE = " \t\n\r\v\f"


def skip_reason(line: str) -> str | None:
    """Why *line* would be skipped on load, or None if it parses."""
    key, sep, _ = line.partition(SEPARATOR)
    if not sep:
        return f"No Separator '{SEPARATOR}'"
    if not key.strip(WHITESPACE):
        return "Empty key"
    return None


def parse_line(line: str) -> Entry | None:
    line = line.rstrip("\r\n")
    key, sep, value = line.partition(SEPARATOR)
    key = key.strip(WHITESPACE)
    if not sep or not key:
        return None
    return Entry(key=key, value=value.strip(WHITESPACE))


def load_entries(path: Path | str, verbose: bool = False) -> list[Entry]:
    """Load every valid record from *path* in file order.

    A missing file is an empty store. Duplicate keys are kept as they are.
    """
    path = Path(path)
    entries: list[Entry] = []
    try:
        with path.open(encoding="utf-8", errors="surrogateescape", newline="\n") as f:
            for raw in f:
                line = raw.rstrip("\r\n")
                entry = parse_line(line)
                if entry is None:
                    if verbose:
                        logger.warning(f"Skipping line : {line} [{skip_reason(line)}]")
                    continue
                entries.append(entry)
    except FileNotFoundError:
        logger.debug(f"{path} does not exist yet, starting empty")
        return []
    except MemoryError as exc:
        raise AllocationError(f"Out of memory while loading '{path}'") from exc
    except OSError as exc:
        raise AccessError(f"Error opening '{path}': {exc}") from exc

    logger.debug(f"Loaded {len(entries)} entries from {path}")
    return entries


def format_entry(entry: Entry) -> str:
    return f"{entry.key}{SEPARATOR}{entry.value}"


def serialize_entries(entries: Iterable[Entry]) -> str:
    return "".join(format_entry(e) + "\n" for e in entries)


def save_entries(path: Path | str, entries: list[Entry]) -> None:
    """Replace *path* with *entries*; on failure the old file stays as it was."""
    path = Path(path)
    try:
        with AtomicWriter(path) as out:
            out.write(serialize_entries(entries))
            out.commit()
    except (OSError, UnicodeError) as exc:
        raise PersistenceError(f"Failed to save changes to '{path}': {exc}") from exc
    logger.debug(f"Saved {len(entries)} entries to {path}")
