from __future__ import annotations

from collections.abc import Callable, Iterable
from pathlib import Path

from loguru import logger

from memoire.errors import AbortedError, InvalidEntryError, NotFoundError
from memoire.matcher import find_exact, find_fuzzy
from memoire.models import Entry
from memoire.records import SEPARATOR, WHITESPACE, load_entries, save_entries

ConfirmFn = Callable[[str], bool]


def join_value(parts: Iterable[str]) -> str:
    """Join trailing command-line words into one value."""
    return " ".join(parts)


def _clean_key(key: str) -> str:
    key = key.strip(WHITESPACE)
    if not key:
        raise InvalidEntryError("Key must not be empty")
    if SEPARATOR in key or "\n" in key or "\r" in key:
        raise InvalidEntryError(f"Key '{key}' must not contain '{SEPARATOR}' or line breaks")
    return key


def _clean_value(value: str) -> str:
    if "\n" in value or "\r" in value:
        raise InvalidEntryError("Value must not contain line breaks")
    return value.strip(WHITESPACE)


class NoteStore:
    """One data file, loaded fresh for every command and saved atomically."""

    def __init__(
        self,
        path: Path | str,
        *,
        assume_yes: bool = False,
        confirm: ConfirmFn | None = None,
        verbose: bool = False,
    ):
        self.path = Path(path)
        self.assume_yes = assume_yes
        self.confirm = confirm
        self.verbose = verbose

    def _load(self) -> list[Entry]:
        return load_entries(self.path, verbose=self.verbose)

    def _confirm(self, prompt: str) -> None:
        if self.assume_yes:
            return
        if self.confirm is None or not self.confirm(prompt):
            raise AbortedError()

    def list_entries(self) -> list[Entry]:
        return self._load()

    def get(self, query: str) -> Entry:
        entries = self._load()
        pos = find_fuzzy(entries, query)
        if pos is None:
            raise NotFoundError(query)
        return entries[pos]

    def set(self, key: str, value: str) -> Entry:
        """Create *key*, or overwrite its value in place after confirmation."""
        key, value = _clean_key(key), _clean_value(value)
        entries = self._load()
        pos = find_exact(entries, key)
        if pos is None:
            entry = Entry(key=key, value=value)
            entries.append(entry)
            logger.debug(f"Adding '{key}'")
        else:
            entry = entries[pos]
            self._confirm(f"Key '{key}' exists.\nOld value: {entry.value}\nNew value: {value}\nConfirm overwrite?")
            entry = entries[pos] = Entry(key=key, value=value)
            logger.debug(f"Overwriting '{key}' at position {pos}")
        save_entries(self.path, entries)
        return entry

    def update(self, key: str, value: str) -> Entry:
        """Overwrite an existing key; unknown keys are an error."""
        key, value = _clean_key(key), _clean_value(value)
        entries = self._load()
        pos = find_exact(entries, key)
        if pos is None:
            raise NotFoundError(key, hint="Use 'set' to create new entries.")
        old = entries[pos]
        self._confirm(f"Update key '{key}'?\nOld value: {old.value}\nNew value: {value}\nConfirm update?")
        entry = entries[pos] = Entry(key=key, value=value)
        logger.debug(f"Updating '{key}' at position {pos}")
        save_entries(self.path, entries)
        return entry

    def delete(self, key: str) -> Entry:
        entries = self._load()
        pos = find_exact(entries, key)
        if pos is None:
            raise NotFoundError(key)
        entry = entries[pos]
        self._confirm(f"Delete key '{key}'?\nValue: {entry.value}\nConfirm delete?")
        del entries[pos]
        logger.debug(f"Deleting '{key}' from position {pos}")
        save_entries(self.path, entries)
        return entry
