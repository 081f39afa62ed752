from __future__ import annotations


class MemoireError(Exception):
    """Base class for errors that fail the current command."""


class AccessError(MemoireError):
    """The data file exists but cannot be read."""


class AllocationError(MemoireError):
    """Ran out of memory while building the in-memory entry list."""


class NotFoundError(MemoireError):
    def __init__(self, key: str, hint: str = "") -> None:
        self.key = key
        message = f"Key '{key}' not found"
        super().__init__(f"{message}. {hint}" if hint else message)


class PersistenceError(MemoireError):
    """Writing the data file failed; the previous file is left in place."""


class InvalidEntryError(MemoireError):
    """Key or value cannot be represented in the line format."""


class AbortedError(MemoireError):
    def __init__(self) -> None:
        super().__init__("Aborted.")
