"""Temp-file-then-rename writes.

    with AtomicWriter(path) as out:
        out.write("a:1\n")
        out.commit()

The temporary file lives next to the target so the final ``os.replace`` stays
on one filesystem. Leaving the block without ``commit()`` (or with an
exception) removes the temporary file and leaves the target untouched.
"""

from __future__ import annotations

import contextlib
import os
import tempfile
from pathlib import Path
from typing import IO

from loguru import logger


class AtomicWriter:
    def __init__(self, path: Path | str, encoding: str = "utf-8", errors: str = "surrogateescape") -> None:
        self.path = Path(path)
        self.encoding = encoding
        self.errors = errors
        self.tmp_path: Path | None = None
        self._file: IO[str] | None = None
        self._committed = False

    def __enter__(self) -> AtomicWriter:
        fd, tmp = tempfile.mkstemp(prefix=f"{self.path.name}.tmp", dir=self.path.parent)
        self.tmp_path = Path(tmp)
        try:
            self._file = os.fdopen(fd, "w", encoding=self.encoding, errors=self.errors, newline="")
        except BaseException:
            os.close(fd)
            self._discard()
            raise
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if not self._committed:
            self._discard()

    def write(self, text: str) -> None:
        if self._file is None:
            raise RuntimeError("AtomicWriter is not open")
        self._file.write(text)

    def commit(self) -> None:
        """Flush, fsync, close and rename the temporary file onto the target."""
        if self._file is None or self.tmp_path is None:
            raise RuntimeError("AtomicWriter is not open")
        f = self._file
        f.flush()
        try:
            os.fsync(f.fileno())
        except OSError as exc:
            # not fatal: the rename still rules out partial writes
            logger.warning(f"fsync failed for {self.tmp_path}: {exc}")
        self._file = None
        f.close()
        os.replace(self.tmp_path, self.path)
        self._committed = True
        logger.debug(f"Replaced {self.path} via {self.tmp_path.name}")

    def _discard(self) -> None:
        if self._file is not None:
            with contextlib.suppress(OSError):
                self._file.close()
            self._file = None
        if self.tmp_path is not None:
            with contextlib.suppress(FileNotFoundError):
                self.tmp_path.unlink()
