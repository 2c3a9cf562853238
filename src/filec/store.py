"""Clipboard file storage with per-operation exclusive locking.

The clipboard file is plain UTF-8 text, one canonical absolute path per line.
Every access goes through ClipboardStore.open_locked(), which opens the file
and takes a non-blocking exclusive lock before anything is read or written.
The lock is released when the returned handle is closed, so no lock is ever
held across two commands and nothing is cached between them.
"""

from __future__ import annotations

import os
from collections.abc import Iterable
from pathlib import Path
from typing import IO

from loguru import logger

from .concurrency import try_lock
from .errors import ClipboardFileAccessError, LockError
from .models import LockStatus, OpenMode

log = logger.bind(stage="store")

# surrogateescape keeps non-UTF-8 filenames round-tripping on POSIX
_ENCODING = "utf-8"
_ERRORS = "surrogateescape"


class ClipboardHandle:
    """An open, locked clipboard file. Use as a context manager."""

    def __init__(self, path: Path, fh: IO[str]) -> None:
        self.path = path
        self._fh = fh

    def __enter__(self) -> ClipboardHandle:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    @property
    def closed(self) -> bool:
        return self._fh.closed

    def close(self) -> None:
        """Flush, close and release the lock."""
        if self._fh.closed:
            return
        try:
            self._fh.close()
        except OSError as e:
            raise ClipboardFileAccessError(self.path, e) from e
        log.debug(f"Released clipboard {self.path}")

    def read_all(self) -> set[Path]:
        """Read every queued path from the start of the file.

        Lines end at LF only (one trailing CR is dropped), so other line
        separators that are legal in filenames stay part of the path. Blank
        lines and lines that are not absolute paths are skipped. Leaves the
        cursor at the end of the file.
        """
        try:
            self._fh.seek(0)
            content = self._fh.read()
        except OSError as e:
            raise ClipboardFileAccessError(self.path, e) from e

        paths: set[Path] = set()
        for line in content.split("\n"):
            if line.endswith("\r"):
                line = line[:-1]
            if not line.strip():
                continue
            candidate = Path(line)
            if not candidate.is_absolute():
                log.debug(f"Skipping malformed clipboard line: {line!r}")
                continue
            paths.add(candidate)
        return paths

    def append(self, paths: Iterable[Path]) -> None:
        """Write each path as one line at the end of the file."""
        try:
            self._fh.seek(0, os.SEEK_END)
            self._write(paths)
        except OSError as e:
            raise ClipboardFileAccessError(self.path, e) from e

    def overwrite(self, paths: Iterable[Path]) -> None:
        """Replace the whole file with exactly these paths."""
        try:
            self._truncate()
            self._write(paths)
        except OSError as e:
            raise ClipboardFileAccessError(self.path, e) from e

    def clear(self) -> None:
        """Truncate to zero length. An empty file is an empty clipboard."""
        try:
            self._truncate()
            self._fh.flush()
        except OSError as e:
            raise ClipboardFileAccessError(self.path, e) from e

    def _truncate(self) -> None:
        self._fh.seek(0)
        self._fh.truncate(0)

    def _write(self, paths: Iterable[Path]) -> None:
        count = 0
        for path in paths:
            self._fh.write(f"{os.fspath(path)}\n")
            count += 1
        self._fh.flush()
        log.debug(f"Wrote {count} path(s) to {self.path}")


class ClipboardStore:
    """Owns one clipboard file path. Each operation locks the file anew."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def __repr__(self) -> str:
        return f"ClipboardStore({str(self.path)!r})"

    def open_locked(self, mode: OpenMode) -> ClipboardHandle:
        """Open the clipboard file and take an exclusive lock without waiting.

        Raises LockError if another process holds the lock (the file is
        closed again, nothing is read or written) and ClipboardFileAccessError
        if the file cannot be opened or the lock call itself fails.
        """
        log.debug(f"open_locked(path={self.path}, mode={mode})")

        def _opener(path: str, _flags: int) -> int:
            return os.open(path, mode.flags, 0o644)

        try:
            fh = open(
                self.path,
                mode.file_mode,
                encoding=_ENCODING,
                errors=_ERRORS,
                newline="\n",
                opener=_opener,
            )
        except OSError as e:
            raise ClipboardFileAccessError(self.path, e) from e

        attempt = try_lock(fh)
        if attempt.acquired:
            return ClipboardHandle(self.path, fh)

        fh.close()
        if attempt.status is LockStatus.HELD_BY_OTHER:
            raise LockError(self.path)
        raise ClipboardFileAccessError(self.path, attempt.error)

    def contents(self) -> list[Path]:
        """Return the queued paths, sorted for stable display.

        A clipboard file that does not exist yet is an empty clipboard;
        listing never creates it.
        """
        if not self.path.exists():
            log.debug(f"No clipboard file at {self.path}")
            return []
        with self.open_locked(OpenMode.READ) as handle:
            return sorted(handle.read_all())

    def clear(self) -> None:
        """Empty the clipboard. Clearing an empty clipboard succeeds."""
        with self.open_locked(OpenMode.WRITE) as handle:
            handle.clear()
        log.info(f"Cleared clipboard {self.path}")
