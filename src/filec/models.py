"""Core enums and result types for the filec clipboard.

Enums:
    Command        -- Top-level command dispatched by the runner.
    TransferMode   -- Batch operation applied to the queued set (copy, move).
    OpenMode       -- How the clipboard file is opened. Only WRITE and
                      READ_WRITE_CREATE create a missing file.
    LockStatus     -- Outcome of a non-blocking lock attempt. Distinguishes a
                      busy clipboard (held_by_other) from a broken one (io_error).
    ErrorCategory  -- Error classification for exit codes (transient, permanent).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path


class Command(StrEnum):
    ADD = "add"
    COPY = "copy"
    MOVE = "move"
    LIST = "list"
    CLEAR = "clear"


class TransferMode(StrEnum):
    COPY = "copy"
    MOVE = "move"


class OpenMode(StrEnum):
    READ = "read"
    WRITE = "write"
    READ_WRITE = "read_write"
    READ_WRITE_CREATE = "read_write_create"

    @property
    def flags(self) -> int:
        """os.open flags for this mode."""
        return _OPEN_FLAGS[self]

    @property
    def file_mode(self) -> str:
        """Mode string for wrapping the descriptor with open()."""
        return _FILE_MODES[self]


# Text decoding happens in Python; keep the descriptor binary on Windows
_BINARY = getattr(os, "O_BINARY", 0)

_OPEN_FLAGS: dict[OpenMode, int] = {
    OpenMode.READ: os.O_RDONLY | _BINARY,
    OpenMode.WRITE: os.O_WRONLY | os.O_CREAT | _BINARY,
    OpenMode.READ_WRITE: os.O_RDWR | _BINARY,
    OpenMode.READ_WRITE_CREATE: os.O_RDWR | os.O_CREAT | _BINARY,
}

_FILE_MODES: dict[OpenMode, str] = {
    OpenMode.READ: "r",
    OpenMode.WRITE: "w",
    OpenMode.READ_WRITE: "r+",
    OpenMode.READ_WRITE_CREATE: "r+",
}


class LockStatus(StrEnum):
    ACQUIRED = "acquired"
    HELD_BY_OTHER = "held_by_other"
    IO_ERROR = "io_error"


class ErrorCategory(StrEnum):
    TRANSIENT = "transient"
    PERMANENT = "permanent"


@dataclass(frozen=True)
class LockAttempt:
    """Tagged result of a lock attempt. error is set unless ACQUIRED."""

    status: LockStatus
    error: OSError | None = None

    @property
    def acquired(self) -> bool:
        return self.status is LockStatus.ACQUIRED


@dataclass(frozen=True)
class TransferFailure:
    """One failed leaf of a copy/move.

    queued is the top-level clipboard entry the failure belongs to, which is
    what stays in the clipboard; error.source may be a nested file below it.
    """

    queued: Path
    error: Exception


@dataclass
class TransferResult:
    """Outcome of a copy/move batch over the queued set."""

    mode: TransferMode
    succeeded: list[Path] = field(default_factory=list)
    failures: list[TransferFailure] = field(default_factory=list)

    @property
    def failed_paths(self) -> list[Path]:
        """Unique queued paths with at least one failure, in failure order."""
        return list(dict.fromkeys(f.queued for f in self.failures))

    @property
    def total(self) -> int:
        return len(self.succeeded) + len(self.failed_paths)


@dataclass
class AddResult:
    """Outcome of an add: newly queued paths and inputs that did not resolve."""

    added: list[Path] = field(default_factory=list)
    unresolved: list[str] = field(default_factory=list)
