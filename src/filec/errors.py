"""Exception hierarchy and exit code categorization for filec."""

from __future__ import annotations

from pathlib import Path

from .models import ErrorCategory

# sysexits.h EX_TEMPFAIL: the user can re-invoke the command later
EXIT_TRANSIENT = 75
EXIT_PERMANENT = 1


class FilecError(Exception):
    """Base exception for all filec errors."""

    category = ErrorCategory.PERMANENT


class ClipboardFileError(FilecError):
    """The clipboard file could not be used."""


class LockError(ClipboardFileError):
    """Another process holds the clipboard lock. Nothing was read or written."""

    category = ErrorCategory.TRANSIENT

    def __init__(self, path: Path) -> None:
        super().__init__(f"other process acquired lock on clipboard file {path}")
        self.path = path


class ClipboardFileAccessError(ClipboardFileError):
    """Cannot open, read, write, truncate or lock the clipboard file."""

    def __init__(self, path: Path, cause: OSError) -> None:
        super().__init__(f"cannot access clipboard file {path}: {cause}")
        self.path = path
        self.cause = cause


class PathResolutionError(FilecError):
    """A user-supplied path cannot be canonicalized."""

    def __init__(self, path: str, cause: Exception) -> None:
        super().__init__(f"{path}: {cause}")
        self.path = path
        self.cause = cause


class NoNewFilesError(FilecError):
    """Add found nothing new to queue."""

    def __init__(self) -> None:
        super().__init__("there's no new files to add")


class DestinationError(FilecError):
    """The copy/move target directory cannot be resolved."""

    def __init__(self, path: str, cause: Exception) -> None:
        super().__init__(f"cannot access destination dir {path}: {cause}")
        self.path = path
        self.cause = cause


class TransferItemError(FilecError):
    """A single queued path failed to copy or move.

    These are collected per item by the transfer engine and never raised
    across items.
    """

    def __init__(
        self, source: Path, target: Path | None, cause: Exception | None = None
    ) -> None:
        super().__init__(self._describe(source, target, cause))
        self.source = source
        self.target = target
        self.cause = cause

    def _describe(
        self, source: Path, target: Path | None, cause: Exception | None
    ) -> str:
        return f"{source} -> {target}: {cause}"


class InvalidPathError(TransferItemError):
    """A queued path has no basename and cannot be joined to a destination."""

    def __init__(self, source: Path) -> None:
        super().__init__(source, None)

    def _describe(self, source, target, cause) -> str:
        return f"{source}: invalid path"


class MoveError(TransferItemError):
    """Renaming a queued path into the destination failed."""


class CopyError(TransferItemError):
    """Copying a queued path (or a file below it) into the destination failed."""


class PartialFailure(FilecError):
    """The batch ran to completion but one or more items failed.

    The failed queued paths remain in the clipboard. Per-item causes were
    already logged as they happened.
    """

    def __init__(self, failed: list[Path]) -> None:
        super().__init__(
            f"one or more files were processed with errors ({len(failed)} failed)"
        )
        self.failed = failed

    @property
    def count(self) -> int:
        return len(self.failed)


def exit_code_for(error: FilecError) -> int:
    """Map an error to a process exit code.

    Transient errors (clipboard busy) exit with EX_TEMPFAIL so scripts can
    tell "try again" from a real failure. Everything else exits 1.
    """
    if error.category == ErrorCategory.TRANSIENT:
        return EXIT_TRANSIENT
    return EXIT_PERMANENT
