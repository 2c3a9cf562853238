"""Copy or move the queued paths into a destination directory.

Batches are continue-on-error: every queued path is attempted, each failure
is logged as it happens and collected as a TransferFailure, and the failed
queued paths are written back to the clipboard for a later retry. Successful
entries are dropped from the clipboard.

Per-item functions return lists of failures instead of raising, so a failing
file deep inside a copied directory never stops its siblings.
"""

from __future__ import annotations

import os
import shutil
import stat
from pathlib import Path

from loguru import logger

from ..errors import (
    CopyError,
    DestinationError,
    InvalidPathError,
    MoveError,
    PartialFailure,
    PathResolutionError,
    TransferItemError,
)
from ..models import OpenMode, TransferFailure, TransferMode, TransferResult
from ..resolve import resolve_path
from ..store import ClipboardStore

log = logger.bind(stage="transfer")


# ---------------------------------------------------------------------------
# Per-item operations
# ---------------------------------------------------------------------------


def move_item(source: Path, dest_dir: Path) -> list[TransferItemError]:
    """Rename source into dest_dir, keeping its basename.

    An existing file at the target is replaced on every platform. Uses a
    plain rename, so moves across filesystems fail rather than falling back
    to copy-and-delete.
    """
    if not source.name:
        return [InvalidPathError(source)]

    target = dest_dir / source.name
    log.debug(f"Move {source} -> {target}")
    try:
        os.replace(source, target)
    except OSError as e:
        return [MoveError(source, target, e)]
    return []


def copy_item(
    source: Path, dest_dir: Path, follow_symlinks: bool = True
) -> list[TransferItemError]:
    """Copy source into dest_dir, recursing into directories.

    Regular files overwrite an existing target. Directories are created
    (with missing parents) and every entry is copied into them; failures
    from the whole subtree are flattened into the returned list. Symlinks
    below the top level are recreated as links, never followed.
    """
    if not source.name:
        return [InvalidPathError(source)]

    target = dest_dir / source.name
    try:
        st = os.stat(source, follow_symlinks=follow_symlinks)
    except OSError as e:
        return [CopyError(source, target, e)]

    if stat.S_ISLNK(st.st_mode):
        return _copy_link(source, target)

    if not stat.S_ISDIR(st.st_mode):
        log.debug(f"Copy {source} -> {target}")
        try:
            # copyfile refuses a directory target instead of copying into it
            shutil.copyfile(source, target)
            shutil.copymode(source, target)
        except OSError as e:
            return [CopyError(source, target, e)]
        return []

    if _is_within(dest_dir, source):
        loop = ValueError("cannot copy a directory into itself")
        return [CopyError(source, target, loop)]

    log.debug(f"Copy dir {source} -> {target}")
    try:
        target.mkdir(parents=True, exist_ok=True)
        entries = sorted(source.iterdir())
    except OSError as e:
        return [CopyError(source, target, e)]

    errors: list[TransferItemError] = []
    for entry in entries:
        errors.extend(copy_item(entry, target, follow_symlinks=False))
    return errors


def _copy_link(source: Path, target: Path) -> list[TransferItemError]:
    """Recreate the symlink source at target with the same link text."""
    log.debug(f"Copy link {source} -> {target}")
    try:
        link = os.readlink(source)
        # Replace a file or link in the way; a directory stays an error
        if target.is_symlink() or target.is_file():
            target.unlink()
        os.symlink(link, target, target_is_directory=source.is_dir())
    except OSError as e:
        return [CopyError(source, target, e)]
    return []


def _is_within(path: Path, directory: Path) -> bool:
    """True if path is directory or lies below it (after resolving both)."""
    try:
        resolved = path.resolve()
    except OSError:
        return False
    return resolved == directory.resolve() or directory.resolve() in resolved.parents


_ITEM_OPS = {
    TransferMode.COPY: copy_item,
    TransferMode.MOVE: move_item,
}


# ---------------------------------------------------------------------------
# Batch execution
# ---------------------------------------------------------------------------


def resolve_destination(destination: str | os.PathLike[str] | None) -> Path:
    """Canonicalize the target directory (cwd when None).

    Raises DestinationError if it does not exist or is not a directory.
    """
    raw = destination if destination is not None else Path.cwd()
    try:
        dest = resolve_path(raw)
    except PathResolutionError as e:
        raise DestinationError(e.path, e.cause) from e
    if not dest.is_dir():
        raise DestinationError(os.fspath(raw), NotADirectoryError("not a directory"))
    return dest


def execute(
    store: ClipboardStore,
    destination: str | os.PathLike[str] | None,
    mode: TransferMode,
) -> TransferResult:
    """Copy or move every queued path into destination.

    The destination is checked before the clipboard is touched. The
    clipboard stays locked for the whole batch. Afterwards it holds exactly
    the queued paths that failed (empty if none did). Raises PartialFailure
    when at least one item failed.
    """
    dest = resolve_destination(destination)
    item_op = _ITEM_OPS[mode]
    result = TransferResult(mode=mode)

    with store.open_locked(OpenMode.READ_WRITE) as handle:
        queued = sorted(handle.read_all())
        log.debug(f"{mode} {len(queued)} queued path(s) -> {dest}")

        for path in queued:
            errors = item_op(path, dest)
            if not errors:
                result.succeeded.append(path)
                continue
            for err in errors:
                log.error(str(err))
                result.failures.append(TransferFailure(queued=path, error=err))

        failed = result.failed_paths
        if failed:
            handle.overwrite(failed)
        else:
            handle.clear()

    log.info(
        f"{mode}: {len(result.succeeded)} succeeded, {len(failed)} failed "
        f"out of {result.total}"
    )
    if failed:
        raise PartialFailure(failed)
    return result


def copy_to(
    store: ClipboardStore, destination: str | os.PathLike[str] | None = None
) -> TransferResult:
    """Copy the queued paths into destination (cwd by default)."""
    return execute(store, destination, TransferMode.COPY)


def move_to(
    store: ClipboardStore, destination: str | os.PathLike[str] | None = None
) -> TransferResult:
    """Move the queued paths into destination (cwd by default)."""
    return execute(store, destination, TransferMode.MOVE)
