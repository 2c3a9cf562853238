"""Queue new paths on the clipboard."""

from __future__ import annotations

import os
from collections.abc import Iterable
from pathlib import Path

from loguru import logger

from ..errors import NoNewFilesError, PathResolutionError
from ..models import AddResult, OpenMode
from ..resolve import resolve_path
from ..store import ClipboardStore

log = logger.bind(stage="add")


def add(
    store: ClipboardStore, input_paths: Iterable[str | os.PathLike[str]]
) -> AddResult:
    """Canonicalize input_paths and append the ones not already queued.

    Inputs that fail to resolve, or whose name contains a newline, are
    logged and skipped; they never abort the add. Different spellings of the same target (relative paths, symlinks)
    collapse to one entry. Raises NoNewFilesError without writing anything
    when no input resolves to a path that is not already on the clipboard.
    """
    with store.open_locked(OpenMode.READ_WRITE_CREATE) as handle:
        existing = handle.read_all()

        result = AddResult()
        incoming: set[Path] = set()
        for raw in input_paths:
            try:
                path = resolve_path(raw)
            except PathResolutionError as e:
                log.error(str(e))
                result.unresolved.append(e.path)
                continue
            # One path per line; a newline in the name cannot be stored
            if "\n" in str(path):
                log.error(f"{os.fspath(raw)!r}: newline in path is not supported")
                result.unresolved.append(os.fspath(raw))
                continue
            incoming.add(path)

        new = incoming - existing
        log.debug(
            f"add: {len(incoming)} resolved, {len(incoming) - len(new)} already queued, "
            f"{len(result.unresolved)} unresolved"
        )
        if not new:
            raise NoNewFilesError()

        result.added = sorted(new)
        handle.append(result.added)

    log.info(f"Queued {len(result.added)} path(s)")
    return result
