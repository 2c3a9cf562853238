"""Canonical path resolution -- the identity key for clipboard entries."""

import os
from pathlib import Path

from loguru import logger

from .errors import PathResolutionError

log = logger.bind(stage="resolve")


def resolve_path(input_path: str | os.PathLike[str]) -> Path:
    """Resolve a path to its canonical absolute form.

    Relative paths are taken against the cwd and every symlink is followed.
    The target must exist. Raises PathResolutionError on a missing target,
    broken or looping symlink, or a component that cannot be stat'd.
    """
    try:
        resolved = Path(input_path).resolve(strict=True)
    except (OSError, RuntimeError) as e:
        # RuntimeError: symlink loop on Python < 3.13
        raise PathResolutionError(os.fspath(input_path), e) from e

    log.debug(f"resolve_path({input_path}) -> {resolved}")
    return resolved
