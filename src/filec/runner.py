"""Command runner -- routes one command to one clipboard operation."""

from __future__ import annotations

import os
from collections.abc import Sequence
from pathlib import Path

from loguru import logger

from .config import FilecConfig
from .models import AddResult, Command, TransferMode, TransferResult
from .ops.add import add
from .ops.transfer import execute
from .store import ClipboardStore

log = logger.bind(stage="runner")


class ClipboardRunner:
    """Runs a single filec command against one clipboard file.

    The runner owns exactly one ClipboardStore for its lifetime, which is one
    CLI invocation. Every operation locks the file on its own, so nothing is
    cached between commands.
    """

    def __init__(self, config: FilecConfig, clipboard_path: Path | None = None) -> None:
        self.config = config
        path = clipboard_path or config.resolve_clipboard_path()
        self.store = ClipboardStore(path)
        log.debug(f"Using clipboard {self.store.path}")

    def run(
        self,
        command: Command,
        files: Sequence[str | os.PathLike[str]] = (),
        dest: str | os.PathLike[str] | None = None,
    ) -> AddResult | TransferResult | list[Path] | None:
        """Dispatch a command. Errors propagate as FilecError subclasses."""
        log.debug(f"run(command={command}, files={list(files)}, dest={dest})")
        if command == Command.ADD:
            return self.add(files)
        if command == Command.COPY:
            return self.copy(dest)
        if command == Command.MOVE:
            return self.move(dest)
        if command == Command.LIST:
            return self.contents()
        if command == Command.CLEAR:
            self.clear()
            return None
        raise ValueError(f"Unknown command: {command}")

    def add(self, files: Sequence[str | os.PathLike[str]]) -> AddResult:
        return add(self.store, files)

    def copy(self, dest: str | os.PathLike[str] | None = None) -> TransferResult:
        return execute(self.store, dest, TransferMode.COPY)

    def move(self, dest: str | os.PathLike[str] | None = None) -> TransferResult:
        return execute(self.store, dest, TransferMode.MOVE)

    def contents(self) -> list[Path]:
        return self.store.contents()

    def clear(self) -> None:
        self.store.clear()
