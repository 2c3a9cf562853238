"""filec configuration via pydantic-settings (.env + FILEC_* env vars)."""

import os
import sys
from pathlib import Path

from loguru import logger
from platformdirs import user_data_dir
from pydantic_settings import BaseSettings, SettingsConfigDict

APP_NAME = "filec"
CLIPBOARD_FILENAME = "buf.txt"


def default_clipboard_path() -> Path:
    """Platform data dir location of the clipboard file.

    On macOS an explicit XDG_DATA_HOME wins over Application Support so
    users who set it get the same layout as on Linux.
    """
    if sys.platform == "darwin":
        data_home = os.environ.get("XDG_DATA_HOME")
        if data_home:
            return Path(data_home) / APP_NAME / CLIPBOARD_FILENAME
    return Path(user_data_dir(APP_NAME, appauthor=False)) / CLIPBOARD_FILENAME


class FilecConfig(BaseSettings):
    """All filec configuration with layered resolution:
    .env file < FILEC_* environment variables < constructor kwargs.
    """

    model_config = SettingsConfigDict(
        env_prefix="FILEC_",
        env_file=".env",
        extra="ignore",
    )

    # -- Storage --
    clipboard_path: Path | None = None  # None = platform data dir

    # -- Logging --
    verbose: bool = False
    log_level: str = "WARNING"
    log_file: Path | None = None

    def resolve_clipboard_path(self) -> Path:
        """Return the clipboard file path, creating the default data dir.

        An explicit clipboard_path is returned as-is; its parent must exist.
        """
        if self.clipboard_path is not None:
            return self.clipboard_path

        path = default_clipboard_path()
        path.parent.mkdir(parents=True, exist_ok=True)
        return path

    def setup_logging(self) -> None:
        """Configure loguru: stderr sink plus an optional file sink."""
        logger.remove()  # Remove default stderr handler

        def _default_extra(record):
            record["extra"].setdefault("stage", "")
            return True

        if self.verbose:
            stderr_format = "{level:<8} | {extra[stage]:<11} | {message}"
            level = "DEBUG"
        else:
            stderr_format = APP_NAME + ": {message}"
            level = self.log_level.upper()

        logger.add(
            sys.stderr,
            format=stderr_format,
            level=level,
            filter=_default_extra,
        )

        if self.log_file is not None:
            self.log_file.parent.mkdir(parents=True, exist_ok=True)
            logger.add(
                str(self.log_file),
                format=(
                    "{time:YYYY-MM-DDTHH:mm:ssZ} | {level:<8} | "
                    "{extra[stage]:<11} | {message}"
                ),
                level="DEBUG",
                rotation="1 MB",
                retention=3,
                filter=_default_extra,
            )
