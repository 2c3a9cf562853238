"""CLI entry point for filec."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

import click
from loguru import logger

from .config import FilecConfig
from .errors import FilecError, exit_code_for
from .models import Command
from .runner import ClipboardRunner

log = logger.bind(stage="cli")


def _package_version() -> str:
    try:
        return version("filec")
    except PackageNotFoundError:
        return "unknown"


def _run(ctx: click.Context, context: str, command: Command, **kwargs):
    """Run a command, turning FilecError into a click error with exit code.

    The runner (and with it the default data directory) is only created
    once a subcommand actually runs.
    """
    config: FilecConfig = ctx.obj
    try:
        runner = ClipboardRunner(config)
    except OSError as e:
        raise click.ClickException(f"cannot prepare clipboard location: {e}") from e

    try:
        return runner.run(command, **kwargs)
    except FilecError as e:
        log.debug(f"{command} failed: {e!r}")
        err = click.ClickException(f"{context}: {e}")
        err.exit_code = exit_code_for(e)
        raise err from e


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output.")
@click.option(
    "--clipboard-path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Clipboard file to use (env: FILEC_CLIPBOARD_PATH).",
)
@click.version_option(_package_version(), prog_name="filec")
@click.pass_context
def main(ctx: click.Context, verbose: bool, clipboard_path: Path | None) -> None:
    """Cut, copy and paste files between shell commands."""
    # Pass CLI flags as kwargs to avoid env pollution
    config_kwargs: dict[str, bool | Path] = {"verbose": verbose}
    if clipboard_path is not None:
        config_kwargs["clipboard_path"] = clipboard_path

    config = FilecConfig(**config_kwargs)  # type: ignore[arg-type]
    config.setup_logging()
    ctx.obj = config


@main.command()
@click.argument("files", nargs=-1, required=True)
@click.pass_context
def add(ctx: click.Context, files: tuple[str, ...]) -> None:
    """Add files to clipboard."""
    _run(ctx, "failed to add files", Command.ADD, files=files)


@click.command()
@click.argument("dest", required=False, type=click.Path(path_type=Path))
@click.pass_context
def copy(ctx: click.Context, dest: Path | None) -> None:
    """Copy files from clipboard to directory (cwd by default)."""
    _run(ctx, "failed to copy files", Command.COPY, dest=dest)


@click.command()
@click.argument("dest", required=False, type=click.Path(path_type=Path))
@click.pass_context
def move(ctx: click.Context, dest: Path | None) -> None:
    """Move files from clipboard to directory (cwd by default)."""
    _run(ctx, "failed to move files", Command.MOVE, dest=dest)


@click.command(name="list")
@click.pass_context
def list_(ctx: click.Context) -> None:
    """List selected files."""
    for path in _run(ctx, "failed to list contents", Command.LIST):
        click.echo(str(path))


@main.command()
@click.pass_context
def clear(ctx: click.Context) -> None:
    """Clear clipboard."""
    _run(ctx, "failed to clear clipboard", Command.CLEAR)


# Visible aliases: cp, mv, ls
for _cmd, _alias in ((copy, "cp"), (move, "mv"), (list_, "ls")):
    main.add_command(_cmd)
    main.add_command(_cmd, name=_alias)
