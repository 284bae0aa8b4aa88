"""Main CLI entry point and application setup."""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import click
from click.exceptions import Exit
from rich.console import Console

from devnotes import __version__
from devnotes.cli.commands import note
from devnotes.cli.config import load_config
from devnotes.notes.exceptions import NoteError
from devnotes.notes.manager import NoteManager
from devnotes.notes.storage import DEFAULT_SNAPSHOT_NAME, SnapshotStorage

logger = logging.getLogger(__name__)


@dataclass
class Context:
    """CLI context that holds shared resources."""

    manager: NoteManager
    console: Console
    config: dict[str, Any] = field(default_factory=dict)
    debug: bool = False


def setup_logging(
    verbose: bool = False, quiet: bool = False, debug: bool = False
) -> None:
    """Configure logging based on CLI flags."""
    if quiet:
        level = logging.ERROR
    elif verbose or debug:
        level = logging.DEBUG
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s"
        if not debug
        else "%(asctime)s - %(name)s - %(threadName)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def create_console(no_color: bool = False, width: int | None = None) -> Console:
    """Create Rich console with appropriate settings."""
    return Console(
        no_color=no_color,
        width=width or 120,
        highlight=not no_color,
        color_system=None if no_color else "auto",
    )


def get_storage_path(data_dir: Path | None = None) -> Path:
    """Get the directory holding the notes snapshot."""
    if data_dir:
        return Path(data_dir)

    # Check environment variable
    if env_dir := os.environ.get("DEVNOTES_DATA_DIR"):
        return Path(env_dir)

    # Default to XDG data home
    xdg_data_home = Path(
        os.environ.get("XDG_DATA_HOME", Path.home() / ".local" / "share")
    )
    return xdg_data_home / "devnotes"


def open_manager(storage_path: Path, snapshot_name: str) -> NoteManager:
    """Create a manager and load the existing snapshot, if any.

    Raises:
        NoteError: If an existing snapshot cannot be loaded
    """
    storage = SnapshotStorage.in_directory(storage_path, snapshot_name)
    manager = NoteManager(storage)

    if storage.exists():
        result = manager.load().result()
        if result.failed:
            manager.close()
            raise result.error

    return manager


class DevNotesGroup(click.Group):
    """Custom group that reports errors without tracebacks."""

    def invoke(self, ctx):
        try:
            return super().invoke(ctx)
        except KeyboardInterrupt:
            console = getattr(ctx.obj, "console", None) if ctx.obj else None
            if console:
                console.print("[yellow]Interrupted[/yellow]")
            ctx.exit(130)
        except (click.ClickException, click.Abort, Exit, SystemExit):
            raise
        except Exception as e:
            debug = getattr(ctx.obj, "debug", False) if ctx.obj else False
            if debug:
                raise
            if not isinstance(e, NoteError):
                logger.exception("Unexpected error")
            console = getattr(ctx.obj, "console", None) if ctx.obj else None
            if console:
                console.print(f"[red]Error:[/red] {e}")
            else:
                click.echo(f"Error: {e}", err=True)
            ctx.exit(1)


@click.group(cls=DevNotesGroup)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-error output")
@click.option("--no-color", is_flag=True, help="Disable colored output")
@click.option("--debug", is_flag=True, help="Enable debug mode with full tracebacks")
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, path_type=Path),
    help="Path to configuration file",
)
@click.option(
    "--data-dir",
    "-d",
    type=click.Path(path_type=Path),
    help="Override data directory location",
)
@click.version_option(
    version=__version__, prog_name="devnotes", message="devnotes version %(version)s"
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    no_color: bool,
    debug: bool,
    config: Path | None,
    data_dir: Path | None,
) -> None:
    """Developer note keeper.

    Create plain, programming and testing notes, edit them with a version
    history, and keep them in a single snapshot file.
    """
    setup_logging(verbose=verbose, quiet=quiet, debug=debug)

    console = create_console(no_color=no_color)

    try:
        config_data = load_config(config)
    except ValueError as e:
        if debug:
            raise
        console.print(f"[red]Error loading config file:[/red] {e}")
        ctx.exit(1)

    storage_path = get_storage_path(data_dir or config_data.get("data_dir"))
    snapshot_name = config_data.get("snapshot_name") or DEFAULT_SNAPSHOT_NAME

    try:
        manager = open_manager(storage_path, snapshot_name)
    except NoteError as e:
        if debug:
            raise
        console.print(f"[red]Error loading notes:[/red] {e}")
        ctx.exit(1)

    ctx.call_on_close(manager.close)
    ctx.obj = Context(
        manager=manager,
        console=console,
        config=config_data,
        debug=debug,
    )


# Register commands
cli.add_command(note.add)
cli.add_command(note.list_cmd, name="list")
cli.add_command(note.show)
cli.add_command(note.edit)
cli.add_command(note.delete)
cli.add_command(note.history)
cli.add_command(note.status)


def main() -> None:
    """Main entry point for the CLI application."""
    cli()


if __name__ == "__main__":
    main()
