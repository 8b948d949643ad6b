"""CLI commands using Typer."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Annotated

if TYPE_CHECKING:
    from storagekit.context import AppContext

import typer
from rich.console import Console
from rich.logging import RichHandler

from storagekit import __version__, storage
from storagekit.config import ConfigError, StorageSettings, load_settings, save_settings
from storagekit.console import ConsoleOutput
from storagekit.context import create_context
from storagekit.types import StorageResult

app = typer.Typer(
    name="storagekit",
    help="Everyday file and directory operations",
    no_args_is_help=True,
)

config_app = typer.Typer(help="Configuration commands")
app.add_typer(config_app, name="config")

output = ConsoleOutput()


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        output.console.print(f"storagekit v{__version__}")
        raise typer.Exit()


def configure_logging(level: str) -> None:
    """Route log records to stderr through rich."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-v",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = False,
    log_level: Annotated[
        str | None, typer.Option("--log-level", help="Override the configured log level")
    ] = None,
) -> None:
    """Everyday file and directory operations."""
    if log_level is None:
        try:
            log_level = load_settings().log_level
        except ConfigError:
            log_level = "WARNING"
    configure_logging(log_level)


def _get_context(context: AppContext | None) -> AppContext:
    """Return the injected context or build the default one."""
    if context is not None:
        return context
    try:
        return create_context()
    except ConfigError as e:
        output.show_error(str(e))
        raise typer.Exit(1) from e


def _check(ctx: AppContext, result: StorageResult, action: str) -> StorageResult:
    """Exit with an error if an operation failed.

    Args:
        ctx: Application context.
        result: Result of the operation.
        action: What was attempted, for the error message.

    Returns:
        The result, when successful.

    Raises:
        typer.Exit: If the result is a failure.
    """
    if not result:
        ctx.output.show_error(f"{action} failed: {result.error} ({result.path})")
        raise typer.Exit(1)
    return result


# ============================================================================
# Listing Commands
# ============================================================================


@app.command("ls")
def list_directory(
    directory: Annotated[Path, typer.Argument(help="Directory to list")] = Path("."),
    recursive: Annotated[
        bool, typer.Option("--recursive", "-r", help="Include all subdirectories")
    ] = False,
    files_only: Annotated[bool, typer.Option("--files", "-f", help="Only list files")] = False,
    dirs_only: Annotated[
        bool, typer.Option("--dirs", "-d", help="Only list directories")
    ] = False,
    _context=None,
) -> None:
    """List the files and directories inside a directory."""
    ctx = _get_context(_context)

    if files_only and dirs_only:
        ctx.output.show_error("--files and --dirs are mutually exclusive")
        raise typer.Exit(1)

    if not storage.is_directory(directory):
        ctx.output.show_error(f"Not a directory: {directory}")
        raise typer.Exit(1)

    if recursive:
        list_files, list_dirs = storage.all_files, storage.all_directories
    else:
        list_files, list_dirs = storage.files, storage.directories

    if not files_only:
        ctx.output.show_paths(list_dirs(directory, on_warning=ctx.sink), "Directories")
    if not dirs_only:
        ctx.output.show_paths(list_files(directory, on_warning=ctx.sink), "Files")


@app.command()
def info(
    path: Annotated[Path, typer.Argument(help="Path to describe")],
    _context=None,
) -> None:
    """Show type, size, modification time and MIME type of a path."""
    ctx = _get_context(_context)

    if not storage.exists(path):
        ctx.output.show_error(f"Path not found: {path}")
        raise typer.Exit(1)

    details: dict[str, object] = {
        "Type": storage.path_type(path),
        "Name": storage.name(path),
        "Extension": storage.extension(path),
        "Writable": storage.is_writable(path),
    }
    if storage.is_file(path):
        size = storage.size(path, on_warning=ctx.sink)
        modified = storage.last_modified(path, on_warning=ctx.sink)
        mime = storage.mime_type(
            path, sample_size=ctx.settings.mime_sample_size, on_warning=ctx.sink
        )
        details["Size"] = f"{size.value} bytes" if size else None
        details["Modified"] = (
            datetime.fromtimestamp(modified.value, tz=timezone.utc) if modified else None
        )
        details["MIME type"] = mime.value if mime else None

    ctx.output.show_details(path, details)


# ============================================================================
# Content Commands
# ============================================================================


@app.command()
def cat(
    path: Annotated[Path, typer.Argument(help="File to print")],
    _context=None,
) -> None:
    """Print the content of a file."""
    ctx = _get_context(_context)
    result = _check(ctx, storage.get(path, on_warning=ctx.sink), "Read")
    ctx.output.write_content(result.value)


@app.command()
def put(
    path: Annotated[Path, typer.Argument(help="File to write")],
    content: Annotated[str, typer.Argument(help="New content")],
    _context=None,
) -> None:
    """Write content to a file, replacing what it held."""
    ctx = _get_context(_context)
    result = _check(ctx, storage.put(path, content, on_warning=ctx.sink), "Write")
    ctx.output.show_success(f"Wrote {result.value} bytes to {path}")


@app.command()
def append(
    path: Annotated[Path, typer.Argument(help="File to extend")],
    content: Annotated[str, typer.Argument(help="Content to add at the end")],
    _context=None,
) -> None:
    """Add content at the end of a file."""
    ctx = _get_context(_context)
    result = _check(ctx, storage.append(path, content, on_warning=ctx.sink), "Append")
    ctx.output.show_success(f"Appended {result.value} bytes to {path}")


@app.command()
def prepend(
    path: Annotated[Path, typer.Argument(help="File to extend")],
    content: Annotated[str, typer.Argument(help="Content to add at the beginning")],
    _context=None,
) -> None:
    """Add content at the beginning of a file."""
    ctx = _get_context(_context)
    _check(ctx, storage.prepend(path, content, on_warning=ctx.sink), "Prepend")
    ctx.output.show_success(f"Prepended content to {path}")


# ============================================================================
# File Commands
# ============================================================================


@app.command("cp")
def copy_file(
    source: Annotated[Path, typer.Argument(help="File to copy")],
    target: Annotated[Path, typer.Argument(help="Destination path")],
    _context=None,
) -> None:
    """Copy a file, creating the destination directory if needed."""
    ctx = _get_context(_context)
    _check(ctx, storage.copy(source, target, on_warning=ctx.sink), "Copy")
    ctx.output.show_success(f"Copied {source} to {target}")


@app.command("mv")
def move_file(
    source: Annotated[Path, typer.Argument(help="File to move")],
    target: Annotated[Path, typer.Argument(help="Destination path")],
    _context=None,
) -> None:
    """Move a file, creating the destination directory if needed."""
    ctx = _get_context(_context)
    _check(ctx, storage.move(source, target, on_warning=ctx.sink), "Move")
    ctx.output.show_success(f"Moved {source} to {target}")


@app.command("rm")
def remove_files(
    paths: Annotated[list[Path], typer.Argument(help="Files to delete")],
    _context=None,
) -> None:
    """Delete one or more files."""
    ctx = _get_context(_context)
    result = _check(ctx, storage.delete(*paths, on_warning=ctx.sink), "Delete")
    ctx.output.show_success(f"Deleted {len(result.value)} file(s)")


# ============================================================================
# Directory Commands
# ============================================================================


@app.command("mkdir")
def make_directory(
    path: Annotated[Path, typer.Argument(help="Directory to create")],
    mode: Annotated[
        str | None, typer.Option("--mode", "-m", help="Octal permission bits, e.g. 750")
    ] = None,
    _context=None,
) -> None:
    """Create a directory and any missing parents."""
    ctx = _get_context(_context)

    dir_mode = ctx.settings.directory_mode
    if mode is not None:
        try:
            dir_mode = int(mode, 8)
        except ValueError as e:
            ctx.output.show_error(f"Invalid mode: {mode}")
            raise typer.Exit(1) from e

    _check(ctx, storage.make_directory(path, dir_mode, on_warning=ctx.sink), "Create directory")
    ctx.output.show_success(f"Directory ready: {path}")


@app.command()
def clean(
    directory: Annotated[Path, typer.Argument(help="Directory to empty")],
    _context=None,
) -> None:
    """Delete everything inside a directory, keeping the directory."""
    ctx = _get_context(_context)
    result = _check(ctx, storage.clean_directory(directory, on_warning=ctx.sink), "Clean")
    ctx.output.show_success(f"Removed {result.value} entries from {directory}")


@app.command("rmdir")
def remove_directory(
    directory: Annotated[Path, typer.Argument(help="Directory to delete")],
    _context=None,
) -> None:
    """Delete a directory with everything inside it."""
    ctx = _get_context(_context)
    result = _check(
        ctx, storage.delete_directory(directory, on_warning=ctx.sink), "Delete directory"
    )
    ctx.output.show_success(f"Deleted {directory} ({result.value} entries)")


# ============================================================================
# Config Commands
# ============================================================================


CONFIG_KEYS = {
    "directory-mode": "directory_mode",
    "log-level": "log_level",
    "mime-sample-size": "mime_sample_size",
}


@config_app.command("show")
def config_show(
    _context=None,
) -> None:
    """Show current configuration."""
    ctx = _get_context(_context)
    settings = ctx.settings

    ctx.output.console.print("\n[bold]Configuration[/bold]")
    ctx.output.console.print(f"  Directory mode: {settings.directory_mode:o}")
    ctx.output.console.print(f"  Log level: {settings.log_level}")
    ctx.output.console.print(f"  MIME sample size: {settings.mime_sample_size}")


@config_app.command("set")
def config_set(
    key: Annotated[str, typer.Argument(help="Configuration key")],
    value: Annotated[str, typer.Argument(help="Configuration value")],
    _context=None,
) -> None:
    """Set a configuration value."""
    ctx = _get_context(_context)

    field_name = CONFIG_KEYS.get(key)
    if field_name is None:
        ctx.output.show_error(f"Unknown configuration key: {key}")
        raise typer.Exit(1)

    data = ctx.settings.model_dump()
    data[field_name] = value
    try:
        settings = StorageSettings.model_validate(data)
        save_settings(settings, ctx.config_path)
    except ValueError as e:
        ctx.output.show_error(f"Invalid value for {key}: {e}")
        raise typer.Exit(1) from e
    except ConfigError as e:
        ctx.output.show_error(str(e))
        raise typer.Exit(1) from e

    ctx.settings = settings
    ctx.output.show_success(f"Set {key} to {value}")


if __name__ == "__main__":
    app()
