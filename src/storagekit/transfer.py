"""Single-file copy, move and delete."""

from __future__ import annotations

import errno
import logging
import os
import shutil
from pathlib import Path

from storagekit.classify import exists, is_file
from storagekit.diagnostics import fail, fail_os
from storagekit.directory import ensure_parent
from storagekit.protocols import DiagnosticSink
from storagekit.types import ErrorKind, StorageResult

logger = logging.getLogger(__name__)


def _prepare(
    source: Path, target: Path, action: str, on_warning: DiagnosticSink | None
) -> StorageResult | None:
    """Check the source and create the target's parent directory.

    Returns:
        A failed result, or None if the transfer may proceed.
    """
    if not is_file(source):
        return fail(
            source,
            "Source file does not exist or is not a file",
            ErrorKind.NOT_FOUND,
            on_warning,
        )

    parent = ensure_parent(target, on_warning=on_warning)
    if not parent:
        return StorageResult.fail(
            target,
            f"Unable to create destination directory for {action}",
            parent.kind or ErrorKind.WRITE_ERROR,
        )
    return None


def copy(
    path: str | os.PathLike[str],
    target: str | os.PathLike[str],
    *,
    on_warning: DiagnosticSink | None = None,
) -> StorageResult:
    """Copy a file to another location, creating the destination directory.

    Content and timestamps are copied. An existing target file is replaced.

    Args:
        path: Source file.
        target: Destination path, file name included.
        on_warning: Diagnostic sink for failures.

    Returns:
        StorageResult for the destination.
    """
    source, destination = Path(path), Path(target)
    failure = _prepare(source, destination, "copy", on_warning)
    if failure is not None:
        return failure

    try:
        shutil.copy2(source, destination)
    except (OSError, shutil.Error) as e:
        return fail(
            destination,
            f"Unable to copy file from '{source}' ({e})",
            ErrorKind.WRITE_ERROR,
            on_warning,
        )

    logger.debug("Copied %s to %s", source, destination)
    return StorageResult.ok(destination)


def move(
    path: str | os.PathLike[str],
    target: str | os.PathLike[str],
    *,
    on_warning: DiagnosticSink | None = None,
) -> StorageResult:
    """Move a file to a new location, creating the destination directory.

    The rename is atomic when both paths are on the same filesystem. Across
    filesystems the file is copied and the source removed afterwards.

    Args:
        path: Source file.
        target: Destination path, file name included.
        on_warning: Diagnostic sink for failures.

    Returns:
        StorageResult for the destination.
    """
    source, destination = Path(path), Path(target)
    failure = _prepare(source, destination, "move", on_warning)
    if failure is not None:
        return failure

    try:
        os.replace(source, destination)
    except OSError as e:
        if e.errno != errno.EXDEV:
            return fail_os(
                destination,
                f"Unable to move file from '{source}'",
                e,
                ErrorKind.WRITE_ERROR,
                on_warning,
            )
        try:
            shutil.move(source, destination)
        except (OSError, shutil.Error) as move_error:
            return fail(
                destination,
                f"Unable to move file across devices from '{source}' ({move_error})",
                ErrorKind.WRITE_ERROR,
                on_warning,
            )

    logger.debug("Moved %s to %s", source, destination)
    return StorageResult.ok(destination)


def delete(
    *paths: str | os.PathLike[str],
    on_warning: DiagnosticSink | None = None,
) -> StorageResult:
    """Remove one or more files.

    Paths that do not exist are skipped. A path that exists but is not a
    file is a failure. Every path is attempted even after a failure.

    Args:
        *paths: Files to remove.
        on_warning: Diagnostic sink for failures.

    Returns:
        StorageResult whose value is the list of paths removed. A failed
        result is anchored on the first path that could not be deleted.
    """
    removed: list[Path] = []
    failures: list[Path] = []

    for raw in paths:
        path = Path(raw)
        if not exists(path):
            logger.debug("Nothing to delete at %s", path)
            continue
        if not is_file(path):
            fail(path, "Path is not a file", ErrorKind.NOT_FOUND, on_warning)
            failures.append(path)
            continue
        try:
            os.unlink(path)
        except FileNotFoundError:
            continue
        except OSError as e:
            fail_os(path, "Unable to delete file", e, ErrorKind.WRITE_ERROR, on_warning)
            failures.append(path)
            continue
        removed.append(path)

    if failures:
        return fail(
            failures[0],
            f"{len(failures)} of {len(paths)} files could not be deleted",
            ErrorKind.WRITE_ERROR,
            on_warning,
        )
    return StorageResult.ok(Path(paths[0]) if paths else Path("."), removed)
