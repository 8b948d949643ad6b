"""Directory creation."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from storagekit.classify import is_directory
from storagekit.diagnostics import fail_os
from storagekit.protocols import DiagnosticSink
from storagekit.types import ErrorKind, StorageResult

logger = logging.getLogger(__name__)

DEFAULT_DIRECTORY_MODE = 0o755


def make_directory(
    path: str | os.PathLike[str],
    mode: int = DEFAULT_DIRECTORY_MODE,
    recursive: bool = True,
    *,
    on_warning: DiagnosticSink | None = None,
) -> StorageResult:
    """Create a directory, including missing ancestors when recursive.

    An existing directory is a success without change, so the call is
    idempotent.

    Args:
        path: Directory to create.
        mode: Permission bits for created directories (umask applies).
        recursive: Create missing parent directories.
        on_warning: Diagnostic sink for failures.

    Returns:
        StorageResult for the directory.
    """
    target = Path(path)
    if is_directory(target):
        return StorageResult.ok(target)

    try:
        if recursive:
            os.makedirs(target, mode)
        else:
            os.mkdir(target, mode)
    except OSError as e:
        # Lost a race against another creator
        if isinstance(e, FileExistsError) and is_directory(target):
            return StorageResult.ok(target)
        return fail_os(
            target, "Unable to create directory", e, ErrorKind.WRITE_ERROR, on_warning
        )

    logger.debug("Created directory %s (mode %o)", target, mode)
    return StorageResult.ok(target)


def ensure_parent(
    path: str | os.PathLike[str],
    *,
    on_warning: DiagnosticSink | None = None,
) -> StorageResult:
    """Make sure the directory containing path exists."""
    return make_directory(Path(path).parent, on_warning=on_warning)
