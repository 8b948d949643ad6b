"""Failure reporting shared by every storage operation."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from storagekit.protocols import DiagnosticSink
from storagekit.types import Diagnostic, ErrorKind, StorageResult

logger = logging.getLogger(__name__)


def log_diagnostic(diagnostic: Diagnostic) -> None:
    """Default sink: log the diagnostic as a warning."""
    logger.warning("%s: %s", diagnostic.message, diagnostic.path)


def kind_for(error: OSError, default: ErrorKind) -> ErrorKind:
    """Map an OS error onto the failure taxonomy.

    Args:
        error: The error raised by the OS call.
        default: Kind to use when the error has no more specific mapping.

    Returns:
        The matching ErrorKind.
    """
    if isinstance(error, (FileNotFoundError, NotADirectoryError)):
        return ErrorKind.NOT_FOUND
    if isinstance(error, PermissionError):
        return ErrorKind.PERMISSION_DENIED
    if isinstance(error, FileExistsError):
        return ErrorKind.ALREADY_EXISTS
    return default


def warn(
    path: str | os.PathLike[str],
    message: str,
    kind: ErrorKind,
    on_warning: DiagnosticSink | None = None,
) -> Diagnostic:
    """Emit a diagnostic to the given sink, or the default one."""
    diagnostic = Diagnostic(message=message, path=Path(path), kind=kind)
    (on_warning or log_diagnostic)(diagnostic)
    return diagnostic


def fail(
    path: str | os.PathLike[str],
    message: str,
    kind: ErrorKind,
    on_warning: DiagnosticSink | None = None,
) -> StorageResult:
    """Emit a diagnostic and build the matching failed result."""
    diagnostic = warn(path, message, kind, on_warning)
    return StorageResult.fail(diagnostic.path, message, kind)


def fail_os(
    path: str | os.PathLike[str],
    message: str,
    error: OSError,
    default: ErrorKind,
    on_warning: DiagnosticSink | None = None,
) -> StorageResult:
    """Emit a diagnostic for a failed OS call and build the failed result."""
    detail = error.strerror or str(error)
    return fail(path, f"{message} ({detail})", kind_for(error, default), on_warning)
