"""Whole-file content operations: get, put, append and prepend.

Every write takes an exclusive advisory lock for the duration of the write
and creates the parent directory first when it is missing.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from storagekit.classify import is_file
from storagekit.diagnostics import fail, fail_os
from storagekit.directory import ensure_parent
from storagekit.locking import exclusive_lock
from storagekit.protocols import DiagnosticSink
from storagekit.types import ErrorKind, StorageResult

logger = logging.getLogger(__name__)

Content = str | bytes | bytearray | memoryview

# Permission bits for newly created files, before the umask
FILE_MODE = 0o666


def _as_bytes(content: Content) -> bytes:
    """Normalize write content to bytes, encoding text as UTF-8."""
    if isinstance(content, str):
        return content.encode("utf-8")
    if isinstance(content, (bytes, bytearray, memoryview)):
        return bytes(content)
    raise TypeError(f"content must be str or bytes, not {type(content).__name__}")


def _parent_failure(target: Path, parent: StorageResult) -> StorageResult:
    """Carry a parent-directory failure over to the file being written.

    make_directory has already reported the diagnostic.
    """
    return StorageResult.fail(target, parent.error or "", parent.kind or ErrorKind.WRITE_ERROR)


def get(
    path: str | os.PathLike[str],
    *,
    on_warning: DiagnosticSink | None = None,
) -> StorageResult:
    """Read the full content of a file.

    Args:
        path: File to read.
        on_warning: Diagnostic sink for failures.

    Returns:
        StorageResult whose value is the file content as bytes.
    """
    target = Path(path)
    if not is_file(target):
        return fail(
            target, "File does not exist or is not a file", ErrorKind.NOT_FOUND, on_warning
        )

    try:
        data = target.read_bytes()
    except OSError as e:
        return fail_os(target, "Unable to read file", e, ErrorKind.READ_ERROR, on_warning)

    return StorageResult.ok(target, data)


def put(
    path: str | os.PathLike[str],
    content: Content,
    *,
    on_warning: DiagnosticSink | None = None,
) -> StorageResult:
    """Write content to a file, replacing whatever it held.

    The file is opened without truncation and only emptied once the lock is
    held, so a concurrent locked writer never sees its data cut short.

    Args:
        path: File to write.
        content: New content (text is encoded as UTF-8).
        on_warning: Diagnostic sink for failures.

    Returns:
        StorageResult whose value is the number of bytes written.
    """
    target = Path(path)
    data = _as_bytes(content)

    parent = ensure_parent(target, on_warning=on_warning)
    if not parent:
        return _parent_failure(target, parent)

    try:
        fd = os.open(target, os.O_WRONLY | os.O_CREAT, FILE_MODE)
        with os.fdopen(fd, "wb") as handle, exclusive_lock(handle):
            handle.truncate(0)
            handle.write(data)
    except OSError as e:
        return fail_os(
            target, "Unable to store content in file", e, ErrorKind.WRITE_ERROR, on_warning
        )

    logger.debug("Wrote %d bytes to %s", len(data), target)
    return StorageResult.ok(target, len(data))


def append(
    path: str | os.PathLike[str],
    content: Content,
    *,
    on_warning: DiagnosticSink | None = None,
) -> StorageResult:
    """Add content at the end of a file, creating it if absent.

    Args:
        path: File to extend.
        content: Content to add (text is encoded as UTF-8).
        on_warning: Diagnostic sink for failures.

    Returns:
        StorageResult whose value is the number of bytes appended.
    """
    target = Path(path)
    data = _as_bytes(content)

    parent = ensure_parent(target, on_warning=on_warning)
    if not parent:
        return _parent_failure(target, parent)

    try:
        with open(target, "ab") as handle, exclusive_lock(handle):
            handle.write(data)
    except OSError as e:
        return fail_os(
            target, "Unable to append content to file", e, ErrorKind.WRITE_ERROR, on_warning
        )

    logger.debug("Appended %d bytes to %s", len(data), target)
    return StorageResult.ok(target, len(data))


def prepend(
    path: str | os.PathLike[str],
    content: Content,
    *,
    on_warning: DiagnosticSink | None = None,
) -> StorageResult:
    """Insert content at the beginning of a file, creating it if absent.

    The current content is read and the file rewritten under a single lock,
    so locked writers cannot slip an update in between. An existing file
    that cannot be read is left untouched.

    Args:
        path: File to extend.
        content: Content to insert (text is encoded as UTF-8).
        on_warning: Diagnostic sink for failures.

    Returns:
        StorageResult whose value is the new size of the file in bytes.
    """
    target = Path(path)
    data = _as_bytes(content)

    parent = ensure_parent(target, on_warning=on_warning)
    if not parent:
        return _parent_failure(target, parent)

    try:
        fd = os.open(target, os.O_RDWR | os.O_CREAT, FILE_MODE)
        with os.fdopen(fd, "r+b") as handle, exclusive_lock(handle):
            current = handle.read()
            handle.seek(0)
            handle.truncate()
            handle.write(data + current)
    except OSError as e:
        return fail_os(
            target, "Unable to prepend content to file", e, ErrorKind.WRITE_ERROR, on_warning
        )

    logger.debug("Prepended %d bytes to %s", len(data), target)
    return StorageResult.ok(target, len(data) + len(current))
