"""Directory tree listing and removal.

Traversals use an explicit worklist rather than recursion, so tree depth is
bounded only by the filesystem. Symlinks to directories are reported as
directories but never descended into: a listing cannot loop on a symlink
cycle and a removal never reaches outside the tree it was given.

Sibling order is whatever the OS enumeration returns; nothing is sorted.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from pathlib import Path

from storagekit.classify import DIRECTORY, FILE, UNKNOWN, is_directory
from storagekit.diagnostics import fail, fail_os, warn
from storagekit.protocols import DiagnosticSink
from storagekit.types import ErrorKind, StorageResult

logger = logging.getLogger(__name__)


def _scan(directory: Path, on_warning: DiagnosticSink | None) -> list[os.DirEntry[str]] | None:
    """Enumerate the direct children of a directory.

    Returns:
        The entries, or None if the directory could not be read.
    """
    try:
        with os.scandir(directory) as entries:
            return list(entries)
    except OSError as e:
        detail = e.strerror or str(e)
        warn(directory, f"Unable to read directory ({detail})", ErrorKind.ENUMERATION_ERROR, on_warning)
        return None


def _classify(entry: os.DirEntry[str]) -> str:
    """Classify an entry the way the OS reports it (symlinks followed)."""
    try:
        if entry.is_file():
            return FILE
        if entry.is_dir():
            return DIRECTORY
    except OSError:
        pass
    return UNKNOWN


def _is_real_directory(entry: os.DirEntry[str]) -> bool:
    """Check if an entry is a directory that is not a symlink."""
    try:
        return entry.is_dir(follow_symlinks=False)
    except OSError:
        return False


def _require_directory(root: Path, on_warning: DiagnosticSink | None) -> bool:
    if is_directory(root):
        return True
    warn(root, "Directory does not exist or is not a directory", ErrorKind.NOT_FOUND, on_warning)
    return False


def _children(
    directory: str | os.PathLike[str],
    wanted: str,
    on_warning: DiagnosticSink | None,
) -> list[Path]:
    root = Path(directory)
    if not _require_directory(root, on_warning):
        return []
    entries = _scan(root, on_warning)
    if entries is None:
        return []
    return [root / entry.name for entry in entries if _classify(entry) == wanted]


def files(
    directory: str | os.PathLike[str],
    *,
    on_warning: DiagnosticSink | None = None,
) -> list[Path]:
    """List the files directly inside a directory.

    Args:
        directory: Directory to scan.
        on_warning: Diagnostic sink for failures.

    Returns:
        Full paths of the files; empty if the directory cannot be read.
    """
    return _children(directory, FILE, on_warning)


def directories(
    directory: str | os.PathLike[str],
    *,
    on_warning: DiagnosticSink | None = None,
) -> list[Path]:
    """List the directories directly inside a directory.

    Args:
        directory: Directory to scan.
        on_warning: Diagnostic sink for failures.

    Returns:
        Full paths of the subdirectories; empty if the directory cannot be read.
    """
    return _children(directory, DIRECTORY, on_warning)


def walk(
    directory: str | os.PathLike[str],
    *,
    on_warning: DiagnosticSink | None = None,
) -> Iterator[tuple[Path, bool]]:
    """Yield every file and directory below a directory.

    Directories are yielded before anything inside them. A subdirectory that
    cannot be read is reported to the sink and skipped; the walk goes on.

    Args:
        directory: Root of the tree. It is not yielded itself.
        on_warning: Diagnostic sink for failures.

    Yields:
        (path, is_dir) pairs.
    """
    root = Path(directory)
    if not _require_directory(root, on_warning):
        return

    stack = [root]
    while stack:
        current = stack.pop()
        entries = _scan(current, on_warning)
        if entries is None:
            continue

        subdirs = []
        for entry in entries:
            path = current / entry.name
            kind = _classify(entry)
            if kind == DIRECTORY:
                yield path, True
                if _is_real_directory(entry):
                    subdirs.append(path)
            elif kind == FILE:
                yield path, False
        # Reversed so the first subdirectory is the next one visited
        stack.extend(reversed(subdirs))


def all_files(
    directory: str | os.PathLike[str],
    *,
    on_warning: DiagnosticSink | None = None,
) -> list[Path]:
    """List every file in a directory and all of its subdirectories."""
    return [path for path, is_dir in walk(directory, on_warning=on_warning) if not is_dir]


def all_directories(
    directory: str | os.PathLike[str],
    *,
    on_warning: DiagnosticSink | None = None,
) -> list[Path]:
    """List every directory below a directory, parents before children."""
    return [path for path, is_dir in walk(directory, on_warning=on_warning) if is_dir]


def _remove(path: Path, is_dir: bool, on_warning: DiagnosticSink | None) -> bool:
    try:
        if is_dir:
            os.rmdir(path)
        else:
            os.unlink(path)
    except FileNotFoundError:
        # Removed by someone else in the meantime
        return True
    except OSError as e:
        what = "subdirectory" if is_dir else "file"
        fail_os(path, f"Unable to delete {what}", e, ErrorKind.WRITE_ERROR, on_warning)
        return False
    return True


def _remove_contents(root: Path, on_warning: DiagnosticSink | None) -> tuple[int, int]:
    """Remove everything below root, leaving root itself in place.

    Files and symlinks are unlinked while the tree is scanned; directories
    are collected in discovery order and removed in reverse, so every
    directory is emptied before its own removal. Failures do not stop the
    remaining work.

    Returns:
        (removed, failed) entry counts.
    """
    removed = failed = 0
    found_dirs: list[Path] = []

    stack = [root]
    while stack:
        current = stack.pop()
        entries = _scan(current, on_warning)
        if entries is None:
            # A non-empty subdirectory is counted when its rmdir fails
            if current == root:
                failed += 1
            continue
        for entry in entries:
            path = current / entry.name
            if _is_real_directory(entry):
                found_dirs.append(path)
                stack.append(path)
            elif _remove(path, False, on_warning):
                removed += 1
            else:
                failed += 1

    for path in reversed(found_dirs):
        if _remove(path, True, on_warning):
            removed += 1
        else:
            failed += 1

    return removed, failed


def clean_directory(
    directory: str | os.PathLike[str],
    *,
    on_warning: DiagnosticSink | None = None,
) -> StorageResult:
    """Empty a directory of all files and subdirectories, keeping the directory.

    Every entry is attempted even after a failure; the result is a success
    only if everything was removed.

    Args:
        directory: Directory to empty.
        on_warning: Diagnostic sink for failures.

    Returns:
        StorageResult whose value is the number of entries removed.
    """
    root = Path(directory)
    if not is_directory(root):
        return fail(
            root, "Directory does not exist or is not a directory", ErrorKind.NOT_FOUND, on_warning
        )

    removed, failed = _remove_contents(root, on_warning)
    if failed:
        return fail(
            root,
            f"Unable to clean directory ({failed} entries could not be removed)",
            ErrorKind.WRITE_ERROR,
            on_warning,
        )

    logger.debug("Cleaned %s (%d entries removed)", root, removed)
    return StorageResult.ok(root, removed)


def delete_directory(
    directory: str | os.PathLike[str],
    *,
    on_warning: DiagnosticSink | None = None,
) -> StorageResult:
    """Remove a directory with all of its files and subdirectories.

    Same best-effort policy as clean_directory. The directory itself is only
    removed once everything inside it is gone. A symlink to a directory is
    unlinked; its target is left untouched.

    Args:
        directory: Directory to remove.
        on_warning: Diagnostic sink for failures.

    Returns:
        StorageResult whose value is the number of entries removed, the
        directory included.
    """
    root = Path(directory)
    if not is_directory(root):
        return fail(
            root, "Directory does not exist or is not a directory", ErrorKind.NOT_FOUND, on_warning
        )

    if root.is_symlink():
        if not _remove(root, False, on_warning):
            return StorageResult.fail(root, "Unable to delete directory link", ErrorKind.WRITE_ERROR)
        logger.debug("Unlinked directory link %s", root)
        return StorageResult.ok(root, 1)

    removed, failed = _remove_contents(root, on_warning)
    if failed:
        return fail(
            root,
            f"Unable to delete directory ({failed} entries could not be removed)",
            ErrorKind.WRITE_ERROR,
            on_warning,
        )

    try:
        os.rmdir(root)
    except OSError as e:
        return fail_os(root, "Unable to delete directory", e, ErrorKind.WRITE_ERROR, on_warning)

    logger.debug("Deleted %s (%d entries removed)", root, removed + 1)
    return StorageResult.ok(root, removed + 1)
