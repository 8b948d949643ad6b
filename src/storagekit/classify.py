"""Path classifiers.

Thin wrappers over the OS existence and type queries. None of them emit
diagnostics: a missing path is an answer, not a failure.
"""

from __future__ import annotations

import os
from pathlib import Path

FILE = "file"
DIRECTORY = "dir"
UNKNOWN = "unknown"


def exists(path: str | os.PathLike[str]) -> bool:
    """Check if a file, directory or other entry exists at path."""
    return os.path.exists(path)


def is_file(path: str | os.PathLike[str]) -> bool:
    """Check if path is an existing regular file (symlinks followed)."""
    return os.path.isfile(path)


def is_directory(path: str | os.PathLike[str]) -> bool:
    """Check if path is an existing directory (symlinks followed)."""
    return os.path.isdir(path)


def is_writable(path: str | os.PathLike[str]) -> bool:
    """Check if an existing path is writable by the current process.

    A missing path is never writable; the parent directory is not consulted.
    """
    if not exists(path):
        return False
    return os.access(path, os.W_OK)


def path_type(path: str | os.PathLike[str]) -> str:
    """Classify a path as "file", "dir" or "unknown".

    Sockets, FIFOs, dangling symlinks and missing paths are all "unknown".
    """
    if is_file(path):
        return FILE
    if is_directory(path):
        return DIRECTORY
    return UNKNOWN


def _split_name(path: str | os.PathLike[str]) -> tuple[str, str]:
    """Split the final path segment into (name, extension).

    Leading dots belong to the name, so dotfiles have no extension. A
    trailing dot is dropped and leaves an empty extension.
    """
    segment = Path(path).name
    if "." not in segment.lstrip("."):
        return segment, ""
    stem, _, suffix = segment.rpartition(".")
    return stem, suffix


def extension(path: str | os.PathLike[str]) -> str:
    """Extract the extension of the final path segment, without the dot.

    Example:
        >>> extension("archive.tar.gz")
        'gz'
        >>> extension("README")
        ''
    """
    return _split_name(path)[1]


def name(path: str | os.PathLike[str]) -> str:
    """Extract the final path segment with its extension stripped.

    Example:
        >>> name("/tmp/archive.tar.gz")
        'archive.tar'
    """
    return _split_name(path)[0]
