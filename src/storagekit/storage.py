"""Flat namespace of every storage operation.

Usage:
    >>> from storagekit import storage
    >>> storage.put("/tmp/demo/notes.txt", "hello")
    >>> storage.get("/tmp/demo/notes.txt").value
    b'hello'
"""

from __future__ import annotations

from storagekit.classify import (
    exists,
    extension,
    is_directory,
    is_file,
    is_writable,
    name,
    path_type,
)
from storagekit.content import append, get, prepend, put
from storagekit.directory import make_directory
from storagekit.metadata import last_modified, mime_type, size
from storagekit.transfer import copy, delete, move
from storagekit.tree import (
    all_directories,
    all_files,
    clean_directory,
    delete_directory,
    directories,
    files,
    walk,
)

__all__ = [
    "all_directories",
    "all_files",
    "append",
    "clean_directory",
    "copy",
    "delete",
    "delete_directory",
    "directories",
    "exists",
    "extension",
    "files",
    "get",
    "is_directory",
    "is_file",
    "is_writable",
    "last_modified",
    "make_directory",
    "mime_type",
    "move",
    "name",
    "path_type",
    "prepend",
    "put",
    "size",
    "walk",
]
