"""Stateless convenience functions over the local filesystem."""

__version__ = "0.1.0"

# Export the operations and result types for direct import
from storagekit import storage
from storagekit.protocols import DiagnosticSink, MimeDetector
from storagekit.storage import (
    all_directories,
    all_files,
    append,
    clean_directory,
    copy,
    delete,
    delete_directory,
    directories,
    exists,
    extension,
    files,
    get,
    is_directory,
    is_file,
    is_writable,
    last_modified,
    make_directory,
    mime_type,
    move,
    name,
    path_type,
    prepend,
    put,
    size,
    walk,
)
from storagekit.types import Diagnostic, ErrorKind, StorageError, StorageResult

__all__ = [
    "__version__",
    "Diagnostic",
    "DiagnosticSink",
    "ErrorKind",
    "MimeDetector",
    "StorageError",
    "StorageResult",
    "storage",
    *storage.__all__,
]
