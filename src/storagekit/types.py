"""Shared data types for storagekit."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

__all__ = ["Diagnostic", "ErrorKind", "StorageError", "StorageResult"]


class ErrorKind(str, Enum):
    """Category of a failed filesystem operation."""

    NOT_FOUND = "not_found"
    READ_ERROR = "read_error"
    WRITE_ERROR = "write_error"
    PERMISSION_DENIED = "permission_denied"
    ALREADY_EXISTS = "already_exists"
    ENUMERATION_ERROR = "enumeration_error"
    MIME_UNAVAILABLE = "mime_unavailable"


@dataclass(frozen=True)
class Diagnostic:
    """A non-fatal warning emitted when an operation fails.

    Attributes:
        message: Human-readable description of the failure.
        path: The offending path.
        kind: Failure category.
    """

    message: str
    path: Path
    kind: ErrorKind

    def __str__(self) -> str:
        return f"{self.message}: {self.path}"


class StorageError(Exception):
    """Raised by StorageResult.unwrap() when the result is a failure."""

    def __init__(self, result: StorageResult) -> None:
        super().__init__(f"{result.error}: {result.path}")
        self.result = result


@dataclass
class StorageResult:
    """Result of a filesystem operation.

    Attributes:
        success: True if the operation succeeded.
        path: Path the operation acted on.
        value: Payload of a successful query (bytes, size, timestamp...).
        error: Error message (None on success).
        kind: Failure category (None on success).
    """

    success: bool
    path: Path
    value: Any = None
    error: str | None = None
    kind: ErrorKind | None = None

    def __post_init__(self) -> None:
        """Validate invariants."""
        if self.success and (self.error is not None or self.kind is not None):
            raise ValueError("success=True but error is set")
        if not self.success and (self.error is None or self.kind is None):
            raise ValueError("success=False requires error message and kind")

    def __bool__(self) -> bool:
        return self.success

    @classmethod
    def ok(cls, path: Path, value: Any = None) -> StorageResult:
        """Build a successful result."""
        return cls(success=True, path=path, value=value)

    @classmethod
    def fail(cls, path: Path, error: str, kind: ErrorKind) -> StorageResult:
        """Build a failed result."""
        return cls(success=False, path=path, error=error, kind=kind)

    def unwrap(self) -> Any:
        """Return the value of a successful result.

        Raises:
            StorageError: If the result is a failure.
        """
        if not self.success:
            raise StorageError(self)
        return self.value
