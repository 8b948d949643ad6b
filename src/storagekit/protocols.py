"""Protocol definitions for the collaborators storage operations call out to.

Operations accept these as keyword arguments instead of reaching for global
state, so callers and tests can substitute their own implementations.

All concrete implementations satisfy these protocols structurally (duck typing).
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable

from storagekit.types import Diagnostic


@runtime_checkable
class DiagnosticSink(Protocol):
    """Protocol for receiving failure diagnostics.

    A sink is observability only: operations report the failure through
    their return value regardless of what the sink does.
    """

    def __call__(self, diagnostic: Diagnostic) -> None:
        """Receive a diagnostic.

        Args:
            diagnostic: The failure being reported.
        """
        ...


@runtime_checkable
class MimeDetector(Protocol):
    """Protocol for MIME type detection.

    Implementations inspect the path and the leading bytes of the file.
    """

    def __call__(self, path: Path, sample: bytes) -> str | None:
        """Detect the MIME type of a file.

        Args:
            path: Path to the file.
            sample: Leading bytes of the file content.

        Returns:
            MIME type string, or None if detection failed.
        """
        ...
