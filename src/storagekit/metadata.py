"""File metadata queries: size, modification time and MIME type."""

from __future__ import annotations

import codecs
import logging
import mimetypes
import os
from pathlib import Path

from storagekit.classify import is_file
from storagekit.diagnostics import fail, fail_os
from storagekit.protocols import DiagnosticSink, MimeDetector
from storagekit.types import ErrorKind, StorageResult

logger = logging.getLogger(__name__)

DEFAULT_SAMPLE_SIZE = 2048

EMPTY_MIME_TYPE = "application/x-empty"
TEXT_MIME_TYPE = "text/plain"
BINARY_MIME_TYPE = "application/octet-stream"

# Leading-byte signatures, checked in order
SIGNATURES: tuple[tuple[bytes, str], ...] = (
    (b"\x89PNG\r\n\x1a\n", "image/png"),
    (b"\xff\xd8\xff", "image/jpeg"),
    (b"GIF87a", "image/gif"),
    (b"GIF89a", "image/gif"),
    (b"%PDF-", "application/pdf"),
    (b"PK\x03\x04", "application/zip"),
    (b"PK\x05\x06", "application/zip"),
    (b"\x1f\x8b", "application/gzip"),
    (b"BZh", "application/x-bzip2"),
    (b"\xfd7zXZ\x00", "application/x-xz"),
    (b"7z\xbc\xaf\x27\x1c", "application/x-7z-compressed"),
    (b"\x7fELF", "application/x-executable"),
    (b"OggS", "audio/ogg"),
    (b"fLaC", "audio/flac"),
    (b"ID3", "audio/mpeg"),
    (b"\x1a\x45\xdf\xa3", "video/webm"),
    (b"SQLite format 3\x00", "application/vnd.sqlite3"),
    (b"\x00\x00\x01\x00", "image/vnd.microsoft.icon"),
)


# Registered types outside text/* whose content is text
TEXT_APPLICATION_TYPES = frozenset(
    {
        "application/json",
        "application/javascript",
        "application/xml",
        "application/x-sh",
        "application/x-yaml",
        "application/yaml",
        "application/toml",
        "application/sql",
        "image/svg+xml",
    }
)


def _is_text_type(mime: str) -> bool:
    return mime.startswith("text/") or mime in TEXT_APPLICATION_TYPES


def _looks_like_text(sample: bytes) -> bool:
    """Check if a sample is NUL-free UTF-8, tolerating a cut final character."""
    if b"\x00" in sample:
        return False
    try:
        codecs.getincrementaldecoder("utf-8")().decode(sample, final=False)
    except UnicodeDecodeError:
        return False
    return True


def sniff_mime_type(path: Path, sample: bytes) -> str | None:
    """Default MIME detector.

    Known content signatures win over the file name. Otherwise the sample
    is classified as text or binary, and the type registered for the
    extension is used only when it agrees with that classification.
    """
    if not sample:
        return EMPTY_MIME_TYPE

    for signature, mime in SIGNATURES:
        if sample.startswith(signature):
            return mime
    if sample[:4] == b"RIFF" and sample[8:12] == b"WAVE":
        return "audio/wav"
    if sample[:4] == b"RIFF" and sample[8:12] == b"WEBP":
        return "image/webp"

    text = _looks_like_text(sample)
    guessed, _ = mimetypes.guess_type(path.name)
    if guessed and _is_text_type(guessed) == text:
        return guessed
    return TEXT_MIME_TYPE if text else BINARY_MIME_TYPE


def _require_file(target: Path, on_warning: DiagnosticSink | None) -> StorageResult | None:
    if is_file(target):
        return None
    return fail(
        target, "Path does not exist or is not a file", ErrorKind.NOT_FOUND, on_warning
    )


def size(
    path: str | os.PathLike[str],
    *,
    on_warning: DiagnosticSink | None = None,
) -> StorageResult:
    """Get the size of a file in bytes."""
    target = Path(path)
    failure = _require_file(target, on_warning)
    if failure is not None:
        return failure

    try:
        return StorageResult.ok(target, target.stat().st_size)
    except OSError as e:
        return fail_os(target, "Unable to get file size", e, ErrorKind.READ_ERROR, on_warning)


def last_modified(
    path: str | os.PathLike[str],
    *,
    on_warning: DiagnosticSink | None = None,
) -> StorageResult:
    """Get the modification time of a file as a POSIX timestamp."""
    target = Path(path)
    failure = _require_file(target, on_warning)
    if failure is not None:
        return failure

    try:
        return StorageResult.ok(target, target.stat().st_mtime)
    except OSError as e:
        return fail_os(
            target, "Unable to get last modification time", e, ErrorKind.READ_ERROR, on_warning
        )


def mime_type(
    path: str | os.PathLike[str],
    *,
    detector: MimeDetector | None = None,
    sample_size: int = DEFAULT_SAMPLE_SIZE,
    on_warning: DiagnosticSink | None = None,
) -> StorageResult:
    """Get the MIME type of a file from its content.

    Args:
        path: File to inspect.
        detector: Detection callable; sniff_mime_type when omitted.
        sample_size: Number of leading bytes handed to the detector.
        on_warning: Diagnostic sink for failures.

    Returns:
        StorageResult whose value is the MIME type, e.g. "text/plain".
    """
    target = Path(path)
    failure = _require_file(target, on_warning)
    if failure is not None:
        return failure

    try:
        with open(target, "rb") as handle:
            sample = handle.read(sample_size)
    except OSError as e:
        return fail_os(target, "Unable to read file", e, ErrorKind.READ_ERROR, on_warning)

    detect = detector or sniff_mime_type
    try:
        detected = detect(target, sample)
    except Exception as e:
        logger.debug("MIME detector raised for %s", target, exc_info=True)
        return fail(
            target,
            f"MIME type detection failed ({e})",
            ErrorKind.MIME_UNAVAILABLE,
            on_warning,
        )

    if not detected:
        return fail(
            target, "Unable to determine MIME type", ErrorKind.MIME_UNAVAILABLE, on_warning
        )
    return StorageResult.ok(target, detected)
