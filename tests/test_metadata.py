"""Tests for metadata queries."""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from storagekit import metadata
from storagekit.types import ErrorKind

if TYPE_CHECKING:
    from conftest import RecordingSink


class TestSize:
    """Tests for size."""

    def test_size(self, tmp_path: Path) -> None:
        """Test the byte length of a file is returned."""
        path = tmp_path / "f.bin"
        path.write_bytes(b"12345")

        assert metadata.size(path).value == 5

    def test_empty_file(self, tmp_path: Path) -> None:
        """Test an empty file has size zero and still succeeds."""
        path = tmp_path / "empty"
        path.touch()

        result = metadata.size(path)

        assert result
        assert result.value == 0

    def test_directory_not_found(self, tmp_path: Path, sink: RecordingSink) -> None:
        """Test a directory has no size."""
        result = metadata.size(tmp_path, on_warning=sink)

        assert result.kind is ErrorKind.NOT_FOUND
        assert len(sink.diagnostics) == 1


class TestLastModified:
    """Tests for last_modified."""

    def test_reports_mtime(self, tmp_path: Path) -> None:
        """Test the OS modification time is returned."""
        path = tmp_path / "f.txt"
        path.write_text("x")
        os.utime(path, (1_000_000_000, 1_234_567_890))

        assert metadata.last_modified(path).value == 1_234_567_890

    def test_missing(self, tmp_path: Path, sink: RecordingSink) -> None:
        """Test a missing file fails with NOT_FOUND."""
        result = metadata.last_modified(tmp_path / "missing", on_warning=sink)

        assert not result
        assert result.kind is ErrorKind.NOT_FOUND


class TestMimeType:
    """Tests for mime_type and the default detector."""

    @pytest.mark.parametrize(
        ("filename", "data", "expected"),
        [
            ("document.txt", b"plain words\n", "text/plain"),
            ("notes", "café crème".encode(), "text/plain"),
            ("image.dat", b"\x89PNG\r\n\x1a\n" + b"\x00" * 16, "image/png"),
            ("report", b"%PDF-1.7\n", "application/pdf"),
            ("archive.bin", b"PK\x03\x04rest", "application/zip"),
            ("sound", b"RIFF\x00\x00\x00\x00WAVEfmt ", "audio/wav"),
            ("blob", b"\x00\x01\x02\x03", "application/octet-stream"),
            ("empty.txt", b"", "application/x-empty"),
            ("page.html", b"<html></html>", "text/html"),
            ("data.json", b'{"a": 1}', "application/json"),
            ("notes.txt", b"\x00\x01\x02\x03\xfe\xff binary blob", "application/octet-stream"),
            ("report.pdf", b"just some plain text\n", "text/plain"),
        ],
    )
    def test_detection(self, tmp_path: Path, filename: str, data: bytes, expected: str) -> None:
        """Test the MIME type is detected from content, then name."""
        path = tmp_path / filename
        path.write_bytes(data)

        assert metadata.mime_type(path).value == expected

    def test_content_beats_extension(self, tmp_path: Path) -> None:
        """Test a PNG signature wins over a misleading .txt name."""
        path = tmp_path / "picture.txt"
        path.write_bytes(b"\x89PNG\r\n\x1a\n")

        assert metadata.mime_type(path).value == "image/png"

    def test_utf8_cut_at_sample_boundary(self, tmp_path: Path) -> None:
        """Test a multibyte character split by the sample is still text."""
        path = tmp_path / "text"
        path.write_bytes("aé".encode())

        assert metadata.mime_type(path, sample_size=2).value == "text/plain"

    def test_injected_detector(self, tmp_path: Path) -> None:
        """Test a custom detector receives the path and leading bytes."""
        path = tmp_path / "f.custom"
        path.write_bytes(b"abcdef")
        calls = []

        def detector(p: Path, sample: bytes) -> str:
            calls.append((p, sample))
            return "application/x-custom"

        result = metadata.mime_type(path, detector=detector, sample_size=3)

        assert result.value == "application/x-custom"
        assert calls == [(path, b"abc")]

    def test_detector_without_answer(self, tmp_path: Path, sink: RecordingSink) -> None:
        """Test a detector returning nothing is MIME_UNAVAILABLE."""
        path = tmp_path / "f"
        path.write_bytes(b"x")

        result = metadata.mime_type(path, detector=lambda p, s: None, on_warning=sink)

        assert result.kind is ErrorKind.MIME_UNAVAILABLE
        assert sink.kinds == [ErrorKind.MIME_UNAVAILABLE]

    def test_detector_raising(self, tmp_path: Path, sink: RecordingSink) -> None:
        """Test a detector that raises is reported, not propagated."""
        path = tmp_path / "f"
        path.write_bytes(b"x")

        def broken(p: Path, sample: bytes) -> str:
            raise RuntimeError("magic database missing")

        result = metadata.mime_type(path, detector=broken, on_warning=sink)

        assert result.kind is ErrorKind.MIME_UNAVAILABLE
        assert "magic database missing" in result.error

    def test_missing_file(self, tmp_path: Path, sink: RecordingSink) -> None:
        """Test a missing file fails with NOT_FOUND."""
        result = metadata.mime_type(tmp_path / "missing", on_warning=sink)

        assert result.kind is ErrorKind.NOT_FOUND
