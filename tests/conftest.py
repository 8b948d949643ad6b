"""Shared test fixtures."""

from __future__ import annotations

import io
from pathlib import Path

import pytest
from rich.console import Console

from storagekit.console import ConsoleOutput
from storagekit.context import AppContext
from storagekit.types import Diagnostic


class RecordingSink:
    """Diagnostic sink that keeps every diagnostic it receives."""

    def __init__(self) -> None:
        self.diagnostics: list[Diagnostic] = []

    def __call__(self, diagnostic: Diagnostic) -> None:
        self.diagnostics.append(diagnostic)

    @property
    def kinds(self) -> list:
        return [d.kind for d in self.diagnostics]


@pytest.fixture
def sink() -> RecordingSink:
    """Create a diagnostic sink recording failures."""
    return RecordingSink()


@pytest.fixture
def temp_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Override home directory for testing."""
    monkeypatch.setattr(Path, "home", lambda: tmp_path)
    monkeypatch.delenv("STORAGEKIT_CONFIG", raising=False)
    return tmp_path


# ============================================================================
# Directory Tree Fixtures
# ============================================================================


@pytest.fixture
def flat_dir(tmp_path: Path) -> Path:
    """Create a directory holding two files and one subdirectory.

    Layout:
        flat/f1.txt
        flat/f2.log
        flat/s/
    """
    root = tmp_path / "flat"
    root.mkdir()
    (root / "f1.txt").write_text("one")
    (root / "f2.log").write_text("two")
    (root / "s").mkdir()
    return root


@pytest.fixture
def nested_dir(tmp_path: Path) -> Path:
    """Create a three-level tree.

    Layout:
        tree/f1
        tree/s/f2
        tree/s/t/f3
    """
    root = tmp_path / "tree"
    (root / "s" / "t").mkdir(parents=True)
    (root / "f1").write_text("1")
    (root / "s" / "f2").write_text("2")
    (root / "s" / "t" / "f3").write_text("3")
    return root


# ============================================================================
# CLI Fixtures
# ============================================================================


@pytest.fixture
def console_buffers() -> tuple[io.StringIO, io.StringIO]:
    """Create buffers capturing console output (stdout, stderr)."""
    return io.StringIO(), io.StringIO()


@pytest.fixture
def app_context(
    tmp_path: Path, console_buffers: tuple[io.StringIO, io.StringIO]
) -> AppContext:
    """Create an AppContext writing to in-memory consoles."""
    out, err = console_buffers
    output = ConsoleOutput(
        console=Console(file=out, width=200, color_system=None),
        err_console=Console(file=err, width=200, color_system=None),
    )
    return AppContext(output=output, config_path=tmp_path / "config" / "config.yaml")
