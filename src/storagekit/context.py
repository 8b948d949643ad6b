"""Application context for dependency injection.

This module separates object creation from object use, enabling testability
of CLI commands. The storage operations themselves are stateless functions;
the context only carries what the command line needs around them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from storagekit.config import StorageSettings, load_settings
from storagekit.console import ConsoleOutput
from storagekit.protocols import DiagnosticSink


@dataclass
class AppContext:
    """Container for command line dependencies.

    Provides a single injection point for settings and terminal output.
    Tests construct it directly with their own console.
    """

    settings: StorageSettings = field(default_factory=StorageSettings)
    output: ConsoleOutput = field(default_factory=ConsoleOutput)
    config_path: Path | None = None

    @property
    def sink(self) -> DiagnosticSink:
        """Diagnostic sink routing failures to the terminal."""
        return self.output.show_diagnostic


def create_context(config_path: Path | None = None) -> AppContext:
    """Factory for command line dependencies.

    Args:
        config_path: Override configuration file (for testing).

    Returns:
        Configured AppContext.

    Raises:
        ConfigError: If the configuration file is invalid.
    """
    return AppContext(
        settings=load_settings(config_path),
        output=ConsoleOutput(),
        config_path=config_path,
    )
