"""Tests for configuration loading and saving."""

from __future__ import annotations

from pathlib import Path

import pytest

from storagekit.config import (
    ConfigError,
    StorageSettings,
    default_config_path,
    load_settings,
    save_settings,
)


class TestStorageSettings:
    """Tests for StorageSettings validation."""

    def test_defaults(self) -> None:
        """Test default settings."""
        settings = StorageSettings()

        assert settings.directory_mode == 0o755
        assert settings.log_level == "WARNING"
        assert settings.mime_sample_size == 2048

    def test_octal_string_mode(self) -> None:
        """Test string modes are read as octal."""
        assert StorageSettings(directory_mode="750").directory_mode == 0o750
        assert StorageSettings(directory_mode="0o700").directory_mode == 0o700

    def test_invalid_mode(self) -> None:
        """Test non-octal and out-of-range modes are rejected."""
        with pytest.raises(ValueError):
            StorageSettings(directory_mode="789")
        with pytest.raises(ValueError):
            StorageSettings(directory_mode=0o17777)

    def test_log_level_normalized(self) -> None:
        """Test log levels are upper-cased and checked."""
        assert StorageSettings(log_level="debug").log_level == "DEBUG"
        with pytest.raises(ValueError):
            StorageSettings(log_level="verbose")

    def test_sample_size_positive(self) -> None:
        """Test the MIME sample size must be positive."""
        with pytest.raises(ValueError):
            StorageSettings(mime_sample_size=0)

    def test_aliases(self) -> None:
        """Test camelCase keys from the file are accepted."""
        settings = StorageSettings.model_validate({"directoryMode": "700", "logLevel": "info"})

        assert settings.directory_mode == 0o700
        assert settings.log_level == "INFO"


class TestLoadSettings:
    """Tests for load_settings and save_settings."""

    def test_missing_file_gives_defaults(self, tmp_path: Path) -> None:
        """Test a missing configuration file yields the defaults."""
        assert load_settings(tmp_path / "none.yaml") == StorageSettings()

    def test_roundtrip(self, tmp_path: Path) -> None:
        """Test saved settings load back unchanged."""
        path = tmp_path / "cfg" / "config.yaml"
        settings = StorageSettings(directory_mode=0o750, log_level="INFO", mime_sample_size=512)

        save_settings(settings, path)

        assert "directoryMode: '750'" in path.read_text()
        assert load_settings(path) == settings

    def test_empty_file(self, tmp_path: Path) -> None:
        """Test an empty file yields the defaults."""
        path = tmp_path / "config.yaml"
        path.write_text("")

        assert load_settings(path) == StorageSettings()

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        """Test malformed YAML raises ConfigError."""
        path = tmp_path / "config.yaml"
        path.write_text("directoryMode: [unclosed")

        with pytest.raises(ConfigError):
            load_settings(path)

    def test_not_a_mapping(self, tmp_path: Path) -> None:
        """Test a YAML list raises ConfigError."""
        path = tmp_path / "config.yaml"
        path.write_text("- a\n- b\n")

        with pytest.raises(ConfigError, match="mapping"):
            load_settings(path)

    def test_invalid_value(self, tmp_path: Path) -> None:
        """Test an invalid value raises ConfigError."""
        path = tmp_path / "config.yaml"
        path.write_text("logLevel: chatty\n")

        with pytest.raises(ConfigError, match="Invalid configuration"):
            load_settings(path)

    def test_save_failure(self, tmp_path: Path) -> None:
        """Test an unwritable location raises ConfigError."""
        (tmp_path / "blocker").write_text("")

        with pytest.raises(ConfigError):
            save_settings(StorageSettings(), tmp_path / "blocker" / "config.yaml")


class TestDefaultConfigPath:
    """Tests for default_config_path."""

    def test_home_default(self, temp_home: Path) -> None:
        """Test the default lives under the home directory."""
        assert default_config_path() == temp_home / ".storagekit" / "config.yaml"

    def test_env_override(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test $STORAGEKIT_CONFIG overrides the location."""
        monkeypatch.setenv("STORAGEKIT_CONFIG", str(tmp_path / "custom.yaml"))

        assert default_config_path() == tmp_path / "custom.yaml"
