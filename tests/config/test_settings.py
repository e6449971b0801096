"""Tests for the settings configuration module."""

import json
from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from scriptkit.config import get_settings, reset_settings, set_settings
from scriptkit.config.settings import ScriptKitSettings
from scriptkit.exceptions import ConfigurationError


class TestScriptKitSettings:
    """Test settings defaults and validation."""

    def test_default_values(self):
        settings = ScriptKitSettings()
        assert settings.strict_validation is False
        assert settings.auto_fix is False
        assert settings.log_validation is False
        assert settings.text_encoding == "utf-8"
        assert settings.log_level == "WARNING"
        assert settings.log_format == "console"
        assert settings.log_file is None

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("SCRIPTKIT_STRICT_VALIDATION", "true")
        monkeypatch.setenv("SCRIPTKIT_AUTO_FIX", "1")
        settings = ScriptKitSettings.from_env()
        assert settings.strict_validation is True
        assert settings.auto_fix is True

    def test_log_level_case_insensitive(self):
        assert ScriptKitSettings(log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level(self):
        with pytest.raises(ValidationError):
            ScriptKitSettings(log_level="LOUD")

    def test_log_format_normalized(self):
        assert ScriptKitSettings(log_format="JSON").log_format == "json"

    def test_encoding_normalized(self):
        assert ScriptKitSettings(text_encoding="Latin-1").text_encoding == "iso8859-1"

    def test_unknown_encoding(self):
        with pytest.raises(ValidationError):
            ScriptKitSettings(text_encoding="no-such-codec")

    def test_log_file_expanded(self, tmp_path):
        settings = ScriptKitSettings(log_file=str(tmp_path / "logs" / "app.log"))
        assert settings.log_file == (tmp_path / "logs" / "app.log").resolve()


class TestSettingsFiles:
    """Test loading settings from configuration files."""

    def test_from_yaml(self, tmp_path):
        config = tmp_path / "scriptkit.yaml"
        config.write_text(yaml.dump({"strict_validation": True, "log_level": "info"}))
        settings = ScriptKitSettings.from_file(config)
        assert settings.strict_validation is True
        assert settings.log_level == "INFO"

    def test_from_toml(self, tmp_path):
        config = tmp_path / "scriptkit.toml"
        config.write_text('auto_fix = true\ntext_encoding = "cp1252"\n')
        settings = ScriptKitSettings.from_file(config)
        assert settings.auto_fix is True
        assert settings.text_encoding == "cp1252"

    def test_from_json(self, tmp_path):
        config = tmp_path / "scriptkit.json"
        config.write_text(json.dumps({"log_validation": True}))
        assert ScriptKitSettings.from_file(config).log_validation is True

    def test_unsupported_format(self, tmp_path):
        config = tmp_path / "scriptkit.ini"
        config.write_text("[scriptkit]\n")
        with pytest.raises(ConfigurationError, match="Unsupported configuration"):
            ScriptKitSettings.from_file(config)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            ScriptKitSettings.from_file(tmp_path / "missing.yaml")

    def test_wrong_key_hint(self, tmp_path):
        config = tmp_path / "scriptkit.yaml"
        config.write_text(yaml.dump({"strict": True}))
        with pytest.raises(ConfigurationError) as exc_info:
            ScriptKitSettings.from_file(config)
        assert "strict_validation" in exc_info.value.hint


class TestMultipleSources:
    """Test settings precedence."""

    def test_later_files_win(self, tmp_path):
        first = tmp_path / "first.yaml"
        first.write_text(yaml.dump({"auto_fix": True, "log_level": "DEBUG"}))
        second = tmp_path / "second.json"
        second.write_text(json.dumps({"log_level": "ERROR"}))
        settings = ScriptKitSettings.from_multiple_sources(
            config_files=[first, second]
        )
        assert settings.auto_fix is True
        assert settings.log_level == "ERROR"

    def test_missing_files_are_skipped(self, tmp_path):
        settings = ScriptKitSettings.from_multiple_sources(
            config_files=[tmp_path / "missing.yaml"]
        )
        assert settings.strict_validation is False

    def test_cli_args_win(self, tmp_path):
        config = tmp_path / "scriptkit.yaml"
        config.write_text(yaml.dump({"strict_validation": False}))
        settings = ScriptKitSettings.from_multiple_sources(
            config_files=[config],
            cli_args={"strict_validation": True, "auto_fix": None},
        )
        assert settings.strict_validation is True
        assert settings.auto_fix is False

    def test_files_override_environment(self, tmp_path, monkeypatch):
        monkeypatch.setenv("SCRIPTKIT_AUTO_FIX", "true")
        config = tmp_path / "scriptkit.yaml"
        config.write_text(yaml.dump({"auto_fix": False}))
        settings = ScriptKitSettings.from_multiple_sources(config_files=[config])
        assert settings.auto_fix is False


class TestGlobalSettings:
    """Test the global settings instance."""

    def test_cached(self):
        assert get_settings() is get_settings()

    def test_set_and_reset(self):
        custom = ScriptKitSettings(strict_validation=True)
        set_settings(custom)
        assert get_settings() is custom
        reset_settings()
        assert get_settings() is not custom

    def test_reads_config_in_working_directory(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setattr(Path, "home", lambda: tmp_path / "home")
        (tmp_path / "scriptkit.yaml").write_text(yaml.dump({"auto_fix": True}))
        assert get_settings().auto_fix is True
