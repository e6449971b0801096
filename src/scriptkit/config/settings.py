"""scriptkit configuration settings."""

from __future__ import annotations

import json
import os
import tomllib
from pathlib import Path
from typing import Any, cast

import yaml
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from scriptkit.exceptions import ConfigurationError, check_config_keys


class ScriptKitSettings(BaseSettings):
    """scriptkit configuration settings.

    Settings are loaded with the following precedence (highest to lowest):
    1. CLI arguments (when provided via command flags)
       Example: scriptkit parse script.fdx --strict

    2. Config file values (YAML, TOML, or JSON)
       Multiple files: Later files override earlier ones

    3. Environment variables (prefixed with SCRIPTKIT_)
       Example: export SCRIPTKIT_AUTO_FIX=true

    4. .env file (in current directory or specified path)

    5. Default values (defined in field declarations below)
    """

    model_config = SettingsConfigDict(
        env_prefix="SCRIPTKIT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Import settings
    strict_validation: bool = Field(
        default=False,
        description="Reject scripts that still carry error-severity issues",
    )
    auto_fix: bool = Field(
        default=False,
        description="Apply mechanical repairs before building the document",
    )
    log_validation: bool = Field(
        default=False,
        description="Log the formatted validation report for every new document",
    )
    text_encoding: str = Field(
        default="utf-8",
        description="Encoding used to decode Fountain and plain text sources",
    )

    # Debug settings
    debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )

    # Logging settings
    log_level: str = Field(
        default="WARNING",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
        pattern="^(?i)(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
    )
    log_format: str = Field(
        default="console",
        description="Log output format (console, json, structured)",
        pattern="^(?i)(console|json|structured)$",
    )
    log_file: Path | None = Field(
        default=None,
        description="Optional log file path",
    )

    @field_validator("log_file", mode="before")
    @classmethod
    def expand_path(cls, v: Any) -> Path | None:
        """Expand environment variables and ~ in the log file path."""
        if v is None:
            return None
        if isinstance(v, str):
            return Path(os.path.expandvars(v)).expanduser().resolve()
        if isinstance(v, Path):
            return v.resolve()
        raise ValueError(
            f"Path fields must be str or Path, got {type(v).__name__}: {v!r}"
        )

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: Any) -> str:
        """Normalize log level to uppercase for case-insensitive handling."""
        if isinstance(v, str):
            return v.upper()
        raise ValueError(f"log_level must be a string, got {type(v).__name__}")

    @field_validator("log_format", mode="before")
    @classmethod
    def normalize_log_format(cls, v: Any) -> str:
        """Normalize log format to lowercase for case-insensitive handling."""
        if isinstance(v, str):
            return v.lower()
        raise ValueError(f"log_format must be a string, got {type(v).__name__}")

    @field_validator("text_encoding")
    @classmethod
    def check_encoding(cls, v: str) -> str:
        """Reject encodings the codec registry does not know."""
        import codecs

        try:
            return codecs.lookup(v).name
        except LookupError as e:
            raise ValueError(f"Unknown text encoding: {v}") from e

    @classmethod
    def from_env(cls) -> ScriptKitSettings:
        """Create settings from environment variables."""
        return cls()

    @classmethod
    def from_file(cls, config_path: Path | str) -> ScriptKitSettings:
        """Load settings from a configuration file.

        Args:
            config_path: Path to configuration file (YAML, TOML, or JSON).

        Returns:
            Settings loaded from the file.

        Raises:
            ConfigurationError: If file format is not supported.
            FileNotFoundError: If config file doesn't exist.
        """
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        suffix = config_path.suffix.lower()

        if suffix in {".yml", ".yaml"}:
            with config_path.open(encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        elif suffix == ".toml":
            with config_path.open("rb") as f:
                data = tomllib.load(f)
        elif suffix == ".json":
            with config_path.open(encoding="utf-8") as f:
                data = json.load(f)
        else:
            raise ConfigurationError(
                message=f"Unsupported configuration file format: {suffix}",
                hint="Use one of the supported formats: .yml, .yaml, .toml, or .json",
                details={
                    "file": str(config_path),
                    "detected_format": suffix,
                    "supported_formats": [".yml", ".yaml", ".toml", ".json"],
                },
            )

        check_config_keys(data)

        return cls(**data)

    @classmethod
    def from_multiple_sources(
        cls,
        config_files: list[Path | str] | None = None,
        env_file: Path | str | None = None,
        cli_args: dict[str, Any] | None = None,
    ) -> ScriptKitSettings:
        """Load settings with proper precedence from multiple sources.

        Precedence (highest to lowest):
        1. CLI arguments
        2. Config files (last file wins)
        3. Environment variables
        4. .env file
        5. Default values

        Args:
            config_files: List of config files to load (later files override earlier).
            env_file: Path to .env file (default: .env in current directory).
            cli_args: Dictionary of CLI arguments.

        Returns:
            Merged settings from all sources.
        """
        data: dict[str, Any] = {}

        for config_file in config_files or []:
            try:
                file_settings = cls.from_file(config_file)
            except FileNotFoundError:
                from scriptkit.config.logging import get_logger as _get_logger

                _get_logger(__name__).warning(
                    "Configuration file not found, using defaults",
                    config_file=str(config_file),
                )
                continue
            data.update(file_settings.model_dump(exclude_unset=True))

        if env_file:
            settings = cast(
                "ScriptKitSettings", cast(Any, cls)(_env_file=env_file, **data)
            )
        else:
            settings = cls(**data)

        if cli_args:
            cli_data = {k: v for k, v in cli_args.items() if v is not None}
            if cli_data:
                updated_data = settings.model_dump()
                updated_data.update(cli_data)
                settings = cls(**updated_data)

        return settings


# Global settings instance
_settings: ScriptKitSettings | None = None


def _get_config_paths() -> list[Path | str]:
    """Get list of config file paths that exist, in priority order."""
    potential_paths = [
        Path.home() / ".config" / "scriptkit" / "config.yaml",
        Path.home() / ".config" / "scriptkit" / "config.toml",
        Path.cwd() / "scriptkit.yaml",
        Path.cwd() / "scriptkit.json",
        Path.cwd() / "scriptkit.toml",
    ]

    existing_paths: list[Path | str] = []
    for path in potential_paths:
        try:
            if path.is_file():
                existing_paths.append(path)
        except OSError:
            continue
    return existing_paths


def get_settings() -> ScriptKitSettings:
    """Get the global settings instance.

    Returns:
        Global ScriptKitSettings instance.
    """
    global _settings
    if _settings is None:
        config_paths = _get_config_paths()
        if config_paths:
            _settings = ScriptKitSettings.from_multiple_sources(
                config_files=config_paths
            )
        else:
            _settings = ScriptKitSettings.from_env()
    return _settings


def set_settings(settings: ScriptKitSettings) -> None:
    """Set the global settings instance.

    Args:
        settings: Settings instance to use globally.
    """
    global _settings
    _settings = settings


def reset_settings() -> None:
    """Reset the global settings instance.

    Forces recreation of settings on next call to get_settings(),
    useful for tests that modify environment variables.
    """
    global _settings
    _settings = None
