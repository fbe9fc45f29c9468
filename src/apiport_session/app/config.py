from __future__ import annotations

import logging
from pathlib import Path

from platformdirs import PlatformDirs
from pydantic import Field, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


APP_NAME = "apiport_session"


def _default_home() -> Path:
    """Get default home directory using platformdirs."""
    return Path(PlatformDirs(appname=APP_NAME, appauthor=False).user_cache_dir)


class DirectoryConfig(BaseSettings):
    """Directory configuration with computed paths."""

    model_config = SettingsConfigDict(env_prefix="APIPORT_SESSION_DIRECTORIES__")

    home: Path = Field(
        default_factory=_default_home,
        description="Base directory for all apiport_session data",
    )

    @computed_field
    @property
    def reports_dir(self) -> Path:
        """Default directory for generated reports."""
        path = self.home / "reports"
        path.mkdir(parents=True, exist_ok=True)
        return path

    @computed_field
    @property
    def logs_dir(self) -> Path:
        """Directory for session logs."""
        path = self.home / "logs"
        path.mkdir(parents=True, exist_ok=True)
        return path


class EngineConfig(BaseSettings):
    """Analysis service connection settings."""

    model_config = SettingsConfigDict(env_prefix="APIPORT_SESSION_ENGINE__")

    endpoint: str = Field(
        default="https://portability.dot.net",
        description="Base URL of the portability analysis service",
    )

    timeout: float = Field(
        default=60.0,
        description="Request timeout in seconds",
    )

    api_key: str | None = Field(
        default=None,
        description="Optional bearer token for the analysis service",
    )


class OptionsConfig(BaseSettings):
    """Defaults for the options view model."""

    model_config = SettingsConfigDict(env_prefix="APIPORT_SESSION_OPTIONS__")

    options_file: Path | None = Field(
        default=None,
        description="JSON document with target and format selections, re-read on every refresh",
    )

    output_directory: Path | None = Field(
        default=None,
        description="Report directory (defaults to <home>/reports)",
    )

    formats: list[str] = Field(
        default_factory=lambda: ["HTML"],
        description="Selected output formats",
    )

    default_output_name: str = Field(
        default="ApiPortAnalysis",
        description="Base file name for generated reports",
    )

    save_metadata: bool = Field(
        default=True,
        description="Allow the service to keep result metadata (False sends NO_TELEMETRY)",
    )

    open_reports: bool = Field(
        default=False,
        description="Open generated reports with the system handler",
    )


class LoggingConfig(BaseSettings):
    """Session logging settings."""

    model_config = SettingsConfigDict(env_prefix="APIPORT_SESSION_LOGGING__")

    logger_name: str = Field(default="apiport_session")
    level: str = Field(default="INFO")
    console_output: bool = Field(default=False)
    session_id: str | None = Field(
        default=None,
        description="When set, session logs are written to <logs_dir>/<session_id>.jsonl",
    )

    @field_validator("level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        value = value.upper()
        if not isinstance(logging.getLevelName(value), int):
            raise ValueError(f"Unknown log level: {value}")
        return value


class AppConfig(BaseSettings):
    """Root application configuration.

    All configuration is loaded from environment variables with APIPORT_SESSION_ prefix.
    Use double underscore for nested config: APIPORT_SESSION_ENGINE__ENDPOINT

    Example env vars:
        export APIPORT_SESSION_ENGINE__ENDPOINT=https://portability.example.com
        export APIPORT_SESSION_OPTIONS__OPTIONS_FILE=~/apiport-options.json
        export APIPORT_SESSION_OPTIONS__SAVE_METADATA=false
        export APIPORT_SESSION_DIRECTORIES__HOME=/custom/path
    """

    model_config = SettingsConfigDict(
        env_prefix="APIPORT_SESSION_",
        env_nested_delimiter="__",
        frozen=True,
        extra="forbid",
    )

    directories: DirectoryConfig = Field(default_factory=DirectoryConfig)
    engine: EngineConfig = Field(default_factory=EngineConfig)
    options: OptionsConfig = Field(default_factory=OptionsConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @property
    def report_directory(self) -> Path:
        return self.options.output_directory or self.directories.reports_dir
