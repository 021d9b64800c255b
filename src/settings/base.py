"""Base configuration settings.

Contains foundational settings for paths, logging, and the page pipeline.
"""

import logging
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# =============================================================================
# PROJECT ROOT DETECTION
# =============================================================================

_PROJECT_ROOT = Path(__file__).parent.parent.parent


def get_project_root() -> Path:
    """Get project root directory."""
    return _PROJECT_ROOT


# =============================================================================
# PATH SETTINGS
# =============================================================================


class PathsSettings(BaseSettings):
    """Data and logs paths configuration.

    Directories are created when the global Settings object is built.

    Attributes:
        log_dir: Log files directory (LOG_DIR), relative to the project root
            unless absolute.
    """

    log_dir: str = Field(default="logs", alias="LOG_DIR")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def project_root(self) -> Path:
        """Project root directory."""
        return _PROJECT_ROOT

    @property
    def data_dir(self) -> Path:
        """Local state directory (stored credentials)."""
        return _PROJECT_ROOT / "data"

    @property
    def logs_dir(self) -> Path:
        """Application logs."""
        path = Path(self.log_dir)
        return path if path.is_absolute() else _PROJECT_ROOT / path

    def ensure_directories(self) -> None:
        """Create all required directories if they don't exist."""
        for directory in (self.data_dir, self.logs_dir):
            directory.mkdir(parents=True, exist_ok=True)


# =============================================================================
# LOGGING SETTINGS
# =============================================================================


class LoggingSettings(BaseSettings):
    """Logging configuration.

    Attributes:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        format: Log format (json or text).
    """

    level: str = Field(default="INFO", alias="LOG_LEVEL")
    format: str = Field(default="text", alias="LOG_FORMAT")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is valid."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Invalid LOG_LEVEL. Valid: {valid_levels}")
        return v_upper

    @field_validator("format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        """Validate log format is text or json."""
        v_lower = v.lower()
        if v_lower not in {"text", "json"}:
            raise ValueError("Invalid LOG_FORMAT. Valid: text, json")
        return v_lower

    @property
    def level_number(self) -> int:
        """Numeric logging level for ``logging.Logger.setLevel``."""
        return logging.getLevelName(self.level)


# =============================================================================
# PIPELINE SETTINGS
# =============================================================================


class PipelineSettings(BaseSettings):
    """Page enrichment pipeline configuration.

    Attributes:
        debounce_seconds: Quiet period before a rescan after DOM insertions.
        credentials_file: JSON file backing the persistent credential store.
    """

    debounce_seconds: float = Field(default=0.5, alias="PIPELINE_DEBOUNCE_SECONDS")
    credentials_file: str = Field(
        default="data/credentials.json",
        alias="CREDENTIALS_FILE",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("debounce_seconds")
    @classmethod
    def validate_debounce(cls, v: float) -> float:
        """Validate debounce delay is not negative."""
        if v < 0:
            raise ValueError("PIPELINE_DEBOUNCE_SECONDS must be >= 0")
        return v

    @property
    def credentials_path(self) -> Path:
        """Absolute path of the credentials file."""
        path = Path(self.credentials_file)
        if path.is_absolute():
            return path
        return _PROJECT_ROOT / path
