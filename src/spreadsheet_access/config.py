"""Configuration management for spreadsheet access.

This module provides centralized configuration using pydantic-settings.
All configuration options can be set via environment variables with the
SPA_ prefix, or via a .env file in the project root.

Environment Variables:
    SPA_HEADER_SEARCH_MAX_ROWS: Rows scanned when searching for a header row (default: 100)
    SPA_CSV_SEPARATOR: Default CSV field separator (default: ,)
    SPA_EXCEL_LOAD_FORMULAS: Tag formula cells when reading workbooks (default: true)
    SPA_LOG_LEVEL: Logging level (default: INFO)
    SPA_DEBUG: Enable debug mode (default: false)
"""

import logging
from typing import Any

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Package settings loaded from environment variables.

    Example .env file:
        SPA_CSV_SEPARATOR=;
        SPA_LOG_LEVEL=DEBUG
    """

    model_config = SettingsConfigDict(
        env_prefix="SPA_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # =========================================================================
    # Header Resolution Settings
    # =========================================================================

    header_search_max_rows: int = 100
    """Rows inspected by the header search before it gives up."""

    # =========================================================================
    # Export Settings
    # =========================================================================

    csv_separator: str = ","
    """Separator placed between CSV fields."""

    # =========================================================================
    # Source Settings
    # =========================================================================

    excel_load_formulas: bool = True
    """Open workbooks a second time to tag formula cells as ``formula``."""

    # =========================================================================
    # Logging Settings
    # =========================================================================

    log_level: str = "INFO"
    """Logging level: DEBUG, INFO, WARNING, ERROR, or CRITICAL."""

    debug: bool = False
    """Enable debug mode with additional logging."""

    # =========================================================================
    # Validators
    # =========================================================================

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is a valid Python logging level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper_v = v.upper()
        if upper_v not in valid_levels:
            raise ValueError(
                f"Invalid log level: {v}. Must be one of: {', '.join(valid_levels)}"
            )
        return upper_v

    @field_validator("header_search_max_rows")
    @classmethod
    def validate_header_search_max_rows(cls, v: int) -> int:
        """Validate the header search window is positive and bounded."""
        if not 1 <= v <= 10000:
            raise ValueError(
                f"header_search_max_rows must be between 1 and 10000, got {v}"
            )
        return v

    @field_validator("csv_separator")
    @classmethod
    def validate_csv_separator(cls, v: str) -> str:
        """Validate the separator is non-empty."""
        if not v:
            raise ValueError("csv_separator must be a non-empty string")
        return v

    # =========================================================================
    # Computed Properties
    # =========================================================================

    @property
    def log_level_int(self) -> int:
        """Get log level as integer for logging module."""
        level: int = getattr(logging, self.log_level)
        return level

    def to_safe_dict(self) -> dict[str, Any]:
        """Convert settings to a plain dictionary."""
        return {
            "header_search_max_rows": self.header_search_max_rows,
            "csv_separator": self.csv_separator,
            "excel_load_formulas": self.excel_load_formulas,
            "log_level": self.log_level,
            "debug": self.debug,
        }


def validate_settings_on_startup(s: Settings) -> None:
    """Log a configuration summary and warn about suspicious values.

    Args:
        s: Settings instance to validate.
    """
    logger = logging.getLogger(__name__)

    if '"' in s.csv_separator:
        logger.warning(
            "CSV separator contains a double quote; quoted string cells "
            "will be ambiguous in the exported text."
        )

    summary = ", ".join(f"{key}={value!r}" for key, value in s.to_safe_dict().items())
    logger.info(f"Configuration loaded: {summary}")


settings = Settings()
