"""Spreadsheet Access - uniform cell access above spreadsheet decoders."""

import logging

from spreadsheet_access.config import Settings, settings, validate_settings_on_startup
from spreadsheet_access.document import SpreadsheetDocument
from spreadsheet_access.models import CellType, IterationOptions, Link
from spreadsheet_access.services.cell_source import CellSource, InMemoryCellSource
from spreadsheet_access.utils.logging import configure_logging

__all__ = [
    "CellSource",
    "CellType",
    "InMemoryCellSource",
    "IterationOptions",
    "Link",
    "SpreadsheetDocument",
    "configure",
    "open_spreadsheet",
]
__version__ = "0.1.0"


def configure(config: Settings | None = None) -> Settings:
    """Install logging from settings and log the configuration summary.

    Call once at application startup. ``SPA_LOG_LEVEL`` sets the level of
    the console handler; ``SPA_DEBUG`` forces DEBUG.

    Args:
        config: Settings to apply; the module-level settings by default.

    Returns:
        The settings that were applied.
    """
    s = config or settings
    configure_logging(logging.DEBUG if s.debug else s.log_level_int)
    validate_settings_on_startup(s)
    return s


def open_spreadsheet(file_path: str) -> SpreadsheetDocument:
    """Open a workbook or CSV file, choosing the source from its extension."""
    return SpreadsheetDocument.open(file_path)
