"""Utilities package for spreadsheet access.

This package provides:
- Centralized exception classes (exceptions.py)
- Structured logging utilities (logging.py)
"""

from spreadsheet_access.utils.exceptions import (
    ErrorCode,
    HeaderNotFoundError,
    InvalidCellNameError,
    InvalidCoordinateError,
    SheetNotFoundError,
    SourceUnavailableError,
    SpreadsheetAccessError,
    UnhandledCellTypeError,
)
from spreadsheet_access.utils.logging import (
    LogContext,
    StructuredLogger,
    get_logger,
    timed_operation,
)

__all__ = [
    # Exceptions
    "ErrorCode",
    "HeaderNotFoundError",
    "InvalidCellNameError",
    "InvalidCoordinateError",
    "SheetNotFoundError",
    "SourceUnavailableError",
    "SpreadsheetAccessError",
    "UnhandledCellTypeError",
    # Logging
    "LogContext",
    "StructuredLogger",
    "get_logger",
    "timed_operation",
]
