"""Centralized exception classes for spreadsheet access.

This module provides a hierarchy of custom exceptions with error codes
and structured error details for consistent error handling throughout
the cell-access layer.

Exception Hierarchy:
    SpreadsheetAccessError (base)
    ├── InvalidCoordinateError
    │   └── InvalidCellNameError
    ├── SheetNotFoundError
    ├── HeaderNotFoundError
    ├── UnhandledCellTypeError
    └── SourceUnavailableError

Error Codes:
    All errors have a unique error code (e.g., "E1001") that can be used
    for programmatic error handling and documentation.
"""

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Enumeration of all error codes used in the package.

    Error codes are grouped by category:
    - E1xxx: Coordinate errors
    - E2xxx: Sheet errors
    - E3xxx: Header errors
    - E4xxx: Cell type / export errors
    - E5xxx: Source (decoding collaborator) errors
    - E9xxx: Internal/unexpected errors
    """

    # Coordinate errors (E1xxx)
    INVALID_COORDINATE = "E1001"
    INVALID_CELL_NAME = "E1002"

    # Sheet errors (E2xxx)
    SHEET_NOT_FOUND = "E2001"

    # Header errors (E3xxx)
    HEADER_NOT_FOUND = "E3001"
    HEADER_LABEL_NOT_FOUND = "E3002"

    # Cell type errors (E4xxx)
    UNHANDLED_CELL_TYPE = "E4001"

    # Source errors (E5xxx)
    SOURCE_UNAVAILABLE = "E5001"
    SOURCE_READ_FAILED = "E5002"

    # Internal errors (E9xxx)
    INTERNAL_ERROR = "E9001"


class SpreadsheetAccessError(Exception):
    """Base exception for all spreadsheet access errors.

    Attributes:
        message: Human-readable error message.
        error_code: Unique error code from ErrorCode enum.
        details: Optional dictionary with additional error details.
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Error code from ErrorCode enum.
            details: Optional additional details about the error.
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert the exception to a dictionary.

        Returns:
            Dictionary with error information.
        """
        result: dict[str, Any] = {
            "error_code": self.error_code.value,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        return result

    def __str__(self) -> str:
        """Return string representation with error code."""
        return f"[{self.error_code.value}] {self.message}"


# =============================================================================
# Coordinate Errors (E1xxx)
# =============================================================================


class InvalidCoordinateError(SpreadsheetAccessError):
    """Raised for malformed row/column input or an ambiguous pair."""

    def __init__(
        self,
        message: str,
        value: Any = None,
        error_code: ErrorCode = ErrorCode.INVALID_COORDINATE,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize with the offending value.

        Args:
            message: Error message.
            value: The coordinate input that was rejected.
            error_code: Error code.
            details: Additional details.
        """
        details = details or {}
        if value is not None:
            details["value"] = repr(value)
        super().__init__(message, error_code, details)
        self.value = value


class InvalidCellNameError(InvalidCoordinateError):
    """Raised when a spreadsheet-style cell name such as "B5" cannot be parsed."""

    def __init__(self, name: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(
            message=f"Invalid cell name: {name!r}",
            value=name,
            error_code=ErrorCode.INVALID_CELL_NAME,
            details=details,
        )


# =============================================================================
# Sheet Errors (E2xxx)
# =============================================================================


class SheetNotFoundError(SpreadsheetAccessError):
    """Raised when a sheet name or index does not exist in the document."""

    def __init__(
        self,
        sheet: Any,
        available: list[str] | None = None,
        message: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize with the requested sheet.

        Args:
            sheet: Sheet name or index that was requested.
            available: Sheet names the document does have.
            message: Optional custom message.
            details: Additional details.
        """
        details = details or {}
        details["sheet"] = sheet
        if available is not None:
            details["available_sheets"] = available
        message = message or f"Sheet not found: {sheet!r}"
        super().__init__(message, ErrorCode.SHEET_NOT_FOUND, details)
        self.sheet = sheet
        self.available = available or []


# =============================================================================
# Header Errors (E3xxx)
# =============================================================================


class HeaderNotFoundError(SpreadsheetAccessError):
    """Raised when no header row matches or a header label is absent.

    The header search is deliberately fatal: parsing must not silently
    continue with a guessed header row.
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.HEADER_NOT_FOUND,
        queries: list[str] | None = None,
        rows_scanned: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize with search information.

        Args:
            message: Error message.
            error_code: Error code.
            queries: Header queries or labels that were searched for.
            rows_scanned: Number of rows inspected before giving up.
            details: Additional details.
        """
        details = details or {}
        if queries:
            details["queries"] = queries
        if rows_scanned is not None:
            details["rows_scanned"] = rows_scanned
        super().__init__(message, error_code, details)
        self.queries = queries or []
        self.rows_scanned = rows_scanned


# =============================================================================
# Cell Type Errors (E4xxx)
# =============================================================================


class UnhandledCellTypeError(SpreadsheetAccessError):
    """Raised when a cell's type tag (or formula result) cannot be rendered."""

    def __init__(
        self,
        cell_type: Any,
        row: int | None = None,
        column: int | None = None,
        message: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize with the cell type and its position.

        Args:
            cell_type: The type tag or Python type that is not handled.
            row: Row of the offending cell, if known.
            column: Column of the offending cell, if known.
            message: Optional custom message.
            details: Additional details.
        """
        details = details or {}
        details["cell_type"] = str(cell_type)
        if row is not None:
            details["row"] = row
        if column is not None:
            details["column"] = column
        message = message or f"Unhandled cell type: {cell_type}"
        super().__init__(message, ErrorCode.UNHANDLED_CELL_TYPE, details)
        self.cell_type = cell_type
        self.row = row
        self.column = column


# =============================================================================
# Source Errors (E5xxx)
# =============================================================================


class SourceUnavailableError(SpreadsheetAccessError):
    """Raised when the decoding collaborator cannot open or read its source."""

    def __init__(
        self,
        message: str,
        source: str | None = None,
        error_code: ErrorCode = ErrorCode.SOURCE_UNAVAILABLE,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize with the source description.

        Args:
            message: Error message.
            source: Path or description of the source.
            error_code: Error code.
            details: Additional details.
        """
        details = details or {}
        if source:
            details["source"] = source
        super().__init__(message, error_code, details)
        self.source = source
