"""CSV export of one sheet."""

from __future__ import annotations

import io
from pathlib import Path
from typing import TYPE_CHECKING, TextIO

from spreadsheet_access.config import settings
from spreadsheet_access.output.cell_formatter import format_cell
from spreadsheet_access.utils.logging import get_logger, timed_operation

if TYPE_CHECKING:
    from spreadsheet_access.document import SpreadsheetDocument

logger = get_logger(__name__)


class CsvExporter:
    """Write a sheet as CSV, rows 1..last_row by columns 1..last_column.

    Cells are rendered by ``format_cell``; the leading rows and columns
    before the populated area are emitted as empty fields.
    """

    def __init__(self, document: SpreadsheetDocument, separator: str | None = None) -> None:
        self._document = document
        self._separator = separator or settings.csv_separator

    def cell_to_csv(self, row: int, column: int, sheet: str) -> str:
        if self._document.empty(row, column, sheet):
            return ""
        return format_cell(
            self._document.cell(row, column, sheet),
            self._document.cell_type(row, column, sheet),
            row=row,
            column=column,
        )

    def write(self, stream: TextIO, sheet: str) -> int:
        """Write ``sheet`` to ``stream``.

        Returns:
            Number of rows written.
        """
        bounds = self._document.bounds(sheet)
        if bounds.is_empty:
            return 0

        with timed_operation(logger, "to_csv") as metrics:
            for row in range(1, bounds.last_row + 1):  # type: ignore[operator]
                fields = [
                    self.cell_to_csv(row, column, sheet)
                    for column in range(1, bounds.last_column + 1)  # type: ignore[operator]
                ]
                stream.write(self._separator.join(fields))
                stream.write("\n")
            metrics.rows_processed = bounds.last_row  # type: ignore[assignment]
        return metrics.rows_processed

    def to_string(self, sheet: str) -> str:
        buffer = io.StringIO()
        self.write(buffer, sheet)
        return buffer.getvalue()

    def to_file(self, destination: Path | str, sheet: str) -> int:
        with open(destination, "w", encoding="utf-8", newline="") as handle:
            return self.write(handle, sheet)
