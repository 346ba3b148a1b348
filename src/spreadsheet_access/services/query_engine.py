"""Row lookup by index or by equality conditions on header columns."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from spreadsheet_access.services.header_resolver import SheetReader
from spreadsheet_access.utils.exceptions import ErrorCode, HeaderNotFoundError
from spreadsheet_access.utils.logging import get_logger

logger = get_logger(__name__)


class QueryEngine:
    """Answer ``find`` queries against one sheet.

    ``header_line`` is the row holding the header cells; row indexes passed
    to ``find_by_row`` are shifted down by ``header_line - 1``.
    """

    def __init__(self, reader: SheetReader, sheet: str, header_line: int = 1) -> None:
        self._reader = reader
        self._sheet = sheet
        self._header_line = header_line

    def find_by_row(self, row_index: int) -> list[Any]:
        """Return the row at ``row_index`` counted from the header row.

        The result starts at column 1 and is as long as the sheet's
        populated column span.
        """
        line = row_index + (self._header_line - 1)
        width = len(self._reader.row(line, self._sheet))
        return [self._reader.cell(line, column, self._sheet) for column in range(1, width + 1)]

    def find_by_conditions(
        self,
        conditions: Mapping[Any, Any] | None = None,
        as_array: bool = False,
    ) -> list[Any]:
        """Return every row whose header-resolved cells equal ``conditions``.

        Args:
            conditions: Header text to expected value. Empty or None keeps
                every row, the header row included.
            as_array: Return raw row arrays instead of header-keyed mappings.

        Raises:
            HeaderNotFoundError: If a condition names a header that is not on
                the header row.
        """
        bounds = self._reader.bounds(self._sheet)
        if bounds.is_empty:
            return []

        header_for = {
            column: self._reader.cell(self._header_line, column, self._sheet)
            for column in range(1, bounds.last_column + 1)  # type: ignore[operator]
        }
        rows = range(bounds.first_row, bounds.last_row + 1)  # type: ignore[arg-type, operator]

        if conditions:
            column_with = {header: column for column, header in header_for.items()}
            missing = [key for key in conditions if key not in column_with]
            if missing:
                raise HeaderNotFoundError(
                    f"Condition headers not found on row {self._header_line}: {missing}",
                    error_code=ErrorCode.HEADER_LABEL_NOT_FOUND,
                    queries=[str(key) for key in missing],
                )
            rows = [
                line
                for line in rows
                if all(
                    self._reader.cell(line, column_with[key], self._sheet) == expected
                    for key, expected in conditions.items()
                )
            ]

        logger.debug("Rows matched conditions", sheet=self._sheet, matches=len(rows))

        if as_array:
            return [self._reader.row(line, self._sheet) for line in rows]
        return [
            {
                header_for[column]: self._reader.cell(line, column, self._sheet)
                for column in range(1, len(self._reader.row(line, self._sheet)) + 1)
            }
            for line in rows
        ]
