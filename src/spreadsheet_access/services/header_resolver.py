"""Locate the header row of a sheet and map header names to columns.

Three modes are supported:

- Explicit labels: ``{"upc": "UPC", "price": "^(Cost|Price)"}``. Each label
  is a query; the keys of the resulting map are the caller's keys.
- First row: the sheet's first populated row is the header row and the map
  keys are the literal header cell values. Duplicate header text collapses
  to one entry, the right-most column winning.
- Header search: ``["UPC*SKU", "^Price*\\sCost\\s"]``. Each query is split
  on ``*`` into alternatives tried in order, so an earlier alternative wins
  even when a later one also matches. The map is built from the whole
  header row as in first-row mode.

Queries are regular expressions matched case-insensitively against the
text of string cells, scanning each row left to right.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from typing import Any, Protocol

from spreadsheet_access.config import settings
from spreadsheet_access.models import BoundingBox, HeaderResolution, IterationOptions
from spreadsheet_access.utils.exceptions import ErrorCode, HeaderNotFoundError
from spreadsheet_access.utils.logging import get_logger

logger = get_logger(__name__)


class SheetReader(Protocol):
    """The slice of ``SpreadsheetDocument`` the resolver reads through."""

    def row(self, row_number: int, sheet: str | int | None = None) -> list[Any]: ...

    def cell(
        self, row: int | str, column: int | str, sheet: str | int | None = None
    ) -> Any: ...

    def bounds(self, sheet: str | int | None = None) -> BoundingBox: ...


def split_alternatives(query: str) -> list[re.Pattern[str]]:
    """Split a wildcard query on ``*`` and compile each alternative."""
    return [
        re.compile(alternative, re.IGNORECASE)
        for alternative in query.split("*")
        if alternative
    ]


def first_matching_cell(pattern: re.Pattern[str], cells: Sequence[Any]) -> str | None:
    """Return the left-most string cell that ``pattern`` matches."""
    for value in cells:
        if isinstance(value, str) and pattern.search(value):
            return value
    return None


def match_query(alternatives: Sequence[re.Pattern[str]], cells: Sequence[Any]) -> str | None:
    """Return the cell matched by the first alternative that matches any cell."""
    for pattern in alternatives:
        text = first_matching_cell(pattern, cells)
        if text is not None:
            return text
    return None


class HeaderResolver:
    """Resolve the header row of one sheet of a document."""

    def __init__(
        self,
        reader: SheetReader,
        sheet: str,
        max_rows: int | None = None,
    ) -> None:
        """Initialize the resolver.

        Args:
            reader: Document the rows are read from.
            sheet: Name of the sheet to inspect.
            max_rows: Rows scanned before giving up (defaults to
                ``settings.header_search_max_rows``).
        """
        self._reader = reader
        self._sheet = sheet
        self._max_rows = max_rows or settings.header_search_max_rows

    def match_header_cells(self, queries: Sequence[str]) -> tuple[int, list[str]]:
        """Find the first row on which every query matches a cell.

        Returns:
            The header row number and, per query, the text of the cell it
            matched.

        Raises:
            HeaderNotFoundError: If no row within the search window matches
                all queries.
        """
        compiled = [split_alternatives(query) for query in queries]
        last_row = self._reader.bounds(self._sheet).last_row or 0
        rows_to_scan = min(last_row, self._max_rows)

        for line in range(1, rows_to_scan + 1):
            cells = self._reader.row(line, self._sheet)
            matched: list[str] = []
            for alternatives in compiled:
                hit = match_query(alternatives, cells)
                if hit is None:
                    break
                matched.append(hit)
            else:
                logger.info(
                    "Header row found", sheet=self._sheet, row=line, queries=list(queries)
                )
                return line, matched

        logger.warning(
            "Header row not found",
            sheet=self._sheet,
            rows_scanned=rows_to_scan,
            queries=list(queries),
        )
        raise HeaderNotFoundError(
            "Couldn't find header row",
            queries=list(queries),
            rows_scanned=rows_to_scan,
        )

    def find_header_row(self, queries: Sequence[str]) -> int:
        """Return the number of the first row matching every query."""
        line, _ = self.match_header_cells(queries)
        return line

    def header_index(self, label: Any, header_line: int) -> int:
        """Return the column holding ``label`` on ``header_line``.

        Raises:
            HeaderNotFoundError: If no header cell equals ``label``.
        """
        bounds = self._reader.bounds(self._sheet)
        cells = self._reader.row(header_line, self._sheet)
        try:
            offset = cells.index(label)
        except ValueError:
            raise HeaderNotFoundError(
                f"Header {label!r} not found on row {header_line}",
                error_code=ErrorCode.HEADER_LABEL_NOT_FOUND,
                queries=[str(label)],
            ) from None
        return offset + (bounds.first_column or 1)

    def row_header_map(self, header_line: int) -> dict[Any, int]:
        """Map every header cell value on ``header_line`` to its column."""
        bounds = self._reader.bounds(self._sheet)
        if bounds.is_empty:
            return {}
        return {
            self._reader.cell(header_line, column, self._sheet): column
            for column in range(bounds.first_column, bounds.last_column + 1)  # type: ignore[arg-type, operator]
        }

    def resolve(self, options: IterationOptions, header_line: int = 1) -> HeaderResolution:
        """Build the header map for one iteration call.

        Args:
            options: Iteration options selecting the header mode.
            header_line: Header row to fall back on when the sheet is empty.

        Returns:
            The header row and the key-to-column map.
        """
        if options.header_search is not None:
            line = self.find_header_row(options.header_search)
            return HeaderResolution(line, self.row_header_map(line))

        if options.uses_first_row:
            first_row = self._reader.bounds(self._sheet).first_row
            if first_row is None:
                return HeaderResolution(header_line, {})
            return HeaderResolution(first_row, self.row_header_map(first_row))

        if options.uses_labels:
            labels: dict[str, str] = options.headers  # type: ignore[assignment]
            line, matched = self.match_header_cells(list(labels.values()))
            header_map = {
                key: self.header_index(text, line)
                for key, text in zip(labels.keys(), matched, strict=True)
            }
            return HeaderResolution(line, header_map)

        return HeaderResolution(header_line, self.row_header_map(header_line))
