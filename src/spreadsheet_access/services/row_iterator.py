"""Row iteration over a sheet, as raw arrays or header-keyed records."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from spreadsheet_access.cell_store import SparseCellStore
from spreadsheet_access.models import HeaderResolution
from spreadsheet_access.services.header_resolver import SheetReader
from spreadsheet_access.utils.logging import get_logger

logger = get_logger(__name__)


def sanitize_value(value: str) -> str:
    """Drop non-ASCII characters, then surrounding whitespace."""
    return "".join(char for char in value if ord(char) < 127).strip()


def clean_store(store: SparseCellStore) -> int:
    """Sanitize every string cell of ``store`` in place.

    Returns:
        Number of cells whose value changed.
    """
    changed = 0
    for (row, column), value, cell_type in store.items():
        if not isinstance(value, str):
            continue
        cleaned = sanitize_value(value)
        if cleaned != value:
            store.set(row, column, cleaned, cell_type)
            changed += 1
    logger.debug("Cleaned string cells", changed=changed)
    return changed


class RowIterator:
    """Produce rows of one sheet lazily.

    Every call to ``rows`` or ``records`` starts a fresh pass.
    """

    def __init__(self, reader: SheetReader, sheet: str) -> None:
        self._reader = reader
        self._sheet = sheet

    def rows(self) -> Iterator[list[Any]]:
        """Yield rows 1..last_row as arrays over the populated columns."""
        last_row = self._reader.bounds(self._sheet).last_row or 0
        for line in range(1, last_row + 1):
            yield self._reader.row(line, self._sheet)

    def records(self, resolution: HeaderResolution) -> Iterator[dict[Any, Any]]:
        """Yield one mapping per row after the header row."""
        last_row = self._reader.bounds(self._sheet).last_row or 0
        for line in range(resolution.header_line + 1, last_row + 1):
            yield {
                key: self._reader.cell(line, column, self._sheet)
                for key, column in resolution.header_map.items()
            }
