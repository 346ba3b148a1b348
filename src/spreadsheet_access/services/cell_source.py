"""Interface to the format-specific decoders that populate cell stores."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Protocol, runtime_checkable

from spreadsheet_access.cell_store import SparseCellStore
from spreadsheet_access.models import CellType, coerce_cell


@runtime_checkable
class CellSource(Protocol):
    """What a decoder must provide to back a ``SpreadsheetDocument``.

    ``list_sheets`` is called once when the document is created and its
    order is significant. ``read_cells`` fills ``store`` with every
    populated cell of ``sheet``; the document calls it at most once per
    sheet between reloads.
    """

    name: str

    def list_sheets(self) -> list[str]: ...

    def read_cells(self, sheet: str, store: SparseCellStore) -> None: ...


CellEntry = tuple[Any, CellType]


class InMemoryCellSource:
    """A source backed by plain Python data.

    Each sheet maps ``(row, column)`` to ``(value, type)``. Use
    ``from_rows`` to build one from row lists with inferred types.
    """

    def __init__(
        self,
        sheets: Mapping[str, Mapping[tuple[int, int], CellEntry]],
        name: str = "memory",
    ) -> None:
        self.name = name
        self._sheets = {sheet: dict(cells) for sheet, cells in sheets.items()}

    @classmethod
    def from_rows(
        cls,
        sheets: Mapping[str, Sequence[Sequence[Any]]],
        name: str = "memory",
        first_row: int = 1,
        first_column: int = 1,
    ) -> InMemoryCellSource:
        """Build a source from row lists; ``None`` entries stay unpopulated."""
        cells: dict[str, dict[tuple[int, int], CellEntry]] = {}
        for sheet, rows in sheets.items():
            sheet_cells: dict[tuple[int, int], CellEntry] = {}
            for row_offset, values in enumerate(rows):
                for col_offset, value in enumerate(values):
                    if value is None:
                        continue
                    coord = (first_row + row_offset, first_column + col_offset)
                    sheet_cells[coord] = coerce_cell(value)
            cells[sheet] = sheet_cells
        return cls(cells, name=name)

    def list_sheets(self) -> list[str]:
        return list(self._sheets)

    def read_cells(self, sheet: str, store: SparseCellStore) -> None:
        for (row, column), (value, cell_type) in self._sheets[sheet].items():
            store.set(row, column, value, cell_type)
