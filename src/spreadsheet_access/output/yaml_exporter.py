"""Flat YAML-like dump of a rectangular area of a sheet.

Each non-empty cell becomes a ``cell_<row>_<col>`` block::

    ---
    cell_1_1:
      file: prices
      row: 1
      col: 1
      celltype: string
      value: UPC

Caller-supplied prefix pairs come first in every block. Time cells are
written as ``HH:MM:SS``.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from spreadsheet_access.models import CellType
from spreadsheet_access.output.cell_formatter import seconds_to_timestring

if TYPE_CHECKING:
    from spreadsheet_access.document import SpreadsheetDocument


def _yaml_value(value: Any, cell_type: CellType | None) -> str:
    if cell_type is CellType.TIME:
        return seconds_to_timestring(value)
    if isinstance(value, bool):
        return str(value).lower()
    return str(value)


def to_yaml(
    document: SpreadsheetDocument,
    prefix: Mapping[str, Any] | None = None,
    from_row: int | None = None,
    from_column: int | None = None,
    to_row: int | None = None,
    to_column: int | None = None,
    sheet: str | None = None,
) -> str:
    """Dump the cells of ``sheet`` within the given bounds.

    Bounds default to the sheet's bounding box; an empty sheet yields "".
    """
    bounds = document.bounds(sheet)
    if bounds.is_empty:
        return ""

    from_row = from_row or bounds.first_row
    to_row = to_row or bounds.last_row
    from_column = from_column or bounds.first_column
    to_column = to_column or bounds.last_column
    prefix = prefix or {}

    lines = ["--- "]
    for row in range(from_row, to_row + 1):  # type: ignore[arg-type, operator]
        for column in range(from_column, to_column + 1):  # type: ignore[arg-type, operator]
            if document.empty(row, column, sheet):
                continue
            cell_type = document.cell_type(row, column, sheet)
            lines.append(f"cell_{row}_{column}: ")
            lines.extend(f"  {key}: {value} " for key, value in prefix.items())
            lines.append(f"  row: {row} ")
            lines.append(f"  col: {column} ")
            lines.append(f"  celltype: {cell_type.value if cell_type else ''} ")
            value = document.cell(row, column, sheet)
            lines.append(f"  value: {_yaml_value(value, cell_type)} ")
    return "\n".join(lines) + "\n"
