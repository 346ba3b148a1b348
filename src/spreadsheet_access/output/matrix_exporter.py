"""Dense, row-major views of a sheet's raw values."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import pandas as pd

from spreadsheet_access.coordinates import number_to_letter

if TYPE_CHECKING:
    from spreadsheet_access.document import SpreadsheetDocument


def _resolve_area(
    document: SpreadsheetDocument,
    from_row: int | None,
    from_column: int | None,
    to_row: int | None,
    to_column: int | None,
    sheet: str | None,
) -> tuple[range, range] | None:
    bounds = document.bounds(sheet)
    if bounds.is_empty:
        return None
    rows = range(from_row or bounds.first_row, (to_row or bounds.last_row) + 1)  # type: ignore[arg-type, operator]
    columns = range(
        from_column or bounds.first_column,  # type: ignore[arg-type]
        (to_column or bounds.last_column) + 1,  # type: ignore[operator]
    )
    return rows, columns


def to_matrix(
    document: SpreadsheetDocument,
    from_row: int | None = None,
    from_column: int | None = None,
    to_row: int | None = None,
    to_column: int | None = None,
    sheet: str | None = None,
) -> list[list[Any]]:
    """Return raw values over the area; an empty sheet gives ``[]``."""
    area = _resolve_area(document, from_row, from_column, to_row, to_column, sheet)
    if area is None:
        return []
    rows, columns = area
    return [[document.cell(row, column, sheet) for column in columns] for row in rows]


def to_dataframe(
    document: SpreadsheetDocument,
    from_row: int | None = None,
    from_column: int | None = None,
    to_row: int | None = None,
    to_column: int | None = None,
    sheet: str | None = None,
) -> pd.DataFrame:
    """Return the matrix as a DataFrame indexed by row number.

    Columns are labelled with their spreadsheet letters.
    """
    area = _resolve_area(document, from_row, from_column, to_row, to_column, sheet)
    if area is None:
        return pd.DataFrame()
    rows, columns = area
    matrix = [[document.cell(row, column, sheet) for column in columns] for row in rows]
    return pd.DataFrame(
        matrix,
        index=pd.Index(list(rows), name="row"),
        columns=[number_to_letter(column) for column in columns],
        dtype=object,
    )
