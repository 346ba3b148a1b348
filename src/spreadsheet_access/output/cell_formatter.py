"""Type-aware rendering of cell values as export text.

| type               | rendering                                          |
|--------------------|----------------------------------------------------|
| string             | double-quoted, embedded quotes doubled; "" if empty |
| boolean            | lowercase text, quoted                             |
| float, percentage  | integer text when integral, else decimal text      |
| formula            | by the runtime type of the result (str/number/date) |
| date, datetime     | ISO text                                           |
| time               | elapsed seconds as HH:MM:SS                        |
| link               | target URL, quoted                                 |

Any other tag raises ``UnhandledCellTypeError`` so exports never drop
values silently.
"""

from __future__ import annotations

import math
from datetime import date
from typing import Any

from spreadsheet_access.models import CellType
from spreadsheet_access.utils.exceptions import UnhandledCellTypeError


def quote(text: str) -> str:
    """Wrap ``text`` in double quotes, doubling embedded quotes."""
    return '"' + text.replace('"', '""') + '"'


def format_number(value: Any) -> str:
    """Render integral numbers without a fractional part."""
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return str(int(value))
    return str(value)


def format_date(value: Any) -> str:
    if isinstance(value, date):
        return value.isoformat()
    return str(value)


def seconds_to_timestring(seconds: int | float) -> str:
    """Render elapsed seconds as ``HH:MM:SS``, flooring each component.

    >>> seconds_to_timestring(7506)
    '02:05:06'
    """
    hours = math.floor(seconds / 3600)
    seconds -= hours * 3600
    minutes = math.floor(seconds / 60)
    seconds -= minutes * 60
    return f"{hours:02d}:{minutes:02d}:{math.floor(seconds):02d}"


def _format_string(value: Any) -> str:
    text = str(value)
    return quote(text) if text else ""


def _format_formula_result(value: Any, row: int | None, column: int | None) -> str:
    # bool is an int subclass but not a numeric result here
    if isinstance(value, str):
        return _format_string(value)
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return format_number(value)
    if isinstance(value, date):
        return format_date(value)
    raise UnhandledCellTypeError(
        type(value).__name__,
        row=row,
        column=column,
        message=f"Unhandled formula result type: {type(value).__name__}",
    )


def format_cell(
    value: Any,
    cell_type: CellType | str | None,
    row: int | None = None,
    column: int | None = None,
) -> str:
    """Render one cell for CSV output.

    Args:
        value: The cell value; None means empty.
        cell_type: The cell's type tag.
        row: Row of the cell, for error reporting.
        column: Column of the cell, for error reporting.

    Raises:
        UnhandledCellTypeError: For unknown tags or formula results.
    """
    if value is None:
        return ""

    try:
        tag = CellType(cell_type)
    except ValueError:
        raise UnhandledCellTypeError(cell_type, row=row, column=column) from None

    if tag is CellType.EMPTY:
        return ""
    if tag is CellType.STRING:
        return _format_string(value)
    if tag is CellType.BOOLEAN:
        return quote(str(value).lower())
    if tag in (CellType.FLOAT, CellType.PERCENTAGE):
        return format_number(value)
    if tag is CellType.FORMULA:
        return _format_formula_result(value, row, column)
    if tag in (CellType.DATE, CellType.DATETIME):
        return format_date(value)
    if tag is CellType.TIME:
        return seconds_to_timestring(value)
    if tag is CellType.LINK:
        return quote(str(getattr(value, "url", value)))
    raise UnhandledCellTypeError(tag.value, row=row, column=column)
