"""Conversion between spreadsheet column letters and 1-based numbers.

Columns use a bijective base-26 numeral: A=1 ... Z=26, AA=27, with no
zero digit. Rows and columns are always 1-based.
"""

from __future__ import annotations

import re
from typing import NamedTuple

from spreadsheet_access.utils.exceptions import (
    InvalidCellNameError,
    InvalidCoordinateError,
)

CELL_NAME_RE = re.compile(r"^([A-Za-z]+)(\d+)(?:@(.+))?$")


class CellAddress(NamedTuple):
    """A parsed cell name: row, column and the optional sheet suffix."""

    row: int
    column: int
    sheet: str | None = None


def letter_to_number(letters: str) -> int:
    """Convert column letters ("A", "aa", "XFD") to a 1-based column number.

    Raises:
        InvalidCoordinateError: If ``letters`` is empty or not purely ASCII
            alphabetic.
    """
    if not isinstance(letters, str) or not letters:
        raise InvalidCoordinateError("Column letters must be a non-empty string", letters)
    if not (letters.isascii() and letters.isalpha()):
        raise InvalidCoordinateError(f"Invalid column letters: {letters!r}", letters)

    number = 0
    for char in letters.upper():
        number = number * 26 + (ord(char) - ord("A") + 1)
    return number


def number_to_letter(number: int) -> str:
    """Convert a 1-based column number to its letters (27 -> "AA").

    Raises:
        InvalidCoordinateError: If ``number`` is not an integer >= 1.
    """
    if isinstance(number, bool) or not isinstance(number, int) or number < 1:
        raise InvalidCoordinateError(
            f"Column number must be a positive integer, got {number!r}", number
        )

    letters = ""
    while number > 0:
        number, remainder = divmod(number - 1, 26)
        letters = chr(ord("A") + remainder) + letters
    return letters


def normalize(row: int | str, column: int | str) -> tuple[int, int]:
    """Return a canonical ``(row, column)`` pair of positive integers.

    Either argument may be a column-letter string. ``("B", 5)`` is read the
    way spreadsheets write it, column B of row 5, and becomes ``(5, 2)``.

    Raises:
        InvalidCoordinateError: If both arguments are strings, or a value is
            not a positive integer.
    """
    if isinstance(row, str):
        if isinstance(column, str):
            raise InvalidCoordinateError(
                f"Ambiguous coordinate: both row and column are strings "
                f"({row!r}, {column!r})",
                (row, column),
            )
        row, column = column, row

    if isinstance(column, str):
        column = letter_to_number(column)

    for label, value in (("row", row), ("column", column)):
        if isinstance(value, bool) or not isinstance(value, int) or value < 1:
            raise InvalidCoordinateError(
                f"{label.capitalize()} must be a positive integer, got {value!r}",
                value,
            )
    return row, column


def parse_cell_name(name: str) -> CellAddress:
    """Parse ``<letters><digits>`` with an optional ``@sheet`` suffix.

    >>> parse_cell_name("b5")
    CellAddress(row=5, column=2, sheet=None)
    >>> parse_cell_name("AA10@Prices")
    CellAddress(row=10, column=27, sheet='Prices')
    """
    match = CELL_NAME_RE.match(name) if isinstance(name, str) else None
    if match is None:
        raise InvalidCellNameError(str(name))

    letters, digits, sheet = match.groups()
    row = int(digits)
    if row < 1:
        raise InvalidCellNameError(name)
    return CellAddress(row=row, column=letter_to_number(letters), sheet=sheet)
