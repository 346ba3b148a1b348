"""Value types shared across the cell-access layer."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, Field, model_validator

from spreadsheet_access.utils.exceptions import UnhandledCellTypeError


class CellType(str, Enum):
    """Semantic kind of a cell's value, driving export rendering."""

    STRING = "string"
    FLOAT = "float"
    PERCENTAGE = "percentage"
    BOOLEAN = "boolean"
    DATE = "date"
    DATETIME = "datetime"
    TIME = "time"
    FORMULA = "formula"
    LINK = "link"
    EMPTY = "empty"


@dataclass(frozen=True)
class Link:
    """A hyperlink cell: the displayed text plus its target URL."""

    text: str
    url: str

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True)
class BoundingBox:
    """Minimal rectangle enclosing every populated cell of a sheet.

    All four bounds are ``None`` for a sheet without populated cells.
    """

    first_row: int | None = None
    last_row: int | None = None
    first_column: int | None = None
    last_column: int | None = None

    @property
    def is_empty(self) -> bool:
        return self.first_row is None

    @property
    def width(self) -> int:
        if self.first_column is None or self.last_column is None:
            return 0
        return self.last_column - self.first_column + 1

    @property
    def height(self) -> int:
        if self.first_row is None or self.last_row is None:
            return 0
        return self.last_row - self.first_row + 1

    def contains(self, row: int, column: int) -> bool:
        if self.is_empty:
            return False
        return (
            self.first_row <= row <= self.last_row  # type: ignore[operator]
            and self.first_column <= column <= self.last_column  # type: ignore[operator]
        )


@dataclass
class HeaderResolution:
    """Result of header resolution for one iteration call.

    Attributes:
        header_line: Row holding the header cells; data starts on the next row.
        header_map: Logical key to column number. Keys are caller-chosen
            names, or the literal header cell values.
    """

    header_line: int
    header_map: dict[Any, int] = field(default_factory=dict)


HeadersOption = bool | Literal["first_row"] | dict[str, str] | None


class IterationOptions(BaseModel):
    """Options accepted by ``each`` / ``parse``.

    ``headers`` selects explicit labels (a mapping of key to header text,
    optionally with ``*`` wildcards) or the first row (``True`` /
    ``"first_row"``). ``header_search`` lists wildcard/regex patterns.
    The two are mutually exclusive.
    """

    headers: HeadersOption = Field(
        default=None, description="Explicit header labels or first-row mode"
    )
    header_search: list[str] | None = Field(
        default=None, description="Wildcard/regex patterns locating the header row"
    )
    clean: bool = Field(
        default=False,
        description="Strip non-ASCII characters and whitespace from string cells",
    )

    @model_validator(mode="after")
    def validate_single_mode(self) -> IterationOptions:
        """Reject configurations that select more than one header mode."""
        if self.header_search is not None and self.headers not in (None, False):
            raise ValueError("headers and header_search cannot be combined")
        if isinstance(self.headers, dict) and not self.headers:
            raise ValueError("headers mapping must not be empty")
        return self

    @property
    def uses_first_row(self) -> bool:
        return self.headers is True or self.headers == "first_row"

    @property
    def uses_labels(self) -> bool:
        return isinstance(self.headers, dict)

    @property
    def has_header_mode(self) -> bool:
        return self.uses_first_row or self.uses_labels or self.header_search is not None


class SheetSummary(BaseModel):
    """Dimensions of one sheet as reported by ``info``."""

    index: int = Field(..., description="1-based position of the sheet")
    name: str = Field(..., description="Sheet name")
    first_row: int | None = None
    last_row: int | None = None
    first_column: str | None = Field(
        default=None, description="First populated column as letters"
    )
    last_column: str | None = Field(
        default=None, description="Last populated column as letters"
    )

    @property
    def is_empty(self) -> bool:
        return self.first_row is None


def time_to_seconds(value: time | timedelta) -> int:
    """Convert a time of day or a duration into whole elapsed seconds."""
    if isinstance(value, timedelta):
        return int(value.total_seconds())
    return value.hour * 3600 + value.minute * 60 + value.second


def infer_cell_type(value: Any) -> CellType:
    """Pick the type tag for a plain Python value.

    Raises:
        UnhandledCellTypeError: If no tag fits the value's type.
    """
    # bool before int: bool is an int subclass
    if isinstance(value, bool):
        return CellType.BOOLEAN
    if isinstance(value, (int, float)):
        return CellType.FLOAT
    if isinstance(value, str):
        return CellType.STRING
    if isinstance(value, Link):
        return CellType.LINK
    # datetime before date: datetime is a date subclass
    if isinstance(value, datetime):
        return CellType.DATETIME
    if isinstance(value, date):
        return CellType.DATE
    if isinstance(value, (time, timedelta)):
        return CellType.TIME
    raise UnhandledCellTypeError(
        type(value).__name__,
        message=f"Cannot infer a cell type for value {value!r}",
    )


def coerce_cell(
    value: Any, cell_type: CellType | str | None = None
) -> tuple[Any, CellType]:
    """Return ``(value, type)`` ready for the store.

    A tag given as a plain string (``"string"``) is converted to its
    ``CellType``. Times are stored as elapsed seconds so the formatter can
    render them.

    Raises:
        UnhandledCellTypeError: If the tag names no known cell type.
    """
    if cell_type is None:
        resolved = infer_cell_type(value)
    else:
        try:
            resolved = CellType(cell_type)
        except ValueError as exc:
            raise UnhandledCellTypeError(cell_type) from exc
    if resolved is CellType.TIME and isinstance(value, (time, timedelta)):
        value = time_to_seconds(value)
    return value, resolved
