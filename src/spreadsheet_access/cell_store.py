"""Sparse, coordinate-indexed storage for the cells of one sheet."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import Any

from spreadsheet_access.models import BoundingBox, CellType
from spreadsheet_access.utils.logging import get_logger

logger = get_logger(__name__)

Coordinate = tuple[int, int]


def compute_bounding_box(coordinates: Iterable[Coordinate]) -> BoundingBox:
    """Track row and column extremes independently over ``coordinates``.

    Returns a box with all bounds ``None`` when ``coordinates`` is empty.
    """
    first_row = last_row = first_column = last_column = None
    for row, column in coordinates:
        if first_row is None:
            first_row = last_row = row
            first_column = last_column = column
            continue
        first_row = min(first_row, row)
        last_row = max(last_row, row)  # type: ignore[type-var]
        first_column = min(first_column, column)  # type: ignore[type-var]
        last_column = max(last_column, column)  # type: ignore[type-var]
    return BoundingBox(first_row, last_row, first_column, last_column)


class SparseCellStore:
    """Mapping of ``(row, column)`` to a value and its type tag.

    Never-written coordinates have no entry; reading them returns ``None``.
    The bounding box is cached until the next write or an explicit
    invalidation.
    """

    def __init__(self) -> None:
        self._values: dict[Coordinate, Any] = {}
        self._types: dict[Coordinate, CellType] = {}
        self._bounds: BoundingBox | None = None

    def __len__(self) -> int:
        return len(self._values)

    def __contains__(self, coordinate: object) -> bool:
        return coordinate in self._values

    def get(self, row: int, column: int) -> Any:
        return self._values.get((row, column))

    def get_type(self, row: int, column: int) -> CellType | None:
        return self._types.get((row, column))

    def set(self, row: int, column: int, value: Any, cell_type: CellType) -> None:
        """Store ``value`` and ``cell_type`` together at ``(row, column)``."""
        self._values[(row, column)] = value
        self._types[(row, column)] = cell_type
        self._bounds = None

    def all_coordinates(self) -> Iterator[Coordinate]:
        """Lazily yield the coordinates that hold a value."""
        return (coord for coord, value in self._values.items() if value is not None)

    def items(self) -> Iterator[tuple[Coordinate, Any, CellType]]:
        for coord, value in list(self._values.items()):
            yield coord, value, self._types[coord]

    def clear(self) -> None:
        self._values.clear()
        self._types.clear()
        self._bounds = None

    def bounding_box(self) -> BoundingBox:
        """Return the cached bounding box, computing it on first use."""
        if self._bounds is None:
            self._bounds = compute_bounding_box(self.all_coordinates())
            logger.debug(
                "Computed bounding box",
                first_row=self._bounds.first_row,
                last_row=self._bounds.last_row,
                first_column=self._bounds.first_column,
                last_column=self._bounds.last_column,
            )
        return self._bounds

    def invalidate_bounds(self) -> None:
        self._bounds = None

    @property
    def bounds_cached(self) -> bool:
        return self._bounds is not None


@dataclass
class SheetState:
    """Per-sheet lazy state: the store plus its lifecycle flags.

    Transitions are ``unloaded -> loaded`` (first access reads the cells
    from the source) and ``bounds-stale -> bounds-cached`` (first
    dimension query after a write or a switch to this sheet).
    """

    name: str
    store: SparseCellStore = field(default_factory=SparseCellStore)
    loaded: bool = False
    cleaned: bool = False
