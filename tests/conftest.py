from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest

from spreadsheet_access import InMemoryCellSource, SpreadsheetDocument
from spreadsheet_access.cell_store import SparseCellStore
from spreadsheet_access.utils.logging import clear_context

PEOPLE_ROWS: list[list[Any]] = [["id", "name"], [1, "Alice"], [2, "Bob"]]

PRICE_ROWS: list[list[Any]] = [
    ["Price list 2024"],
    [],
    ["SKU", "UPC", "Description", "Cost"],
    ["A-1", 123456789012, "Widget", 4.5],
    ["A-2", 210987654321, "Gadget", 10],
]


class CountingSource(InMemoryCellSource):
    """In-memory source that records how often each sheet is read."""

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.reads: dict[str, int] = {}

    def read_cells(self, sheet: str, store: SparseCellStore) -> None:
        self.reads[sheet] = self.reads.get(sheet, 0) + 1
        super().read_cells(sheet, store)


@pytest.fixture(autouse=True)
def _reset_log_context() -> Any:
    yield
    clear_context()


@pytest.fixture
def people_source() -> CountingSource:
    """Two sheets: a small people table and an empty sheet."""
    return CountingSource.from_rows(
        {"People": PEOPLE_ROWS, "Empty": []}, name="people.xlsx"
    )


@pytest.fixture
def people_doc(people_source: CountingSource) -> SpreadsheetDocument:
    return SpreadsheetDocument(people_source)


@pytest.fixture
def prices_doc() -> SpreadsheetDocument:
    """A sheet whose header row sits below a title and a blank row."""
    source = InMemoryCellSource.from_rows({"Prices": PRICE_ROWS}, name="prices.xlsx")
    return SpreadsheetDocument(source)


@pytest.fixture
def make_doc() -> Callable[..., SpreadsheetDocument]:
    """Factory building a single-sheet document from row lists."""

    def _make(rows: list[list[Any]], sheet: str = "Sheet1", **kwargs: Any) -> SpreadsheetDocument:
        return SpreadsheetDocument(InMemoryCellSource.from_rows({sheet: rows}, **kwargs))

    return _make
