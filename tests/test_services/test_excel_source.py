"""Tests for the openpyxl-backed ExcelCellSource."""

from __future__ import annotations

import logging
from datetime import date, datetime, time
from pathlib import Path
from unittest.mock import patch

import pytest
from openpyxl import Workbook

from spreadsheet_access import CellType, Link, SpreadsheetDocument
from spreadsheet_access.cell_store import SparseCellStore
from spreadsheet_access.config import settings
from spreadsheet_access.services.excel_source import ExcelCellSource, ExcelSourceOptions
from spreadsheet_access.utils.exceptions import ErrorCode, SourceUnavailableError


def _make_workbook(tmp_path: Path) -> Path:
    wb = Workbook()
    ws1 = wb.active
    ws1.title = "Sheet1"
    ws1["A1"] = "Name"
    ws1["B1"] = "Amount"
    ws1["A2"] = "Alice"
    ws1["B2"] = 123.45
    ws1["A3"] = "Bob"
    ws1["B3"] = 10
    ws1["C2"] = True
    ws1["D2"] = datetime(2024, 1, 15)
    ws1["E2"] = "=SUM(B2,B3)"
    ws1["F2"] = 0.25
    ws1["F2"].number_format = "0%"
    ws1["G2"] = time(2, 5, 6)
    ws1["H2"] = "Docs"
    ws1["H2"].hyperlink = "https://example.com/docs"
    ws1["I2"] = datetime(2024, 1, 15, 10, 30)

    ws2 = wb.create_sheet("Secondary")
    ws2["A1"] = "Secondary"

    path = tmp_path / "book.xlsx"
    wb.save(path)
    return path


@pytest.fixture
def workbook_path(tmp_path: Path) -> Path:
    return _make_workbook(tmp_path)


@pytest.fixture
def sheet1(workbook_path: Path) -> SparseCellStore:
    store = SparseCellStore()
    ExcelCellSource(workbook_path).read_cells("Sheet1", store)
    return store


def test_list_sheets(workbook_path: Path) -> None:
    source = ExcelCellSource(workbook_path)
    assert source.list_sheets() == ["Sheet1", "Secondary"]
    assert source.name == "book.xlsx"


def test_strings_and_numbers(sheet1: SparseCellStore) -> None:
    assert sheet1.get(1, 1) == "Name"
    assert sheet1.get_type(1, 1) is CellType.STRING
    assert sheet1.get(2, 2) == 123.45
    assert sheet1.get_type(2, 2) is CellType.FLOAT
    assert sheet1.get(3, 2) == 10


def test_boolean(sheet1: SparseCellStore) -> None:
    assert sheet1.get(2, 3) is True
    assert sheet1.get_type(2, 3) is CellType.BOOLEAN


def test_dates_and_datetimes(sheet1: SparseCellStore) -> None:
    """Midnight timestamps are read as dates."""
    assert sheet1.get(2, 4) == date(2024, 1, 15)
    assert sheet1.get_type(2, 4) is CellType.DATE
    assert sheet1.get(2, 9) == datetime(2024, 1, 15, 10, 30)
    assert sheet1.get_type(2, 9) is CellType.DATETIME


def test_formula_without_cached_value(sheet1: SparseCellStore) -> None:
    assert sheet1.get(2, 5) == "=SUM(B2,B3)"
    assert sheet1.get_type(2, 5) is CellType.FORMULA


def test_uncalculated_formula_logs_warning(
    workbook_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    """Falling back to the formula text is reported with the cell position."""
    store = SparseCellStore()
    with caplog.at_level(logging.WARNING, logger="spreadsheet_access.services.excel_source"):
        ExcelCellSource(workbook_path).read_cells("Sheet1", store)
    assert "Formula has no cached result" in caplog.text
    assert "cell=E2" in caplog.text


def test_percentage(sheet1: SparseCellStore) -> None:
    assert sheet1.get(2, 6) == 0.25
    assert sheet1.get_type(2, 6) is CellType.PERCENTAGE


def test_time_stored_as_seconds(sheet1: SparseCellStore) -> None:
    assert sheet1.get(2, 7) == 7506
    assert sheet1.get_type(2, 7) is CellType.TIME


def test_hyperlink(sheet1: SparseCellStore) -> None:
    assert sheet1.get(2, 8) == Link(text="Docs", url="https://example.com/docs")
    assert sheet1.get_type(2, 8) is CellType.LINK


def test_empty_cells_not_stored(sheet1: SparseCellStore) -> None:
    assert (1, 3) not in sheet1
    assert sheet1.bounding_box().last_row == 3


def test_formulas_not_loaded(workbook_path: Path) -> None:
    """Without the formula pass, uncalculated formulas read as empty."""
    store = SparseCellStore()
    source = ExcelCellSource(workbook_path, ExcelSourceOptions(load_formulas=False))
    source.read_cells("Sheet1", store)
    assert store.get(2, 5) is None
    assert store.get(2, 2) == 123.45


def test_formula_option_follows_settings() -> None:
    """The default is read from settings when the options are created."""
    with patch.object(settings, "excel_load_formulas", False):
        assert ExcelSourceOptions().load_formulas is False
    assert ExcelSourceOptions().load_formulas is settings.excel_load_formulas


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(SourceUnavailableError) as exc_info:
        ExcelCellSource(tmp_path / "missing.xlsx")
    assert exc_info.value.error_code == ErrorCode.SOURCE_UNAVAILABLE


def test_corrupt_file(tmp_path: Path) -> None:
    path = tmp_path / "broken.xlsx"
    path.write_bytes(b"not a zip archive")
    source = ExcelCellSource(path)
    with pytest.raises(SourceUnavailableError) as exc_info:
        source.list_sheets()
    assert exc_info.value.error_code == ErrorCode.SOURCE_READ_FAILED


def test_document_over_workbook(workbook_path: Path) -> None:
    doc = SpreadsheetDocument.open(workbook_path)
    assert doc.cell_by_name("B2") == 123.45
    assert doc.cell(1, 1, "Secondary") == "Secondary"
    assert doc.parse(headers={"who": "name", "amount": "amount"}) == [
        {"who": "Alice", "amount": 123.45},
        {"who": "Bob", "amount": 10},
    ]
    csv_line = doc.to_csv().splitlines()[1]
    assert csv_line == (
        '"Alice",123.45,"true",2024-01-15,"=SUM(B2,B3)",0.25,02:05:06,'
        '"https://example.com/docs",2024-01-15T10:30:00'
    )
