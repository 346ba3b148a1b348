"""Tests for the pandas-backed DataFrameCellSource."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

import pandas as pd
import pytest

from spreadsheet_access import CellType, SpreadsheetDocument
from spreadsheet_access.cell_store import SparseCellStore
from spreadsheet_access.services.dataframe_source import DataFrameCellSource
from spreadsheet_access.utils.exceptions import SourceUnavailableError


class TestDataFrameCellSource:
    """Tests for reading in-memory DataFrames."""

    def test_header_row_then_data(self) -> None:
        frame = pd.DataFrame({"id": [1, 2], "name": ["Alice", "Bob"]})
        doc = SpreadsheetDocument(DataFrameCellSource({"People": frame}))
        assert doc.row(1) == ["id", "name"]
        assert doc.parse(headers=True) == [
            {"id": 1, "name": "Alice"},
            {"id": 2, "name": "Bob"},
        ]

    def test_numpy_scalars_become_python(self) -> None:
        frame = pd.DataFrame({"n": [1.5]})
        store = SparseCellStore()
        DataFrameCellSource({"S": frame}).read_cells("S", store)
        assert type(store.get(2, 1)) is float
        assert store.get_type(2, 1) is CellType.FLOAT

    def test_missing_values_left_empty(self) -> None:
        frame = pd.DataFrame({"a": [1.0, float("nan")], "b": [None, "x"]})
        store = SparseCellStore()
        DataFrameCellSource({"S": frame}).read_cells("S", store)
        assert store.get(3, 1) is None
        assert store.get(2, 2) is None
        assert store.get(3, 2) == "x"

    def test_timestamps(self) -> None:
        frame = pd.DataFrame({"when": pd.to_datetime(["2024-01-15 10:30"])})
        store = SparseCellStore()
        DataFrameCellSource({"S": frame}).read_cells("S", store)
        assert store.get(2, 1) == datetime(2024, 1, 15, 10, 30)
        assert store.get_type(2, 1) is CellType.DATETIME

    def test_without_header(self) -> None:
        frame = pd.DataFrame([["a", "b"]])
        store = SparseCellStore()
        DataFrameCellSource({"S": frame}, include_header=False).read_cells("S", store)
        assert store.get(1, 1) == "a"

    def test_sheet_order(self) -> None:
        source = DataFrameCellSource({"b": pd.DataFrame(), "a": pd.DataFrame()})
        assert source.list_sheets() == ["b", "a"]


class TestFromCsv:
    """Tests for DataFrameCellSource.from_csv."""

    def test_cells_are_strings(self, tmp_path: Path) -> None:
        path = tmp_path / "people.csv"
        path.write_text("id,name\n1,Alice\n2,\n", encoding="utf-8")
        source = DataFrameCellSource.from_csv(path)
        assert source.list_sheets() == ["people"]
        assert source.name == "people.csv"

        store = SparseCellStore()
        source.read_cells("people", store)
        assert store.get(2, 1) == "1"
        assert store.get_type(2, 1) is CellType.STRING
        assert store.get(3, 2) is None

    def test_custom_separator_and_name(self, tmp_path: Path) -> None:
        path = tmp_path / "data.txt"
        path.write_text("a;b\n", encoding="utf-8")
        source = DataFrameCellSource.from_csv(path, separator=";", sheet_name="Data")
        store = SparseCellStore()
        source.read_cells("Data", store)
        assert store.get(1, 2) == "b"

    def test_empty_file(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.csv"
        path.write_text("", encoding="utf-8")
        doc = SpreadsheetDocument(DataFrameCellSource.from_csv(path))
        assert doc.bounds().is_empty

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(SourceUnavailableError):
            DataFrameCellSource.from_csv(tmp_path / "missing.csv")
