"""Tests for matrix and DataFrame views."""

from typing import Any

from spreadsheet_access import SpreadsheetDocument


class TestToMatrix:
    """Tests for to_matrix."""

    def test_whole_sheet(self, people_doc: SpreadsheetDocument) -> None:
        assert people_doc.to_matrix() == [["id", "name"], [1, "Alice"], [2, "Bob"]]

    def test_sub_area(self, people_doc: SpreadsheetDocument) -> None:
        assert people_doc.to_matrix(from_row=2, from_column=2) == [["Alice"], ["Bob"]]

    def test_area_starts_at_bounding_box(self, make_doc: Any) -> None:
        doc = make_doc([["a", None], [None, "d"]], first_row=3, first_column=3)
        assert doc.to_matrix() == [["a", None], [None, "d"]]

    def test_empty_sheet(self, people_doc: SpreadsheetDocument) -> None:
        assert people_doc.to_matrix(sheet="Empty") == []


class TestToDataFrame:
    """Tests for to_dataframe."""

    def test_labels(self, people_doc: SpreadsheetDocument) -> None:
        frame = people_doc.to_dataframe()
        assert list(frame.columns) == ["A", "B"]
        assert list(frame.index) == [1, 2, 3]
        assert frame.index.name == "row"
        assert frame.loc[2, "B"] == "Alice"

    def test_values_keep_python_types(self, people_doc: SpreadsheetDocument) -> None:
        frame = people_doc.to_dataframe(from_row=2)
        assert frame.loc[3, "A"] == 2
        assert frame["A"].dtype == object

    def test_empty_sheet(self, people_doc: SpreadsheetDocument) -> None:
        assert people_doc.to_dataframe(sheet="Empty").empty
