"""Tests for the YAML-like dump."""

from datetime import time
from typing import Any

from spreadsheet_access import SpreadsheetDocument


def test_cell_blocks(people_doc: SpreadsheetDocument) -> None:
    text = people_doc.to_yaml(prefix={"file": "people"})
    assert text.startswith(
        "--- \n"
        "cell_1_1: \n"
        "  file: people \n"
        "  row: 1 \n"
        "  col: 1 \n"
        "  celltype: string \n"
        "  value: id \n"
        "cell_1_2: \n"
    )
    assert text.count("cell_") == 6
    assert text.endswith("  value: Bob \n")


def test_bounds_restrict_area(people_doc: SpreadsheetDocument) -> None:
    text = people_doc.to_yaml(from_row=2, to_row=2, from_column=2)
    assert "cell_2_2: " in text
    assert "cell_2_1: " not in text
    assert "cell_1_2: " not in text


def test_time_and_boolean_values(make_doc: Any) -> None:
    doc = make_doc([[time(2, 5, 6), True]])
    text = doc.to_yaml()
    assert "  celltype: time \n  value: 02:05:06 \n" in text
    assert "  value: true \n" in text


def test_empty_cells_skipped(make_doc: Any) -> None:
    doc = make_doc([["a", "", "c"]])
    assert "cell_1_2" not in doc.to_yaml()


def test_empty_sheet(people_doc: SpreadsheetDocument) -> None:
    assert people_doc.to_yaml(sheet="Empty") == ""
