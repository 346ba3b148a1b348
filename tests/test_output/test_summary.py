"""Tests for the document summary."""

from typing import Any

from spreadsheet_access import SpreadsheetDocument
from spreadsheet_access.output.summary import render_info, summarize_sheets


def test_summarize_sheets(people_doc: SpreadsheetDocument) -> None:
    people, empty = summarize_sheets(people_doc)
    assert (people.index, people.name) == (1, "People")
    assert (people.first_column, people.last_column) == ("A", "B")
    assert empty.is_empty
    assert empty.first_row is None


def test_info_keeps_current_sheet(people_doc: SpreadsheetDocument) -> None:
    people_doc.select_sheet(1)
    render_info(people_doc)
    assert people_doc.current_sheet == "Empty"


def test_single_sheet_has_no_trailing_newline(make_doc: Any) -> None:
    doc = make_doc([["x"]], first_column=28, name="/data/book.xlsx")
    assert render_info(doc) == (
        "File: book.xlsx\n"
        "Number of sheets: 1\n"
        "Sheets: Sheet1\n"
        "Sheet 1:\n"
        "  First row: 1\n"
        "  Last row: 1\n"
        "  First column: AB\n"
        "  Last column: AB"
    )
