"""Human-readable summary of a document and its sheets."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from spreadsheet_access.models import SheetSummary

if TYPE_CHECKING:
    from spreadsheet_access.document import SpreadsheetDocument


def summarize_sheets(document: SpreadsheetDocument) -> list[SheetSummary]:
    """Collect the dimensions of every sheet, restoring the current sheet."""
    summaries: list[SheetSummary] = []
    with document.preserve_current_sheet():
        for index, name in enumerate(document.sheets, start=1):
            document.current_sheet = name
            bounds = document.bounds()
            summaries.append(
                SheetSummary(
                    index=index,
                    name=name,
                    first_row=bounds.first_row,
                    last_row=bounds.last_row,
                    first_column=document.first_column_as_letter(),
                    last_column=document.last_column_as_letter(),
                )
            )
    return summaries


def render_info(document: SpreadsheetDocument) -> str:
    """Render the summary shown by ``SpreadsheetDocument.info``.

    Example::

        File: prices.xlsx
        Number of sheets: 2
        Sheets: Prices, Notes
        Sheet 1:
          First row: 1
          Last row: 40
          First column: A
          Last column: F
        Sheet 2:
          - empty -
    """
    sheets = document.sheets
    parts = [
        f"File: {Path(document.filename).name}\n",
        f"Number of sheets: {len(sheets)}\n",
        f"Sheets: {', '.join(sheets)}\n",
    ]
    summaries = summarize_sheets(document)
    for summary in summaries:
        parts.append(f"Sheet {summary.index}:\n")
        if summary.is_empty:
            parts.append("  - empty -")
        else:
            parts.append(f"  First row: {summary.first_row}\n")
            parts.append(f"  Last row: {summary.last_row}\n")
            parts.append(f"  First column: {summary.first_column}\n")
            parts.append(f"  Last column: {summary.last_column}")
        if summary is not summaries[-1]:
            parts.append("\n")
    return "".join(parts)
