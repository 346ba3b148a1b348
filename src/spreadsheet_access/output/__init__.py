"""Export of sheets as CSV, XML, YAML-like text, matrices and summaries.

Every textual export renders cells through the type-aware formatter in
``cell_formatter``.
"""

from spreadsheet_access.output.cell_formatter import (
    format_cell,
    quote,
    seconds_to_timestring,
)
from spreadsheet_access.output.csv_exporter import CsvExporter

__all__ = [
    "CsvExporter",
    "format_cell",
    "quote",
    "seconds_to_timestring",
]
