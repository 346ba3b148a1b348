"""Services for spreadsheet access."""

from spreadsheet_access.services.cell_source import CellSource, InMemoryCellSource
from spreadsheet_access.services.dataframe_source import DataFrameCellSource
from spreadsheet_access.services.excel_source import ExcelCellSource
from spreadsheet_access.services.header_resolver import HeaderResolver
from spreadsheet_access.services.query_engine import QueryEngine
from spreadsheet_access.services.row_iterator import RowIterator
from spreadsheet_access.services.source_factory import source_for_path

__all__ = [
    "CellSource",
    "DataFrameCellSource",
    "ExcelCellSource",
    "HeaderResolver",
    "InMemoryCellSource",
    "QueryEngine",
    "RowIterator",
    "source_for_path",
]
