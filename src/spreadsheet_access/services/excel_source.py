"""openpyxl-backed cell source for Excel workbooks."""

from __future__ import annotations

import zipfile
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta
from itertools import repeat
from pathlib import Path
from typing import Any

from openpyxl import load_workbook
from openpyxl.cell import Cell
from openpyxl.utils.exceptions import InvalidFileException
from openpyxl.workbook.workbook import Workbook

from spreadsheet_access.cell_store import SparseCellStore
from spreadsheet_access.config import settings
from spreadsheet_access.models import CellType, Link, time_to_seconds
from spreadsheet_access.utils.exceptions import (
    ErrorCode,
    SourceUnavailableError,
    UnhandledCellTypeError,
)
from spreadsheet_access.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass
class ExcelSourceOptions:
    """Options controlling how workbooks are read."""

    load_formulas: bool = field(default_factory=lambda: settings.excel_load_formulas)


class ExcelCellSource:
    """Read ``.xlsx`` / ``.xlsm`` workbooks with openpyxl.

    Workbooks are opened lazily on first use. When formulas are loaded the
    file is opened twice: once for cached results and once to see which
    cells hold formulas.
    """

    def __init__(
        self, file_path: Path | str, options: ExcelSourceOptions | None = None
    ) -> None:
        self._path = Path(file_path)
        if not self._path.is_file():
            raise SourceUnavailableError(
                f"Excel file not found: {self._path}", source=str(self._path)
            )
        self._options = options or ExcelSourceOptions()
        self._values_wb: Workbook | None = None
        self._formulas_wb: Workbook | None = None
        self.name = self._path.name

    def list_sheets(self) -> list[str]:
        return list(self._values_workbook().sheetnames)

    def read_cells(self, sheet: str, store: SparseCellStore) -> None:
        """Copy every non-empty cell of ``sheet`` into ``store``."""
        values_ws = self._values_workbook()[sheet]
        value_rows = values_ws.iter_rows()

        formula_rows: Iterable[tuple[Any, ...] | None]
        if self._options.load_formulas:
            formula_rows = self._formulas_workbook()[sheet].iter_rows()
        else:
            formula_rows = repeat(None)

        for value_cells, formula_cells in zip(value_rows, formula_rows):
            formula_cells = formula_cells or (None,) * len(value_cells)
            for cell, formula_cell in zip(value_cells, formula_cells, strict=True):
                entry = self._build_entry(cell, formula_cell)
                if entry is not None:
                    store.set(cell.row, cell.column, *entry)

    # ------------------------------------------------------------------ #
    # Internal helpers
    # ------------------------------------------------------------------ #

    def _values_workbook(self) -> Workbook:
        if self._values_wb is None:
            self._values_wb = self._load(data_only=True)
        return self._values_wb

    def _formulas_workbook(self) -> Workbook:
        if self._formulas_wb is None:
            self._formulas_wb = self._load(data_only=False)
        return self._formulas_wb

    def _load(self, *, data_only: bool) -> Workbook:
        try:
            return load_workbook(filename=self._path, data_only=data_only)
        except (InvalidFileException, zipfile.BadZipFile, OSError, KeyError) as exc:
            logger.error("Failed to open workbook", path=str(self._path), error=str(exc))
            raise SourceUnavailableError(
                f"Could not read Excel file {self._path}: {exc}",
                source=str(self._path),
                error_code=ErrorCode.SOURCE_READ_FAILED,
            ) from exc

    def _build_entry(
        self, cell: Cell, formula_cell: Cell | None
    ) -> tuple[Any, CellType] | None:
        """Map an openpyxl cell to ``(value, type)``, or None when empty."""
        value = cell.value
        if formula_cell is not None and formula_cell.data_type == "f":
            # Keep the formula text when the file carries no cached result
            if value is None:
                value = str(formula_cell.value)
                logger.warning(
                    "Formula has no cached result; workbook was not recalculated",
                    path=str(self._path),
                    cell=formula_cell.coordinate,
                )
            if isinstance(value, (time, timedelta)):
                value = time_to_seconds(value)
            return value, CellType.FORMULA

        if value is None:
            return None
        return self._map_value(cell, value)

    @staticmethod
    def _map_value(cell: Cell, value: Any) -> tuple[Any, CellType]:
        hyperlink = getattr(cell, "hyperlink", None)
        if hyperlink is not None and hyperlink.target:
            return Link(text=str(value), url=hyperlink.target), CellType.LINK
        if isinstance(value, bool):
            return value, CellType.BOOLEAN
        if isinstance(value, datetime):
            if value.time() == time(0):
                return value.date(), CellType.DATE
            return value, CellType.DATETIME
        if isinstance(value, date):
            return value, CellType.DATE
        if isinstance(value, (time, timedelta)):
            return time_to_seconds(value), CellType.TIME
        if isinstance(value, (int, float)):
            if "%" in (cell.number_format or ""):
                return value, CellType.PERCENTAGE
            return value, CellType.FLOAT
        if isinstance(value, str):
            return value, CellType.STRING
        raise UnhandledCellTypeError(
            type(value).__name__, row=cell.row, column=cell.column
        )
