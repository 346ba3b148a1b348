"""pandas-backed cell source for DataFrames and CSV files."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

import pandas as pd

from spreadsheet_access.cell_store import SparseCellStore
from spreadsheet_access.config import settings
from spreadsheet_access.models import coerce_cell
from spreadsheet_access.utils.exceptions import ErrorCode, SourceUnavailableError
from spreadsheet_access.utils.logging import get_logger

logger = get_logger(__name__)


class DataFrameCellSource:
    """Expose one DataFrame per sheet as a cell source.

    With ``include_header`` the column labels occupy row 1 and the data
    starts on row 2. Missing values (NaN, None, NaT) leave the cell empty.
    """

    def __init__(
        self,
        frames: Mapping[str, pd.DataFrame],
        include_header: bool = True,
        name: str = "dataframe",
    ) -> None:
        self.name = name
        self._frames = dict(frames)
        self._include_header = include_header

    @classmethod
    def from_csv(
        cls,
        file_path: Path | str,
        separator: str | None = None,
        sheet_name: str | None = None,
    ) -> DataFrameCellSource:
        """Read a CSV file as a single sheet of string cells.

        Args:
            file_path: Path to the CSV file.
            separator: Field separator (defaults to ``settings.csv_separator``).
            sheet_name: Name of the sheet (defaults to the file stem).

        Raises:
            SourceUnavailableError: If the file is missing or unreadable.
        """
        path = Path(file_path)
        if not path.is_file():
            raise SourceUnavailableError(f"CSV file not found: {path}", source=str(path))

        try:
            frame = pd.read_csv(
                path,
                sep=separator or settings.csv_separator,
                header=None,
                dtype=str,
                keep_default_na=False,
            )
        except pd.errors.EmptyDataError:
            frame = pd.DataFrame()
        except (OSError, UnicodeDecodeError, pd.errors.ParserError) as exc:
            raise SourceUnavailableError(
                f"Could not read CSV file {path}: {exc}",
                source=str(path),
                error_code=ErrorCode.SOURCE_READ_FAILED,
            ) from exc

        return cls(
            {sheet_name or path.stem: frame}, include_header=False, name=path.name
        )

    def list_sheets(self) -> list[str]:
        return list(self._frames)

    def read_cells(self, sheet: str, store: SparseCellStore) -> None:
        frame = self._frames[sheet]
        first_data_row = 1
        if self._include_header:
            for col_offset, label in enumerate(frame.columns):
                self._store_value(store, 1, col_offset + 1, label)
            first_data_row = 2

        for row_offset, values in enumerate(frame.itertuples(index=False, name=None)):
            for col_offset, value in enumerate(values):
                self._store_value(store, first_data_row + row_offset, col_offset + 1, value)

    @staticmethod
    def _store_value(store: SparseCellStore, row: int, column: int, value: Any) -> None:
        if value is None or (not isinstance(value, str) and pd.isna(value)):
            return
        if isinstance(value, str) and value == "":
            return
        if isinstance(value, pd.Timestamp):
            value = value.to_pydatetime()
        elif hasattr(value, "item"):
            # numpy scalar -> Python scalar
            value = value.item()
        store.set(row, column, *coerce_cell(value))
