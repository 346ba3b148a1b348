"""Pick a cell source for a file from its extension."""

from pathlib import Path

from spreadsheet_access.services.cell_source import CellSource
from spreadsheet_access.services.dataframe_source import DataFrameCellSource
from spreadsheet_access.services.excel_source import ExcelCellSource
from spreadsheet_access.utils.exceptions import SourceUnavailableError

EXCEL_EXTENSIONS = frozenset({".xlsx", ".xlsm", ".xltx", ".xltm"})
CSV_EXTENSIONS = frozenset({".csv", ".tsv"})

SUPPORTED_EXTENSIONS = EXCEL_EXTENSIONS | CSV_EXTENSIONS


def source_for_path(file_path: Path | str) -> CellSource:
    """Return the cell source able to read ``file_path``.

    Raises:
        SourceUnavailableError: If the file does not exist or its extension
            is not supported.
    """
    path = Path(file_path)
    if not path.is_file():
        raise SourceUnavailableError(f"File not found: {path}", source=str(path))

    extension = path.suffix.lower()
    if extension in EXCEL_EXTENSIONS:
        return ExcelCellSource(path)
    if extension == ".tsv":
        return DataFrameCellSource.from_csv(path, separator="\t")
    if extension in CSV_EXTENSIONS:
        return DataFrameCellSource.from_csv(path)

    raise SourceUnavailableError(
        f"Unsupported spreadsheet extension {extension!r}; "
        f"expected one of {', '.join(sorted(SUPPORTED_EXTENSIONS))}",
        source=str(path),
        details={"extension": extension},
    )
