"""Uniform, coordinate-addressed access to a multi-sheet document.

``SpreadsheetDocument`` sits above a ``CellSource`` (the format decoder).
It keeps one lazily loaded ``SheetState`` per sheet and a current-sheet
pointer used whenever an operation is called without a sheet.

Example:
    doc = SpreadsheetDocument.open("prices.xlsx")
    doc.select_sheet("New Prices")
    for record in doc.each(headers={"upc": "UPC", "price": "^(Cost|Price)"}):
        print(record["upc"], record["price"])
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Literal, TextIO

import pandas as pd

from spreadsheet_access.cell_store import SheetState
from spreadsheet_access.config import Settings, settings as default_settings
from spreadsheet_access.coordinates import normalize, number_to_letter, parse_cell_name
from spreadsheet_access.models import (
    BoundingBox,
    CellType,
    HeaderResolution,
    IterationOptions,
    coerce_cell,
)
from spreadsheet_access.output import matrix_exporter, summary, xml_exporter, yaml_exporter
from spreadsheet_access.output.csv_exporter import CsvExporter
from spreadsheet_access.services.cell_source import CellSource
from spreadsheet_access.services.header_resolver import HeaderResolver
from spreadsheet_access.services.query_engine import QueryEngine
from spreadsheet_access.services.row_iterator import RowIterator, clean_store
from spreadsheet_access.services.source_factory import source_for_path
from spreadsheet_access.utils.exceptions import SheetNotFoundError
from spreadsheet_access.utils.logging import LogContext, get_logger, timed_operation

logger = get_logger(__name__)

SheetRef = str | int | None


class SpreadsheetDocument:
    """A multi-sheet tabular document backed by a cell source.

    Not thread-safe: the current-sheet pointer and the per-sheet caches are
    shared mutable state. Serialize access externally if a document is used
    from several threads.

    Attributes:
        filename: Name shown by ``info``; defaults to the source name.
        header_line: Header row used by ``find``; updated whenever a header
            is resolved by ``each`` / ``parse``.
    """

    def __init__(
        self,
        source: CellSource,
        filename: str | None = None,
        config: Settings | None = None,
    ) -> None:
        self._source = source
        self._settings = config or default_settings
        self.filename = filename or source.name
        self.header_line = 1

        names = list(source.list_sheets())
        if len(set(names)) != len(names):
            raise ValueError(f"Sheet names must be distinct, got {names}")
        self._sheet_names = names
        self._states = {name: SheetState(name) for name in names}
        self._current_sheet: str | None = None

    @classmethod
    def open(cls, file_path: Path | str, config: Settings | None = None) -> SpreadsheetDocument:
        """Open a file with the source matching its extension."""
        path = Path(file_path)
        return cls(source_for_path(path), filename=str(path), config=config)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(filename={self.filename!r}, "
            f"sheets={self._sheet_names!r})"
        )

    def __iter__(self) -> Iterator[list[Any]]:
        return self.each()

    # ------------------------------------------------------------------ #
    # Sheets
    # ------------------------------------------------------------------ #

    @property
    def sheets(self) -> list[str]:
        return list(self._sheet_names)

    @property
    def current_sheet(self) -> str:
        """The sheet used when an operation omits one; the first by default."""
        if self._current_sheet is None:
            if not self._sheet_names:
                raise SheetNotFoundError(
                    None, available=[], message="Document has no sheets"
                )
            self._current_sheet = self._sheet_names[0]
        return self._current_sheet

    @current_sheet.setter
    def current_sheet(self, sheet: str | int) -> None:
        name = self._validate_sheet(sheet)
        self._current_sheet = name
        # Only the newly selected sheet's bounds are recomputed
        self._states[name].store.invalidate_bounds()
        logger.debug("Current sheet changed", sheet=name)

    def select_sheet(self, sheet: str | int) -> SpreadsheetDocument:
        """Make ``sheet`` (name or 0-based index) current and return self."""
        self.current_sheet = sheet
        return self

    @contextmanager
    def preserve_current_sheet(self) -> Iterator[str]:
        """Restore the current sheet on exit, including when an error escapes."""
        original = self.current_sheet
        try:
            yield original
        finally:
            self.current_sheet = original

    def each_with_sheet_name(self) -> Iterator[tuple[str, SpreadsheetDocument]]:
        """Yield ``(name, self)`` with each sheet current in turn."""
        with self.preserve_current_sheet():
            for name in self.sheets:
                self.current_sheet = name
                yield name, self

    def _validate_sheet(self, sheet: str | int) -> str:
        if isinstance(sheet, bool):
            raise TypeError(f"Not a valid sheet reference: {sheet!r}")
        if isinstance(sheet, int):
            if not 0 <= sheet < len(self._sheet_names):
                raise SheetNotFoundError(sheet, available=self.sheets)
            return self._sheet_names[sheet]
        if isinstance(sheet, str):
            if sheet not in self._states:
                raise SheetNotFoundError(sheet, available=self.sheets)
            return sheet
        raise TypeError(f"Not a valid sheet reference: {sheet!r}")

    def _sheet_name(self, sheet: SheetRef) -> str:
        return self.current_sheet if sheet is None else self._validate_sheet(sheet)

    def _state(self, sheet: SheetRef) -> SheetState:
        """Return the state of ``sheet``, reading its cells on first access."""
        state = self._states[self._sheet_name(sheet)]
        if not state.loaded:
            with LogContext(document=self.filename, sheet=state.name):
                with timed_operation(logger, "read_cells") as metrics:
                    self._source.read_cells(state.name, state.store)
                    metrics.cells_read = len(state.store)
                logger.debug("Sheet loaded", cells=len(state.store))
            state.loaded = True
        return state

    def read_cells(self, sheet: SheetRef = None) -> None:
        """Load the cells of ``sheet`` now; later calls are no-ops."""
        self._state(sheet)

    def reload(self) -> None:
        """Discard every loaded sheet so the next access reads the source again."""
        current = self.current_sheet if self._sheet_names else None
        self._states = {name: SheetState(name) for name in self._sheet_names}
        self.header_line = 1
        if current is not None:
            self.current_sheet = current

    # ------------------------------------------------------------------ #
    # Cells
    # ------------------------------------------------------------------ #

    def cell(self, row: int | str, column: int | str, sheet: SheetRef = None) -> Any:
        """Return the value at ``(row, column)``, or None when empty.

        ``column`` may be given as letters, and ``cell("B", 5)`` reads
        column B of row 5.
        """
        row, column = normalize(row, column)
        return self._state(sheet).store.get(row, column)

    def cell_type(
        self, row: int | str, column: int | str, sheet: SheetRef = None
    ) -> CellType | None:
        row, column = normalize(row, column)
        return self._state(sheet).store.get_type(row, column)

    def cell_by_name(self, name: str) -> Any:
        """Read a cell by spreadsheet name, e.g. ``"B5"`` or ``"B5@Prices"``."""
        address = parse_cell_name(name)
        return self.cell(address.row, address.column, address.sheet)

    def empty(self, row: int | str, column: int | str, sheet: SheetRef = None) -> bool:
        """True for unset cells, empty strings, and cells outside the bounds."""
        row, column = normalize(row, column)
        state = self._state(sheet)
        value = state.store.get(row, column)
        if value is None:
            return True
        if state.store.get_type(row, column) is CellType.STRING and value == "":
            return True
        return not state.store.bounding_box().contains(row, column)

    def set(
        self,
        row: int | str,
        column: int | str,
        value: Any,
        sheet: SheetRef = None,
        cell_type: CellType | str | None = None,
    ) -> None:
        """Overwrite a cell in memory; nothing is written back to the source.

        The type is inferred from ``value`` unless ``cell_type`` is given.
        """
        row, column = normalize(row, column)
        stored_value, resolved_type = coerce_cell(value, cell_type)
        self._state(sheet).store.set(row, column, stored_value, resolved_type)

    # ------------------------------------------------------------------ #
    # Dimensions
    # ------------------------------------------------------------------ #

    def bounds(self, sheet: SheetRef = None) -> BoundingBox:
        return self._state(sheet).store.bounding_box()

    def first_row(self, sheet: SheetRef = None) -> int | None:
        return self.bounds(sheet).first_row

    def last_row(self, sheet: SheetRef = None) -> int | None:
        return self.bounds(sheet).last_row

    def first_column(self, sheet: SheetRef = None) -> int | None:
        return self.bounds(sheet).first_column

    def last_column(self, sheet: SheetRef = None) -> int | None:
        return self.bounds(sheet).last_column

    def first_column_as_letter(self, sheet: SheetRef = None) -> str | None:
        column = self.first_column(sheet)
        return number_to_letter(column) if column is not None else None

    def last_column_as_letter(self, sheet: SheetRef = None) -> str | None:
        column = self.last_column(sheet)
        return number_to_letter(column) if column is not None else None

    # ------------------------------------------------------------------ #
    # Rows and columns
    # ------------------------------------------------------------------ #

    def row(self, row_number: int, sheet: SheetRef = None) -> list[Any]:
        """Values of ``row_number`` over first_column..last_column."""
        bounds = self.bounds(sheet)
        if bounds.is_empty:
            return []
        store = self._state(sheet).store
        return [
            store.get(row_number, column)
            for column in range(bounds.first_column, bounds.last_column + 1)  # type: ignore[arg-type, operator]
        ]

    def column(self, column: int | str, sheet: SheetRef = None) -> list[Any]:
        """Values of ``column`` (number or letters) over first_row..last_row."""
        _, column_number = normalize(1, column)
        bounds = self.bounds(sheet)
        if bounds.is_empty:
            return []
        store = self._state(sheet).store
        return [
            store.get(row, column_number)
            for row in range(bounds.first_row, bounds.last_row + 1)  # type: ignore[arg-type, operator]
        ]

    # ------------------------------------------------------------------ #
    # Iteration
    # ------------------------------------------------------------------ #

    def _options(self, options: IterationOptions | None, kwargs: dict[str, Any]) -> IterationOptions:
        if options is not None and kwargs:
            raise TypeError("Pass either an IterationOptions instance or keywords, not both")
        return options if options is not None else IterationOptions(**kwargs)

    def _clean_if_needed(self, sheet: str) -> None:
        state = self._state(sheet)
        if not state.cleaned:
            clean_store(state.store)
            state.cleaned = True

    def resolve_headers(
        self, options: IterationOptions | None = None, sheet: SheetRef = None, **kwargs: Any
    ) -> HeaderResolution:
        """Resolve the header row and map for ``options`` and remember the row."""
        opts = self._options(options, kwargs)
        name = self._sheet_name(sheet)
        resolver = HeaderResolver(self, name, self._settings.header_search_max_rows)
        resolution = resolver.resolve(opts, self.header_line)
        self.header_line = resolution.header_line
        return resolution

    def each(
        self, options: IterationOptions | None = None, **kwargs: Any
    ) -> Iterator[Any]:
        """Iterate the current sheet.

        Without a header mode, yields row arrays for rows 1..last_row. With
        ``headers`` or ``header_search``, yields one mapping per row after
        the header row. ``clean=True`` sanitizes string cells first, once
        per sheet. Header resolution happens immediately, so
        ``HeaderNotFoundError`` is raised by this call; each call returns a
        fresh iterator.
        """
        opts = self._options(options, kwargs)
        sheet = self.current_sheet
        if opts.clean:
            self._clean_if_needed(sheet)

        iterator = RowIterator(self, sheet)
        if not opts.has_header_mode:
            return iterator.rows()
        return iterator.records(self.resolve_headers(opts, sheet))

    def parse(
        self,
        options: IterationOptions | None = None,
        callback: Callable[[Any], None] | None = None,
        **kwargs: Any,
    ) -> list[Any]:
        """Collect ``each`` into a list, calling ``callback`` per row."""
        rows = []
        for item in self.each(options, **kwargs):
            if callback is not None:
                callback(item)
            rows.append(item)
        return rows

    # ------------------------------------------------------------------ #
    # Queries
    # ------------------------------------------------------------------ #

    def find(
        self,
        target: int | Literal["all"],
        conditions: Mapping[Any, Any] | None = None,
        as_array: bool = False,
    ) -> list[Any]:
        """Find a row by index, or all rows matching ``conditions``.

        ``find(i)`` returns row ``i + header_line - 1``, so with the default
        ``header_line`` of 1 the index is the sheet row number.
        ``find("all", conditions={"id": 2})`` returns header-keyed mappings
        (or arrays with ``as_array=True``) for the matching rows.
        """
        engine = QueryEngine(self, self.current_sheet, self.header_line)
        if isinstance(target, int) and not isinstance(target, bool):
            return engine.find_by_row(target)
        if target == "all":
            return engine.find_by_conditions(conditions, as_array=as_array)
        raise ValueError(f"Unexpected find target {target!r}; pass a row index or 'all'")

    # ------------------------------------------------------------------ #
    # Export
    # ------------------------------------------------------------------ #

    def to_csv(
        self,
        destination: Path | str | TextIO | None = None,
        separator: str | None = None,
        sheet: SheetRef = None,
    ) -> str | None:
        """Render a sheet as CSV.

        Returns the text when ``destination`` is None; otherwise writes to
        the path or stream and returns None.
        """
        name = self._sheet_name(sheet)
        exporter = CsvExporter(self, separator or self._settings.csv_separator)
        if destination is None:
            return exporter.to_string(name)
        if isinstance(destination, (str, Path)):
            exporter.to_file(destination, name)
        else:
            exporter.write(destination, name)
        return None

    def to_xml(self) -> str:
        return xml_exporter.to_xml(self)

    def to_yaml(
        self,
        prefix: Mapping[str, Any] | None = None,
        from_row: int | None = None,
        from_column: int | None = None,
        to_row: int | None = None,
        to_column: int | None = None,
        sheet: SheetRef = None,
    ) -> str:
        return yaml_exporter.to_yaml(
            self, prefix, from_row, from_column, to_row, to_column, self._sheet_name(sheet)
        )

    def to_matrix(
        self,
        from_row: int | None = None,
        from_column: int | None = None,
        to_row: int | None = None,
        to_column: int | None = None,
        sheet: SheetRef = None,
    ) -> list[list[Any]]:
        return matrix_exporter.to_matrix(
            self, from_row, from_column, to_row, to_column, self._sheet_name(sheet)
        )

    def to_dataframe(
        self,
        from_row: int | None = None,
        from_column: int | None = None,
        to_row: int | None = None,
        to_column: int | None = None,
        sheet: SheetRef = None,
    ) -> pd.DataFrame:
        return matrix_exporter.to_dataframe(
            self, from_row, from_column, to_row, to_column, self._sheet_name(sheet)
        )

    def info(self) -> str:
        """Summarize the file, its sheets, and each sheet's dimensions."""
        return summary.render_info(self)
