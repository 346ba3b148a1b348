"""XML export of every sheet of a document."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from typing import TYPE_CHECKING

from spreadsheet_access.models import CellType
from spreadsheet_access.utils.logging import get_logger, timed_operation

if TYPE_CHECKING:
    from spreadsheet_access.document import SpreadsheetDocument

logger = get_logger(__name__)

XML_DECLARATION = '<?xml version="1.0"?>\n'


def build_xml_tree(document: SpreadsheetDocument) -> ET.Element:
    """Build ``<spreadsheet><sheet name=..><cell row column type>value``.

    Sheets without populated cells produce an empty ``<sheet>`` element.
    The current sheet is switched per sheet and restored afterwards.
    """
    root = ET.Element("spreadsheet")
    with timed_operation(logger, "to_xml") as metrics, document.preserve_current_sheet():
        for name in document.sheets:
            document.current_sheet = name
            sheet_element = ET.SubElement(root, "sheet", name=name)
            metrics.sheets_processed += 1

            bounds = document.bounds()
            if bounds.is_empty:
                continue
            for row in range(bounds.first_row, bounds.last_row + 1):  # type: ignore[arg-type, operator]
                for column in range(bounds.first_column, bounds.last_column + 1):  # type: ignore[arg-type, operator]
                    if document.empty(row, column):
                        continue
                    cell_element = ET.SubElement(
                        sheet_element, "cell", row=str(row), column=str(column)
                    )
                    cell_type = document.cell_type(row, column)
                    if cell_type is not None:
                        cell_element.set("type", CellType(cell_type).value)
                    cell_element.text = str(document.cell(row, column))
                metrics.rows_processed += 1
    return root


def to_xml(document: SpreadsheetDocument) -> str:
    """Render the whole document as an indented XML string."""
    root = build_xml_tree(document)
    ET.indent(root)
    return XML_DECLARATION + ET.tostring(root, encoding="unicode") + "\n"
