"""Serialize a formatted grid into a single-sheet workbook buffer."""

from __future__ import annotations

import io
from typing import Sequence

import xlwt
from openpyxl import Workbook
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter

from playlist_report.models.cells import Cell, CellStyle, Grid, NumberCell
from playlist_report.models.errors import PipelineError

XLS_MAX_ROWS = 65_536
XLS_MAX_COLUMNS = 256
XLS_WIDTH_UNITS = 256  # BIFF column widths are in 1/256 of a character
TWIPS_PER_POINT = 20

_DEFAULT_STYLE = CellStyle()


def _number_format(cell: Cell) -> str:
    return cell.number_format if isinstance(cell, NumberCell) else "General"


class _XlsStyles:
    """Cache of ``xlwt.XFStyle`` objects keyed by (number format, font size)."""

    def __init__(self) -> None:
        self._styles: dict[tuple[str, int], xlwt.XFStyle] = {}

    def for_cell(self, cell: Cell) -> xlwt.XFStyle:
        font_size = (cell.style or _DEFAULT_STYLE).font_size
        key = (_number_format(cell), font_size)
        style = self._styles.get(key)
        if style is None:
            style = xlwt.XFStyle()
            font = xlwt.Font()
            font.height = font_size * TWIPS_PER_POINT
            style.font = font
            style.num_format_str = key[0]
            self._styles[key] = style
        return style


def write_xls(grid: Grid, *, widths: Sequence[int], sheet_name: str = "Sheet1") -> bytes:
    """Write ``grid`` as a legacy binary (BIFF8) workbook and return its bytes."""

    if len(grid) > XLS_MAX_ROWS:
        raise PipelineError(
            f"Output has {len(grid)} rows; the .xls format allows at most {XLS_MAX_ROWS}",
            stage="write",
        )
    if len(widths) > XLS_MAX_COLUMNS:
        raise PipelineError(f"Output has more than {XLS_MAX_COLUMNS} columns", stage="write")

    book = xlwt.Workbook(encoding="utf-8")
    sheet = book.add_sheet(sheet_name)
    for col_idx, width in enumerate(widths):
        sheet.col(col_idx).width = width * XLS_WIDTH_UNITS

    styles = _XlsStyles()
    for row_idx, row in enumerate(grid):
        for col_idx, cell in enumerate(row):
            sheet.write(row_idx, col_idx, cell.value, styles.for_cell(cell))

    buffer = io.BytesIO()
    book.save(buffer)
    return buffer.getvalue()


def write_xlsx(grid: Grid, *, widths: Sequence[int], sheet_name: str = "Sheet1") -> bytes:
    """Write ``grid`` as an OOXML workbook and return its bytes."""

    workbook = Workbook()
    sheet = workbook.active
    sheet.title = sheet_name
    for col_idx, width in enumerate(widths, start=1):
        sheet.column_dimensions[get_column_letter(col_idx)].width = width

    fonts: dict[int, Font] = {}
    for row_idx, row in enumerate(grid, start=1):
        for col_idx, cell in enumerate(row, start=1):
            font_size = (cell.style or _DEFAULT_STYLE).font_size
            target = sheet.cell(row=row_idx, column=col_idx)
            target.value = None if cell.is_blank else cell.value
            target.number_format = _number_format(cell)
            target.font = fonts.setdefault(font_size, Font(size=font_size))

    buffer = io.BytesIO()
    workbook.save(buffer)
    workbook.close()
    return buffer.getvalue()


WRITERS = {
    "xls": write_xls,
    "xlsx": write_xlsx,
}


__all__ = ["WRITERS", "XLS_MAX_ROWS", "write_xls", "write_xlsx"]
