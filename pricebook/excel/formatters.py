"""
Cell-level formatting for price-book sheets.
"""
from __future__ import annotations

from openpyxl.cell.cell import Cell
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from pricebook.excel.styles import (
    HEADER_FONT, HEADER_FILL, HEADER_BORDER,
    DATA_FONT, THIN_BORDER, ALTERNATE_FILL,
    KPI_VALUE_FONT, KPI_LABEL_FONT,
    CENTER, LEFT, RIGHT,
    HIGHLIGHT_FILLS,
)

# Price changes are stored as percent points (12.5 == 12.5%), not fractions
NUMBER_FORMATS = {
    "currency": '"$"#,##0.00',
    "percent": '+0.0"%";-0.0"%";0.0"%"',
    "number": "#,##0",
}


def _apply_number_format(cell: Cell, col_type: str) -> None:
    fmt = NUMBER_FORMATS.get(col_type)
    if fmt:
        cell.number_format = fmt


def format_header_row(ws: Worksheet, row_num: int, num_cols: int) -> None:
    for col in range(1, num_cols + 1):
        cell = ws.cell(row=row_num, column=col)
        cell.font, cell.fill = HEADER_FONT, HEADER_FILL
        cell.alignment, cell.border = CENTER, HEADER_BORDER


def format_data_cell(
    ws: Worksheet,
    row_num: int,
    col_num: int,
    value,
    col_type: str = "text",
    highlight: str | None = None,
) -> None:
    """Write one table cell. Numbers align right; a trend highlight beats row banding."""
    cell = ws.cell(row=row_num, column=col_num, value=value)
    cell.font = DATA_FONT
    cell.border = THIN_BORDER
    cell.alignment = RIGHT if col_type in NUMBER_FORMATS else LEFT
    _apply_number_format(cell, col_type)

    fill = HIGHLIGHT_FILLS.get(highlight) if highlight else None
    if fill is None and row_num % 2 == 0:
        fill = ALTERNATE_FILL
    if fill is not None:
        cell.fill = fill


def auto_column_width(ws: Worksheet, min_width: int = 10, max_width: int = 45) -> None:
    for idx, column in enumerate(ws.iter_cols(), 1):
        longest = max((len(str(c.value)) for c in column if c.value is not None), default=0)
        ws.column_dimensions[get_column_letter(idx)].width = max(min_width, min(longest + 2, max_width))


def add_kpi_card(ws: Worksheet, row: int, col: int, value, label: str, format_type: str = "number") -> None:
    """Large figure with its caption on the row below."""
    figure = ws.cell(row=row, column=col, value=value)
    figure.font, figure.alignment = KPI_VALUE_FONT, CENTER
    _apply_number_format(figure, format_type)

    caption = ws.cell(row=row + 1, column=col, value=label)
    caption.font, caption.alignment = KPI_LABEL_FONT, CENTER
