"""
ExcelWriter: builds the styled price-book workbook sheet by sheet.

Every write_* method takes the row to start on and returns the next free row,
so report code can stack blocks without tracking cell coordinates.
"""
from __future__ import annotations

import io
from pathlib import Path
from typing import Callable, Optional

import pandas as pd
from openpyxl import Workbook
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from pricebook.excel.styles import (
    TITLE_FONT, SUBTITLE_FONT, SECTION_FONT,
    INSIGHT_TITLE_FONT, INSIGHT_BODY_FONT,
)
from pricebook.excel.formatters import (
    add_kpi_card,
    auto_column_width,
    format_data_cell,
    format_header_row,
)

# (row key, column type, header label); column type picks the number format
Column = tuple[str, str, str]
Highlighter = Callable[[int, dict], Optional[str]]

BANNER_WIDTH = 8


def _text(ws: Worksheet, row: int, text: str, font: Font, span: int = 1) -> None:
    cell = ws.cell(row=row, column=1, value=text)
    cell.font = font
    if span > 1:
        ws.merge_cells(start_row=row, start_column=1, end_row=row, end_column=span)


def _records(data: list[dict] | pd.DataFrame) -> list[dict]:
    if isinstance(data, pd.DataFrame):
        return data.to_dict("records")
    return data


class ExcelWriter:
    """Workbook under construction. The first sheet added replaces openpyxl's default one."""

    def __init__(self) -> None:
        self.wb = Workbook()
        self._sheets: list[Worksheet] = []

    def add_sheet(self, title: str) -> Worksheet:
        if self._sheets:
            ws = self.wb.create_sheet(title=title)
        else:
            ws = self.wb.active
            ws.title = title
        self._sheets.append(ws)
        return ws

    def write_title(self, ws: Worksheet, title: str, subtitle: str, span: int = BANNER_WIDTH) -> int:
        """Big title on row 1, subtitle on row 2, both merged across the banner."""
        _text(ws, 1, title, TITLE_FONT, span)
        _text(ws, 2, subtitle, SUBTITLE_FONT, span)
        for col in range(1, span + 1):
            ws.column_dimensions[get_column_letter(col)].width = 18
        return 4

    def write_section(self, ws: Worksheet, row: int, title: str) -> int:
        _text(ws, row, title, SECTION_FONT)
        return row + 2

    def write_kpi_row(self, ws: Worksheet, row: int, kpis: list[tuple], gap: int = 2) -> int:
        """kpis: [(value, label, number format key), ...], one card every `gap` columns."""
        for i, (value, label, fmt) in enumerate(kpis):
            add_kpi_card(ws, row, 1 + i * gap, value, label, fmt)
        return row + 3

    def write_table(
        self,
        ws: Worksheet,
        start_row: int,
        columns: list[Column],
        data: list[dict] | pd.DataFrame,
        highlight_fn: Optional[Highlighter] = None,
        freeze: bool = True,
    ) -> int:
        """Header row plus one row per record. NaN and missing keys are written as blanks.

        highlight_fn(index, record) returns a HIGHLIGHT_FILLS key ('up',
        'down', 'gold') or None.
        """
        for col_num, (_, _, label) in enumerate(columns, 1):
            ws.cell(row=start_row, column=col_num, value=label)
        format_header_row(ws, start_row, len(columns))

        row = start_row
        for idx, record in enumerate(_records(data)):
            row += 1
            fill = highlight_fn(idx, record) if highlight_fn else None
            for col_num, (key, col_type, _) in enumerate(columns, 1):
                value = record.get(key)
                if value is not None and pd.isna(value):
                    value = None
                format_data_cell(ws, row, col_num, value, col_type, highlight=fill)

        auto_column_width(ws)
        if freeze:
            ws.freeze_panes = ws.cell(row=start_row + 1, column=1)
        return row + 1

    def write_insight(self, ws: Worksheet, row: int, headline: str, detail: str) -> int:
        """Bold one-line headline with an italic detail line under it."""
        _text(ws, row, headline, INSIGHT_TITLE_FONT)
        _text(ws, row + 1, detail, INSIGHT_BODY_FONT, BANNER_WIDTH)
        return row + 3

    def save(self, path: str | Path) -> Path:
        out = Path(path)
        out.parent.mkdir(parents=True, exist_ok=True)
        self.wb.save(out)
        return out

    def to_bytes(self) -> bytes:
        """The workbook as .xlsx bytes, for HTTP downloads."""
        buf = io.BytesIO()
        self.wb.save(buf)
        return buf.getvalue()
