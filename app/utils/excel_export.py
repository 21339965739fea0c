from __future__ import annotations
from typing import List, Dict, Any
from io import BytesIO
from datetime import datetime

from openpyxl import Workbook
from openpyxl.utils import get_column_letter
from openpyxl.styles import Font, Alignment

SCHEDULE_COLUMNS = [
    ("Subject Code", "subject_code"),
    ("Description", "description"),
    ("Room", "room"),
    ("Teacher", "teacher_name"),
    ("Days", "days"),
    ("Time Start", "time_start"),
    ("Time End", "time_end"),
]


def _cell_value(v):
    if isinstance(v, (list, tuple)):
        return ", ".join(getattr(x, "value", str(x)) for x in v)
    return v


def _write_sheet(ws, rows: List[Dict[str, Any]]):
    ws.append([h for h, _ in SCHEDULE_COLUMNS])

    header_font = Font(bold=True)
    for col_idx in range(1, len(SCHEDULE_COLUMNS) + 1):
        cell = ws.cell(row=1, column=col_idx)
        cell.font = header_font
        cell.alignment = Alignment(horizontal="center", vertical="center")

    for r in rows:
        ws.append([_cell_value(r.get(key)) for _, key in SCHEDULE_COLUMNS])

    # autosize columns
    for col_idx in range(1, len(SCHEDULE_COLUMNS) + 1):
        max_len = 0
        for row_idx in range(1, ws.max_row + 1):
            v = ws.cell(row=row_idx, column=col_idx).value
            if v is None:
                continue
            max_len = max(max_len, len(str(v)))
        ws.column_dimensions[get_column_letter(col_idx)].width = min(max_len + 2, 60)


def schedule_board_to_xlsx_bytes(year_levels: Dict[str, List[Dict[str, Any]]]) -> bytes:
    """
    year_levels: {"1st Year": [row, ...], ...}, one sheet per year level
    """
    wb = Workbook()
    ws = wb.active

    if not year_levels:
        ws.title = "Schedule"
        ws.append(["No data"])
    else:
        for i, (level, rows) in enumerate(year_levels.items()):
            if i > 0:
                ws = wb.create_sheet()
            # sheet titles are capped at 31 chars
            ws.title = level[:31]
            _write_sheet(ws, rows)

    buf = BytesIO()
    wb.save(buf)
    return buf.getvalue()


def make_filename(prefix: str = "schedule") -> str:
    ts = datetime.now().strftime("%Y%m%d_%H%M%S")
    return f"{prefix}_{ts}.xlsx"
