"""Excel export of one year's revenue entries and its monthly summary."""
from __future__ import annotations

from io import BytesIO
from typing import Iterable, List

from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from application.revenue_aggregator import monthly_totals
from domain.revenue import MONTH_INDEX, MONTHS, RevenueRecord

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

HEADER_FILL = PatternFill("solid", fgColor="FFF2CC")
RECORD_HEADERS = ["Month", "Year", "Revenue", "Source", "Description", "Created", "Updated"]
SUMMARY_HEADERS = ["Month", "Revenue", "Entries"]


def build_revenue_workbook(year: int, records: Iterable[RevenueRecord]) -> Workbook:
    rows: List[RevenueRecord] = sorted(
        records,
        key=lambda r: (MONTH_INDEX[r.month], r.created_at.timestamp() if r.created_at else 0.0),
    )

    wb = Workbook()
    ws = wb.active
    ws.title = "Records"
    _write_header(ws, RECORD_HEADERS)
    for record in rows:
        ws.append([
            record.month,
            record.year,
            record.revenue,
            record.source.value,
            record.description or "",
            record.created_at.isoformat() if record.created_at else "",
            record.updated_at.isoformat() if record.updated_at else "",
        ])

    summary = wb.create_sheet("Monthly Summary")
    _write_header(summary, SUMMARY_HEADERS)
    totals = monthly_totals(rows)
    counts = [0] * len(MONTHS)
    for record in rows:
        counts[MONTH_INDEX[record.month]] += 1
    for month, total, entries in zip(MONTHS, totals, counts):
        summary.append([month, total, entries])
    summary.append([f"Total {year}", sum(totals), len(rows)])
    for cell in summary[summary.max_row]:
        cell.font = Font(bold=True)

    for sheet in (ws, summary):
        _auto_width(sheet)
    return wb


def workbook_bytes(wb: Workbook) -> bytes:
    buffer = BytesIO()
    wb.save(buffer)
    return buffer.getvalue()


def _write_header(ws: Worksheet, headers: List[str]) -> None:
    ws.append(headers)
    for cell in ws[1]:
        cell.fill = HEADER_FILL
        cell.font = Font(bold=True)
        cell.alignment = Alignment(horizontal="center")


def _auto_width(ws: Worksheet) -> None:
    for col_idx in range(1, ws.max_column + 1):
        max_len = 0
        for row_idx in range(1, ws.max_row + 1):
            val = ws.cell(row=row_idx, column=col_idx).value
            if val is not None:
                max_len = max(max_len, len(str(val)))
        ws.column_dimensions[get_column_letter(col_idx)].width = max(9, min(40, max_len + 2))
