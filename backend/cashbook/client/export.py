from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date
from io import BytesIO

import xlsxwriter

from cashbook.client.balance import Entry
from cashbook.client.errors import NothingToExport, ValidationFailure

SHEET_NAME = "Transactions"
HEADERS = ("Date", "Description", "Income", "Expense", "Balance")


@dataclass(frozen=True)
class ExportRow:
    date: str
    description: str
    income: float
    expense: float
    balance: float


def filter_by_date_range(entries: Sequence[Entry], start: date | None, end: date | None) -> list[Entry]:
    """Entries with ``start <= dateISO <= end``, order preserved."""
    if start is None or end is None:
        raise ValidationFailure("choose a date range")
    return [e for e in entries if start <= e.tx.date_iso <= end]


def export_rows(entries: Sequence[Entry]) -> list[ExportRow]:
    return [
        ExportRow(
            date=e.tx.date,
            description=e.tx.description,
            income=float(e.amount) if e.tx.type == "income" else 0.0,
            expense=float(e.amount) if e.tx.type == "expense" else 0.0,
            balance=float(e.balance),
        )
        for e in entries
    ]


def write_workbook(rows: Sequence[ExportRow], out_file) -> None:
    wb = xlsxwriter.Workbook(out_file, {"in_memory": True})
    base_font = "Calibri"

    header = wb.add_format(
        {
            "bold": True,
            "font_name": base_font,
            "font_size": 11,
            "bg_color": "#F1F5F9",
            "border": 1,
            "align": "center",
            "valign": "vcenter",
        }
    )
    text_cell = wb.add_format({"font_name": base_font, "font_size": 11, "border": 1, "align": "left"})
    money = wb.add_format(
        {"font_name": base_font, "font_size": 11, "num_format": "#,##0.##", "border": 1, "align": "right"}
    )

    ws = wb.add_worksheet(SHEET_NAME)
    ws.set_column(0, 0, 14)  # Date
    ws.set_column(1, 1, 36)  # Description
    ws.set_column(2, 4, 16)  # amounts

    for col, name in enumerate(HEADERS):
        ws.write(0, col, name, header)

    for i, r in enumerate(rows, start=1):
        ws.write_string(i, 0, r.date, text_cell)
        ws.write_string(i, 1, r.description, text_cell)
        ws.write_number(i, 2, r.income, money)
        ws.write_number(i, 3, r.expense, money)
        ws.write_number(i, 4, r.balance, money)

    ws.freeze_panes(1, 0)
    wb.close()


def _workbook_bytes(entries: Sequence[Entry]) -> bytes:
    buf = BytesIO()
    write_workbook(export_rows(entries), buf)
    return buf.getvalue()


def export_all(entries: Sequence[Entry], today: date) -> tuple[str, bytes]:
    if not entries:
        raise NothingToExport("no data yet")
    return f"finance_all_{today.isoformat()}.xlsx", _workbook_bytes(entries)


def export_range(entries: Sequence[Entry], start: date | None, end: date | None) -> tuple[str, bytes]:
    picked = filter_by_date_range(entries, start, end)
    if not picked:
        raise NothingToExport("no data in that date range")
    return f"history_{start.isoformat()}_{end.isoformat()}.xlsx", _workbook_bytes(picked)
