from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP

from cashbook.client.balance import Entry, totals


def format_currency(v) -> str:
    n = int(Decimal(str(v)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    body = f"{abs(n):,}".replace(",", ".")
    return f"-Rp {body}" if n < 0 else f"Rp {body}"


@dataclass(frozen=True)
class Summary:
    total_income: Decimal
    total_expense: Decimal
    final_balance: Decimal

    @property
    def tone(self) -> str:
        if self.final_balance > 0:
            return "positive"
        if self.final_balance < 0:
            return "negative"
        return "neutral"


@dataclass(frozen=True)
class HistoryRow:
    id: int
    date: str
    description: str
    income: str
    expense: str
    balance: str


@dataclass(frozen=True)
class ManageRow:
    id: int
    date: str
    description: str
    amount: str
    type: str


def summarize(entries: Sequence[Entry], final_balance: Decimal) -> Summary:
    inc, exp = totals(entries)
    return Summary(total_income=inc, total_expense=exp, final_balance=final_balance)


def history_rows(entries: Sequence[Entry]) -> list[HistoryRow]:
    """Newest first; the empty column of each row shows ``-``."""
    return [
        HistoryRow(
            id=e.tx.id,
            date=e.tx.date,
            description=e.tx.description,
            income=format_currency(e.amount) if e.tx.type == "income" else "-",
            expense=format_currency(e.amount) if e.tx.type == "expense" else "-",
            balance=format_currency(e.balance),
        )
        for e in reversed(entries)
    ]


def manage_rows(entries: Sequence[Entry]) -> list[ManageRow]:
    return [
        ManageRow(
            id=e.tx.id,
            date=e.tx.date,
            description=e.tx.description,
            amount=format_currency(e.amount),
            type=e.tx.type,
        )
        for e in reversed(entries)
    ]


def pie_series(entries: Sequence[Entry]) -> dict:
    inc, exp = totals(entries)
    return {"labels": ["Income", "Expense"], "data": [float(inc), float(exp)]}


def balance_line_series(entries: Sequence[Entry]) -> dict:
    return {
        "labels": [e.tx.date for e in entries],
        "data": [float(e.balance) for e in entries],
    }
