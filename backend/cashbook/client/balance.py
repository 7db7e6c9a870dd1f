from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from decimal import Decimal

from cashbook.schemas.transaction import TxOut

ZERO = Decimal("0")


def _to_dec(v) -> Decimal:
    return Decimal(str(v))


@dataclass(frozen=True)
class Entry:
    tx: TxOut
    balance: Decimal

    @property
    def amount(self) -> Decimal:
        return _to_dec(self.tx.amount)

    @property
    def signed_amount(self) -> Decimal:
        return self.amount if self.tx.type == "income" else -self.amount


def compute_balances(txs: Sequence[TxOut]) -> tuple[list[Entry], Decimal]:
    """Annotate each record with the running balance after applying it.

    ``txs`` must already be in creation order, as listed by the store.
    Returns the annotated records and the final balance.
    """
    bal = ZERO
    out: list[Entry] = []
    for t in txs:
        amt = _to_dec(t.amount)
        bal = bal + amt if t.type == "income" else bal - amt
        out.append(Entry(tx=t, balance=bal))
    return out, bal


def totals(entries: Sequence[Entry]) -> tuple[Decimal, Decimal]:
    income = sum((e.amount for e in entries if e.tx.type == "income"), ZERO)
    expense = sum((e.amount for e in entries if e.tx.type == "expense"), ZERO)
    return income, expense
