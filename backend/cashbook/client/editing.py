from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from cashbook.client.errors import ValidationFailure
from cashbook.models.transaction import DESCRIPTION_MAX_LEN
from cashbook.schemas.transaction import DEFAULT_DESCRIPTION, TxOut

log = logging.getLogger(__name__)

INCOME = "income"
EXPENSE = "expense"

NORMAL = "normal"
EDITING = "editing"


def parse_amount(raw) -> Decimal:
    """Parse form input into a positive amount; anything else is rejected.

    The store keeps amounts as doubles, so the value must also survive the
    trip through ``float`` as a positive finite number.
    """
    try:
        v = Decimal(str(raw).strip()) if raw is not None else Decimal("0")
    except InvalidOperation:
        v = Decimal("0")
    if not v.is_finite() or v <= 0 or not 0 < float(v) < float("inf"):
        raise ValidationFailure("amount must be greater than 0")
    return v


def clean_description(raw) -> str:
    desc = (raw or "").strip() or DEFAULT_DESCRIPTION
    if len(desc) > DESCRIPTION_MAX_LEN:
        raise ValidationFailure(f"description is longer than {DESCRIPTION_MAX_LEN} characters")
    return desc


def plain_amount(v) -> str:
    d = Decimal(str(v)).normalize()
    return format(d, "f")


@dataclass
class Form:
    kind: str
    amount: str = ""
    description: str = ""
    enabled: bool = True
    editing: bool = False

    @property
    def title(self) -> str:
        if self.editing:
            return "Edit transaction"
        return "Add income" if self.kind == INCOME else "Add expense"

    @property
    def submit_label(self) -> str:
        if self.editing:
            return "Save changes"
        return "Save income" if self.kind == INCOME else "Save expense"

    @property
    def show_cancel(self) -> bool:
        return self.editing

    def clear(self) -> None:
        self.amount = ""
        self.description = ""


class EditSession:
    """normal <-> editing(record) for the income/expense form pair.

    While editing, only the form matching the record's type is enabled and its
    submit updates the record instead of adding a new one.
    """

    def __init__(self):
        self.target: TxOut | None = None
        self.forms: dict[str, Form] = {INCOME: Form(INCOME), EXPENSE: Form(EXPENSE)}

    @property
    def state(self) -> str:
        return EDITING if self.target is not None else NORMAL

    @property
    def editing(self) -> bool:
        return self.target is not None

    def form(self, kind: str) -> Form:
        if kind not in self.forms:
            raise ValidationFailure(f"unknown transaction type: {kind}")
        return self.forms[kind]

    def start(self, tx: TxOut) -> Form:
        if self.target is not None:
            # No confirmation: the new record simply replaces the old target.
            log.warning("edit of tx %s replaced by tx %s without confirmation", self.target.id, tx.id)
            self._reset()

        self.target = tx
        active = self.form(tx.type)
        sibling = self.forms[EXPENSE if tx.type == INCOME else INCOME]

        active.amount = plain_amount(tx.amount)
        active.description = tx.description
        active.editing = True
        active.enabled = True
        sibling.enabled = False
        return active

    def cancel(self) -> None:
        self._reset()

    def finish(self) -> None:
        self._reset()

    def _reset(self) -> None:
        self.target = None
        for f in self.forms.values():
            f.clear()
            f.enabled = True
            f.editing = False
