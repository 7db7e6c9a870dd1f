from datetime import date, datetime
from decimal import Decimal

import pytest
from fastapi import HTTPException
from sqlalchemy import create_engine, select
from sqlalchemy.orm import sessionmaker

from cashbook.db.base import Base
from cashbook.models.transaction import Transaction
from cashbook.schemas.transaction import TxCreate, TxUpdate, DEFAULT_DESCRIPTION
from cashbook.client.balance import compute_balances
from cashbook.client.editing import parse_amount
import cashbook.api.routes.transactions as tx_routes
from cashbook.api.routes.transactions import (
    list_transactions,
    create_transaction,
    update_transaction,
    delete_transaction,
    delete_all_transactions,
)


@pytest.fixture()
def session():
    engine = create_engine("sqlite+pysqlite:///:memory:", future=True)
    Base.metadata.create_all(engine)
    SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)

    connection = engine.connect()
    trans = connection.begin()
    s = SessionLocal(bind=connection)
    try:
        yield s
    finally:
        s.close()
        trans.rollback()
        connection.close()


def _create(session, kind: str, amount: float, d: date = date(2024, 1, 15), description: str = "x"):
    return create_transaction(
        TxCreate(date=f"{d.day}/{d.month}/{d.year}", date_iso=d, type=kind, amount=amount, description=description),
        s=session,
    )


def test_create_then_list_round_trips_fields_and_adds_identity(session):
    out = _create(session, "income", 100000.0, date(2024, 1, 15), "salary")

    listed = list_transactions(s=session)
    assert len(listed) == 1
    got = listed[0]

    assert got.id == out.id
    assert got.created_at is not None
    assert got.updated_at is not None
    assert (got.date, got.date_iso, got.type, got.amount, got.description) == (
        "15/1/2024",
        date(2024, 1, 15),
        "income",
        100000.0,
        "salary",
    )


def test_fractional_amounts_are_stored_without_rounding(session):
    _create(session, "income", 123.456)
    _create(session, "expense", float(parse_amount("0.004")))
    _create(session, "income", 0.1)

    amounts = [t.amount for t in list_transactions(s=session)]
    assert amounts == [123.456, 0.004, 0.1]
    assert all(a > 0 for a in amounts)

    _, final = compute_balances(list_transactions(s=session))
    assert final == Decimal("123.456") - Decimal("0.004") + Decimal("0.1")


def test_blank_description_falls_back_to_placeholder(session):
    out = _create(session, "expense", 10.0, description="   ")
    assert out.description == DEFAULT_DESCRIPTION


def test_listing_follows_creation_order_not_date_iso(session):
    a = _create(session, "income", 1.0, date(2024, 3, 1))
    b = _create(session, "income", 2.0, date(2024, 1, 1))
    c = _create(session, "expense", 3.0, date(2024, 2, 1))

    assert [t.id for t in list_transactions(s=session)] == [a.id, b.id, c.id]


def test_listing_orders_by_created_at_before_id(session):
    late = Transaction(
        date="2/1/2024", date_iso=date(2024, 1, 2), type="income", amount=5, description="late",
        created_at=datetime(2024, 1, 2, 9, 0, 0),
    )
    early = Transaction(
        date="1/1/2024", date_iso=date(2024, 1, 1), type="income", amount=7, description="early",
        created_at=datetime(2024, 1, 1, 9, 0, 0),
    )
    session.add(late)
    session.add(early)
    session.commit()

    assert [t.description for t in list_transactions(s=session)] == ["early", "late"]


def test_update_amount_only_keeps_description(session):
    out = _create(session, "expense", 30000.0, description="groceries")

    upd = update_transaction(out.id, TxUpdate(amount=45000.0), s=session)

    assert upd.amount == 45000.0
    assert upd.description == "groceries"
    assert upd.type == "expense"
    assert upd.date_iso == out.date_iso


def test_update_with_empty_body_is_a_no_op(session):
    out = _create(session, "income", 12.5, description="tip")
    upd = update_transaction(out.id, TxUpdate(), s=session)
    assert (upd.amount, upd.description, upd.type, upd.date) == (out.amount, out.description, out.type, out.date)


def test_update_blank_fields_are_treated_as_absent(session):
    out = _create(session, "income", 12.5, description="tip")
    upd = update_transaction(out.id, TxUpdate(description="  ", date=""), s=session)
    assert upd.description == "tip"
    assert upd.date == out.date


def test_update_can_replace_type_and_dates(session):
    out = _create(session, "income", 12.5, date(2024, 1, 1))
    upd = update_transaction(
        out.id,
        TxUpdate(type="expense", date="2/2/2024", date_iso=date(2024, 2, 2)),
        s=session,
    )
    assert (upd.type, upd.date, upd.date_iso) == ("expense", "2/2/2024", date(2024, 2, 2))
    assert upd.id == out.id


def test_update_unknown_id_is_not_found(session):
    with pytest.raises(HTTPException) as ei:
        update_transaction(999, TxUpdate(amount=1.0), s=session)
    assert ei.value.status_code == 404
    assert ei.value.detail == "transaction_not_found"


def test_delete_removes_the_record(session):
    keep = _create(session, "income", 1.0)
    gone = _create(session, "income", 2.0)

    res = delete_transaction(gone.id, s=session)

    assert res.ok is True
    assert res.deleted == 1
    assert [t.id for t in list_transactions(s=session)] == [keep.id]


def test_delete_unknown_id_reports_success_by_default(session):
    res = delete_transaction(12345, s=session)
    assert res.ok is True
    assert res.deleted == 0


def test_delete_unknown_id_is_404_when_strict(session, monkeypatch):
    monkeypatch.setattr(tx_routes.settings, "strict_delete", True)
    with pytest.raises(HTTPException) as ei:
        delete_transaction(12345, s=session)
    assert ei.value.status_code == 404


def test_delete_all_on_non_empty_collection_then_list_is_empty(session):
    for amt in (1.0, 2.0, 3.0):
        _create(session, "income", amt)

    res = delete_all_transactions(s=session)

    assert res.deleted == 3
    assert list_transactions(s=session) == []
    assert session.execute(select(Transaction)).scalars().all() == []


def test_listed_records_feed_the_balance_engine_in_creation_order(session):
    _create(session, "income", 100000.0, date(2024, 1, 3))
    _create(session, "income", 50000.0, date(2024, 1, 1))
    _create(session, "expense", 30000.0, date(2024, 1, 2))

    entries, final = compute_balances(list_transactions(s=session))

    assert [float(e.balance) for e in entries] == [100000.0, 150000.0, 120000.0]
    assert float(final) == 120000.0
