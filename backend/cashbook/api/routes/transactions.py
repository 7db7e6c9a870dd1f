import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from sqlalchemy import select, delete

from cashbook.api.deps import db
from cashbook.core.config import settings
from cashbook.schemas.transaction import TxCreate, TxUpdate, TxOut, DeleteOut
from cashbook.models.transaction import Transaction

log = logging.getLogger(__name__)

router = APIRouter(prefix="/transactions", tags=["transactions"])


def _tx_out(t: Transaction) -> TxOut:
    return TxOut(
        id=t.id,
        date=t.date,
        date_iso=t.date_iso,
        type=t.type,
        amount=float(t.amount),
        description=t.description,
        created_at=t.created_at,
        updated_at=t.updated_at,
    )


def _require_tx(s: Session, tx_id: int) -> Transaction:
    t = s.execute(select(Transaction).where(Transaction.id == tx_id)).scalar_one_or_none()
    if t is None:
        raise HTTPException(status_code=404, detail="transaction_not_found")
    return t


@router.get("", response_model=list[TxOut])
def list_transactions(s: Session = Depends(db)):
    # creation order; balances downstream depend on it
    q = select(Transaction).order_by(Transaction.created_at.asc(), Transaction.id.asc())
    return [_tx_out(t) for t in s.execute(q).scalars().all()]


@router.post("", response_model=TxOut, status_code=201)
def create_transaction(body: TxCreate, s: Session = Depends(db)):
    t = Transaction(
        date=body.date,
        date_iso=body.date_iso,
        type=body.type,
        amount=body.amount,
        description=body.description,
    )
    s.add(t)
    s.commit()
    s.refresh(t)
    log.info("tx.create id=%s type=%s amount=%s", t.id, t.type, t.amount)
    return _tx_out(t)


@router.put("/{tx_id}", response_model=TxOut)
def update_transaction(tx_id: int, body: TxUpdate, s: Session = Depends(db)):
    t = _require_tx(s, tx_id)

    changes = body.model_dump(exclude_none=True)
    for field, value in changes.items():
        setattr(t, field, value)

    if changes:
        s.add(t)
        s.commit()
        s.refresh(t)
        log.info("tx.update id=%s fields=%s", t.id, sorted(changes))
    return _tx_out(t)


@router.delete("/{tx_id}", response_model=DeleteOut)
def delete_transaction(tx_id: int, s: Session = Depends(db)):
    t = s.execute(select(Transaction).where(Transaction.id == tx_id)).scalar_one_or_none()
    if t is None:
        if settings.strict_delete:
            raise HTTPException(status_code=404, detail="transaction_not_found")
        log.info("tx.delete id=%s not found, nothing removed", tx_id)
        return DeleteOut(message="transaction deleted", deleted=0)

    s.delete(t)
    s.commit()
    log.info("tx.delete id=%s", tx_id)
    return DeleteOut(message="transaction deleted", deleted=1)


@router.delete("", response_model=DeleteOut)
def delete_all_transactions(s: Session = Depends(db)):
    res = s.execute(delete(Transaction))
    s.commit()
    n = int(res.rowcount or 0)
    log.info("tx.delete_all removed=%s", n)
    return DeleteOut(message="all transactions deleted", deleted=n)
