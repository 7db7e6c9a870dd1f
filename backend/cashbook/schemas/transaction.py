from pydantic import BaseModel, Field, field_validator
import datetime as dt
from typing import Literal

from cashbook.models.transaction import DATE_MAX_LEN, DESCRIPTION_MAX_LEN

TxType = Literal["income", "expense"]

DEFAULT_DESCRIPTION = "(no desc)"


def _finite_amount(v: float | None):
    if v is None:
        return None
    if v != v:
        raise ValueError("amount must be a number")
    if v == float("inf") or v == float("-inf"):
        raise ValueError("amount must be finite")
    return v


def _trimmed(v: str | None):
    if v is None:
        return None
    v = v.strip()
    return v or None


class TxCreate(BaseModel):
    date: str = Field(max_length=DATE_MAX_LEN)
    date_iso: dt.date = Field(alias="dateISO")
    type: TxType
    amount: float
    description: str = Field(default=DEFAULT_DESCRIPTION, max_length=DESCRIPTION_MAX_LEN)

    class Config:
        populate_by_name = True

    @field_validator("amount")
    @classmethod
    def amount_must_be_finite(cls, v: float):
        return _finite_amount(v)

    @field_validator("date")
    @classmethod
    def date_required(cls, v: str):
        v = _trimmed(v)
        if v is None:
            raise ValueError("date is required")
        return v

    @field_validator("description", mode="before")
    @classmethod
    def description_default(cls, v: str | None):
        if v is None:
            return DEFAULT_DESCRIPTION
        return _trimmed(str(v)) or DEFAULT_DESCRIPTION


class TxUpdate(BaseModel):
    date: str | None = Field(default=None, max_length=DATE_MAX_LEN)
    date_iso: dt.date | None = Field(default=None, alias="dateISO")
    type: TxType | None = None
    amount: float | None = None
    description: str | None = Field(default=None, max_length=DESCRIPTION_MAX_LEN)

    class Config:
        populate_by_name = True

    @field_validator("amount")
    @classmethod
    def amount_must_be_finite(cls, v: float | None):
        return _finite_amount(v)

    @field_validator("date", "description")
    @classmethod
    def blank_means_unchanged(cls, v: str | None):
        return _trimmed(v)


class TxOut(BaseModel):
    id: int
    date: str
    date_iso: dt.date = Field(alias="dateISO")
    type: TxType
    amount: float
    description: str
    created_at: dt.datetime | None = Field(default=None, alias="createdAt")
    updated_at: dt.datetime | None = Field(default=None, alias="updatedAt")

    class Config:
        from_attributes = True
        populate_by_name = True


class DeleteOut(BaseModel):
    ok: bool = True
    message: str
    deleted: int
