import datetime as dt

from sqlalchemy import Integer, Date, DateTime, func, Float, String
from sqlalchemy.orm import Mapped, mapped_column
from cashbook.db.base import Base

DATE_MAX_LEN = 64
DESCRIPTION_MAX_LEN = 256

class Transaction(Base):
    __tablename__ = "transactions"
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    date: Mapped[str] = mapped_column(String(DATE_MAX_LEN))
    date_iso: Mapped[dt.date] = mapped_column(Date, index=True)
    type: Mapped[str] = mapped_column(String(16))
    # double precision: amounts come back exactly as the client sent them
    amount: Mapped[float] = mapped_column(Float)
    description: Mapped[str] = mapped_column(String(DESCRIPTION_MAX_LEN))
    created_at: Mapped[dt.datetime] = mapped_column(DateTime, server_default=func.now(), index=True)
    updated_at: Mapped[dt.datetime] = mapped_column(DateTime, server_default=func.now(), onupdate=func.now())
