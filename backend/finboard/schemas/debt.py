from pydantic import BaseModel, field_validator
import datetime as dt
from typing import Literal
from uuid import UUID

from finboard.schemas.common import check_amount, trim_optional, trim_required

DebtStatus = Literal["pending", "paid"]
DebtType = Literal["short", "long"]
CurrencyCode = Literal["USD", "TRY"]

class DebtCreate(BaseModel):
    title: str
    creditor: str = ""
    amount: float
    currency: CurrencyCode = "USD"
    due_date: dt.date | None = None
    status: DebtStatus = "pending"
    type: DebtType = "short"
    date: dt.date | None = None
    note: str | None = None

    @field_validator("amount")
    @classmethod
    def amount_ok(cls, v: float):
        return check_amount(v)

    @field_validator("title")
    @classmethod
    def title_trim(cls, v: str):
        return trim_required(v, "title")

    @field_validator("creditor")
    @classmethod
    def creditor_trim(cls, v: str):
        return (v or "").strip()

    @field_validator("note")
    @classmethod
    def note_trim(cls, v: str | None):
        return trim_optional(v)

class DebtUpdate(BaseModel):
    title: str | None = None
    creditor: str | None = None
    amount: float | None = None
    currency: CurrencyCode | None = None
    due_date: dt.date | None = None
    status: DebtStatus | None = None
    type: DebtType | None = None
    date: dt.date | None = None
    note: str | None = None

    @field_validator("amount")
    @classmethod
    def amount_ok(cls, v: float | None):
        return check_amount(v)

    @field_validator("title")
    @classmethod
    def title_trim(cls, v: str | None):
        return trim_required(v, "title")

    @field_validator("creditor")
    @classmethod
    def creditor_trim(cls, v: str | None):
        return v.strip() if v is not None else None

    @field_validator("note")
    @classmethod
    def note_trim(cls, v: str | None):
        return trim_optional(v)

class DebtAmountHistoryOut(BaseModel):
    id: UUID
    amount: float
    note: str | None
    logged_at: dt.datetime

    class Config:
        from_attributes = True

class DebtOut(BaseModel):
    id: UUID
    title: str
    creditor: str
    amount: float
    currency: str
    due_date: dt.date | None
    status: str
    type: str
    date: dt.date
    created_at: dt.datetime | None = None
    amount_history: list[DebtAmountHistoryOut] = []

    class Config:
        from_attributes = True

class DebtHistoryEntryOut(BaseModel):
    id: UUID
    amount: float
    previous_amount: float
    delta: float
    kind: Literal["initial", "increase", "payment", "unchanged"]
    note: str | None
    logged_at: dt.datetime

class DebtHistoryOut(BaseModel):
    debt_id: UUID
    title: str
    currency: str
    entries: list[DebtHistoryEntryOut]
