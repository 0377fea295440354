from pydantic import BaseModel, field_validator
import datetime as dt
from typing import Literal
from uuid import UUID

from finboard.schemas.common import check_amount, trim_optional, trim_required

ExpenseStatus = Literal["paid", "pending"]
ExpenseType = Literal["fixed", "variable"]
CurrencyCode = Literal["USD", "TRY"]

class ExpenseCreate(BaseModel):
    title: str
    category: str = "other"
    amount: float
    currency: CurrencyCode = "USD"
    date: dt.date
    status: ExpenseStatus = "pending"
    type: ExpenseType = "variable"

    @field_validator("amount")
    @classmethod
    def amount_ok(cls, v: float):
        return check_amount(v)

    @field_validator("title")
    @classmethod
    def title_trim(cls, v: str):
        return trim_required(v, "title")

    @field_validator("category")
    @classmethod
    def category_trim(cls, v: str):
        return (trim_optional(v) or "other").lower()

class ExpenseUpdate(BaseModel):
    title: str | None = None
    category: str | None = None
    amount: float | None = None
    currency: CurrencyCode | None = None
    date: dt.date | None = None
    status: ExpenseStatus | None = None
    type: ExpenseType | None = None

    @field_validator("amount")
    @classmethod
    def amount_ok(cls, v: float | None):
        return check_amount(v)

    @field_validator("title")
    @classmethod
    def title_trim(cls, v: str | None):
        return trim_required(v, "title")

    @field_validator("category")
    @classmethod
    def category_trim(cls, v: str | None):
        v = trim_optional(v)
        return v.lower() if v else None

class ExpenseOut(BaseModel):
    id: UUID
    title: str
    category: str
    amount: float
    currency: str
    date: dt.date
    status: str
    type: str
    created_at: dt.datetime | None = None

    class Config:
        from_attributes = True
