from pydantic import BaseModel, field_validator
import datetime as dt
from typing import Literal
from uuid import UUID

from finboard.schemas.common import check_amount, trim_optional, trim_required

IncomeStatus = Literal["expected", "received"]
CurrencyCode = Literal["USD", "TRY"]

class IncomeCreate(BaseModel):
    title: str
    amount: float
    currency: CurrencyCode = "USD"
    category: str = "other"
    status: IncomeStatus = "expected"
    date: dt.date

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

class IncomeUpdate(BaseModel):
    title: str | None = None
    amount: float | None = None
    currency: CurrencyCode | None = None
    category: str | None = None
    status: IncomeStatus | None = None
    date: dt.date | None = None

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

class IncomeOut(BaseModel):
    id: UUID
    title: str
    amount: float
    currency: str
    category: str
    status: str
    date: dt.date
    created_at: dt.datetime | None = None

    class Config:
        from_attributes = True
