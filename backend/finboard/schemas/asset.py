from pydantic import BaseModel, field_validator
import datetime as dt
from typing import Literal
from uuid import UUID

from finboard.schemas.common import check_amount, trim_required

CurrencyCode = Literal["USD", "TRY"]

class AssetCreate(BaseModel):
    type: str
    quantity: float
    unit: str
    price_per_unit: float
    currency: CurrencyCode = "USD"
    auto_update: bool = False
    date: dt.date | None = None

    @field_validator("quantity", "price_per_unit")
    @classmethod
    def number_ok(cls, v: float):
        return check_amount(v)

    @field_validator("type", "unit")
    @classmethod
    def trim(cls, v: str, info):
        return trim_required(v, info.field_name).lower()

class AssetUpdate(BaseModel):
    type: str | None = None
    quantity: float | None = None
    unit: str | None = None
    price_per_unit: float | None = None
    currency: CurrencyCode | None = None
    auto_update: bool | None = None
    date: dt.date | None = None

    @field_validator("quantity", "price_per_unit")
    @classmethod
    def number_ok(cls, v: float | None):
        return check_amount(v)

    @field_validator("type", "unit")
    @classmethod
    def trim(cls, v: str | None, info):
        v = trim_required(v, info.field_name)
        return v.lower() if v is not None else None

class AssetOut(BaseModel):
    id: UUID
    type: str
    quantity: float
    unit: str
    price_per_unit: float
    currency: str
    auto_update: bool
    total_value: float
    date: dt.date
    created_at: dt.datetime | None = None

    class Config:
        from_attributes = True
