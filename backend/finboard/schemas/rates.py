from pydantic import BaseModel
from datetime import datetime

class FxRateOut(BaseModel):
    base: str = "USD"
    quote: str = "TRY"
    rate: float
    fetched_at: datetime | None = None

class AssetPricesOut(BaseModel):
    bitcoin: float | None = None
    ethereum: float | None = None
    cardano: float | None = None
    gold: float | None = None
    silver: float | None = None
    error: str | None = None
