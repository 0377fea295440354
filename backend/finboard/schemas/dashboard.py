from pydantic import BaseModel

class DashboardOut(BaseModel):
    month: str
    currency: str
    balance: float
    income: float
    expenses: float
    debt: float
    assets: float
    net_worth: float
    usd_try_rate: float | None = None
