from pydantic import BaseModel

class MonthlyStatsOut(BaseModel):
    month: str
    total: float
    count: int
    average: float

class IncomeSummaryOut(MonthlyStatsOut):
    expected_total: float
    received_total: float
    by_category: dict[str, float]

class ExpenseSummaryOut(MonthlyStatsOut):
    fixed_total: float
    variable_total: float
    paid_total: float
    pending_total: float

class DebtSummaryOut(MonthlyStatsOut):
    short_term_total: float
    long_term_total: float
    pending_total: float
    paid_total: float

class AssetSummaryOut(MonthlyStatsOut):
    by_type: dict[str, float]
    revalued_count: int
    price_error: str | None = None
