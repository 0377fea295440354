from __future__ import annotations

import uuid
from decimal import Decimal
from typing import Any, Callable, Iterable

from sqlalchemy import select
from sqlalchemy.orm import Session

from finboard.models.asset import Asset
from finboard.models.debt import Debt
from finboard.models.expense import Expense
from finboard.models.income import Income
from finboard.services.currency import convert, get_usd_try_rate
from finboard.services.monthly import ALL_MONTHS, filter_and_aggregate
from finboard.services.prices import AssetPrices, get_asset_prices, revalue_assets


def _rows(s: Session, model, user_id: uuid.UUID) -> list:
    return s.execute(select(model).where(model.user_id == user_id)).scalars().all()


def _converted_total(
    records: Iterable[Any],
    month: str | None,
    currency: str,
    rate: Callable[[], Decimal],
) -> Decimal:
    stats = filter_and_aggregate(records, month)
    total = Decimal("0")
    for r in stats.items:
        if r.currency == currency:
            total += Decimal(str(r.amount))
        else:
            total += convert(r.amount, r.currency, currency, rate())
    return total


def build_dashboard(s: Session, user_id: uuid.UUID, month: str | None, currency: str) -> dict:
    incomes = _rows(s, Income, user_id)
    expenses = _rows(s, Expense, user_id)
    debts = _rows(s, Debt, user_id)
    assets = _rows(s, Asset, user_id)

    prices = get_asset_prices() if any(a.auto_update for a in assets) else AssetPrices()
    valuations = revalue_assets(assets, prices)

    # fetched lazily: only when some record is in another currency
    fetched: list[Decimal] = []

    def rate() -> Decimal:
        if not fetched:
            fetched.append(get_usd_try_rate())
        return fetched[0]

    income = _converted_total(incomes, month, currency, rate)
    spent = _converted_total(expenses, month, currency, rate)
    debt = _converted_total(debts, month, currency, rate)
    held = _converted_total(valuations, month, currency, rate)

    return {
        "month": month or ALL_MONTHS,
        "currency": currency,
        "balance": float(income - spent),
        "income": float(income),
        "expenses": float(spent),
        "debt": float(debt),
        "assets": float(held),
        "net_worth": float(held - debt),
        "usd_try_rate": float(fetched[0]) if fetched else None,
    }
