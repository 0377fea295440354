from __future__ import annotations

from decimal import Decimal
from typing import Any, Iterable

from finboard.services.monthly import ALL_MONTHS, filter_and_aggregate, group_totals, sum_where
from finboard.services.prices import AssetPrices, revalue_assets


def _f(v: Decimal) -> float:
    return float(v)


def _base(month: str | None, stats) -> dict:
    return {
        "month": month or ALL_MONTHS,
        "total": _f(stats.total),
        "count": stats.count,
        "average": _f(stats.average),
    }


def _eq(name: str, value: str):
    return lambda r: getattr(r, name, None) == value


def income_summary(incomes: Iterable[Any], month: str | None) -> dict:
    stats = filter_and_aggregate(incomes, month)
    items = stats.items
    return {
        **_base(month, stats),
        "expected_total": _f(sum_where(items, _eq("status", "expected"))),
        "received_total": _f(sum_where(items, _eq("status", "received"))),
        "by_category": {k: _f(v) for k, v in group_totals(items, "category").items()},
    }


def expense_summary(expenses: Iterable[Any], month: str | None) -> dict:
    stats = filter_and_aggregate(expenses, month)
    items = stats.items
    return {
        **_base(month, stats),
        "fixed_total": _f(sum_where(items, _eq("type", "fixed"))),
        "variable_total": _f(sum_where(items, _eq("type", "variable"))),
        "paid_total": _f(sum_where(items, _eq("status", "paid"))),
        "pending_total": _f(sum_where(items, _eq("status", "pending"))),
    }


def debt_summary(debts: Iterable[Any], month: str | None) -> dict:
    stats = filter_and_aggregate(debts, month)
    items = stats.items
    return {
        **_base(month, stats),
        "short_term_total": _f(sum_where(items, _eq("type", "short"))),
        "long_term_total": _f(sum_where(items, _eq("type", "long"))),
        "pending_total": _f(sum_where(items, _eq("status", "pending"))),
        "paid_total": _f(sum_where(items, _eq("status", "paid"))),
    }


def asset_summary(assets: Iterable[Any], month: str | None, prices: AssetPrices) -> dict:
    valuations = revalue_assets(assets, prices)
    stats = filter_and_aggregate(valuations, month)
    return {
        **_base(month, stats),
        "by_type": {k: _f(v) for k, v in group_totals(stats.items, "type").items()},
        "revalued_count": sum(1 for v in stats.items if v.revalued),
        "price_error": prices.error,
    }
