from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Iterable

from finboard.utils.timezone import reporting_tz

ALL_MONTHS = "all"

_PERIOD_RE = re.compile(r"^(\d{4})-(\d{1,2})$")


class InvalidPeriodError(ValueError):
    def __init__(self, value):
        super().__init__(f"invalid reporting period: {value!r}")
        self.value = value


class DataFormatError(ValueError):
    def __init__(self, value, field_name: str = "date"):
        super().__init__(f"unparseable {field_name}: {value!r}")
        self.value = value
        self.field_name = field_name


@dataclass
class MonthlyStats:
    items: list = field(default_factory=list)
    total: Decimal = Decimal("0")
    count: int = 0
    average: Decimal = Decimal("0")


def _get(rec, name: str):
    if isinstance(rec, Mapping):
        return rec.get(name)
    return getattr(rec, name, None)


def parse_period(selected_month: str | None) -> tuple[str, str] | None:
    """Return ``(year, month)`` as zero-padded strings, or None for "all"."""
    if selected_month is None:
        return None
    v = str(selected_month).strip()
    if not v or v.lower() == ALL_MONTHS:
        return None
    m = _PERIOD_RE.match(v)
    if m is None:
        raise InvalidPeriodError(selected_month)
    month = int(m.group(2))
    if not 1 <= month <= 12:
        raise InvalidPeriodError(selected_month)
    return m.group(1), f"{month:02d}"


def record_date(value) -> date:
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(reporting_tz())
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        v = value.strip()
        try:
            if len(v) == 10:
                return date.fromisoformat(v)
            return record_date(datetime.fromisoformat(v.replace("Z", "+00:00")))
        except ValueError:
            raise DataFormatError(value) from None
    raise DataFormatError(value)


def record_amount(rec, amount_field: str = "amount") -> Decimal:
    v = _get(rec, amount_field)
    if v is None or isinstance(v, bool):
        raise DataFormatError(v, field_name=amount_field)
    try:
        amt = Decimal(str(v))
    except InvalidOperation:
        raise DataFormatError(v, field_name=amount_field) from None
    if not amt.is_finite():
        raise DataFormatError(v, field_name=amount_field)
    return amt


def filter_by_month(records: Iterable[Any], selected_month: str | None) -> list:
    period = parse_period(selected_month)
    items = list(records)
    if period is None:
        return items

    year, month = period
    out = []
    for rec in items:
        d = record_date(_get(rec, "date"))
        if f"{d.year:04d}" == year and f"{d.month:02d}" == month:
            out.append(rec)
    return out


def filter_and_aggregate(
    records: Iterable[Any],
    selected_month: str | None = None,
    predicate: Callable[[Any], bool] | None = None,
    amount_field: str = "amount",
) -> MonthlyStats:
    items = filter_by_month(records, selected_month)
    if predicate is not None:
        items = [r for r in items if predicate(r)]

    total = sum((record_amount(r, amount_field) for r in items), Decimal("0"))
    count = len(items)
    average = total / count if count > 0 else Decimal("0")
    return MonthlyStats(items=items, total=total, count=count, average=average)


def sum_where(records: Iterable[Any], predicate: Callable[[Any], bool], amount_field: str = "amount") -> Decimal:
    return sum((record_amount(r, amount_field) for r in records if predicate(r)), Decimal("0"))


def group_totals(records: Iterable[Any], key: str, amount_field: str = "amount") -> dict[str, Decimal]:
    out: dict[str, Decimal] = {}
    for r in records:
        k = str(_get(r, key) or "other")
        out[k] = out.get(k, Decimal("0")) + record_amount(r, amount_field)
    return out
