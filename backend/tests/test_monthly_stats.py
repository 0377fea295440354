from dataclasses import dataclass
from datetime import date, datetime, timezone
from decimal import Decimal

import pytest

from finboard.core.config import settings
from finboard.services.monthly import (
    DataFormatError,
    InvalidPeriodError,
    filter_and_aggregate,
    filter_by_month,
    group_totals,
    parse_period,
)


RECORDS = [
    {"date": "2024-03-05", "amount": 50},
    {"date": "2024-04-01", "amount": 30},
]


@dataclass
class _Row:
    date: date
    amount: Decimal
    status: str = "pending"


def test_selected_month_keeps_matching_records():
    st = filter_and_aggregate(RECORDS, "2024-03")
    assert st.items == [{"date": "2024-03-05", "amount": 50}]
    assert st.total == 50
    assert st.count == 1
    assert st.average == 50


def test_month_without_records_is_all_zero():
    st = filter_and_aggregate(RECORDS, "2024-05")
    assert st.items == []
    assert st.total == 0
    assert st.count == 0
    assert st.average == 0


@pytest.mark.parametrize("month", ["all", None, "", "ALL"])
def test_all_sentinel_returns_everything_in_order(month):
    st = filter_and_aggregate(RECORDS, month)
    assert st.items == RECORDS
    assert st.total == 80
    assert st.count == 2
    assert st.average == 40


@pytest.mark.parametrize("month", ["all", "2024-03", "1999-12"])
def test_empty_input(month):
    st = filter_and_aggregate([], month)
    assert (st.items, st.total, st.count, st.average) == ([], 0, 0, 0)


def test_predicate_applies_after_month_filter():
    rows = [
        _Row(date(2024, 3, 1), Decimal("10.00"), "paid"),
        _Row(date(2024, 3, 20), Decimal("15.50"), "pending"),
        _Row(date(2024, 4, 2), Decimal("99.00"), "paid"),
    ]
    st = filter_and_aggregate(rows, "2024-03", predicate=lambda r: r.status == "paid")
    assert st.items == [rows[0]]
    assert st.total == Decimal("10.00")


def test_average_is_total_over_count():
    rows = [_Row(date(2024, 1, d), Decimal(a)) for d, a in ((1, "10"), (2, "20"), (3, "45"))]
    st = filter_and_aggregate(rows, "2024-01")
    assert st.total == Decimal("75")
    assert st.average == Decimal("25")


def test_single_digit_month_is_zero_padded():
    assert parse_period("2024-3") == ("2024", "03")
    assert filter_by_month(RECORDS, "2024-3") == [RECORDS[0]]


def test_month_boundary_dates():
    rows = [
        {"date": "2024-01-31", "amount": 1},
        {"date": "2024-02-01", "amount": 2},
        {"date": "2024-02-29", "amount": 3},
        {"date": "2024-03-01", "amount": 4},
    ]
    st = filter_and_aggregate(rows, "2024-02")
    assert st.total == 5
    assert st.count == 2


def test_datetime_strings_and_objects_are_accepted():
    rows = [
        {"date": "2024-06-30T10:15:00", "amount": 1},
        {"date": datetime(2024, 6, 1, 8, 0), "amount": 2},
        {"date": date(2024, 6, 15), "amount": 3},
    ]
    assert filter_and_aggregate(rows, "2024-06").total == 6


def test_aware_timestamps_use_reporting_timezone(monkeypatch):
    monkeypatch.setattr(settings, "reporting_timezone", "Europe/Istanbul")
    # 22:30 UTC on May 31 is already June 1 in Istanbul (UTC+3)
    rows = [{"date": datetime(2024, 5, 31, 22, 30, tzinfo=timezone.utc), "amount": 7}]
    assert filter_and_aggregate(rows, "2024-06").count == 1
    assert filter_and_aggregate(rows, "2024-05").count == 0


@pytest.mark.parametrize("bad", ["not-a-date", "2024-13-01", "", None, 20240101])
def test_unparseable_record_date_fails_fast(bad):
    rows = [{"date": "2024-03-05", "amount": 1}, {"date": bad, "amount": 2}]
    with pytest.raises(DataFormatError) as ei:
        filter_and_aggregate(rows, "2024-03")
    assert ei.value.value == bad


def test_bad_dates_are_not_inspected_without_month_filter():
    rows = [{"date": "garbage", "amount": 2}]
    assert filter_and_aggregate(rows, "all").total == 2


@pytest.mark.parametrize("bad", ["2024", "2024-00", "2024-13", "March", "2024/03"])
def test_invalid_period_is_rejected(bad):
    with pytest.raises(InvalidPeriodError):
        filter_and_aggregate(RECORDS, bad)


def test_group_totals():
    rows = [
        {"category": "salary", "amount": "1000"},
        {"category": "freelance", "amount": "250.50"},
        {"category": "salary", "amount": "1000"},
        {"category": None, "amount": "5"},
    ]
    assert group_totals(rows, "category") == {
        "salary": Decimal("2000"),
        "freelance": Decimal("250.50"),
        "other": Decimal("5"),
    }


@pytest.mark.parametrize("bad", [None, "twelve", "NaN", True])
def test_unusable_amount_fails_fast(bad):
    rows = [{"date": "2024-03-05", "amount": 10}, {"date": "2024-03-06", "amount": bad}]
    with pytest.raises(DataFormatError) as ei:
        filter_and_aggregate(rows, "2024-03")
    assert ei.value.field_name == "amount"
    assert ei.value.value == bad


def test_missing_amount_field_is_not_zero():
    with pytest.raises(DataFormatError):
        group_totals([{"category": "salary"}], "category")
