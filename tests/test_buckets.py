import calendar
from datetime import date, datetime

import pytest

from tourhub.core.exceptions import InvalidReportPeriod
from tourhub.schemas.records import PaymentRecord
from tourhub.schemas.revenue import ViewMode
from tourhub.services.revenue.buckets import ReportPeriod, bucket_payments


def pay(when, amount, status="success"):
    return PaymentRecord(id=1, amount=amount, payment_date=when, status=status)


@pytest.mark.parametrize("selector, days", [("2024-02", 29), ("2023-02", 28), ("2024-04", 30), ("2024-12", 31)])
def test_day_view_has_one_bucket_per_calendar_day(selector, days):
    series = bucket_payments([], ReportPeriod.for_month(selector))
    assert len(series.points) == days
    assert [p.period_start for p in series.points] == sorted(p.period_start for p in series.points)
    assert series.points[0].label == f"01/{selector[-2:]}"
    assert series.total == 0
    assert all(p.amount == 0 for p in series.points)


def test_month_view_always_has_twelve_buckets():
    series = bucket_payments([], ReportPeriod.for_year(2024))
    assert len(series.points) == 12
    assert series.labels[0] == "01/2024"
    assert series.labels[-1] == "12/2024"
    assert series.amounts == [0.0] * 12


def test_day_view_sums_into_calendar_days():
    payments = [
        pay(datetime(2024, 3, 1, 0, 0), 100),
        pay(datetime(2024, 3, 1, 23, 59, 59), 50),
        pay(datetime(2024, 3, 31, 23, 59, 59), 7),
        pay(datetime(2024, 4, 1, 0, 0), 1000),
        pay(datetime(2024, 2, 29, 23, 59, 59), 1000),
    ]
    series = bucket_payments(payments, ReportPeriod.for_month("2024-03"))
    assert series.points[0].amount == 150
    assert series.points[30].amount == 7
    assert series.total == 157


def test_month_view_sums_into_months():
    payments = [
        pay(datetime(2024, 3, 10), 500000),
        pay(datetime(2024, 3, 28), 100),
        pay(datetime(2024, 12, 31, 23, 59), 1),
        pay(datetime(2025, 1, 1), 9999),
    ]
    series = bucket_payments(payments, ReportPeriod.for_year(2024))
    assert series.amounts[2] == 500100
    assert series.amounts[11] == 1
    assert series.total == 500101


def test_undated_and_unsuccessful_payments_are_ignored():
    payments = [
        pay(None, 100),
        pay(datetime(2024, 3, 5), 200, status="failed"),
        PaymentRecord(id=2, amount=30, created_at=datetime(2024, 3, 6), status="success"),
    ]
    series = bucket_payments(payments, ReportPeriod.for_month("2024-03"))
    # created_at stands in for a missing payment date
    assert series.points[5].amount == 30
    assert series.total == 30


def test_bucket_total_matches_in_range_payments():
    payments = [pay(datetime(2024, m, d), m * 10 + d) for m in (1, 6, 7) for d in (1, 15, 28)]
    period = ReportPeriod.for_month("2024-06")
    start, end = period.bounds
    expected = sum(p.amount for p in payments if start <= p.payment_date < end)
    assert bucket_payments(payments, period).total == expected == sum(bucket_payments(payments, period).amounts)


def test_report_period_parsing():
    assert ReportPeriod.for_month("2024-3") == ReportPeriod(ViewMode.DAY, 2024, 3)
    assert ReportPeriod.for_year("2025") == ReportPeriod(ViewMode.MONTH, 2025)
    assert ReportPeriod.select(ViewMode.DAY, today=date(2026, 10, 19)) == ReportPeriod(ViewMode.DAY, 2026, 10)
    assert ReportPeriod.select(ViewMode.MONTH, today=date(2026, 10, 19)) == ReportPeriod(ViewMode.MONTH, 2026)
    assert ReportPeriod.select("month", year=2020) == ReportPeriod(ViewMode.MONTH, 2020)


@pytest.mark.parametrize("selector", ["2024-13", "2024/03", "", "March", "2024-00"])
def test_bad_month_selector_raises(selector):
    with pytest.raises(InvalidReportPeriod):
        ReportPeriod.for_month(selector)


def test_bad_year_selector_raises():
    with pytest.raises(InvalidReportPeriod):
        ReportPeriod.for_year("twenty")
    with pytest.raises(ValueError):
        ReportPeriod.for_year(9999)


def test_december_bounds_roll_into_next_year():
    start, end = ReportPeriod.for_month("2024-12").bounds
    assert (start, end) == (datetime(2024, 12, 1), datetime(2025, 1, 1))
    assert calendar.monthrange(2024, 12)[1] == 31
