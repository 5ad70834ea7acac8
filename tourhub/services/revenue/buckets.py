# tourhub/services/revenue/buckets.py
import calendar
import re
from dataclasses import dataclass
from datetime import date, datetime
from typing import Iterable, Optional, Tuple, Union

from tourhub.core.exceptions import InvalidReportPeriod
from tourhub.schemas.records import PaymentRecord
from tourhub.schemas.revenue import ChartPoint, ChartSeries, ViewMode

_YEAR_MONTH = re.compile(r"^\s*(\d{4})-(\d{1,2})\s*$")


@dataclass(frozen=True)
class ReportPeriod:
    """The period a chart shows: one month (DAY view) or one year (MONTH view)."""

    view_mode: ViewMode
    year: int
    month: Optional[int] = None

    @classmethod
    def for_month(cls, value: str) -> "ReportPeriod":
        """Parse a ``YYYY-MM`` selector."""
        m = _YEAR_MONTH.match(value or "")
        if not m:
            raise InvalidReportPeriod(value, "expected YYYY-MM")
        year, month = int(m.group(1)), int(m.group(2))
        if not 1 <= month <= 12:
            raise InvalidReportPeriod(value, "month out of range")
        return cls(ViewMode.DAY, _check_year(year), month)

    @classmethod
    def for_year(cls, value: Union[int, str]) -> "ReportPeriod":
        try:
            year = int(value)
        except (TypeError, ValueError):
            raise InvalidReportPeriod(value, "expected a year")
        return cls(ViewMode.MONTH, _check_year(year))

    @classmethod
    def select(
        cls,
        view_mode: ViewMode,
        month: Optional[str] = None,
        year: Union[int, str, None] = None,
        today: Optional[date] = None,
    ) -> "ReportPeriod":
        """Pick the period for ``view_mode``, defaulting to the one containing today."""
        today = today or date.today()
        if ViewMode(view_mode) is ViewMode.DAY:
            return cls.for_month(month or f"{today.year}-{today.month:02d}")
        return cls.for_year(year if year is not None else today.year)

    @property
    def bounds(self) -> Tuple[datetime, datetime]:
        """Half-open [start, end) range covered by the period."""
        if self.view_mode is ViewMode.DAY:
            start = datetime(self.year, self.month, 1)
            if self.month == 12:
                return start, datetime(self.year + 1, 1, 1)
            return start, datetime(self.year, self.month + 1, 1)
        return datetime(self.year, 1, 1), datetime(self.year + 1, 1, 1)

    def contains(self, moment: Optional[datetime]) -> bool:
        if moment is None:
            return False
        start, end = self.bounds
        return start <= moment < end


def _check_year(year: int) -> int:
    # datetime(year + 1, ...) must stay representable
    if not 1 <= year < 9999:
        raise InvalidReportPeriod(year, "year out of range")
    return year


def empty_points(period: ReportPeriod):
    if period.view_mode is ViewMode.DAY:
        days = calendar.monthrange(period.year, period.month)[1]
        return [
            ChartPoint(label=f"{day:02d}/{period.month:02d}", amount=0.0,
                       period_start=date(period.year, period.month, day))
            for day in range(1, days + 1)
        ]
    return [
        ChartPoint(label=f"{month:02d}/{period.year}", amount=0.0,
                   period_start=date(period.year, month, 1))
        for month in range(1, 13)
    ]


def bucket_payments(payments: Iterable[PaymentRecord], period: ReportPeriod) -> ChartSeries:
    """Sum successful payments into the buckets of ``period``.

    Payments with no resolvable date, or outside the period, are ignored. The
    series always has every bucket of the period, zero-filled.
    """
    points = empty_points(period)
    amounts = [0.0] * len(points)

    for payment in payments:
        if not payment.is_success:
            continue
        moment = payment.effective_date
        if not period.contains(moment):
            continue
        index = moment.day - 1 if period.view_mode is ViewMode.DAY else moment.month - 1
        amounts[index] += payment.amount

    points = [p.model_copy(update={"amount": a}) for p, a in zip(points, amounts)]
    return ChartSeries(
        view_mode=period.view_mode,
        year=period.year,
        month=period.month,
        points=points,
        total=sum(amounts),
    )
