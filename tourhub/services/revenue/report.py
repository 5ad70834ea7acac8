# tourhub/services/revenue/report.py
import logging
from collections import Counter
from datetime import datetime
from typing import Iterable, List, Optional

from tourhub.core.config import Settings, get_settings
from tourhub.schemas.records import BookingRecord, ServiceComboRecord
from tourhub.schemas.revenue import BookingStats, RevenueReport, SortBy
from tourhub.services.revenue.buckets import ReportPeriod, bucket_payments
from tourhub.services.revenue.normalizer import normalize_bookings, normalize_combos, normalize_reviews
from tourhub.services.revenue.payments import PAID_STATUSES, payment_stream
from tourhub.services.revenue.ranking import rank_combos, summarize_combos

logger = logging.getLogger(__name__)


def local_now(settings: Settings) -> datetime:
    tz = settings.tzinfo
    if tz is None:
        return datetime.now()
    return datetime.now(tz).replace(tzinfo=None)


def host_bookings(
    bookings: Iterable[BookingRecord],
    combos: List[ServiceComboRecord],
    host_id: int,
) -> List[BookingRecord]:
    """Bookings whose combo belongs to ``host_id``."""
    combo_ids = {c.id for c in combos}
    scoped = []
    for booking in bookings:
        if booking.host_id is not None:
            if booking.host_id == host_id:
                scoped.append(booking)
        elif booking.combo_id in combo_ids:
            scoped.append(booking)
    return scoped


def booking_stats(bookings: Iterable[BookingRecord]) -> BookingStats:
    counts = Counter(b.status for b in bookings)
    return BookingStats(
        total=sum(counts.values()),
        accepted=sum(counts[s] for s in PAID_STATUSES),
        rejected=counts["cancelled"],
        pending=counts["pending"],
    )


def build_revenue_report(
    raw_bookings,
    raw_reviews,
    raw_combos,
    host_id: int,
    period: ReportPeriod,
    sort_by: SortBy = SortBy.RATING,
    now: Optional[datetime] = None,
    settings: Optional[Settings] = None,
) -> RevenueReport:
    """Chart series, top combos and booking counts for one host.

    A pure function of its arguments: call it again on every change of
    period or sort order. ``now`` anchors the ranking's revenue window and
    defaults to the current time in the report timezone.
    """
    settings = settings or get_settings()
    tz = settings.tzinfo
    now = now or local_now(settings)

    combos = [c for c in normalize_combos(raw_combos, tz) if c.host_id == host_id]
    bookings = host_bookings(normalize_bookings(raw_bookings, tz), combos, host_id)
    reviews = normalize_reviews(raw_reviews, tz)

    payments = payment_stream(bookings)
    chart = bucket_payments(payments, period)

    summaries = summarize_combos(combos, bookings, reviews, host_id, period.view_mode, now)
    top = rank_combos(
        summaries,
        sort_by,
        limit=settings.top_combo_limit,
        image_base_url=settings.image_base_url,
        default_image_url=settings.default_image_url,
    )

    logger.info(
        "revenue report host=%s view=%s year=%s month=%s: %d bookings, %d payments, total=%.2f, top=%s",
        host_id, period.view_mode.value, period.year, period.month,
        len(bookings), len(payments), chart.total, [c.offering_id for c in top],
    )

    return RevenueReport(
        host_id=host_id,
        sort_by=SortBy(sort_by),
        chart=chart,
        top_combos=top,
        booking_stats=booking_stats(bookings),
    )
