# tourhub/services/revenue/ranking.py
"""
Per-combo rating/revenue summaries and the "best performing" top list.
"""
from collections import defaultdict
from dataclasses import dataclass
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, Iterable, List, Optional

from tourhub.schemas.records import BookingRecord, ReviewRecord, ServiceComboRecord
from tourhub.schemas.revenue import SortBy, TopCombo, ViewMode
from tourhub.services.revenue.buckets import ReportPeriod
from tourhub.services.revenue.payments import is_paid

ABSOLUTE_IMAGE_PREFIXES = ("http://", "https://", "data:image")


@dataclass(frozen=True)
class ComboSummary:
    combo: ServiceComboRecord
    average_rating: float
    review_count: int
    period_revenue: float


def current_period(view_mode: ViewMode, now: datetime) -> ReportPeriod:
    """The month (DAY view) or year (MONTH view) that contains ``now``."""
    if ViewMode(view_mode) is ViewMode.DAY:
        return ReportPeriod(ViewMode.DAY, now.year, now.month)
    return ReportPeriod(ViewMode.MONTH, now.year)


def resolve_review_combo(
    review: ReviewRecord,
    bookings_by_id: Dict[int, BookingRecord],
    host_id: int,
) -> Optional[int]:
    """Combo a review belongs to, or None if it can't be tied to this host."""
    booking = review.booking
    if booking is None or booking.combo_id is None:
        booking_id = review.booking_id if review.booking_id is not None else (booking.id if booking else None)
        booking = bookings_by_id.get(booking_id, booking)
    if booking is None:
        return None
    if booking.host_id is not None and booking.host_id != host_id:
        return None
    return booking.combo_id


def booking_revenue(booking: BookingRecord) -> float:
    # explicit successful payments, else the booking total; no synthesis here
    paid = [p.amount for p in booking.payments if p.is_success]
    if paid:
        return sum(paid)
    return booking.total_amount


def summarize_combos(
    combos: Iterable[ServiceComboRecord],
    bookings: Iterable[BookingRecord],
    reviews: Iterable[ReviewRecord],
    host_id: int,
    view_mode: ViewMode,
    now: datetime,
) -> List[ComboSummary]:
    bookings = list(bookings)
    bookings_by_id = {b.id: b for b in bookings}

    ratings: Dict[int, List[float]] = defaultdict(list)
    for review in reviews:
        if review.rating is None:
            continue
        combo_id = resolve_review_combo(review, bookings_by_id, host_id)
        if combo_id is not None:
            ratings[combo_id].append(review.rating)

    # ranking revenue is always relative to now, not to the charted period
    period = current_period(view_mode, now)
    revenue: Dict[int, float] = defaultdict(float)
    for booking in bookings:
        if booking.combo_id is None or not is_paid(booking):
            continue
        if period.contains(booking.revenue_date):
            revenue[booking.combo_id] += booking_revenue(booking)

    summaries = []
    for combo in combos:
        if combo.host_id != host_id:
            continue
        combo_ratings = ratings.get(combo.id, [])
        average = sum(combo_ratings) / len(combo_ratings) if combo_ratings else 0.0
        summaries.append(
            ComboSummary(
                combo=combo,
                average_rating=average,
                review_count=len(combo_ratings),
                period_revenue=revenue.get(combo.id, 0.0),
            )
        )
    return summaries


def display_rating(average: float) -> float:
    """One decimal, halves rounded up; ranking itself uses the exact average."""
    return float(Decimal(average).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def is_eligible(summary: ComboSummary, sort_by: SortBy) -> bool:
    if SortBy(sort_by) is SortBy.RATING:
        return summary.review_count > 0
    return summary.period_revenue > 0 or summary.review_count > 0


def sort_key(summary: ComboSummary, sort_by: SortBy):
    if SortBy(sort_by) is SortBy.RATING:
        return (-summary.average_rating, -summary.review_count)
    return (-summary.period_revenue, -summary.average_rating)


def combo_image_url(image: Optional[str], base_url: str, default_url: str) -> str:
    if not image or not image.strip():
        return default_url
    image = image.strip()
    if image.startswith(ABSOLUTE_IMAGE_PREFIXES):
        return image
    return f"{base_url.rstrip('/')}/{image.lstrip('/')}"


def rank_combos(
    summaries: Iterable[ComboSummary],
    sort_by: SortBy,
    limit: int = 3,
    image_base_url: str = "",
    default_image_url: str = "",
) -> List[TopCombo]:
    """Top ``limit`` eligible combos for ``sort_by``; ties keep input order."""
    eligible = [s for s in summaries if is_eligible(s, sort_by)]
    eligible.sort(key=lambda s: sort_key(s, sort_by))
    return [
        TopCombo(
            offering_id=s.combo.id,
            name=s.combo.name,
            image_url=combo_image_url(s.combo.image, image_base_url, default_image_url),
            average_rating=display_rating(s.average_rating),
            review_count=s.review_count,
            period_revenue=s.period_revenue,
            rank=position,
        )
        for position, s in enumerate(eligible[:limit], start=1)
    ]
