# tourhub/api/routes/host_dashboard.py
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from typing import Optional

from tourhub.core.config import Settings, get_settings
from tourhub.core.exceptions import InvalidReportPeriod
from tourhub.db.base import get_db
from tourhub.schemas.revenue import BookingStats, RevenueReport, SortBy, ViewMode
from tourhub.services.revenue.buckets import ReportPeriod
from tourhub.services.revenue.loader import load_host_snapshot
from tourhub.services.revenue.normalizer import normalize_bookings
from tourhub.services.revenue.report import booking_stats, build_revenue_report, local_now

router = APIRouter(prefix="/host", tags=["host-dashboard"])


# --------------------------
# 1) /host/{host_id}/revenue/report?view=&month=&year=&sort=
# --------------------------
@router.get("/{host_id}/revenue/report", response_model=RevenueReport)
def host_revenue_report(
    host_id: int,
    view: ViewMode = Query(ViewMode.DAY, description="day: days of a month, month: months of a year"),
    month: Optional[str] = Query(None, description="YYYY-MM, used when view=day"),
    year: Optional[int] = Query(None, description="YYYY, used when view=month"),
    sort: SortBy = Query(SortBy.RATING),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    now = local_now(settings)
    try:
        period = ReportPeriod.select(view, month=month, year=year, today=now.date())
    except InvalidReportPeriod as exc:
        raise HTTPException(status_code=400, detail=str(exc))

    snapshot = load_host_snapshot(db, host_id)

    return build_revenue_report(
        snapshot.bookings,
        snapshot.reviews,
        snapshot.combos,
        host_id=host_id,
        period=period,
        sort_by=sort,
        now=now,
        settings=settings,
    )


# --------------------------
# 2) /host/{host_id}/bookings/stats
# --------------------------
@router.get("/{host_id}/bookings/stats", response_model=BookingStats)
def host_booking_stats(host_id: int, db: Session = Depends(get_db), settings: Settings = Depends(get_settings)):
    snapshot = load_host_snapshot(db, host_id)
    return booking_stats(normalize_bookings(snapshot.bookings, settings.tzinfo))
