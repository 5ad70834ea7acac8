# tourhub/services/revenue/loader.py
import logging
from dataclasses import dataclass, field
from typing import Callable, List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from tourhub.db.models import Booking, Review, ServiceCombo
from tourhub.schemas.booking import BookingResponse
from tourhub.schemas.review import ReviewResponse
from tourhub.schemas.service_combo import ServiceComboResponse

logger = logging.getLogger(__name__)


@dataclass
class HostSnapshot:
    """Raw rows for one host, as plain dicts ready for the normalizer."""
    host_id: int
    combos: List[dict] = field(default_factory=list)
    bookings: List[dict] = field(default_factory=list)
    reviews: List[dict] = field(default_factory=list)


def _load(db: Session, what: str, host_id: int, fetch: Callable[[], list]) -> List[dict]:
    # one failing collection must not take the whole report down
    try:
        return fetch()
    except SQLAlchemyError:
        logger.exception("failed to load %s for host %s", what, host_id)
        db.rollback()
        return []


def load_host_snapshot(db: Session, host_id: int) -> HostSnapshot:
    def combos():
        rows = db.query(ServiceCombo).filter(ServiceCombo.host_id == host_id).order_by(ServiceCombo.id).all()
        return [ServiceComboResponse.model_validate(r).model_dump() for r in rows]

    def bookings():
        rows = (
            db.query(Booking)
            .join(ServiceCombo, Booking.service_combo_id == ServiceCombo.id)
            .filter(ServiceCombo.host_id == host_id)
            .order_by(Booking.id)
            .all()
        )
        return [BookingResponse.model_validate(r).model_dump() for r in rows]

    def reviews():
        rows = (
            db.query(Review)
            .join(Booking, Review.booking_id == Booking.id)
            .join(ServiceCombo, Booking.service_combo_id == ServiceCombo.id)
            .filter(ServiceCombo.host_id == host_id)
            .order_by(Review.id)
            .all()
        )
        return [ReviewResponse.model_validate(r).model_dump() for r in rows]

    snapshot = HostSnapshot(
        host_id=host_id,
        combos=_load(db, "service combos", host_id, combos),
        bookings=_load(db, "bookings", host_id, bookings),
        reviews=_load(db, "reviews", host_id, reviews),
    )
    logger.debug(
        "loaded host %s snapshot: %d combos, %d bookings, %d reviews",
        host_id, len(snapshot.combos), len(snapshot.bookings), len(snapshot.reviews),
    )
    return snapshot
