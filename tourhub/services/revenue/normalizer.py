# tourhub/services/revenue/normalizer.py
import logging
from collections.abc import Mapping
from typing import Iterable, List, Optional, Type, TypeVar

from pydantic import ValidationError

from tourhub.schemas.records import (
    BookingRecord,
    CanonicalRecord,
    ReviewRecord,
    ServiceComboRecord,
)

logger = logging.getLogger(__name__)

R = TypeVar("R", bound=CanonicalRecord)


def normalize(model: Type[R], raw, tz=None) -> Optional[R]:
    """Build a canonical record from one raw upstream row.

    Returns None when the row is not a mapping, fails validation, or has no
    primary identifier. Never raises on bad data.
    """
    if isinstance(raw, model):
        return raw if raw.id is not None else None
    if not isinstance(raw, Mapping):
        logger.debug("skipping non-mapping %s row: %r", model.__name__, type(raw))
        return None
    try:
        record = model.model_validate(raw, context={"tz": tz})
    except ValidationError as exc:
        logger.debug("skipping unusable %s row: %s", model.__name__, exc)
        return None
    if record.id is None:
        logger.debug("skipping %s row without id", model.__name__)
        return None
    return record


def normalize_many(model: Type[R], rows: Optional[Iterable], tz=None) -> List[R]:
    records = []
    for raw in rows or ():
        record = normalize(model, raw, tz)
        if record is not None:
            records.append(record)
    return records


def normalize_bookings(rows, tz=None) -> List[BookingRecord]:
    return normalize_many(BookingRecord, rows, tz)


def normalize_reviews(rows, tz=None) -> List[ReviewRecord]:
    return normalize_many(ReviewRecord, rows, tz)


def normalize_combos(rows, tz=None) -> List[ServiceComboRecord]:
    return normalize_many(ServiceComboRecord, rows, tz)
