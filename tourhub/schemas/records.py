# tourhub/schemas/records.py
"""
Canonical, read-only records the revenue engine works on.

Upstream payloads arrive in PascalCase (``TotalAmount``) or camelCase
(``totalAmount``), and rows dumped from our own API schemas use snake_case.
Every record resolves its fields through one alias table, first non-null
value wins, PascalCase first.
"""
from collections.abc import Mapping
from datetime import date, datetime, time
from typing import ClassVar, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, ValidationInfo, field_validator, model_validator


def case_variants(name: str) -> Tuple[str, ...]:
    """``total_amount`` -> ("TotalAmount", "totalAmount", "total_amount")"""
    parts = name.split("_")
    pascal = "".join(p.capitalize() for p in parts)
    camel = parts[0] + "".join(p.capitalize() for p in parts[1:])
    return tuple(dict.fromkeys((pascal, camel, name)))


def to_int(value) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def to_amount(value) -> float:
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def to_text(value) -> Optional[str]:
    # free text only; nested objects and lists are not text
    if value is None or isinstance(value, (Mapping, list, tuple)):
        return None
    return str(value)


def parse_timestamp(value, tz=None) -> Optional[datetime]:
    """Parse an upstream timestamp into a naive report-local datetime.

    Naive values are already local wall-clock time. Aware values are shifted
    into ``tz`` when given, then stripped. Anything unparseable is None.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime.combine(value, time.min)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is not None:
        if tz is not None:
            parsed = parsed.astimezone(tz)
        parsed = parsed.replace(tzinfo=None)
    return parsed


class CanonicalRecord(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    # canonical field -> external keys in priority order; unlisted fields
    # fall back to case_variants(field)
    field_aliases: ClassVar[Dict[str, Tuple[str, ...]]] = {}

    @classmethod
    def aliases_for(cls, field_name: str) -> Tuple[str, ...]:
        return cls.field_aliases.get(field_name) or case_variants(field_name)

    @model_validator(mode="before")
    @classmethod
    def canonicalize(cls, data):
        if not isinstance(data, Mapping):
            return data
        out = {}
        for field_name in cls.model_fields:
            for key in cls.aliases_for(field_name):
                value = data.get(key)
                if value is not None:
                    out[field_name] = value
                    break
        return out

    @staticmethod
    def context_tz(info: ValidationInfo):
        return (info.context or {}).get("tz")


class ServiceComboRecord(CanonicalRecord):
    field_aliases: ClassVar[Dict[str, Tuple[str, ...]]] = {
        "image": ("ImageUrl", "imageUrl", "image_url", "Image", "image"),
    }

    id: Optional[int] = None
    host_id: Optional[int] = None
    name: Optional[str] = None
    image: Optional[str] = None

    @field_validator("id", "host_id", mode="before")
    @classmethod
    def coerce_ids(cls, v):
        return to_int(v)

    @field_validator("name", "image", mode="before")
    @classmethod
    def coerce_text(cls, v):
        return to_text(v)


class PaymentRecord(CanonicalRecord):
    id: Optional[int] = None
    booking_id: Optional[int] = None
    amount: float = 0.0
    payment_date: Optional[datetime] = None
    created_at: Optional[datetime] = None
    status: Optional[str] = None
    method: Optional[str] = None
    synthesized: bool = False

    @field_validator("id", "booking_id", mode="before")
    @classmethod
    def coerce_ids(cls, v):
        return to_int(v)

    @field_validator("amount", mode="before")
    @classmethod
    def coerce_amount(cls, v):
        return to_amount(v)

    @field_validator("payment_date", "created_at", mode="before")
    @classmethod
    def coerce_timestamps(cls, v, info: ValidationInfo):
        return parse_timestamp(v, cls.context_tz(info))

    @field_validator("status", "method", mode="before")
    @classmethod
    def lower_text(cls, v):
        return str(v).strip().lower() if v is not None else None

    @property
    def effective_date(self) -> Optional[datetime]:
        return self.payment_date or self.created_at

    @property
    def is_success(self) -> bool:
        return self.status == "success"


class BookingRecord(CanonicalRecord):
    id: Optional[int] = None
    service_combo_id: Optional[int] = None
    service_combo: Optional[ServiceComboRecord] = None
    status: Optional[str] = None
    total_amount: float = 0.0
    created_at: Optional[datetime] = None
    confirmed_date: Optional[datetime] = None
    booking_date: Optional[datetime] = None
    payments: List[PaymentRecord] = []

    @field_validator("id", "service_combo_id", mode="before")
    @classmethod
    def coerce_ids(cls, v):
        return to_int(v)

    @field_validator("service_combo", mode="before")
    @classmethod
    def nested_combo(cls, v):
        return v if isinstance(v, (Mapping, ServiceComboRecord)) else None

    @field_validator("total_amount", mode="before")
    @classmethod
    def coerce_amount(cls, v):
        return to_amount(v)

    @field_validator("created_at", "confirmed_date", "booking_date", mode="before")
    @classmethod
    def coerce_timestamps(cls, v, info: ValidationInfo):
        return parse_timestamp(v, cls.context_tz(info))

    @field_validator("status", mode="before")
    @classmethod
    def lower_text(cls, v):
        return str(v).strip().lower() if v is not None else None

    @field_validator("payments", mode="before")
    @classmethod
    def payment_rows(cls, v):
        if not isinstance(v, (list, tuple)):
            return []
        return [p for p in v if isinstance(p, (Mapping, PaymentRecord))]

    @property
    def combo_id(self) -> Optional[int]:
        if self.service_combo_id is not None:
            return self.service_combo_id
        return self.service_combo.id if self.service_combo else None

    @property
    def host_id(self) -> Optional[int]:
        return self.service_combo.host_id if self.service_combo else None

    @property
    def revenue_date(self) -> Optional[datetime]:
        """When the booking's money counts: confirmed, else created, else booked."""
        return self.confirmed_date or self.created_at or self.booking_date


class ReviewRecord(CanonicalRecord):
    id: Optional[int] = None
    rating: Optional[float] = None
    booking_id: Optional[int] = None
    booking: Optional[BookingRecord] = None
    comment: Optional[str] = None
    reply: Optional[str] = None

    @field_validator("id", "booking_id", mode="before")
    @classmethod
    def coerce_ids(cls, v):
        return to_int(v)

    @field_validator("rating", mode="before")
    @classmethod
    def coerce_rating(cls, v):
        if v is None or isinstance(v, bool):
            return None
        try:
            return float(v)
        except (TypeError, ValueError):
            return None

    @field_validator("comment", mode="before")
    @classmethod
    def coerce_comment(cls, v):
        return to_text(v)

    @field_validator("booking", mode="before")
    @classmethod
    def nested_booking(cls, v):
        return v if isinstance(v, (Mapping, BookingRecord)) else None

    @field_validator("reply", mode="before")
    @classmethod
    def flatten_reply(cls, v):
        # replies sometimes arrive as an object rather than text
        if isinstance(v, Mapping):
            v = v.get("Content") or v.get("content") or v.get("Comment") or v.get("comment")
        return str(v) if v is not None else None
