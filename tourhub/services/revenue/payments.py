# tourhub/services/revenue/payments.py
from typing import Iterable, List

from tourhub.schemas.records import BookingRecord, PaymentRecord

PAID_STATUSES = frozenset({"confirmed", "completed"})


def is_paid(booking: BookingRecord) -> bool:
    return booking.status in PAID_STATUSES


def resolve_payments(booking: BookingRecord) -> List[PaymentRecord]:
    """Payments a booking contributes to the revenue stream.

    Explicit payment rows win. Otherwise a confirmed/completed booking gets
    one synthesized successful payment for its total amount; the upstream
    API does not always include the payments collection.
    """
    if booking.payments:
        return list(booking.payments)
    if not is_paid(booking):
        return []
    return [
        PaymentRecord(
            id=booking.id,
            booking_id=booking.id,
            amount=booking.total_amount,
            payment_date=booking.revenue_date,
            created_at=booking.created_at or booking.booking_date,
            status="success",
            method="booking",
            synthesized=True,
        )
    ]


def payment_stream(bookings: Iterable[BookingRecord]) -> List[PaymentRecord]:
    """Successful payments, explicit and synthesized, across all bookings."""
    return [
        payment
        for booking in bookings
        for payment in resolve_payments(booking)
        if payment.is_success
    ]
