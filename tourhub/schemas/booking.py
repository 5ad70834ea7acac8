# tourhub/schemas/booking.py
from pydantic import BaseModel, Field
from datetime import datetime
from typing import List, Optional

from tourhub.schemas.service_combo import ServiceComboResponse


class PaymentResponse(BaseModel):
    id: int
    booking_id: int
    amount: float
    method: Optional[str] = None
    status: str = Field(description="success, pending or failed")
    payment_date: Optional[datetime] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


# --- RESPONSE ---
class BookingResponse(BaseModel):
    id: int
    user_id: int
    service_combo_id: int
    quantity: int
    total_amount: float
    status: str = Field(description="pending, confirmed, processing, completed, cancelled")
    booking_date: Optional[datetime] = None
    confirmed_date: Optional[datetime] = None
    created_at: Optional[datetime] = None

    service_combo: Optional[ServiceComboResponse] = None
    payments: List[PaymentResponse] = []

    class Config:
        from_attributes = True
