# tourhub/schemas/review.py
from pydantic import BaseModel
from typing import Optional
from datetime import datetime


class ReviewResponse(BaseModel):
    id: int
    booking_id: int
    user_id: int
    rating: Optional[float]
    comment: Optional[str]
    reply: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
