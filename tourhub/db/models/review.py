# tourhub/db/models/review.py
from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, Float, func
from sqlalchemy.orm import relationship
from tourhub.db.base import Base


class Review(Base):
    __tablename__ = "reviews"

    id = Column(Integer, primary_key=True, index=True)
    booking_id = Column(Integer, ForeignKey("bookings.id", ondelete="CASCADE"), nullable=False)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)

    rating = Column(Float, nullable=True)   # 0..5, 0 is a real rating
    comment = Column(String, nullable=True)
    reply = Column(String, nullable=True)   # host's single reply

    created_at = Column(DateTime, server_default=func.now())

    # relationships (helpful for response shaping)
    booking = relationship("Booking", foreign_keys=[booking_id], lazy="selectin")
    user = relationship("User", foreign_keys=[user_id])
