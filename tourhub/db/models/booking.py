# tourhub/db/models/booking.py
from sqlalchemy import Column, Integer, ForeignKey, Float, DateTime
from sqlalchemy import String
from sqlalchemy.orm import relationship
from datetime import datetime
from tourhub.db.base import Base


class Booking(Base):
    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True, index=True)

    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    service_combo_id = Column(Integer, ForeignKey("service_combos.id"), nullable=False)

    quantity = Column(Integer, nullable=False, default=1)
    total_amount = Column(Float, nullable=False, default=0)

    # pending, confirmed, processing, completed, cancelled
    status = Column(String, nullable=False, default="pending")

    booking_date = Column(DateTime, nullable=True)
    confirmed_date = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    # relationships
    user = relationship("User", foreign_keys=[user_id])
    service_combo = relationship("ServiceCombo", back_populates="bookings", lazy="selectin")
    payments = relationship("Payment", back_populates="booking", lazy="selectin")
