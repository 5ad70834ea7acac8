# tourhub/db/models/service_combo.py

from sqlalchemy import Column, DateTime, Integer, String, ForeignKey, Float, func
from sqlalchemy.orm import relationship
from tourhub.db.base import Base


class ServiceCombo(Base):
    __tablename__ = "service_combos"

    id = Column(Integer, primary_key=True, index=True)

    # Foreign keys
    host_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)

    # Basic details
    name = Column(String, nullable=False)
    description = Column(String, nullable=True)
    image = Column(String, nullable=True)  # file name or absolute URL

    # Pricing
    price = Column(Float, nullable=False, default=0)

    # Status: pending / approved / rejected (moderated elsewhere)
    status = Column(String, nullable=False, default="approved")

    # Timestamps
    created_at = Column(DateTime, server_default=func.now())

    # Relationships
    host = relationship("User", back_populates="service_combos")
    bookings = relationship("Booking", back_populates="service_combo", lazy="selectin")
