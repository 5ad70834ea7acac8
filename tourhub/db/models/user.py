# tourhub/db/models/user.py
from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship
from tourhub.db.base import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, unique=True, index=True, nullable=False)
    name = Column(String, nullable=False)
    role = Column(String, nullable=False, default="customer", server_default="customer")

    phone = Column(String, nullable=True)

    # One-to-many with ServiceCombo when the user is a host
    service_combos = relationship(
        "ServiceCombo",
        back_populates="host",
        lazy="selectin"
    )
