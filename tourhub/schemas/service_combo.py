# tourhub/schemas/service_combo.py

from pydantic import BaseModel
from typing import Optional
from datetime import datetime


# What API returns
class ServiceComboResponse(BaseModel):
    id: int
    host_id: int

    name: str
    description: Optional[str] = None
    image: Optional[str] = None
    price: float
    status: str

    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
