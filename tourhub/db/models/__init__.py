# tourhub/db/models/__init__.py
# Import every model so relationship() string targets resolve on first use.
from tourhub.db.models.user import User
from tourhub.db.models.service_combo import ServiceCombo
from tourhub.db.models.booking import Booking
from tourhub.db.models.payment import Payment
from tourhub.db.models.review import Review

__all__ = ["User", "ServiceCombo", "Booking", "Payment", "Review"]
