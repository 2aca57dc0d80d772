# Import all models here for Alembic
from waitlist_api.models.user import User
from waitlist_api.models.waitlist_entry import WaitlistEntry

__all__ = [
    "User",
    "WaitlistEntry",
]
