"""ORM models package."""

from lottery_optimizer.db.models.saved_ticket import SavedTicket

__all__ = [
    "SavedTicket",
]
