"""SQLAlchemy models."""

from fleamarket.models.item import Item
from fleamarket.models.user import User

__all__ = [
    "User",
    "Item",
]
