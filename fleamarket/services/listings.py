"""Listing storage backends.

Both backends scope every single-item operation to the owning user. A
listing that exists but belongs to someone else is reported exactly like a
missing one.
"""

import logging
import threading
from collections.abc import Iterable
from typing import Any, Protocol

from sqlalchemy.orm import Session

from fleamarket.errors import ListingNotFoundError
from fleamarket.models.item import Item

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = frozenset({"name", "price", "description", "sold_out"})


class ListingRepository(Protocol):
    """Capability shared by the listing backends."""

    def create(self, attrs: dict[str, Any], owner_id: int) -> Item: ...

    def find_all(self) -> list[Item]: ...

    def find_by_id(self, item_id: int, owner_id: int) -> Item: ...

    def update(self, item_id: int, owner_id: int, changes: dict[str, Any]) -> Item: ...

    def delete(self, item_id: int, owner_id: int) -> None: ...


def _apply_changes(item: Item, changes: dict[str, Any]) -> None:
    for field, value in changes.items():
        if field not in UPDATABLE_FIELDS:
            raise ValueError(f"Unknown item field: {field}")
        setattr(item, field, value)


class SqlListingRepository:
    """Listings stored in the relational database."""

    def __init__(self, db: Session):
        self.db = db

    def create(self, attrs: dict[str, Any], owner_id: int) -> Item:
        item = Item(
            name=attrs["name"],
            price=attrs["price"],
            description=attrs.get("description") or "",
            sold_out=False,
            user_id=owner_id,
        )
        self.db.add(item)
        self.db.commit()
        self.db.refresh(item)
        logger.info(f"Created item {item.id} for user {owner_id}")
        return item

    def find_all(self) -> list[Item]:
        return self.db.query(Item).order_by(Item.id).all()

    def find_by_id(self, item_id: int, owner_id: int) -> Item:
        item = self.db.query(Item).filter(Item.id == item_id, Item.user_id == owner_id).first()
        if item is None:
            raise ListingNotFoundError()
        return item

    def update(self, item_id: int, owner_id: int, changes: dict[str, Any]) -> Item:
        item = self.find_by_id(item_id, owner_id)
        _apply_changes(item, changes)
        self.db.commit()
        self.db.refresh(item)
        logger.info(f"Updated item {item_id} ({', '.join(sorted(changes)) or 'no changes'})")
        return item

    def delete(self, item_id: int, owner_id: int) -> None:
        item = self.find_by_id(item_id, owner_id)
        self.db.delete(item)
        self.db.commit()
        logger.info(f"Deleted item {item_id} for user {owner_id}")


class InMemoryListingRepository:
    """Listings held in process memory, for demos and tests.

    One instance is shared by all request workers, so access is serialized.
    """

    def __init__(self, items: Iterable[Item] | None = None):
        self._items: list[Item] = list(items or [])
        self._next_id = max((item.id for item in self._items), default=0) + 1
        self._lock = threading.Lock()

    def create(self, attrs: dict[str, Any], owner_id: int) -> Item:
        with self._lock:
            item = Item(
                id=self._next_id,
                name=attrs["name"],
                price=attrs["price"],
                description=attrs.get("description") or "",
                sold_out=False,
                user_id=owner_id,
            )
            self._next_id += 1
            self._items.append(item)
        logger.info(f"Created in-memory item {item.id} for user {owner_id}")
        return item

    def find_all(self) -> list[Item]:
        with self._lock:
            return sorted(self._items, key=lambda item: item.id)

    def find_by_id(self, item_id: int, owner_id: int) -> Item:
        with self._lock:
            return self._find_owned(item_id, owner_id)

    def update(self, item_id: int, owner_id: int, changes: dict[str, Any]) -> Item:
        with self._lock:
            item = self._find_owned(item_id, owner_id)
            _apply_changes(item, changes)
        return item

    def delete(self, item_id: int, owner_id: int) -> None:
        with self._lock:
            item = self._find_owned(item_id, owner_id)
            self._items.remove(item)
        logger.info(f"Deleted in-memory item {item_id} for user {owner_id}")

    def _find_owned(self, item_id: int, owner_id: int) -> Item:
        for item in self._items:
            if item.id == item_id and item.user_id == owner_id:
                return item
        raise ListingNotFoundError()
