"""Inventory service for food items, storage locations and categories."""

import logging
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Protocol
from uuid import UUID, uuid4

from fresh_keeper.domain.inventory import (
    FoodCategory,
    FoodItem,
    InventorySummary,
    StorageLocation,
    default_categories,
    default_locations,
)
from fresh_keeper.services.query import (
    FilterCriteria,
    filter_items,
    move,
    sort_by_order,
    summarize,
)

_logger = logging.getLogger(__name__)


class InventoryRepository(Protocol):
    """Persistence interface for inventory entities.

    The store applies no relation rules of its own; cascade and nullify on
    delete are performed by ``InventoryService``.
    """

    def list_items(self) -> list[FoodItem]:
        """Return all food items."""

    def get_item(self, item_id: UUID) -> FoodItem | None:
        """Return a food item by id, if present."""

    def save_item(self, item: FoodItem) -> None:
        """Insert or replace a food item."""

    def delete_item(self, item_id: UUID) -> None:
        """Delete a food item."""

    def list_locations(self) -> list[StorageLocation]:
        """Return all storage locations."""

    def save_location(self, location: StorageLocation) -> None:
        """Insert or replace a storage location."""

    def delete_location(self, location_id: UUID) -> None:
        """Delete a storage location."""

    def list_categories(self) -> list[FoodCategory]:
        """Return all food categories."""

    def save_category(self, category: FoodCategory) -> None:
        """Insert or replace a food category."""

    def delete_category(self, category_id: UUID) -> None:
        """Delete a food category."""


class PhotoStore(Protocol):
    """Out-of-line storage for item photos."""

    def put(self, key: str, data: bytes) -> str:
        """Store photo bytes and return the stored path."""

    def get(self, path: str) -> bytes | None:
        """Return photo bytes for a stored path."""

    def delete(self, path: str) -> None:
        """Remove a stored photo."""


@dataclass
class InventoryService:
    """Application service for inventory CRUD and views."""

    repository: InventoryRepository
    photos: PhotoStore

    def seed_defaults(self) -> None:
        """Insert default locations and categories into empty tables."""
        if not self.repository.list_locations():
            for order, (name, icon, color) in enumerate(default_locations()):
                self.repository.save_location(
                    StorageLocation(
                        id=uuid4(),
                        name=name,
                        icon=icon,
                        color_hex=color,
                        sort_order=order,
                        is_default=True,
                    )
                )
        if not self.repository.list_categories():
            for order, (name, icon) in enumerate(default_categories()):
                self.repository.save_category(
                    FoodCategory(
                        id=uuid4(),
                        name=name,
                        icon=icon,
                        sort_order=order,
                        is_default=True,
                    )
                )

    def add_item(  # noqa: PLR0913
        self,
        *,
        name: str,
        quantity: int,
        now: datetime,
        expiry_date: datetime | None = None,
        notes: str = "",
        storage_location_id: UUID | None = None,
        category_id: UUID | None = None,
        photo: bytes | None = None,
    ) -> FoodItem:
        """Create a food item stamped with ``now`` as its added date."""
        cleaned = _require_name(name)
        _require_quantity(quantity)
        item_id = uuid4()
        photo_path = self.photos.put(str(item_id), photo) if photo else None
        item = FoodItem(
            id=item_id,
            name=cleaned,
            quantity=quantity,
            date_added=now,
            expiry_date=expiry_date,
            notes=notes,
            storage_location_id=storage_location_id,
            category_id=category_id,
            photo_path=photo_path,
        )
        self.repository.save_item(item)
        return item

    def update_item(self, item: FoodItem) -> FoodItem:
        """Persist edits to an item; the added date cannot change."""
        current = self._get_item(item.id)
        _require_quantity(item.quantity)
        updated = replace(
            item, name=_require_name(item.name), date_added=current.date_added
        )
        self.repository.save_item(updated)
        return updated

    def set_photo(self, item_id: UUID, photo: bytes | None) -> FoodItem:
        """Replace or clear an item's photo."""
        item = self._get_item(item_id)
        if item.photo_path:
            self.photos.delete(item.photo_path)
        photo_path = self.photos.put(str(item.id), photo) if photo else None
        updated = replace(item, photo_path=photo_path)
        self.repository.save_item(updated)
        return updated

    def get_photo(self, item_id: UUID) -> bytes | None:
        """Return the photo bytes for an item, if one is stored."""
        item = self._get_item(item_id)
        if item.photo_path is None:
            return None
        return self.photos.get(item.photo_path)

    def increment_quantity(self, item_id: UUID) -> FoodItem:
        """Add one unit to an item."""
        item = self._get_item(item_id)
        updated = replace(item, quantity=item.quantity + 1)
        self.repository.save_item(updated)
        return updated

    def decrement_quantity(self, item_id: UUID) -> FoodItem | None:
        """Remove one unit; the last unit deletes the item and returns None."""
        item = self._get_item(item_id)
        if item.quantity <= 1:
            self.delete_item(item_id)
            return None
        updated = replace(item, quantity=item.quantity - 1)
        self.repository.save_item(updated)
        return updated

    def delete_item(self, item_id: UUID) -> None:
        """Delete an item and its photo."""
        item = self.repository.get_item(item_id)
        if item is None:
            return
        if item.photo_path:
            self.photos.delete(item.photo_path)
        self.repository.delete_item(item_id)

    def list_items(self, criteria: FilterCriteria, now: datetime) -> list[FoodItem]:
        """Return the filtered, newest-first view of the inventory."""
        return filter_items(self.repository.list_items(), criteria, now)

    def summary(self, now: datetime) -> InventorySummary:
        """Return header counts for the whole inventory."""
        return summarize(self.repository.list_items(), now)

    def list_locations(self) -> list[StorageLocation]:
        """Return storage locations in display order."""
        return sort_by_order(self.repository.list_locations())

    def add_location(
        self, name: str, icon: str | None = None, color_hex: str | None = None
    ) -> StorageLocation:
        """Append a user-created storage location."""
        existing = self.repository.list_locations()
        location = StorageLocation(
            id=uuid4(),
            name=_require_name(name),
            sort_order=_next_sort_order(existing),
        )
        if icon:
            location = replace(location, icon=icon)
        if color_hex:
            location = replace(location, color_hex=color_hex.lstrip("#"))
        self.repository.save_location(location)
        return location

    def delete_location(self, location_id: UUID) -> int:
        """Delete a location together with every item stored in it.

        Returns the number of items removed.
        """
        removed = 0
        for item in self.repository.list_items():
            if item.storage_location_id == location_id:
                self.delete_item(item.id)
                removed += 1
        self.repository.delete_location(location_id)
        _logger.info(
            "Deleted storage location %s with %s items", location_id, removed
        )
        return removed

    def reorder_locations(self, source: int, destination: int) -> list[StorageLocation]:
        """Move a location in display order and persist the new numbering."""
        reordered = move(self.list_locations(), source, destination)
        for location in reordered:
            self.repository.save_location(location)
        return reordered

    def list_categories(self) -> list[FoodCategory]:
        """Return categories in display order."""
        return sort_by_order(self.repository.list_categories())

    def add_category(self, name: str, icon: str | None = None) -> FoodCategory:
        """Append a user-created category."""
        existing = self.repository.list_categories()
        category = FoodCategory(
            id=uuid4(),
            name=_require_name(name),
            sort_order=_next_sort_order(existing),
        )
        if icon:
            category = replace(category, icon=icon)
        self.repository.save_category(category)
        return category

    def delete_category(self, category_id: UUID) -> int:
        """Delete a category, leaving its items uncategorized.

        Returns the number of items that lost their category.
        """
        cleared = 0
        for item in self.repository.list_items():
            if item.category_id == category_id:
                self.repository.save_item(replace(item, category_id=None))
                cleared += 1
        self.repository.delete_category(category_id)
        return cleared

    def reorder_categories(self, source: int, destination: int) -> list[FoodCategory]:
        """Move a category in display order and persist the new numbering."""
        reordered = move(self.list_categories(), source, destination)
        for category in reordered:
            self.repository.save_category(category)
        return reordered

    def _get_item(self, item_id: UUID) -> FoodItem:
        item = self.repository.get_item(item_id)
        if item is None:
            raise LookupError(f"Unknown food item: {item_id}")
        return item


def _require_name(name: str) -> str:
    cleaned = name.strip()
    if not cleaned:
        raise ValueError("Name must not be empty")
    return cleaned


def _require_quantity(quantity: int) -> None:
    if quantity < 0:
        raise ValueError("Quantity must not be negative")


def _next_sort_order(entries: list[StorageLocation] | list[FoodCategory]) -> int:
    return max((entry.sort_order for entry in entries), default=-1) + 1
