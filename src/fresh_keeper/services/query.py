"""Filtering, ordering and reordering over materialized inventory lists."""

from collections.abc import Sequence
from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum
from typing import TypeVar
from uuid import UUID

from fresh_keeper.domain.inventory import (
    FoodCategory,
    FoodItem,
    InventorySummary,
    StorageLocation,
)

Sortable = TypeVar("Sortable", StorageLocation, FoodCategory)


class StatusFilter(str, Enum):
    """Expiry-based filter selectable in the inventory view."""

    ALL = "all"
    EXPIRING_SOON = "expiringSoon"
    EXPIRED = "expired"


@dataclass(frozen=True)
class FilterCriteria:
    """Filters combined with logical AND."""

    status: StatusFilter = StatusFilter.ALL
    location_id: UUID | None = None
    category_id: UUID | None = None
    search_text: str | None = None


def filter_items(
    items: Sequence[FoodItem], criteria: FilterCriteria, now: datetime
) -> list[FoodItem]:
    """Return items newest first, keeping only those matching every filter."""
    ordered = sorted(items, key=lambda item: item.date_added, reverse=True)
    needle = (criteria.search_text or "").strip().casefold()
    return [
        item for item in ordered if _matches(item, criteria, needle, now)
    ]


def _matches(
    item: FoodItem, criteria: FilterCriteria, needle: str, now: datetime
) -> bool:
    if criteria.status == StatusFilter.EXPIRING_SOON and not (
        item.is_expiring_soon(now) and not item.is_expired(now)
    ):
        return False
    if criteria.status == StatusFilter.EXPIRED and not item.is_expired(now):
        return False
    if (
        criteria.location_id is not None
        and item.storage_location_id != criteria.location_id
    ):
        return False
    if criteria.category_id is not None and item.category_id != criteria.category_id:
        return False
    return not needle or needle in item.name.casefold()


def summarize(items: Sequence[FoodItem], now: datetime) -> InventorySummary:
    """Count total, expiring-soon and expired items."""
    expired = sum(1 for item in items if item.is_expired(now))
    expiring = sum(
        1 for item in items if item.is_expiring_soon(now) and not item.is_expired(now)
    )
    return InventorySummary(total=len(items), expiring_soon=expiring, expired=expired)


def sort_by_order(entries: Sequence[Sortable]) -> list[Sortable]:
    """Return entries in display order."""
    return sorted(entries, key=lambda entry: entry.sort_order)


def move(entries: Sequence[Sortable], source: int, destination: int) -> list[Sortable]:
    """Move one entry so it lands at ``destination`` and renumber the list.

    The result carries a gapless ``sort_order`` of 0..n-1 matching list order.
    """
    size = len(entries)
    if not 0 <= source < size or not 0 <= destination < size:
        raise ValueError(
            f"Cannot move index {source} to {destination} in a list of {size}"
        )
    reordered = list(entries)
    reordered.insert(destination, reordered.pop(source))
    return renumber(reordered)


def renumber(entries: Sequence[Sortable]) -> list[Sortable]:
    """Assign sort_order equal to each entry's position."""
    return [
        entry if entry.sort_order == index else replace(entry, sort_order=index)
        for index, entry in enumerate(entries)
    ]
