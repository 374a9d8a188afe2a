"""Domain models for the food inventory."""

from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from uuid import UUID

EXPIRING_SOON_DAYS = 3

_ONE_DAY = timedelta(days=1)


class ExpiryStatus(str, Enum):
    """Derived freshness of a food item."""

    FRESH = "fresh"
    EXPIRING_SOON = "expiringSoon"
    EXPIRED = "expired"


@dataclass(frozen=True)
class StorageLocation:
    """Place where food is kept, such as a fridge or freezer."""

    id: UUID
    name: str
    icon: str = "square.grid.2x2"
    color_hex: str = "4CAF50"
    sort_order: int = 0
    is_default: bool = False


@dataclass(frozen=True)
class FoodCategory:
    """User-facing grouping of food items."""

    id: UUID
    name: str
    icon: str = "📦"
    sort_order: int = 0
    is_default: bool = False


@dataclass(frozen=True)
class FoodItem:
    """A perishable item in the inventory."""

    id: UUID
    name: str
    quantity: int
    date_added: datetime
    expiry_date: datetime | None = None
    notes: str = ""
    storage_location_id: UUID | None = None
    category_id: UUID | None = None
    photo_path: str | None = None

    def days_until_expiry(self, now: datetime) -> int | None:
        """Return whole days left before expiry, floored, or None."""
        if self.expiry_date is None:
            return None
        return (self.expiry_date - now) // _ONE_DAY

    def is_expired(self, now: datetime) -> bool:
        """Return True when the expiry date is in a past day."""
        days = self.days_until_expiry(now)
        return days is not None and days < 0

    def is_expiring_soon(self, now: datetime) -> bool:
        """Return True when zero to three days remain."""
        days = self.days_until_expiry(now)
        return days is not None and 0 <= days <= EXPIRING_SOON_DAYS


@dataclass(frozen=True)
class InventorySummary:
    """Header counters for the inventory screen."""

    total: int
    expiring_soon: int
    expired: int


def expiry_status(item: FoodItem, now: datetime) -> ExpiryStatus:
    """Classify an item by its expiry date relative to ``now``."""
    if item.is_expired(now):
        return ExpiryStatus.EXPIRED
    if item.is_expiring_soon(now):
        return ExpiryStatus.EXPIRING_SOON
    return ExpiryStatus.FRESH


def default_locations() -> list[tuple[str, str, str]]:
    """Return (name, icon, color) for the seeded storage locations."""
    return [
        ("Fridge", "refrigerator", "2196F3"),
        ("Freezer", "snowflake", "00BCD4"),
    ]


def default_categories() -> list[tuple[str, str]]:
    """Return (name, icon) for the seeded food categories."""
    return [
        ("Meat", "🥩"),
        ("Vegetables", "🥬"),
        ("Fruits", "🍎"),
        ("Dairy", "🥛"),
        ("Bread", "🍞"),
        ("Beverages", "🧃"),
        ("Prepared Meals", "🍱"),
        ("Other", "📦"),
    ]
