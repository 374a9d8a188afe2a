"""Supabase repository for food items, storage locations and categories."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from fresh_keeper.domain.inventory import FoodCategory, FoodItem, StorageLocation
from fresh_keeper.services.inventory import InventoryRepository


@dataclass
class SupabaseInventoryRepository(InventoryRepository):
    """Supabase implementation of the inventory store."""

    client: Client

    def list_items(self) -> list[FoodItem]:
        """Return all food items, newest first."""
        response = (
            self.client.table("food_items")
            .select("*")
            .order("date_added", desc=True)
            .execute()
        )
        return [_to_item(row) for row in response.data or []]

    def get_item(self, item_id: UUID) -> FoodItem | None:
        """Return a food item by id."""
        response = (
            self.client.table("food_items")
            .select("*")
            .eq("id", str(item_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _to_item(response.data[0])

    def save_item(self, item: FoodItem) -> None:
        """Upsert a food item row."""
        self.client.table("food_items").upsert(
            {
                "id": str(item.id),
                "name": item.name,
                "quantity": item.quantity,
                "date_added": item.date_added.isoformat(),
                "expiry_date": item.expiry_date.isoformat()
                if item.expiry_date
                else None,
                "notes": item.notes,
                "storage_location_id": _str_or_none(item.storage_location_id),
                "category_id": _str_or_none(item.category_id),
                "photo_path": item.photo_path,
            }
        ).execute()

    def delete_item(self, item_id: UUID) -> None:
        """Delete a food item row."""
        self.client.table("food_items").delete().eq("id", str(item_id)).execute()

    def list_locations(self) -> list[StorageLocation]:
        """Return storage locations ordered for display."""
        response = (
            self.client.table("storage_locations")
            .select("*")
            .order("sort_order")
            .execute()
        )
        return [
            StorageLocation(
                id=UUID(str(row["id"])),
                name=str(row["name"]),
                icon=str(row["icon"]),
                color_hex=str(row["color_hex"]),
                sort_order=int(row["sort_order"]),
                is_default=bool(row["is_default"]),
            )
            for row in response.data or []
        ]

    def save_location(self, location: StorageLocation) -> None:
        """Upsert a storage location row."""
        self.client.table("storage_locations").upsert(
            {
                "id": str(location.id),
                "name": location.name,
                "icon": location.icon,
                "color_hex": location.color_hex,
                "sort_order": location.sort_order,
                "is_default": location.is_default,
            }
        ).execute()

    def delete_location(self, location_id: UUID) -> None:
        """Delete a storage location row."""
        self.client.table("storage_locations").delete().eq(
            "id", str(location_id)
        ).execute()

    def list_categories(self) -> list[FoodCategory]:
        """Return categories ordered for display."""
        response = (
            self.client.table("food_categories")
            .select("*")
            .order("sort_order")
            .execute()
        )
        return [
            FoodCategory(
                id=UUID(str(row["id"])),
                name=str(row["name"]),
                icon=str(row["icon"]),
                sort_order=int(row["sort_order"]),
                is_default=bool(row["is_default"]),
            )
            for row in response.data or []
        ]

    def save_category(self, category: FoodCategory) -> None:
        """Upsert a category row."""
        self.client.table("food_categories").upsert(
            {
                "id": str(category.id),
                "name": category.name,
                "icon": category.icon,
                "sort_order": category.sort_order,
                "is_default": category.is_default,
            }
        ).execute()

    def delete_category(self, category_id: UUID) -> None:
        """Delete a category row."""
        self.client.table("food_categories").delete().eq(
            "id", str(category_id)
        ).execute()


def _to_item(row: dict[str, object]) -> FoodItem:
    expiry = row.get("expiry_date")
    return FoodItem(
        id=UUID(str(row["id"])),
        name=str(row["name"]),
        quantity=int(row["quantity"]),
        date_added=datetime.fromisoformat(str(row["date_added"])),
        expiry_date=datetime.fromisoformat(str(expiry)) if expiry else None,
        notes=str(row.get("notes") or ""),
        storage_location_id=_uuid_or_none(row.get("storage_location_id")),
        category_id=_uuid_or_none(row.get("category_id")),
        photo_path=row.get("photo_path"),
    )


def _uuid_or_none(value: object) -> UUID | None:
    return UUID(str(value)) if value else None


def _str_or_none(value: UUID | None) -> str | None:
    return str(value) if value else None
