"""Shared test fixtures."""

import asyncio
import json
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from io import BytesIO
from uuid import UUID, uuid4

import pytest
from PIL import Image

from fresh_keeper.config import Settings
from fresh_keeper.domain.inventory import FoodCategory, FoodItem, StorageLocation
from fresh_keeper.domain.recipes import Recipe
from fresh_keeper.services.chat import ChatClient, ChatService
from fresh_keeper.services.cookbook import CookbookService, RecipeRepository
from fresh_keeper.services.credentials import CredentialService, SecretStore
from fresh_keeper.services.inventory import (
    InventoryRepository,
    InventoryService,
    PhotoStore,
)

NOW = datetime(2026, 10, 18, 12, 0, tzinfo=UTC)

IDENTIFICATION_JSON = json.dumps(
    {
        "foodName": "Granny Smith Apples",
        "category": "Fruits",
        "confidence": "high",
        "additionalInfo": None,
    }
)

RECOMMENDATION_JSON = json.dumps(
    {
        "dishName": "麻婆豆腐",
        "cuisine": "Sichuan/川菜",
        "ingredients": [
            {
                "foodItem": "Tofu",
                "quantity": "400g",
                "isExpiringSoon": True,
                "fromInventory": True,
            },
            {
                "foodItem": "Doubanjiang",
                "quantity": "2 tbsp",
                "isExpiringSoon": False,
                "fromInventory": False,
            },
        ],
        "recipe": ["豆腐切块", "炒香豆瓣酱", "加入豆腐炖煮"],
        "cookingTime": "25分钟",
        "difficulty": "简单",
        "videoSearchChinese": "麻婆豆腐做法",
        "videoSearchEnglish": None,
        "videoLink": None,
        "reason": "豆腐快过期了",
        "shoppingList": ["Doubanjiang"],
    },
    ensure_ascii=False,
)


def make_item(  # noqa: PLR0913
    name: str = "Milk",
    *,
    quantity: int = 1,
    added: datetime = NOW,
    expiry: datetime | None = None,
    location_id: UUID | None = None,
    category_id: UUID | None = None,
) -> FoodItem:
    return FoodItem(
        id=uuid4(),
        name=name,
        quantity=quantity,
        date_added=added,
        expiry_date=expiry,
        storage_location_id=location_id,
        category_id=category_id,
    )


def days(count: float) -> timedelta:
    return timedelta(days=count)


def image_bytes(width: int, height: int, image_format: str = "PNG") -> bytes:
    buffer = BytesIO()
    Image.new("RGB", (width, height), (200, 40, 40)).save(buffer, format=image_format)
    return buffer.getvalue()


def chat_envelope(content: str | None) -> dict[str, object]:
    return {
        "id": "chatcmpl-test",
        "object": "chat.completion",
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": content},
                "finish_reason": "stop",
            }
        ],
    }


@dataclass
class InMemoryInventoryRepository(InventoryRepository):
    """In-memory inventory repository for tests."""

    items: dict[UUID, FoodItem] = field(default_factory=dict)
    locations: dict[UUID, StorageLocation] = field(default_factory=dict)
    categories: dict[UUID, FoodCategory] = field(default_factory=dict)

    def list_items(self) -> list[FoodItem]:
        return list(self.items.values())

    def get_item(self, item_id: UUID) -> FoodItem | None:
        return self.items.get(item_id)

    def save_item(self, item: FoodItem) -> None:
        self.items[item.id] = item

    def delete_item(self, item_id: UUID) -> None:
        self.items.pop(item_id, None)

    def list_locations(self) -> list[StorageLocation]:
        return list(self.locations.values())

    def save_location(self, location: StorageLocation) -> None:
        self.locations[location.id] = location

    def delete_location(self, location_id: UUID) -> None:
        self.locations.pop(location_id, None)

    def list_categories(self) -> list[FoodCategory]:
        return list(self.categories.values())

    def save_category(self, category: FoodCategory) -> None:
        self.categories[category.id] = category

    def delete_category(self, category_id: UUID) -> None:
        self.categories.pop(category_id, None)


@dataclass
class InMemoryPhotoStore(PhotoStore):
    """In-memory photo store for tests."""

    blobs: dict[str, bytes] = field(default_factory=dict)

    def put(self, key: str, data: bytes) -> str:
        path = f"items/{key}.jpg"
        self.blobs[path] = data
        return path

    def get(self, path: str) -> bytes | None:
        return self.blobs.get(path)

    def delete(self, path: str) -> None:
        self.blobs.pop(path, None)


@dataclass
class InMemoryRecipeRepository(RecipeRepository):
    """In-memory recipe repository for tests."""

    recipes: dict[UUID, Recipe] = field(default_factory=dict)

    def list_recipes(self) -> list[Recipe]:
        return list(self.recipes.values())

    def save_recipe(self, recipe: Recipe) -> None:
        self.recipes[recipe.id] = recipe

    def delete_recipe(self, recipe_id: UUID) -> None:
        self.recipes.pop(recipe_id, None)


@dataclass
class InMemorySecretStore(SecretStore):
    """In-memory secret store for tests."""

    values: dict[tuple[str, str], str] = field(default_factory=dict)

    def get(self, namespace: str, account: str) -> str | None:
        return self.values.get((namespace, account))

    def set(self, namespace: str, account: str, value: str) -> None:
        self.values[(namespace, account)] = value

    def delete(self, namespace: str, account: str) -> None:
        self.values.pop((namespace, account), None)


@dataclass
class FakeChatClient(ChatClient):
    """Fake chat client that records requests and replays a canned reply."""

    content: str | None = IDENTIFICATION_JSON
    envelope: dict[str, object] | None = None
    error: Exception | None = None
    gate: asyncio.Event | None = None
    calls: list[dict[str, object]] = field(default_factory=list)

    async def complete(
        self, *, api_key: str, payload: dict[str, object]
    ) -> dict[str, object]:
        self.calls.append({"api_key": api_key, "payload": payload})
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        if self.envelope is not None:
            return self.envelope
        return chat_envelope(self.content)

    @property
    def last_payload(self) -> dict[str, object]:
        return self.calls[-1]["payload"]  # type: ignore[return-value]


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="service-key",
    )


@pytest.fixture
def inventory_repository() -> InMemoryInventoryRepository:
    return InMemoryInventoryRepository()


@pytest.fixture
def photo_store() -> InMemoryPhotoStore:
    return InMemoryPhotoStore()


@pytest.fixture
def inventory_service(
    inventory_repository: InMemoryInventoryRepository, photo_store: InMemoryPhotoStore
) -> InventoryService:
    return InventoryService(repository=inventory_repository, photos=photo_store)


@pytest.fixture
def recipe_repository() -> InMemoryRecipeRepository:
    return InMemoryRecipeRepository()


@pytest.fixture
def cookbook(recipe_repository: InMemoryRecipeRepository) -> CookbookService:
    return CookbookService(repository=recipe_repository, recent_limit=5)


@pytest.fixture
def secret_store() -> InMemorySecretStore:
    return InMemorySecretStore()


@pytest.fixture
def credentials(secret_store: InMemorySecretStore) -> CredentialService:
    service = CredentialService(
        store=secret_store,
        namespace="com.freshkeeper.openai",
        default_model="gpt-4.1-nano",
    )
    service.save_api_key("sk-test")
    return service


@pytest.fixture
def chat_client() -> FakeChatClient:
    return FakeChatClient()


@pytest.fixture
def chat_service(
    chat_client: FakeChatClient, credentials: CredentialService
) -> ChatService:
    return ChatService(client=chat_client, credentials=credentials)


@dataclass
class FakeSupabaseResponse:
    data: list[dict[str, object]]


@dataclass
class FakeSupabaseQuery:
    """Query builder over one in-memory table, mirroring the Supabase chain."""

    rows: list[dict[str, object]]
    action: str = "select"
    payload: dict[str, object] | None = None
    conflict_keys: tuple[str, ...] = ("id",)
    filters: list[tuple[str, object]] = field(default_factory=list)
    ordering: tuple[str, bool] | None = None
    max_rows: int | None = None

    def select(self, *_columns: str) -> "FakeSupabaseQuery":
        self.action = "select"
        return self

    def upsert(
        self, payload: dict[str, object], on_conflict: str = "id"
    ) -> "FakeSupabaseQuery":
        self.action = "upsert"
        self.payload = payload
        self.conflict_keys = tuple(on_conflict.split(","))
        return self

    def delete(self) -> "FakeSupabaseQuery":
        self.action = "delete"
        return self

    def eq(self, column: str, value: object) -> "FakeSupabaseQuery":
        self.filters.append((column, value))
        return self

    def order(self, column: str, desc: bool = False) -> "FakeSupabaseQuery":
        self.ordering = (column, desc)
        return self

    def limit(self, count: int) -> "FakeSupabaseQuery":
        self.max_rows = count
        return self

    def execute(self) -> FakeSupabaseResponse:
        if self.action == "upsert":
            payload = dict(self.payload or {})
            self.rows[:] = [
                row
                for row in self.rows
                if any(row.get(key) != payload.get(key) for key in self.conflict_keys)
            ]
            self.rows.append(payload)
            return FakeSupabaseResponse(data=[payload])

        matched = [
            row
            for row in self.rows
            if all(row.get(column) == value for column, value in self.filters)
        ]
        if self.action == "delete":
            self.rows[:] = [row for row in self.rows if row not in matched]
            return FakeSupabaseResponse(data=matched)
        if self.ordering is not None:
            column, desc = self.ordering
            matched.sort(key=lambda row: row[column], reverse=desc)
        if self.max_rows is not None:
            matched = matched[: self.max_rows]
        return FakeSupabaseResponse(data=[dict(row) for row in matched])


@dataclass
class FakeBucket:
    objects: dict[str, bytes] = field(default_factory=dict)
    last_options: dict[str, str] | None = None

    def upload(
        self, path: str, file: bytes, file_options: dict[str, str] | None = None
    ) -> None:
        self.objects[path] = file
        self.last_options = file_options

    def download(self, path: str) -> bytes:
        return self.objects[path]

    def remove(self, paths: list[str]) -> None:
        for path in paths:
            self.objects.pop(path, None)


@dataclass
class FakeStorage:
    buckets: dict[str, FakeBucket] = field(default_factory=dict)

    def from_(self, bucket: str) -> FakeBucket:
        return self.buckets.setdefault(bucket, FakeBucket())


@dataclass
class FakeSupabaseClient:
    """In-memory stand-in for ``supabase.Client`` tables and storage."""

    tables: dict[str, list[dict[str, object]]] = field(default_factory=dict)
    storage: FakeStorage = field(default_factory=FakeStorage)

    def table(self, name: str) -> FakeSupabaseQuery:
        return FakeSupabaseQuery(rows=self.tables.setdefault(name, []))
