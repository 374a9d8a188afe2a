"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import Client, create_client

from fresh_keeper.adapters.openai_chat_client import OpenAIChatClient
from fresh_keeper.adapters.supabase_inventory_repository import (
    SupabaseInventoryRepository,
)
from fresh_keeper.adapters.supabase_photo_store import SupabasePhotoStore
from fresh_keeper.adapters.supabase_recipe_repository import SupabaseRecipeRepository
from fresh_keeper.adapters.supabase_secret_store import SupabaseSecretStore
from fresh_keeper.config import Settings
from fresh_keeper.services.chat import ChatService
from fresh_keeper.services.cookbook import CookbookService
from fresh_keeper.services.credentials import CredentialService
from fresh_keeper.services.dinner import DinnerService
from fresh_keeper.services.inventory import InventoryService
from fresh_keeper.services.vision import FoodVisionService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    inventory_service: InventoryService
    credential_service: CredentialService
    cookbook_service: CookbookService
    vision_service: FoodVisionService
    dinner_service: DinnerService
    close_resources: Callable[[], Awaitable[None]]


def build_container(
    settings: Settings | None = None, supabase_client: Client | None = None
) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    client = supabase_client or create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    inventory_service = InventoryService(
        repository=SupabaseInventoryRepository(client),
        photos=SupabasePhotoStore(client, bucket=resolved_settings.photo_bucket),
    )
    credential_service = CredentialService(
        store=SupabaseSecretStore(client),
        namespace=resolved_settings.secret_namespace,
        default_model=resolved_settings.default_model,
    )
    cookbook_service = CookbookService(
        repository=SupabaseRecipeRepository(client),
        recent_limit=resolved_settings.recent_recipe_limit,
        timezone=resolved_settings.timezone,
    )
    chat_client = OpenAIChatClient.create(
        base_url=resolved_settings.openai_base_url,
        timeout_seconds=resolved_settings.openai_timeout_seconds,
    )
    chat_service = ChatService(client=chat_client, credentials=credential_service)
    vision_service = FoodVisionService(
        chat=chat_service,
        max_dimension=resolved_settings.image_max_dimension,
        jpeg_quality=resolved_settings.image_jpeg_quality,
        max_bytes=resolved_settings.image_max_bytes,
    )
    dinner_service = DinnerService(chat=chat_service, cookbook=cookbook_service)

    async def close_resources() -> None:
        await chat_client.close()

    return AppContainer(
        settings=resolved_settings,
        inventory_service=inventory_service,
        credential_service=credential_service,
        cookbook_service=cookbook_service,
        vision_service=vision_service,
        dinner_service=dinner_service,
        close_resources=close_resources,
    )
