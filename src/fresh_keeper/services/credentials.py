"""API credential and model selection management."""

from dataclasses import dataclass
from enum import Enum
from typing import Protocol

API_KEY_ACCOUNT = "api-key"
LEGACY_MODEL_ACCOUNT = "selected-model"


class ModelPurpose(str, Enum):
    """Task a model is selected for."""

    VISION = "vision"
    REASONING = "reasoning"

    @property
    def account(self) -> str:
        return f"selected-{self.value}-model"


@dataclass(frozen=True)
class ModelOption:
    """A selectable model shown in settings."""

    id: str
    name: str
    description: str


MODEL_CATALOGUE: dict[ModelPurpose, tuple[ModelOption, ...]] = {
    ModelPurpose.VISION: (
        ModelOption("gpt-4.1-nano", "GPT-4.1 Nano", "Cheapest and fast"),
        ModelOption("gpt-4o-mini", "GPT-4o Mini", "Best accuracy"),
    ),
    ModelPurpose.REASONING: (
        ModelOption("gpt-4.1-nano", "GPT-4.1 Nano", "Cheapest"),
        ModelOption("gpt-4o-mini", "GPT-4o Mini", "Reliable"),
    ),
}


class SecretStore(Protocol):
    """Secure key-value storage keyed by namespace and account."""

    def get(self, namespace: str, account: str) -> str | None:
        """Return the stored value or None when not found."""

    def set(self, namespace: str, account: str, value: str) -> None:
        """Store a value, replacing any existing one."""

    def delete(self, namespace: str, account: str) -> None:
        """Remove a value; missing values are ignored."""


@dataclass
class CredentialService:
    """Reads and writes the API key and per-purpose model selection."""

    store: SecretStore
    namespace: str
    default_model: str

    def get_api_key(self) -> str | None:
        """Return the configured API key, treating blanks as unset."""
        value = self.store.get(self.namespace, API_KEY_ACCOUNT)
        if value is None or not value.strip():
            return None
        return value.strip()

    def has_api_key(self) -> bool:
        return self.get_api_key() is not None

    def save_api_key(self, api_key: str) -> None:
        cleaned = api_key.strip()
        if not cleaned:
            raise ValueError("API key must not be empty")
        self.store.set(self.namespace, API_KEY_ACCOUNT, cleaned)

    def delete_api_key(self) -> None:
        self.store.delete(self.namespace, API_KEY_ACCOUNT)

    def get_selected_model(self, purpose: ModelPurpose = ModelPurpose.VISION) -> str:
        """Return the stored model for a purpose, or the default model."""
        return self.store.get(self.namespace, purpose.account) or self.default_model

    def save_selected_model(
        self, model_id: str, purpose: ModelPurpose = ModelPurpose.VISION
    ) -> None:
        self.store.set(self.namespace, purpose.account, model_id)

    def delete_all(self) -> None:
        """Remove the key and every stored model selection."""
        self.delete_api_key()
        for purpose in ModelPurpose:
            self.store.delete(self.namespace, purpose.account)
        self.store.delete(self.namespace, LEGACY_MODEL_ACCOUNT)


def available_models(purpose: ModelPurpose) -> tuple[ModelOption, ...]:
    """Return the selectable models for a purpose."""
    return MODEL_CATALOGUE[purpose]
