"""Chat-completion calls shared by the vision and dinner services."""

import logging
from dataclasses import dataclass
from typing import Protocol

from pydantic import ValidationError

from fresh_keeper.domain.chat import (
    MODEL_FAMILIES,
    ChatCompletionRequest,
    ChatCompletionResponse,
    ChatMessage,
    ModelFamily,
)
from fresh_keeper.domain.errors import (
    InvalidRequestError,
    InvalidResponseError,
    NoContentError,
    NoCredentialError,
)
from fresh_keeper.services.credentials import CredentialService, ModelPurpose

_logger = logging.getLogger(__name__)


class ChatClient(Protocol):
    """Interface for the chat-completion endpoint."""

    async def complete(
        self, *, api_key: str, payload: dict[str, object]
    ) -> dict[str, object]:
        """Send a request body and return the decoded response envelope.

        Implementations raise ``InvalidCredentialError`` for 401 responses and
        ``RequestFailedError`` for other failures.
        """


@dataclass
class ChatService:
    """Builds model-specific requests and extracts the reply text."""

    client: ChatClient
    credentials: CredentialService
    families: tuple[ModelFamily, ...] = MODEL_FAMILIES

    def require_api_key(self) -> str:
        """Return the API key or fail before any network work."""
        api_key = self.credentials.get_api_key()
        if api_key is None:
            raise NoCredentialError()
        return api_key

    async def complete(
        self,
        *,
        purpose: ModelPurpose,
        messages: list[ChatMessage],
        max_output_tokens: int,
        temperature: float,
    ) -> str:
        """Send one chat request and return the first choice's text."""
        api_key = self.require_api_key()
        model = self.credentials.get_selected_model(purpose)
        request = ChatCompletionRequest.shaped(
            model=model,
            messages=messages,
            max_output_tokens=max_output_tokens,
            temperature=temperature,
            families=self.families,
        )
        try:
            payload = request.to_payload()
        except (TypeError, ValueError) as exc:
            raise InvalidRequestError() from exc
        _logger.info("Chat request (%s): %s", purpose.value, request.redacted())

        envelope = await self.client.complete(api_key=api_key, payload=payload)
        try:
            response = ChatCompletionResponse.model_validate(envelope)
        except ValidationError as exc:
            raise InvalidResponseError() from exc

        content = response.first_content()
        if not content:
            raise NoContentError()
        _logger.debug("Chat response content: %s", content)
        return content
