"""OpenAI Chat Completions client."""

import json
import logging
from dataclasses import dataclass

import httpx
from openai import (
    APIConnectionError,
    APIStatusError,
    APITimeoutError,
    AsyncOpenAI,
    AuthenticationError,
)

from fresh_keeper.domain.errors import (
    InvalidCredentialError,
    InvalidResponseError,
    RequestFailedError,
)
from fresh_keeper.services.chat import ChatClient

_logger = logging.getLogger(__name__)


@dataclass
class OpenAIChatClient(ChatClient):
    """Chat client backed by the OpenAI SDK, one request per call."""

    base_url: str
    timeout_seconds: float
    http_client: httpx.AsyncClient

    @classmethod
    def create(cls, base_url: str, timeout_seconds: float) -> "OpenAIChatClient":
        """Create a chat client with a managed httpx session."""
        return cls(
            base_url=base_url,
            timeout_seconds=timeout_seconds,
            http_client=httpx.AsyncClient(),
        )

    async def complete(
        self, *, api_key: str, payload: dict[str, object]
    ) -> dict[str, object]:
        """POST the payload and return the raw response envelope."""
        client = AsyncOpenAI(
            api_key=api_key,
            base_url=self.base_url,
            timeout=self.timeout_seconds,
            max_retries=0,
            http_client=self.http_client,
        )
        try:
            raw = await client.chat.completions.with_raw_response.create(**payload)
        except AuthenticationError as exc:
            raise InvalidCredentialError() from exc
        except APIStatusError as exc:
            _logger.warning(
                "Chat completion failed: status=%s body=%s",
                exc.status_code,
                exc.body,
            )
            raise RequestFailedError(exc.status_code) from exc
        except APITimeoutError as exc:
            raise RequestFailedError(
                None, f"Request timed out after {self.timeout_seconds:g} seconds."
            ) from exc
        except APIConnectionError as exc:
            raise RequestFailedError(None) from exc

        try:
            envelope = json.loads(raw.text)
        except ValueError as exc:
            raise InvalidResponseError() from exc
        if not isinstance(envelope, dict):
            raise InvalidResponseError()
        return envelope

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
