"""Typed chat-completion request and response structures."""

from dataclasses import dataclass
from typing import Literal

from pydantic import BaseModel

REDACTED_IMAGE_URL = "data:image/jpeg;base64,[TRUNCATED]"


@dataclass(frozen=True)
class ModelFamily:
    """Request-parameter shape shared by a group of model identifiers."""

    prefix: str
    length_parameter: str
    supports_temperature: bool


STANDARD_FAMILY = ModelFamily(
    prefix="", length_parameter="max_tokens", supports_temperature=True
)

# Checked in order; first matching prefix wins.
MODEL_FAMILIES: tuple[ModelFamily, ...] = (
    ModelFamily(
        prefix="gpt-5",
        length_parameter="max_completion_tokens",
        supports_temperature=False,
    ),
)


def resolve_model_family(
    model_id: str, families: tuple[ModelFamily, ...] = MODEL_FAMILIES
) -> ModelFamily:
    """Return the family whose prefix matches the model id."""
    for family in families:
        if model_id.startswith(family.prefix):
            return family
    return STANDARD_FAMILY


class ImageUrl(BaseModel):
    url: str
    detail: Literal["low", "high", "auto"] = "low"


class ContentPart(BaseModel):
    """One part of a multimodal user message."""

    type: Literal["text", "image_url"]
    text: str | None = None
    image_url: ImageUrl | None = None


class ChatMessage(BaseModel):
    role: Literal["system", "user", "assistant"]
    content: str | list[ContentPart]


class ChatCompletionRequest(BaseModel):
    """Body of a chat-completion POST."""

    model: str
    messages: list[ChatMessage]
    max_tokens: int | None = None
    max_completion_tokens: int | None = None
    temperature: float | None = None

    @classmethod
    def shaped(
        cls,
        *,
        model: str,
        messages: list[ChatMessage],
        max_output_tokens: int,
        temperature: float,
        families: tuple[ModelFamily, ...] = MODEL_FAMILIES,
    ) -> "ChatCompletionRequest":
        """Build a request with the length/temperature pair the model accepts."""
        family = resolve_model_family(model, families)
        length = {family.length_parameter: max_output_tokens}
        return cls(
            model=model,
            messages=messages,
            temperature=temperature if family.supports_temperature else None,
            **length,
        )

    def to_payload(self) -> dict[str, object]:
        """Return the JSON body, omitting unset parameters."""
        return self.model_dump(mode="json", exclude_none=True)

    def redacted(self) -> dict[str, object]:
        """Return a loggable body with image payloads replaced."""
        messages = [_redact_message(message) for message in self.messages]
        return self.model_copy(update={"messages": messages}).to_payload()


def _redact_message(message: ChatMessage) -> ChatMessage:
    if isinstance(message.content, str):
        return message
    parts = [_redact_part(part) for part in message.content]
    return message.model_copy(update={"content": parts})


def _redact_part(part: ContentPart) -> ContentPart:
    if part.image_url is None:
        return part
    image_url = part.image_url.model_copy(update={"url": REDACTED_IMAGE_URL})
    return part.model_copy(update={"image_url": image_url})


class ResponseMessage(BaseModel):
    content: str | None = None


class ResponseChoice(BaseModel):
    message: ResponseMessage


class ChatCompletionResponse(BaseModel):
    """Envelope returned by the chat-completion endpoint."""

    choices: list[ResponseChoice] = []

    def first_content(self) -> str | None:
        """Return the first choice's message text, if any."""
        if not self.choices:
            return None
        return self.choices[0].message.content
