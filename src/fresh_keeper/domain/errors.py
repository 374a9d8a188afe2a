"""Errors raised by the recommendation client."""


class RecommendationError(Exception):
    """Base class for failures of a single chat-completion call."""

    message = "Recommendation request failed."

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)


class NoCredentialError(RecommendationError):
    message = "No API key configured. Please add your OpenAI API key in Settings."


class InvalidCredentialError(RecommendationError):
    message = "Invalid API key. Please check your OpenAI API key."


class ImageTooLargeError(RecommendationError):
    message = "Image is too large. Please try with a smaller image."


class InvalidRequestError(RecommendationError):
    message = "Invalid request format."


class NoContentError(RecommendationError):
    message = "No content in response from OpenAI API."


class InvalidResponseError(RecommendationError):
    message = "Invalid response from OpenAI API."


class EmptyInventoryError(RecommendationError):
    message = "Add some food to your inventory before asking for a recommendation."


class RequestFailedError(RecommendationError):
    """Non-2xx response, or no response at all when ``status_code`` is None."""

    def __init__(self, status_code: int | None, message: str | None = None) -> None:
        self.status_code = status_code
        if message is None:
            if status_code is None:
                message = "Request failed before a response was received."
            else:
                message = f"Request failed with status code: {status_code}"
        super().__init__(message)
