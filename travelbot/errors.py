"""Errors surfaced by the chat orchestrator.

Each error carries the HTTP status a caller should answer with.
"""


class ChatbotError(Exception):
    """Base class for errors surfaced to chat callers."""

    status_code: int = 500

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class QueryValidationError(ChatbotError):
    """The submitted query is empty or otherwise unusable."""

    status_code = 400


class ConfigurationError(ChatbotError):
    """The generation backend is not configured (e.g. missing API key)."""

    status_code = 500


class GatewayError(ChatbotError):
    """A generation call failed after classification and retries."""

    status_code = 500


class RateLimitError(GatewayError):
    """Backend quota or rate limit still exhausted after retrying."""

    status_code = 429


class ServiceUnavailableError(GatewayError):
    """Backend reported itself unavailable or overloaded."""

    status_code = 503


class GenerationError(GatewayError):
    """Any other backend failure."""

    status_code = 500
