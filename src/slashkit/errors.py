from __future__ import annotations

from typing import Optional


class SlashkitError(Exception):
    """Base slashkit error."""

    def __init__(self, message: str, *, user_message: Optional[str] = None) -> None:
        super().__init__(message)
        self.user_message = user_message


class ValidationError(SlashkitError, ValueError):
    """A builder argument or structural limit was violated."""


class DecodingError(SlashkitError, ValueError):
    """A wire record could not be decoded."""


class ConfigError(SlashkitError):
    """slashkit configuration error."""


class InteractionAlreadyRespondedError(SlashkitError):
    """A terminal response was already created for this interaction."""


class TransportError(SlashkitError):
    """Submitting a request to the platform failed."""

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        retry_after: Optional[float] = None,
        user_message: Optional[str] = None,
    ) -> None:
        if user_message is None:
            user_message = "Discord API error. Please try again later."
        super().__init__(message, user_message=user_message)
        self.status_code = status_code
        self.retry_after = retry_after


class TransientTransportError(TransportError):
    """Retryable failure (rate limits, server errors, network issues) that ran out of retries."""


class PermanentTransportError(TransportError):
    """Non-retryable failure (authentication, rejected request)."""
