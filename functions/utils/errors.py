"""Exception types shared by the generation client, proxy and session."""

from __future__ import annotations


class GenerationError(Exception):
    """Base exception for anything that prevents a generation from completing."""


class InputValidationError(GenerationError):
    """Request rejected locally before any network call."""


class ServiceError(GenerationError):
    """Generation endpoint unreachable or answered with a non-2xx status."""

    def __init__(self, message: str, *, status_code: int | None = None, details: str | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = details


class RateLimitError(ServiceError):
    """Upstream quota / rate limit exhausted (HTTP 429). Retrying later may succeed."""


class DesignParseError(GenerationError):
    """Design payload could not be parsed or does not match the DesignConfig schema."""


class LLMCallError(GenerationError):
    """Provider call failed after retries."""


class UpstreamRateLimitError(LLMCallError):
    """Provider reported quota / rate exhaustion."""
