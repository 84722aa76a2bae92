"""Provider error hierarchy.

Raised inside providers and caught by the orchestrator strategies or the
image allocator. None of these ever reach the pipeline caller.
"""

from __future__ import annotations


class ProviderError(Exception):
    """Base error for text and image providers."""

    def __init__(self, message: str, provider: str | None = None, model: str | None = None):
        super().__init__(message)
        self.provider = provider
        self.model = model


class ProviderUnavailable(ProviderError):
    """Network, auth or rate-limit failure on one model attempt."""

    def __init__(
        self,
        message: str,
        provider: str | None = None,
        model: str | None = None,
        status_code: int | None = None,
    ):
        super().__init__(message, provider, model)
        self.status_code = status_code


class MalformedResponse(ProviderError):
    """Response was not JSON or did not match the expected fields."""


class ImageGenerationFailure(ProviderError):
    """A single image request produced no image."""
