"""Text and image generation providers."""

from .config import (
    ImageProviderConfig,
    ProviderConfig,
    ProviderSettings,
    RuntimeSettings,
    TextProviderConfig,
    load_provider_config,
)
from .errors import ImageGenerationFailure, MalformedResponse, ProviderError, ProviderUnavailable
from .image import ImageProvider, KeyStatus, describe_openai_key, is_usable_openai_key
from .parsing import as_json_object, extract_json
from .text import GeminiTextProvider, OpenAITextProvider, TextProvider, create_text_provider

__all__ = [
    "ImageProviderConfig",
    "ProviderConfig",
    "ProviderSettings",
    "RuntimeSettings",
    "TextProviderConfig",
    "load_provider_config",
    "ImageGenerationFailure",
    "MalformedResponse",
    "ProviderError",
    "ProviderUnavailable",
    "ImageProvider",
    "KeyStatus",
    "describe_openai_key",
    "is_usable_openai_key",
    "extract_json",
    "as_json_object",
    "GeminiTextProvider",
    "OpenAITextProvider",
    "TextProvider",
    "create_text_provider",
]
