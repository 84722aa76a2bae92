"""Provider configuration loading and validation."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Literal

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..constants import AI_TIMEOUT_SECONDS, DECK_DEFAULT_SIZE, IMAGE_REQUEST_DELAY_SECONDS

# Load .env file
load_dotenv()

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent.parent / "config" / "providers.yaml"


class RuntimeSettings(BaseSettings):
    """Process-level settings read from ``CARDNEWS_*`` environment variables."""

    model_config = SettingsConfigDict(env_prefix="CARDNEWS_", env_file=".env", extra="ignore")

    provider_config: Path | None = None
    log_dir: Path = Path("logs")
    default_card_count: int = DECK_DEFAULT_SIZE


class ProviderSettings(BaseModel):
    """Global provider settings."""

    timeout_seconds: int = AI_TIMEOUT_SECONDS
    image_request_delay_seconds: float = IMAGE_REQUEST_DELAY_SECONDS
    fallback_on_error: bool = True


def _as_env_list(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    return [str(item) for item in value]


class TextProviderConfig(BaseModel):
    """Configuration for a text provider."""

    priority: int
    enabled: bool = True
    type: Literal["gemini", "openai"]
    models: list[str] = Field(default_factory=list)
    base_url: str | None = None
    api_key: str | None = None
    api_key_env: list[str] = Field(default_factory=list)
    timeout: int | None = None
    temperature: float = 0.7
    max_output_tokens: int = 1500
    discover_models: bool = False

    @field_validator("api_key_env", mode="before")
    @classmethod
    def _env_list(cls, value: Any) -> list[str]:
        return _as_env_list(value)

    def get_api_key(self) -> str | None:
        """Get API key from config or the first set environment variable."""
        if self.api_key and self.api_key.strip():
            return self.api_key.strip()
        for env_name in self.api_key_env:
            value = (os.getenv(env_name) or "").strip()
            if value:
                return value
        return None


class ImageProviderConfig(BaseModel):
    """Configuration for the image provider."""

    enabled: bool = True
    type: Literal["openai"] = "openai"
    model: str = "dall-e-3"
    base_url: str | None = None
    api_key: str | None = None
    api_key_env: str | None = "OPENAI_API_KEY"
    timeout: int = 60
    settings: dict[str, Any] = Field(
        default_factory=lambda: {"size": "1024x1024", "quality": "standard", "style": "natural"}
    )

    def get_api_key(self) -> str | None:
        """Get API key from config or environment."""
        if self.api_key and self.api_key.strip():
            return self.api_key.strip()
        if self.api_key_env:
            return (os.getenv(self.api_key_env) or "").strip() or None
        return None


def _default_text_providers() -> dict[str, TextProviderConfig]:
    return {
        "gemini": TextProviderConfig(
            priority=1,
            type="gemini",
            models=["gemini-2.5-flash", "gemini-2.0-flash", "gemini-1.5-flash"],
            api_key_env=["GEMINI_API_KEY", "GOOGLE_AI_API_KEY"],
        ),
        "openai": TextProviderConfig(
            priority=2,
            type="openai",
            models=["gpt-4o-mini"],
            api_key_env=["OPENAI_API_KEY"],
        ),
    }


class ProviderConfig(BaseModel):
    """Full provider configuration."""

    provider_settings: ProviderSettings = Field(default_factory=ProviderSettings)
    text_providers: dict[str, TextProviderConfig] = Field(default_factory=_default_text_providers)
    image_provider: ImageProviderConfig = Field(default_factory=ImageProviderConfig)

    def get_enabled_text_providers(self) -> list[tuple[str, TextProviderConfig]]:
        """Get enabled text providers sorted by priority."""
        enabled = [
            (name, config)
            for name, config in self.text_providers.items()
            if config.enabled
        ]
        return sorted(enabled, key=lambda x: x[1].priority)

    def timeout_for(self, provider_config: TextProviderConfig) -> float:
        """Per-attempt timeout for a text provider."""
        return float(provider_config.timeout or self.provider_settings.timeout_seconds)


def load_provider_config(config_path: Path | None = None) -> ProviderConfig:
    """Load provider configuration from YAML file."""
    if config_path is None:
        config_path = RuntimeSettings().provider_config or DEFAULT_CONFIG_PATH

    if not config_path.exists():
        # Return default config if file doesn't exist
        return ProviderConfig()

    with open(config_path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    return ProviderConfig(**data)
