"""Image generation provider (OpenAI Images API)."""

from __future__ import annotations

import logging
import os
import re
import time
from typing import Any

import httpx
from pydantic import BaseModel

from ..constants import IMAGE_PROMPT_MAX_LENGTH
from .config import ImageProviderConfig
from .errors import ImageGenerationFailure

_logger = logging.getLogger("ai_calls")

_PLACEHOLDER_KEY = re.compile(r"^(sk-)?your[-_]?openai|sk-your|sk-proj-your", re.IGNORECASE)


# =============================================================================
# CREDENTIAL CHECKS
# =============================================================================


def is_placeholder_openai_key(key: str | None) -> bool:
    return bool(_PLACEHOLDER_KEY.search((key or "").strip()))


def is_usable_openai_key(key: str | None) -> bool:
    """True when the key is set, not a sample value, and looks like an OpenAI key."""
    key = (key or "").strip()
    return bool(key) and not is_placeholder_openai_key(key) and key.startswith("sk-")


class KeyStatus(BaseModel):
    """Result of inspecting the OpenAI credential."""

    is_set: bool
    is_placeholder: bool
    valid_format: bool
    image_generation_available: bool
    message: str


def describe_openai_key(key: str | None = None) -> KeyStatus:
    """Report whether the OpenAI key can be used for image generation.

    Args:
        key: Key to inspect. Defaults to ``OPENAI_API_KEY``.
    """
    if key is None:
        key = os.getenv("OPENAI_API_KEY", "")
    key = key.strip()
    is_set = bool(key)
    placeholder = is_set and is_placeholder_openai_key(key)
    valid = is_usable_openai_key(key)

    if not is_set:
        message = "OPENAI_API_KEY가 설정되지 않았습니다. 기사에서 추출한 이미지만 사용됩니다."
    elif placeholder:
        message = "OPENAI_API_KEY가 예시 값입니다. 실제 키로 교체하세요."
    elif not valid:
        message = "OPENAI_API_KEY 형식을 확인하세요. (sk- 또는 sk-proj- 로 시작)"
    else:
        message = "AI 이미지 생성(DALL-E 3) 사용 가능합니다."

    return KeyStatus(
        is_set=is_set,
        is_placeholder=placeholder,
        valid_format=valid,
        image_generation_available=valid,
        message=message,
    )


# =============================================================================
# PROVIDER
# =============================================================================


class ImageProvider:
    """OpenAI image generation, one image URL per call.

    Requests are never retried here. A failed slot is left for pool-fill.

    Usage:
        provider = ImageProvider(config.image_provider)
        if provider.is_available:
            url = await provider.generate("News context scene, documentary style: ...")
    """

    default_base_url = "https://api.openai.com/v1"

    def __init__(
        self,
        config: ImageProviderConfig | None = None,
        client: httpx.AsyncClient | None = None,
    ):
        self.config = config or ImageProviderConfig()
        self._http_client = client
        self._owns_client = client is None
        self._total_calls = 0

    @property
    def api_key(self) -> str | None:
        return self.config.get_api_key()

    @property
    def is_available(self) -> bool:
        """True when enabled and the credential is usable."""
        return self.config.enabled and is_usable_openai_key(self.api_key)

    @property
    def base_url(self) -> str:
        return (self.config.base_url or self.default_base_url).rstrip("/")

    async def _get_http_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(timeout=float(self.config.timeout))
        return self._http_client

    async def close(self) -> None:
        """Close HTTP client if this provider created it."""
        if self._http_client is not None and self._owns_client:
            await self._http_client.aclose()
            self._http_client = None

    async def generate(self, prompt: str, slot: int | None = None) -> str:
        """Generate one image and return its URL.

        Raises:
            ImageGenerationFailure: On any transport, status or payload problem.
        """
        if not self.is_available:
            raise ImageGenerationFailure("Image generation is not available", "openai", self.config.model)

        payload: dict[str, Any] = {
            "model": self.config.model,
            "prompt": prompt[:IMAGE_PROMPT_MAX_LENGTH],
            "n": 1,
            **self.config.settings,
        }
        _logger.info(
            f"IMAGE_REQUEST | provider:openai | model:{self.config.model} | slot:{slot}\n"
            f"--- PROMPT ---\n{payload['prompt']}\n--- END REQUEST ---"
        )
        start_time = time.time()

        client = await self._get_http_client()
        try:
            response = await client.post(
                f"{self.base_url}/images/generations",
                headers={"Authorization": f"Bearer {self.api_key}"},
                json=payload,
            )
        except httpx.HTTPError as e:
            raise ImageGenerationFailure(f"{type(e).__name__}: {e}", "openai", self.config.model) from e

        if response.status_code >= 400:
            raise ImageGenerationFailure(
                self._describe_error(response), "openai", self.config.model
            )

        try:
            url = response.json()["data"][0]["url"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise ImageGenerationFailure("No image URL in response", "openai", self.config.model) from e
        if not url:
            raise ImageGenerationFailure("Empty image URL in response", "openai", self.config.model)

        self._total_calls += 1
        _logger.info(
            f"IMAGE_RESPONSE | provider:openai | model:{self.config.model} | slot:{slot} | "
            f"duration:{time.time() - start_time:.2f}s | url:{url}"
        )
        return url

    @staticmethod
    def _describe_error(response: httpx.Response) -> str:
        status = response.status_code
        if status == 401:
            return "HTTP 401: API key is invalid or expired"
        if status == 429:
            return "HTTP 429: rate limit or quota exceeded"
        try:
            error = response.json().get("error") or {}
            detail = error.get("message") or error.get("code") or ""
        except (ValueError, AttributeError):
            detail = response.text[:200]
        return f"HTTP {status}: {detail}"

    @property
    def total_calls(self) -> int:
        return self._total_calls
