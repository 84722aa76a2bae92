"""Text generation providers over raw HTTP.

Each provider wraps one vendor API and exposes a single ``complete`` call for
one model. Model iteration, timeouts and fallback belong to the orchestrator.
"""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from typing import Any

import httpx

from .config import TextProviderConfig
from .errors import MalformedResponse, ProviderUnavailable
from .parsing import extract_json

_logger = logging.getLogger("ai_calls")

# Models tried after discovery
GEMINI_DISCOVERY_LIMIT = 3


class TextProvider(ABC):
    """Base class for a text generation provider.

    Usage:
        provider = GeminiTextProvider("gemini", config)
        for model in await provider.list_models():
            text = await provider.complete(prompt, model)
    """

    default_base_url: str = ""

    def __init__(
        self,
        name: str,
        config: TextProviderConfig,
        client: httpx.AsyncClient | None = None,
    ):
        self.name = name
        self.config = config
        self._http_client = client
        self._owns_client = client is None

    @property
    def api_key(self) -> str | None:
        return self.config.get_api_key()

    @property
    def is_configured(self) -> bool:
        """True when a credential is available."""
        return bool(self.api_key)

    @property
    def base_url(self) -> str:
        return (self.config.base_url or self.default_base_url).rstrip("/")

    async def _get_http_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(timeout=float(self.config.timeout or 60))
        return self._http_client

    async def close(self) -> None:
        """Close HTTP client if this provider created it."""
        if self._http_client is not None and self._owns_client:
            await self._http_client.aclose()
            self._http_client = None

    async def _request_json(
        self,
        method: str,
        url: str,
        model: str | None = None,
        **kwargs: Any,
    ) -> dict[str, Any]:
        """Send a request and decode the JSON body.

        Raises:
            ProviderUnavailable: Transport error or non-2xx status.
            MalformedResponse: Body is not a JSON object.
        """
        client = await self._get_http_client()
        try:
            response = await client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            raise ProviderUnavailable(
                f"{type(e).__name__}: {e}", provider=self.name, model=model
            ) from e

        if response.status_code >= 400:
            raise ProviderUnavailable(
                f"HTTP {response.status_code}: {response.text[:200]}",
                provider=self.name,
                model=model,
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise MalformedResponse("Response body is not JSON", self.name, model) from e
        if not isinstance(data, dict):
            raise MalformedResponse("Response body is not a JSON object", self.name, model)
        return data

    async def list_models(self) -> list[str]:
        """Models to try, in priority order."""
        return list(self.config.models)

    async def complete(
        self,
        prompt: str,
        model: str,
        system: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
        task: str | None = None,
    ) -> str:
        """Generate text with one model.

        Args:
            prompt: The user prompt.
            model: Model identifier.
            system: Optional system instruction.
            temperature: Overrides the configured temperature.
            max_tokens: Overrides the configured output limit.
            task: Task name for logging.

        Returns:
            The raw text of the first candidate.
        """
        if not self.is_configured:
            raise ProviderUnavailable("No API key configured", provider=self.name, model=model)

        temperature = self.config.temperature if temperature is None else temperature
        max_tokens = max_tokens or self.config.max_output_tokens

        _logger.info(
            f"AI_REQUEST | provider:{self.name} | model:{model} | task:{task}\n"
            f"--- SYSTEM ---\n{system or '(none)'}\n"
            f"--- PROMPT ---\n{prompt}\n"
            f"--- END REQUEST ---"
        )
        start_time = time.time()

        result = await self._complete(prompt, model, system, temperature, max_tokens)

        duration = time.time() - start_time
        _logger.info(
            f"AI_RESPONSE | provider:{self.name} | model:{model} | "
            f"task:{task} | duration:{duration:.2f}s\n"
            f"--- RESPONSE ---\n{result}\n"
            f"--- END RESPONSE ---"
        )
        return result

    async def complete_json(self, prompt: str, model: str, **kwargs: Any) -> Any:
        """Generate and parse a JSON value."""
        text = await self.complete(prompt, model, **kwargs)
        try:
            return extract_json(text)
        except MalformedResponse as e:
            e.provider, e.model = self.name, model
            raise

    @abstractmethod
    async def _complete(
        self,
        prompt: str,
        model: str,
        system: str | None,
        temperature: float,
        max_tokens: int,
    ) -> str:
        """Vendor-specific request."""


class GeminiTextProvider(TextProvider):
    """Google Gemini ``generateContent`` API."""

    default_base_url = "https://generativelanguage.googleapis.com/v1beta"

    async def list_models(self) -> list[str]:
        """Configured models, or discovered ones when ``discover_models`` is on."""
        configured = list(self.config.models)
        if not self.config.discover_models or not self.is_configured:
            return configured

        try:
            data = await self._request_json(
                "GET", f"{self.base_url}/models", params={"key": self.api_key}
            )
        except (ProviderUnavailable, MalformedResponse) as e:
            _logger.debug(f"Gemini model discovery failed: {e}")
            return configured

        discovered = [
            str(item.get("name", "")).replace("models/", "")
            for item in data.get("models") or []
            if isinstance(item, dict)
            and "generateContent" in (item.get("supportedGenerationMethods") or [])
        ]
        discovered = [name for name in discovered if name]
        if not discovered:
            return configured

        _logger.info(f"Gemini models discovered: {discovered[:GEMINI_DISCOVERY_LIMIT]}")
        return discovered[:GEMINI_DISCOVERY_LIMIT]

    async def _complete(
        self,
        prompt: str,
        model: str,
        system: str | None,
        temperature: float,
        max_tokens: int,
    ) -> str:
        payload: dict[str, Any] = {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": {"temperature": temperature, "maxOutputTokens": max_tokens},
        }
        if system:
            payload["systemInstruction"] = {"parts": [{"text": system}]}

        data = await self._request_json(
            "POST",
            f"{self.base_url}/models/{model}:generateContent",
            model=model,
            params={"key": self.api_key},
            json=payload,
        )
        try:
            return data["candidates"][0]["content"]["parts"][0]["text"] or ""
        except (KeyError, IndexError, TypeError) as e:
            raise MalformedResponse("No candidate text in response", self.name, model) from e


class OpenAITextProvider(TextProvider):
    """OpenAI chat completions API in JSON mode."""

    default_base_url = "https://api.openai.com/v1"

    async def _complete(
        self,
        prompt: str,
        model: str,
        system: str | None,
        temperature: float,
        max_tokens: int,
    ) -> str:
        messages = []
        if system:
            messages.append({"role": "system", "content": system})
        messages.append({"role": "user", "content": prompt})

        data = await self._request_json(
            "POST",
            f"{self.base_url}/chat/completions",
            model=model,
            headers={"Authorization": f"Bearer {self.api_key}"},
            json={
                "model": model,
                "messages": messages,
                "response_format": {"type": "json_object"},
                "temperature": temperature,
                "max_tokens": max_tokens,
            },
        )
        try:
            return data["choices"][0]["message"]["content"] or ""
        except (KeyError, IndexError, TypeError) as e:
            raise MalformedResponse("No message content in response", self.name, model) from e


_PROVIDER_TYPES: dict[str, type[TextProvider]] = {
    "gemini": GeminiTextProvider,
    "openai": OpenAITextProvider,
}


def create_text_provider(
    name: str,
    config: TextProviderConfig,
    client: httpx.AsyncClient | None = None,
) -> TextProvider:
    """Create the provider class matching ``config.type``."""
    return _PROVIDER_TYPES[config.type](name, config, client)
