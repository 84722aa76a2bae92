"""Content generation orchestrator.

Runs an ordered list of generation strategies until one succeeds:

    primary provider (each model in order) -> secondary provider -> extractive

Calls are strictly sequential and every model attempt has its own timeout.
The extractive strategy does no I/O, so the chain as a whole cannot fail.

Usage:
    orchestrator = ContentGenerationOrchestrator.from_config(load_provider_config())
    outcome = await orchestrator.generate_with_report(article, options)
    print(outcome.strategy, outcome.model, len(outcome.failed_attempts))
"""

from __future__ import annotations

import asyncio
import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

import httpx
from pydantic import ValidationError

from ..constants import AI_TIMEOUT_SECONDS, Failure, Result, Success
from ..providers import (
    MalformedResponse,
    ProviderConfig,
    ProviderError,
    TextProvider,
    as_json_object,
    create_text_provider,
)
from .fallback import build_extractive_result, empty_article_result
from .models import ArticleRecord, GenerationOptions, GenerationReport, RawGenerationResult
from .prompts import SYSTEM_PROMPT, build_generation_prompt

_logger = logging.getLogger("ai_calls")


@dataclass
class ProviderAttempt:
    """Record of a single model attempt."""
    provider: str
    model: str | None
    success: bool
    error: str | None = None
    duration_ms: int = 0


@dataclass(frozen=True)
class StrategyOutput:
    """Value carried by a successful strategy attempt."""
    result: RawGenerationResult
    model: str | None = None


@dataclass
class GenerationOutcome:
    """Result of the whole chain."""
    result: RawGenerationResult
    strategy: str
    model: str | None = None
    attempts: list[ProviderAttempt] = field(default_factory=list)

    @property
    def failed_attempts(self) -> list[ProviderAttempt]:
        return [attempt for attempt in self.attempts if not attempt.success]

    def to_report(self) -> GenerationReport:
        return GenerationReport(
            strategy=self.strategy,
            model=self.model,
            failed_attempts=[
                f"{attempt.provider}/{attempt.model}: {attempt.error}"
                for attempt in self.failed_attempts
            ],
        )


def parse_generation_result(data: Any) -> RawGenerationResult:
    """Validate decoded provider JSON as a RawGenerationResult.

    Raises:
        MalformedResponse: Not an object, or the fields do not validate.
    """
    try:
        return RawGenerationResult.model_validate(as_json_object(data))
    except ValidationError as e:
        raise MalformedResponse(f"Response does not match schema ({e.error_count()} errors)") from e


# =============================================================================
# STRATEGIES
# =============================================================================


class GenerationStrategy(ABC):
    """One step of the chain: ``attempt(article, options) -> Success | Failure``."""

    name: str = "strategy"

    @abstractmethod
    async def attempt(
        self,
        article: ArticleRecord,
        options: GenerationOptions,
        attempts: list[ProviderAttempt],
    ) -> Result[StrategyOutput]:
        """Try to produce card copy. Failed model attempts go into ``attempts``."""

    async def close(self) -> None:
        return None


class ProviderStrategy(GenerationStrategy):
    """Try each model of one text provider in priority order."""

    def __init__(self, provider: TextProvider, timeout: float = AI_TIMEOUT_SECONDS):
        self.provider = provider
        self.timeout = timeout
        self.name = provider.name

    async def _models(self) -> list[str]:
        try:
            return await asyncio.wait_for(self.provider.list_models(), timeout=self.timeout)
        except Exception as e:
            _logger.warning(f"AI_MODELS | provider:{self.name} | error:{e}")
            return list(self.provider.config.models)

    async def attempt(
        self,
        article: ArticleRecord,
        options: GenerationOptions,
        attempts: list[ProviderAttempt],
    ) -> Result[StrategyOutput]:
        if not self.provider.is_configured:
            return Failure(f"{self.name}: no API key configured")

        models = await self._models()
        if not models:
            return Failure(f"{self.name}: no models configured")

        prompt = build_generation_prompt(article, options)
        for model in models:
            start_time = time.time()
            try:
                data = await asyncio.wait_for(
                    self.provider.complete_json(
                        prompt, model, system=SYSTEM_PROMPT, task="card_copy"
                    ),
                    timeout=self.timeout,
                )
                result = parse_generation_result(data)
            except asyncio.TimeoutError:
                error = f"timeout after {self.timeout:.0f}s"
            except ProviderError as e:
                error = f"{type(e).__name__}: {e}"
            except Exception as e:
                error = f"unexpected {type(e).__name__}: {e}"
            else:
                attempts.append(ProviderAttempt(
                    provider=self.name,
                    model=model,
                    success=True,
                    duration_ms=int((time.time() - start_time) * 1000),
                ))
                return Success(StrategyOutput(result=result, model=model))

            attempts.append(ProviderAttempt(
                provider=self.name,
                model=model,
                success=False,
                error=error,
                duration_ms=int((time.time() - start_time) * 1000),
            ))
            _logger.warning(f"AI_FAILED | provider:{self.name} | model:{model} | error:{error}")

        return Failure(f"{self.name}: all {len(models)} models failed", {"models": models})

    async def close(self) -> None:
        await self.provider.close()


class ExtractiveFallbackStrategy(GenerationStrategy):
    """Pure strategy built from the article text. Always succeeds."""

    name = "extractive"

    async def attempt(
        self,
        article: ArticleRecord,
        options: GenerationOptions,
        attempts: list[ProviderAttempt],
    ) -> Result[StrategyOutput]:
        return Success(StrategyOutput(result=build_extractive_result(article)))


# =============================================================================
# ORCHESTRATOR
# =============================================================================


class ContentGenerationOrchestrator:
    """Produce a RawGenerationResult for an article. Never raises."""

    def __init__(
        self,
        strategies: list[GenerationStrategy] | None = None,
        fallback_on_error: bool = True,
    ):
        strategies = list(strategies or [])
        if not strategies or not isinstance(strategies[-1], ExtractiveFallbackStrategy):
            strategies.append(ExtractiveFallbackStrategy())
        self.strategies = strategies
        self.fallback_on_error = fallback_on_error

    @classmethod
    def from_config(
        cls,
        config: ProviderConfig,
        client: httpx.AsyncClient | None = None,
    ) -> "ContentGenerationOrchestrator":
        """Build provider strategies in configured priority order."""
        strategies: list[GenerationStrategy] = [
            ProviderStrategy(
                create_text_provider(name, provider_config, client),
                timeout=config.timeout_for(provider_config),
            )
            for name, provider_config in config.get_enabled_text_providers()
        ]
        return cls(strategies, fallback_on_error=config.provider_settings.fallback_on_error)

    @property
    def providers(self) -> list[TextProvider]:
        """Text providers in chain order."""
        return [s.provider for s in self.strategies if isinstance(s, ProviderStrategy)]

    async def generate_with_report(
        self,
        article: ArticleRecord,
        options: GenerationOptions | None = None,
    ) -> GenerationOutcome:
        """Run the chain and report which strategy produced the result."""
        options = options or GenerationOptions()
        attempts: list[ProviderAttempt] = []

        if article.is_empty:
            _logger.warning("Empty article: using placeholder summary")
            return GenerationOutcome(empty_article_result(), ExtractiveFallbackStrategy.name)

        for strategy in self.strategies:
            try:
                outcome = await strategy.attempt(article, options, attempts)
            except Exception as e:
                _logger.warning(f"Strategy {strategy.name} raised {type(e).__name__}: {e}")
                outcome = Failure(str(e))

            if outcome.is_success():
                value: StrategyOutput = outcome.value
                _logger.info(
                    f"Card copy generated | strategy:{strategy.name} | model:{value.model} | "
                    f"failed_attempts:{sum(1 for a in attempts if not a.success)}"
                )
                return GenerationOutcome(value.result, strategy.name, value.model, attempts)

            _logger.info(f"Strategy {strategy.name} failed: {outcome.error}")
            if not self.fallback_on_error and isinstance(strategy, ProviderStrategy):
                break

        return GenerationOutcome(
            build_extractive_result(article), ExtractiveFallbackStrategy.name, None, attempts
        )

    async def generate(
        self,
        article: ArticleRecord,
        options: GenerationOptions | None = None,
    ) -> RawGenerationResult:
        """Run the chain and return only the result."""
        outcome = await self.generate_with_report(article, options)
        return outcome.result

    async def close(self) -> None:
        for strategy in self.strategies:
            await strategy.close()

    async def __aenter__(self) -> "ContentGenerationOrchestrator":
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()
