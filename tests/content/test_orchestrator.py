"""Tests for ContentGenerationOrchestrator.

Tests cover:
- Model order within a provider and provider order within the chain
- Timeouts, malformed JSON and schema failures as recorded attempts
- Extractive fallback and the empty-article placeholder
- fallback_on_error=False
"""

from __future__ import annotations

import asyncio

import pytest

from cardnews_automator.constants import Failure, Success
from cardnews_automator.content import (
    ArticleRecord,
    ContentGenerationOrchestrator,
    ExtractiveFallbackStrategy,
    ProviderStrategy,
)
from cardnews_automator.content.orchestrator import GenerationStrategy, parse_generation_result
from cardnews_automator.providers import (
    MalformedResponse,
    ProviderConfig,
    ProviderSettings,
    ProviderUnavailable,
    TextProviderConfig,
)


def _orchestrator(*providers, timeout: float = 5, fallback_on_error: bool = True):
    strategies = [ProviderStrategy(p, timeout=timeout) for p in providers]
    return ContentGenerationOrchestrator(strategies, fallback_on_error=fallback_on_error)


# =============================================================================
# Provider chain
# =============================================================================

class TestProviderChain:
    """Tests for provider and model ordering."""

    @pytest.mark.asyncio
    async def test_first_model_success(self, make_text_provider, raw_generation_data, sample_article):
        provider = make_text_provider("gemini", models=["m1", "m2"], responses=[raw_generation_data])
        outcome = await _orchestrator(provider).generate_with_report(sample_article)

        assert outcome.strategy == "gemini"
        assert outcome.model == "m1"
        assert outcome.failed_attempts == []
        assert outcome.result.headline == raw_generation_data["headline"]
        assert provider.complete_json.await_count == 1

    @pytest.mark.asyncio
    async def test_second_model_after_malformed(self, make_text_provider, raw_generation_data, sample_article):
        provider = make_text_provider(
            "gemini",
            models=["m1", "m2"],
            responses=[MalformedResponse("No valid JSON found"), raw_generation_data],
        )
        outcome = await _orchestrator(provider).generate_with_report(sample_article)

        assert outcome.model == "m2"
        assert len(outcome.failed_attempts) == 1
        assert outcome.failed_attempts[0].model == "m1"
        models = [call.args[1] for call in provider.complete_json.await_args_list]
        assert models == ["m1", "m2"]

    @pytest.mark.asyncio
    async def test_secondary_provider_after_primary_fails(
        self, make_text_provider, raw_generation_data, sample_article
    ):
        primary = make_text_provider(
            "gemini",
            models=["m1", "m2"],
            responses=[ProviderUnavailable("HTTP 429"), ProviderUnavailable("HTTP 503")],
        )
        secondary = make_text_provider("openai", models=["gpt"], responses=[raw_generation_data])
        outcome = await _orchestrator(primary, secondary).generate_with_report(sample_article)

        assert outcome.strategy == "openai"
        assert [a.provider for a in outcome.failed_attempts] == ["gemini", "gemini"]

    @pytest.mark.asyncio
    async def test_schema_mismatch_counts_as_failure(self, make_text_provider, sample_article):
        provider = make_text_provider(responses=[{"quote": "헤드라인이 없다"}])
        outcome = await _orchestrator(provider).generate_with_report(sample_article)

        assert outcome.strategy == "extractive"
        assert "MalformedResponse" in outcome.failed_attempts[0].error

    @pytest.mark.asyncio
    async def test_timeout_moves_on(self, make_text_provider, sample_article):
        async def _slow(*args, **kwargs):
            await asyncio.sleep(5)

        provider = make_text_provider()
        provider.complete_json.side_effect = _slow
        outcome = await _orchestrator(provider, timeout=0.01).generate_with_report(sample_article)

        assert outcome.strategy == "extractive"
        assert "timeout" in outcome.failed_attempts[0].error

    @pytest.mark.asyncio
    async def test_unconfigured_provider_skipped(self, make_text_provider, sample_article):
        provider = make_text_provider(configured=False)
        outcome = await _orchestrator(provider).generate_with_report(sample_article)

        provider.complete_json.assert_not_awaited()
        assert outcome.strategy == "extractive"
        assert outcome.attempts == []

    @pytest.mark.asyncio
    async def test_no_fallback_skips_later_providers(
        self, make_text_provider, raw_generation_data, sample_article
    ):
        primary = make_text_provider("gemini", responses=[ProviderUnavailable("HTTP 500")])
        secondary = make_text_provider("openai", responses=[raw_generation_data])
        orchestrator = _orchestrator(primary, secondary, fallback_on_error=False)
        outcome = await orchestrator.generate_with_report(sample_article)

        secondary.complete_json.assert_not_awaited()
        assert outcome.strategy == "extractive"

    @pytest.mark.asyncio
    async def test_strategy_exception_does_not_escape(self, sample_article):
        class BrokenStrategy(GenerationStrategy):
            name = "broken"

            async def attempt(self, article, options, attempts):
                raise RuntimeError("boom")

        orchestrator = ContentGenerationOrchestrator([BrokenStrategy()])
        outcome = await orchestrator.generate_with_report(sample_article)
        assert outcome.strategy == "extractive"


# =============================================================================
# Fallbacks
# =============================================================================

class TestFallbacks:
    """Tests for the extractive strategy and the empty article."""

    @pytest.mark.asyncio
    async def test_extractive_uses_article_text(self, sample_article):
        result = await ContentGenerationOrchestrator().generate(sample_article)
        assert result.headline == "정부, 내년 예산안 국회 제출"
        assert result.quote.startswith("정부는 내년 예산을")

    @pytest.mark.asyncio
    async def test_empty_article_makes_no_calls(self, make_text_provider):
        provider = make_text_provider()
        outcome = await _orchestrator(provider).generate_with_report(ArticleRecord())

        provider.complete_json.assert_not_awaited()
        assert outcome.strategy == "extractive"
        assert outcome.result.headline == "오늘의 뉴스\n핵심 요약"

    def test_extractive_always_last(self, make_text_provider):
        orchestrator = _orchestrator(make_text_provider())
        assert isinstance(orchestrator.strategies[-1], ExtractiveFallbackStrategy)
        assert len(orchestrator.strategies) == 2

    @pytest.mark.asyncio
    async def test_report(self, make_text_provider, raw_generation_data, sample_article):
        provider = make_text_provider(
            "gemini", models=["m1", "m2"],
            responses=[ProviderUnavailable("HTTP 429"), raw_generation_data],
        )
        report = (await _orchestrator(provider).generate_with_report(sample_article)).to_report()
        assert report.strategy == "gemini"
        assert report.model == "m2"
        assert report.failed_attempts == ["gemini/m1: ProviderUnavailable: HTTP 429"]


# =============================================================================
# Construction and parsing
# =============================================================================

class TestFromConfig:
    """Tests for from_config."""

    def test_strategies_follow_priority(self):
        config = ProviderConfig(
            provider_settings=ProviderSettings(timeout_seconds=30, fallback_on_error=False),
            text_providers={
                "openai": TextProviderConfig(priority=2, type="openai", models=["gpt"], api_key="sk-test"),
                "gemini": TextProviderConfig(priority=1, type="gemini", models=["g"], api_key="g-test"),
                "disabled": TextProviderConfig(priority=0, type="openai", enabled=False),
            },
        )
        orchestrator = ContentGenerationOrchestrator.from_config(config)

        assert [s.name for s in orchestrator.strategies] == ["gemini", "openai", "extractive"]
        assert orchestrator.strategies[0].timeout == 30
        assert orchestrator.fallback_on_error is False
        assert [p.name for p in orchestrator.providers] == ["gemini", "openai"]


class TestParseGenerationResult:
    """Tests for parse_generation_result."""

    def test_object(self, raw_generation_data):
        result = parse_generation_result(raw_generation_data)
        assert result.ai_facts == raw_generation_data["keyFact"]["facts"]

    def test_array_unwrapped(self, raw_generation_data):
        assert parse_generation_result([raw_generation_data]).headline == raw_generation_data["headline"]

    @pytest.mark.parametrize("data", ["text", 42, None, [], {"headline": ""}, {"headline": "   "}])
    def test_rejects(self, data):
        with pytest.raises(MalformedResponse):
            parse_generation_result(data)

    def test_numbers_coerced_to_text(self):
        result = parse_generation_result({"headline": "예산 논란", "quote": 656, "keyFact": "없음"})
        assert result.quote == "656"
        assert result.key_fact is None


def test_result_types():
    assert Success(1).is_success()
    assert Failure("error", {"hint": "x"}).is_failure()
