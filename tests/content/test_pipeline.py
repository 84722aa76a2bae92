"""End-to-end tests for CardNewsPipeline with mocked providers."""

from __future__ import annotations

import pytest

from cardnews_automator.content import (
    CardNewsPipeline,
    ContentGenerationOrchestrator,
    GenerationOptions,
    ImageAllocator,
    ProviderStrategy,
)
from cardnews_automator.content.keywords import KeywordGenerator
from cardnews_automator.providers import ProviderConfig, TextProviderConfig


@pytest.fixture
def offline_pipeline() -> CardNewsPipeline:
    """Extractive text, no image generation, title keywords."""
    return CardNewsPipeline(image_allocator=ImageAllocator(request_delay=0))


class TestOfflinePipeline:
    """Pipeline runs with no credentials at all."""

    @pytest.mark.asyncio
    async def test_seven_card_deck(self, offline_pipeline, sample_article):
        result = await offline_pipeline.run(sample_article)

        assert result.deck.total == 7
        assert result.generation.strategy == "extractive"
        assert result.images.images[0] == sample_article.image_urls[0]
        assert result.images.placeholder_count == 0
        assert result.category == "politics"
        assert result.badge is not None and result.badge.text == "EXCLUSIVE"
        assert result.sns is not None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("count", [5, 7, 9])
    async def test_card_counts(self, offline_pipeline, sample_article, count):
        result = await offline_pipeline.run(sample_article, card_count=count)
        assert result.deck.total == count
        assert result.deck.template_id == f"시사 {count}장"

    @pytest.mark.asyncio
    async def test_no_images_gives_placeholders(self, offline_pipeline, bare_article):
        result = await offline_pipeline.run(bare_article)
        assert result.images.placeholder_count == 7

    @pytest.mark.asyncio
    async def test_empty_article(self, offline_pipeline):
        from cardnews_automator.content import ArticleRecord

        result = await offline_pipeline.run(ArticleRecord())
        assert result.normalized_content.headline == "오늘의 뉴스\n핵심 요약"
        assert result.keywords == ["뉴스"]
        assert result.deck.total == 7

    @pytest.mark.asyncio
    async def test_payload_uses_camel_case(self, offline_pipeline, sample_article):
        payload = (await offline_pipeline.run(sample_article, card_count=5)).to_payload()

        assert set(payload) >= {"normalizedContent", "images", "deck", "factSelection", "categoryLabel"}
        assert payload["deck"]["templateId"] == "시사 5장"
        assert payload["deck"]["cards"][0]["cardType"] == "cover"
        assert len(payload["images"]["images"]) == 7


class TestProviderPipeline:
    """Pipeline with a mocked text provider."""

    @pytest.mark.asyncio
    async def test_ai_copy_and_facts(self, make_text_provider, raw_generation_data, sample_article):
        provider = make_text_provider(
            "gemini",
            responses=[raw_generation_data, {"keywords": ["예산안", "국회", "재정"]}],
        )
        pipeline = CardNewsPipeline(
            orchestrator=ContentGenerationOrchestrator([ProviderStrategy(provider)]),
            image_allocator=ImageAllocator(request_delay=0),
            keyword_generator=KeywordGenerator([provider]),
        )
        result = await pipeline.run(sample_article, GenerationOptions(tone=20), card_count=9)

        assert result.generation.strategy == "gemini"
        assert result.normalized_content.headline == "정부 예산안\n국회 제출"
        assert result.fact_selection.source == "ai"
        assert result.keywords == ["예산안", "국회", "재정"]
        assert result.deck.cards[4].keywords == ["예산안", "국회", "재정"]
        assert "#예산안" in result.sns.hashtags

        prompt = provider.complete_json.await_args_list[0].args[0]
        assert "정보형" in prompt

    @pytest.mark.asyncio
    async def test_context_manager_closes_providers(self, make_text_provider, sample_article):
        provider = make_text_provider(responses=[])
        async with CardNewsPipeline(
            orchestrator=ContentGenerationOrchestrator([ProviderStrategy(provider)]),
        ) as pipeline:
            await pipeline.run(sample_article, generate_images=False)
        provider.close.assert_awaited()


def test_from_config_wires_components(monkeypatch):
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    config = ProviderConfig(
        text_providers={
            "openai": TextProviderConfig(priority=1, type="openai", models=["gpt"], api_key="sk-test"),
        },
    )
    pipeline = CardNewsPipeline.from_config(config)

    assert [p.name for p in pipeline.orchestrator.providers] == ["openai"]
    assert pipeline.keyword_generator is not None
    assert pipeline.image_allocator.can_generate is False
