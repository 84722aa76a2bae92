"""End-to-end deck pipeline: article in, render-ready DeckResult out."""

from __future__ import annotations

import logging

import httpx

from ..constants import DECK_DEFAULT_SIZE
from ..providers import ImageProvider, ProviderConfig, load_provider_config
from .badges import extract_badge
from .captions import build_sns_copy
from .category import category_label, resolve_category
from .deck import DeckAssembler
from .facts import FactExtractionChain
from .images import ImageAllocator
from .keywords import KeywordGenerator, fallback_keywords
from .models import ArticleRecord, DeckResult, GenerationOptions
from .normalizer import FieldNormalizer
from .orchestrator import ContentGenerationOrchestrator

_logger = logging.getLogger("cardnews")


class CardNewsPipeline:
    """Wire the orchestrator, normalizer, fact chain, image allocator and assembler.

    Each ``run`` works on its own copies of the inputs, so one pipeline can
    serve concurrent requests for different articles.

    Usage:
        async with CardNewsPipeline.from_config() as pipeline:
            result = await pipeline.run(article, GenerationOptions(tone=20), card_count=5)
            payload = result.to_payload()
    """

    def __init__(
        self,
        orchestrator: ContentGenerationOrchestrator | None = None,
        normalizer: FieldNormalizer | None = None,
        fact_chain: FactExtractionChain | None = None,
        image_allocator: ImageAllocator | None = None,
        assembler: DeckAssembler | None = None,
        keyword_generator: KeywordGenerator | None = None,
    ):
        self.orchestrator = orchestrator or ContentGenerationOrchestrator()
        self.normalizer = normalizer or FieldNormalizer()
        self.fact_chain = fact_chain or FactExtractionChain()
        self.image_allocator = image_allocator or ImageAllocator()
        self.assembler = assembler or DeckAssembler()
        self.keyword_generator = keyword_generator

    @classmethod
    def from_config(
        cls,
        config: ProviderConfig | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> "CardNewsPipeline":
        """Build every component from provider configuration."""
        config = config or load_provider_config()
        orchestrator = ContentGenerationOrchestrator.from_config(config, client)
        image_allocator = ImageAllocator(
            ImageProvider(config.image_provider, client),
            request_delay=config.provider_settings.image_request_delay_seconds,
        )
        keyword_generator = KeywordGenerator(
            orchestrator.providers, timeout=config.provider_settings.timeout_seconds
        )
        return cls(
            orchestrator=orchestrator,
            image_allocator=image_allocator,
            keyword_generator=keyword_generator,
        )

    async def run(
        self,
        article: ArticleRecord,
        options: GenerationOptions | None = None,
        card_count: int | None = DECK_DEFAULT_SIZE,
        generate_images: bool = True,
    ) -> DeckResult:
        """Produce a complete, contract-valid deck for one article."""
        article = article.model_copy()
        _logger.info(f"Deck requested | title:{article.title[:40]!r} | cards:{card_count}")

        outcome = await self.orchestrator.generate_with_report(article, options)
        content = self.normalizer.normalize(outcome.result, article)
        facts = self.fact_chain.select(outcome.result.ai_facts, article, content)

        if self.keyword_generator is not None:
            keywords = await self.keyword_generator.generate(article)
        else:
            keywords = fallback_keywords(article)

        images = await self.image_allocator.allocate(
            article.image_urls, content, article, generate=generate_images
        )
        deck = self.assembler.assemble(content, images, facts, article, card_count, keywords)
        category = resolve_category(article)

        _logger.info(
            f"Deck ready | template:{deck.template_id} | strategy:{outcome.strategy} | "
            f"facts:{facts.source}/{len(facts.facts)} | placeholders:{images.placeholder_count}"
        )
        return DeckResult(
            normalized_content=content,
            images=images,
            deck=deck,
            fact_selection=facts,
            keywords=keywords,
            category=category,
            category_label=category_label(category),
            badge=extract_badge(article.title),
            sns=build_sns_copy(article, category, keywords),
            generation=outcome.to_report(),
        )

    async def close(self) -> None:
        await self.orchestrator.close()
        if self.image_allocator.provider is not None:
            await self.image_allocator.provider.close()

    async def __aenter__(self) -> "CardNewsPipeline":
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()
