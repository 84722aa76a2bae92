"""Tests for ImageAllocator and pool-fill.

Tests cover:
- Placeholder-only decks when nothing is available
- Pool-fill from article images, keeping the cover image
- Sequential generation per missing slot
- Failed slots left for pool-fill
"""

from __future__ import annotations

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from cardnews_automator.content import PLACEHOLDER_IMAGE, ImageAllocator, pool_fill
from cardnews_automator.content.images import build_slot_prompts, is_real_image
from cardnews_automator.providers import ImageGenerationFailure

ARTICLE_IMAGE = "https://img.example.com/1.jpg"


class TestPoolFill:
    """Tests for pool_fill."""

    def test_no_images_gives_placeholders(self):
        assignment = pool_fill([])
        assert assignment.images == [PLACEHOLDER_IMAGE] * 7
        assert assignment.sources == ["placeholder"] * 7

    def test_fills_from_real_images_and_keeps_cover(self):
        a, b = "https://x.example.com/a.jpg", "https://x.example.com/b.jpg"
        assignment = pool_fill([a, "", b])
        assert assignment.images[0] == a
        assert assignment.images[2] == b
        assert all(is_real_image(ref) for ref in assignment.images)
        assert assignment.sources[:3] == ["article", "pool", "article"]
        assert assignment.placeholder_count == 0

    def test_inline_image_kept_when_pool_empty(self):
        inline = "data:image/png;base64,AAAA"
        assignment = pool_fill([inline])
        assert assignment.images[0] == inline
        assert assignment.sources[0] == "inline"
        assert assignment.sources[1:] == ["placeholder"] * 6

    def test_inline_image_replaced_when_pool_exists(self):
        assignment = pool_fill(["data:image/png;base64,AAAA", ARTICLE_IMAGE])
        assert assignment.images[0] == ARTICLE_IMAGE
        assert assignment.sources[0] == "pool"

    def test_extra_candidates_ignored(self):
        assignment = pool_fill([f"https://x.example.com/{i}.jpg" for i in range(10)])
        assert len(assignment.images) == 7


class TestImageAllocator:
    """Tests for ImageAllocator.allocate."""

    @pytest.mark.asyncio
    async def test_no_candidates_no_credential(self, normalized_content, sample_article):
        """Should return seven placeholders without any request."""
        assignment = await ImageAllocator().allocate([], normalized_content, sample_article)
        assert assignment.images == [PLACEHOLDER_IMAGE] * 7
        assert assignment.placeholder_count == 7

    @pytest.mark.asyncio
    async def test_generates_each_missing_slot(self, mock_image_provider, normalized_content, sample_article):
        allocator = ImageAllocator(mock_image_provider, request_delay=0)
        assignment = await allocator.allocate([ARTICLE_IMAGE], normalized_content, sample_article)

        assert assignment.images[0] == ARTICLE_IMAGE
        assert assignment.sources == ["article"] + ["generated"] * 6
        slots = [call.kwargs["slot"] for call in mock_image_provider.generate.await_args_list]
        assert slots == [2, 3, 4, 5, 6, 7]

    @pytest.mark.asyncio
    async def test_requests_are_sequential(self, normalized_content, sample_article):
        in_flight = 0
        max_in_flight = 0

        async def _generate(prompt, slot=None):
            nonlocal in_flight, max_in_flight
            in_flight += 1
            max_in_flight = max(max_in_flight, in_flight)
            await asyncio.sleep(0)
            in_flight -= 1
            return f"https://generated.example.com/{slot}.png"

        provider = MagicMock()
        provider.is_available = True
        provider.generate = AsyncMock(side_effect=_generate)

        await ImageAllocator(provider, request_delay=0).allocate([], normalized_content, sample_article)
        assert provider.generate.await_count == 7
        assert max_in_flight == 1

    @pytest.mark.asyncio
    async def test_failed_slot_left_for_pool(self, normalized_content, sample_article):
        async def _generate(prompt, slot=None):
            if slot == 3:
                raise ImageGenerationFailure("HTTP 429: rate limit or quota exceeded")
            return f"https://generated.example.com/{slot}.png"

        provider = MagicMock()
        provider.is_available = True
        provider.generate = AsyncMock(side_effect=_generate)

        assignment = await ImageAllocator(provider, request_delay=0).allocate(
            [ARTICLE_IMAGE], normalized_content, sample_article
        )
        assert provider.generate.await_count == 6
        assert assignment.sources[2] == "pool"
        assert is_real_image(assignment.images[2])
        assert assignment.placeholder_count == 0

    @pytest.mark.asyncio
    async def test_unavailable_provider_not_called(self, normalized_content, sample_article):
        provider = MagicMock()
        provider.is_available = False
        provider.generate = AsyncMock()

        assignment = await ImageAllocator(provider).allocate([ARTICLE_IMAGE], normalized_content)
        provider.generate.assert_not_awaited()
        assert assignment.images == [ARTICLE_IMAGE] * 7

    @pytest.mark.asyncio
    async def test_generation_disabled(self, mock_image_provider, normalized_content):
        assignment = await ImageAllocator(mock_image_provider).allocate(
            [ARTICLE_IMAGE], normalized_content, generate=False
        )
        mock_image_provider.generate.assert_not_awaited()
        assert assignment.sources[1:] == ["pool"] * 6

    @pytest.mark.asyncio
    async def test_full_article_set_needs_no_generation(self, mock_image_provider, normalized_content):
        candidates = [f"https://img.example.com/{i}.jpg" for i in range(7)]
        assignment = await ImageAllocator(mock_image_provider).allocate(candidates, normalized_content)
        mock_image_provider.generate.assert_not_awaited()
        assert assignment.images == candidates

    def test_needed_slots(self):
        assert ImageAllocator.needed_slots([ARTICLE_IMAGE, "", "data:x"]) == [1, 2, 3, 4, 5, 6]


def test_slot_prompts(normalized_content, sample_article):
    prompts = build_slot_prompts(normalized_content, sample_article)
    assert len(prompts) == 7
    assert all(0 < len(p) <= 4000 for p in prompts)
    assert "정부 예산안 국회 제출" in prompts[0]
