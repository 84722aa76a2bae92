"""Tests for DeckOutputService."""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path

import pytest

from cardnews_automator.content import CardNewsPipeline
from cardnews_automator.services import DeckOutputService
from cardnews_automator.services.output import slugify


async def _build_deck(article):
    async with CardNewsPipeline() as pipeline:
        return await pipeline.run(article, generate_images=False)


class TestSlugify:
    """Tests for slugify."""

    def test_keeps_hangul(self):
        assert slugify("[단독] 정부, 내년 예산안") == "단독-정부-내년-예산안"

    def test_empty(self):
        assert slugify("!!!") == "deck"

    def test_truncates(self):
        assert len(slugify("가" * 100)) == 40


class TestDeckOutputService:
    """Tests for saving decks."""

    def test_output_path(self, tmp_path):
        service = DeckOutputService(tmp_path)
        path = service.get_output_path("예산 국회", now=datetime(2025, 3, 4, 9, 5, 7))
        assert path == tmp_path / "2025-03-04" / "090507-예산-국회"

    @pytest.mark.asyncio
    async def test_save_writes_files(self, sample_article, tmp_path: Path):
        deck_result = await _build_deck(sample_article)
        service = DeckOutputService(tmp_path)
        path = service.save(deck_result, output_path=tmp_path / "deck")

        payload = json.loads((path / "deck.json").read_text(encoding="utf-8"))
        assert payload["deck"]["templateId"] == "시사 7장"
        assert (path / "instagram.txt").read_text(encoding="utf-8")
        assert (path / "facebook.txt").exists()
        hashtags = (path / "hashtags.txt").read_text(encoding="utf-8").splitlines()
        assert hashtags == deck_result.sns.hashtags

    @pytest.mark.asyncio
    async def test_write_payload_creates_parents(self, sample_article, tmp_path: Path):
        deck_result = await _build_deck(sample_article)
        target = tmp_path / "a" / "b" / "payload.json"
        DeckOutputService.write_payload(deck_result, target)
        assert "normalizedContent" in json.loads(target.read_text(encoding="utf-8"))
