"""Shared test fixtures and configuration.

Provides a sample article, the raw provider output for it, and mocks for the
text and image providers. Provider mocks are AsyncMock based so they can be
awaited exactly like the real providers.
"""

from __future__ import annotations

from typing import Any, Callable
from unittest.mock import AsyncMock, MagicMock

import pytest

from cardnews_automator.content import (
    ArticleRecord,
    FieldNormalizer,
    NormalizedCardContent,
    RawGenerationResult,
)

SAMPLE_BODY = (
    "정부는 내년 예산을 656조 원으로 편성해 국회에 제출했다. "
    "기획재정부 관계자는 \"민생 회복에 집중했다\"고 밝혔다. "
    "지출 증가율은 3.2%로 작년보다 낮다. "
    "야당은 재정 건전성이 악화됐다며 반발했다."
)


@pytest.fixture
def sample_article() -> ArticleRecord:
    """A politics article with two images and a corner badge."""
    return ArticleRecord(
        title="[단독] 정부, 내년 예산안 국회 제출",
        body_text=SAMPLE_BODY,
        source_url="https://news.example.com/articles/123",
        category="politics",
        image_urls=["https://img.example.com/1.jpg", "https://img.example.com/2.jpg"],
    )


@pytest.fixture
def bare_article() -> ArticleRecord:
    """An article with text but no images."""
    return ArticleRecord(
        title="정부, 내년 예산안 국회 제출",
        body_text=SAMPLE_BODY,
        source_url="https://news.example.com/articles/456",
    )


@pytest.fixture
def raw_generation_data() -> dict[str, Any]:
    """Provider JSON as it arrives over the wire (camelCase keys)."""
    return {
        "headline": "정부 예산안\n국회 제출",
        "quote": "\"민생 회복에 집중했다\"고 밝혔다",
        "quoteSpeaker": "기획재정부 관계자",
        "quoteContext": "예산안 발표 브리핑에서",
        "contextKeyLine": "정부가 656조 원 규모의 내년 예산안을 국회에 제출했다.",
        "coreProblem": "재정 건전성과 민생 지원 사이의 균형",
        "card4KeySentence": "지출 증가율은 3.2%로 낮췄다",
        "card4Explanation": "정부는 건전 재정 기조를 유지하면서 민생 예산을 늘렸다.",
        "beforeAfter": "BEFORE: 638조 | AFTER: 656조 | 예산 규모",
        "whyImportant": "예산안은 내년 복지와 일자리 정책의 규모를 결정한다.",
        "prosCons": {
            "question": "예산 확대, 필요할까?",
            "pros": "민생 경기 회복",
            "cons": "재정 적자 확대 우려",
        },
        "readerQuestion": "여러분은 이번 예산안을 어떻게 보시나요?",
        "keyFact": {"facts": ["예산 규모: 656조 원", "증가율: 3.2%", "제출일: 9월 1일"]},
    }


@pytest.fixture
def raw_result(raw_generation_data: dict[str, Any]) -> RawGenerationResult:
    return RawGenerationResult.model_validate(raw_generation_data)


@pytest.fixture
def normalized_content(
    raw_result: RawGenerationResult,
    sample_article: ArticleRecord,
) -> NormalizedCardContent:
    return FieldNormalizer().normalize(raw_result, sample_article)


@pytest.fixture
def make_text_provider() -> Callable[..., MagicMock]:
    """Factory for a mock TextProvider.

    Usage:
        provider = make_text_provider("gemini", models=["m1", "m2"], responses=[...])

    Each item of ``responses`` is either a value returned by ``complete_json``
    or an exception instance raised by it.
    """

    def _make(
        name: str = "mock",
        models: list[str] | None = None,
        responses: list[Any] | None = None,
        configured: bool = True,
    ) -> MagicMock:
        models = models if models is not None else ["mock-model"]
        provider = MagicMock()
        provider.name = name
        provider.is_configured = configured
        provider.config.models = models
        provider.list_models = AsyncMock(return_value=list(models))
        provider.complete_json = AsyncMock(side_effect=list(responses or []))
        provider.close = AsyncMock()
        return provider

    return _make


@pytest.fixture
def mock_image_provider() -> MagicMock:
    """Image provider that returns one URL per slot."""
    provider = MagicMock()
    provider.is_available = True

    async def _generate(prompt: str, slot: int | None = None) -> str:
        return f"https://generated.example.com/slot-{slot}.png"

    provider.generate = AsyncMock(side_effect=_generate)
    provider.close = AsyncMock()
    return provider
