"""Extractive card copy built from the article alone.

This is the terminal step of the generation chain. It does no I/O and
cannot fail; the normalizer takes care of lengths and missing fields.
"""

from __future__ import annotations

import re

from .badges import strip_badges
from .models import ArticleRecord, RawGenerationResult

_SENTENCE_SPLIT = re.compile(r"[.!?。！？]\s+")
_MIN_SENTENCE_LENGTH = 5
_HEADLINE_SOURCE_LENGTH = 22


def empty_article_result() -> RawGenerationResult:
    """Generic placeholder summary for an article with no title and no body."""
    return RawGenerationResult(
        headline="오늘의 뉴스\n핵심 요약",
        quote="기사 내용을 확인하세요.",
        quote_context="기사 본문을 불러오지 못했습니다.",
        context_key_line="기사 본문을 불러오지 못했습니다. 원문을 확인해 주세요.",
        core_problem="기사 내용을 확인하세요.",
        reader_question="당신의 생각은 어떠신가요?",
    )


def split_sentences(text: str) -> list[str]:
    return [
        sentence.strip()
        for sentence in _SENTENCE_SPLIT.split(text)
        if len(sentence.strip()) > _MIN_SENTENCE_LENGTH
    ]


def build_extractive_result(article: ArticleRecord) -> RawGenerationResult:
    """Card copy from leading article text, with generic qualitative fields."""
    if article.is_empty:
        return empty_article_result()

    title = strip_badges(article.title)
    body = article.body_text.strip()
    sentences = split_sentences(body)
    lead = sentences[0] if sentences else ""

    return RawGenerationResult(
        headline=(
            title[:_HEADLINE_SOURCE_LENGTH]
            or lead[:_HEADLINE_SOURCE_LENGTH]
            or body[:_HEADLINE_SOURCE_LENGTH]
            or article.title.strip()[:_HEADLINE_SOURCE_LENGTH]
        ),
        quote=lead or title,
        context_key_line=body[:80] or title,
        core_problem=body[:120] or None,
        card4_key_sentence=body[:45] or title,
        card4_explanation=body[:90] or None,
    )
