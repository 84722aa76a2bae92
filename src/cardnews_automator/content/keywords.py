"""Article keywords for the why-it-matters card and hashtags."""

from __future__ import annotations

import asyncio
import logging
import re
from typing import Any, Sequence

from ..constants import AI_TIMEOUT_SECONDS, KEYWORD_MAX_COUNT
from ..providers import TextProvider
from .models import ArticleRecord
from .prompts import KEYWORD_SYSTEM_PROMPT, build_keyword_prompt

_logger = logging.getLogger("ai_calls")

_NON_WORD = re.compile(r"[^\w\s가-힣]")

KEYWORD_TEMPERATURE = 0.3
KEYWORD_MAX_TOKENS = 200


def _coerce_keywords(data: Any) -> list[str]:
    if isinstance(data, dict):
        data = data.get("keywords")
    if not isinstance(data, list):
        return []
    keywords: list[str] = []
    for item in data:
        keyword = str(item or "").strip().lstrip("#").strip()
        if keyword and keyword not in keywords:
            keywords.append(keyword)
    return keywords[:KEYWORD_MAX_COUNT]


def fallback_keywords(article: ArticleRecord) -> list[str]:
    """Title tokens longer than one character, else the category."""
    tokens = _NON_WORD.sub(" ", article.title).split()
    keywords: list[str] = []
    for token in tokens:
        if len(token) > 1 and token not in keywords:
            keywords.append(token)
    if keywords:
        return keywords[:KEYWORD_MAX_COUNT]
    return [article.category.strip() or "뉴스"]


class KeywordGenerator:
    """Ask the text providers for 4-5 hashtag keywords.

    Each provider gets one attempt with its first model. When none answers,
    keywords come from the title.
    """

    def __init__(self, providers: Sequence[TextProvider] = (), timeout: float = AI_TIMEOUT_SECONDS):
        self.providers = list(providers)
        self.timeout = timeout

    async def generate(self, article: ArticleRecord) -> list[str]:
        if article.is_empty:
            return fallback_keywords(article)

        prompt = build_keyword_prompt(article)
        for provider in self.providers:
            if not provider.is_configured or not provider.config.models:
                continue
            model = provider.config.models[0]
            try:
                data = await asyncio.wait_for(
                    provider.complete_json(
                        prompt,
                        model,
                        system=KEYWORD_SYSTEM_PROMPT,
                        temperature=KEYWORD_TEMPERATURE,
                        max_tokens=KEYWORD_MAX_TOKENS,
                        task="keywords",
                    ),
                    timeout=self.timeout,
                )
            except Exception as e:
                _logger.warning(f"KEYWORDS_FAILED | provider:{provider.name} | model:{model} | error:{e}")
                continue

            keywords = _coerce_keywords(data)
            if keywords:
                return keywords

        return fallback_keywords(article)
