"""SNS caption copy and the three-line title summary."""

from __future__ import annotations

import re
import zlib
from typing import Sequence

from .badges import strip_badges
from .models import ArticleRecord, SnsCopy

INSTAGRAM_CATCHPHRASES: tuple[str, ...] = (
    "오늘의 핵심 이슈 정리",
    "주목할 만한 뉴스 업데이트",
    "꼭 읽어야 할 트렌드",
    "트렌드의 중심 현장",
    "깊이 있는 분석 리포트",
    "시사 핵심 브리핑",
    "이슈 리포트 정리",
    "전문가의 시선 분석",
    "뉴스 업데이트 제공",
    "핵심만 정리 완료",
)

FACEBOOK_CATCHPHRASES: tuple[str, ...] = (
    "정리된 주목할 만한 트렌드",
    "오늘의 헤드라인",
    "확인해야 할 핵심 뉴스",
    "읽어보면 좋을 정보",
    "리포트 트렌드 정리",
    "현장 핵심 브리핑",
)

CATEGORY_HASHTAGS: dict[str, tuple[str, ...]] = {
    "business": ("#경제", "#비즈니스", "#투자", "#시장분석", "#스타트업"),
    "technology": ("#기술", "#IT", "#혁신", "#미래기술", "#테크트렌드"),
    "politics": ("#정치", "#시사", "#정책", "#국정", "#이슈"),
    "health": ("#건강", "#의학", "#헬스", "#피트니스", "#건강정보"),
    "culture": ("#문화", "#예술", "#엔터", "#K컬처", "#문화생활"),
    "sports": ("#스포츠", "#경기", "#선수", "#스포츠뉴스", "#게임"),
    "science": ("#과학", "#우주", "#혁신", "#사이언스", "#기술개발"),
    "default": ("#뉴스", "#트렌드", "#이슈", "#정보", "#오늘의뉴스"),
}

SUMMARY_LINE_MAX_LENGTH = 10
SUMMARY_MAX_LINES = 3
# A line break is searched no earlier than this index
_SUMMARY_MIN_BREAK = 6

_INSTAGRAM_TITLE_LENGTH = 30
_FACEBOOK_SUMMARY_LENGTH = 100

_SUMMARY_DROP = re.compile(r"[\"'‘’“”…•※★☆♡♥【】(){}\[\]]")
_SUMMARY_SPACE = re.compile(r"[·→←↓↑]")
_SUMMARY_PUNCT = re.compile(r"[,、;:.?!]")
_WHITESPACE = re.compile(r"\s+")


def pick_phrase(phrases: Sequence[str], seed: str) -> str:
    """Deterministic choice: the same seed always gives the same phrase."""
    return phrases[zlib.crc32(seed.encode("utf-8")) % len(phrases)]


def category_hashtags(category: str) -> list[str]:
    return list(CATEGORY_HASHTAGS.get(category, CATEGORY_HASHTAGS["default"]))


def _ellipsize(text: str, length: int) -> str:
    return text[:length] + "..." if len(text) > length else text


def instagram_caption(article: ArticleRecord, hashtags: Sequence[str]) -> str:
    title = strip_badges(article.title)
    catch_phrase = pick_phrase(INSTAGRAM_CATCHPHRASES, title)
    return (
        f"{catch_phrase}\n\n"
        f"📰 {_ellipsize(title, _INSTAGRAM_TITLE_LENGTH)}\n\n"
        f"✨ 더 알아보기: Bio 링크\n\n"
        f"{' '.join(hashtags)}"
    )


def facebook_caption(article: ArticleRecord) -> str:
    title = strip_badges(article.title)
    catch_phrase = pick_phrase(FACEBOOK_CATCHPHRASES, title)
    summary = _ellipsize(_WHITESPACE.sub(" ", article.body_text).strip(), _FACEBOOK_SUMMARY_LENGTH)
    parts = [catch_phrase, title, summary, f"🔗 전문 읽기: {article.source_url}"]
    return "\n\n".join(part for part in parts if part)


def three_line_summary(title: str) -> list[str]:
    """Up to three lines of at most ten characters, broken on spaces."""
    text = _SUMMARY_DROP.sub("", (title or "").strip())
    text = _SUMMARY_SPACE.sub(" ", text)
    text = _SUMMARY_PUNCT.sub("", text)
    text = _WHITESPACE.sub(" ", text).strip()

    lines: list[str] = []
    remaining = text
    while remaining and len(lines) < SUMMARY_MAX_LINES:
        if len(remaining) <= SUMMARY_LINE_MAX_LENGTH:
            lines.append(remaining)
            break

        cut = SUMMARY_LINE_MAX_LENGTH
        for j in range(SUMMARY_LINE_MAX_LENGTH, _SUMMARY_MIN_BREAK - 1, -1):
            if remaining[j] == " ":
                cut = j
                break

        line = remaining[:cut].strip()
        if line:
            lines.append(line)
        remaining = remaining[cut:].strip()

    if not lines and text:
        lines.append(text[:SUMMARY_LINE_MAX_LENGTH])
    return lines


def build_sns_copy(article: ArticleRecord, category: str, keywords: Sequence[str] = ()) -> SnsCopy:
    """Captions, hashtags and title summary for sharing the deck."""
    hashtags = category_hashtags(category)
    for keyword in keywords:
        tag = "#" + keyword.replace(" ", "")
        if tag not in hashtags:
            hashtags.append(tag)

    return SnsCopy(
        instagram=instagram_caption(article, hashtags),
        facebook=facebook_caption(article),
        hashtags=hashtags,
        summary_lines=three_line_summary(strip_badges(article.title)),
    )
