"""Limit constants for the card news pipeline.

This module contains all limits and constraints:
- Per-field content contracts (length, word count, fallback text)
- Headline, quote and fact limits
- Image slot and provider request settings

AI CONTEXT:
-----------
FIELD_CONTRACTS is the single source of truth for card text limits. The
normalizer and the tests both read it, so change a limit here and nowhere else.

MODIFICATION GUIDE:
------------------
- Every fallback string must itself satisfy its contract (tests check this).
- HEADLINE_* and QUOTE_* limits are tuned for the 1080px card layouts.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final


@dataclass(frozen=True)
class FieldContract:
    """Contract one text field must satisfy after normalization."""

    name: str
    max_length: int
    fallback: str
    max_words: int | None = None
    sentence_final: bool = False


# =============================================================================
# HEADLINE LIMITS
# =============================================================================

HEADLINE_MAX_LINES: Final[int] = 2
"""Maximum number of headline lines on the cover card."""

HEADLINE_LINE_MAX_LENGTH: Final[int] = 10
"""Maximum characters per headline line."""

HEADLINE_LINE_MIN_LENGTH: Final[int] = 2
"""Shorter lines are replaced with a title-derived line."""

HEADLINE_TRIM_MAX_ITERATIONS: Final[int] = 25
"""Upper bound on suffix stripping passes."""

HEADLINE_TITLE_PREFIX_LENGTH: Final[int] = 12
"""Characters of the article title used to derive a replacement line."""

HEADLINE_GENERIC_SUFFIX: Final[str] = "이슈"
"""Appended to a title prefix when nothing better can be derived."""

HEADLINE_GENERIC_FALLBACK: Final[str] = "핵심 이슈"
"""Headline used when neither the headline nor the title yields a line."""


# =============================================================================
# QUOTE LIMITS
# =============================================================================

QUOTE_MAX_LENGTH: Final[int] = 30
"""Maximum quote length on the quote card."""

QUOTE_TRIM_MAX_PASSES: Final[int] = 3
"""Passes of trailing particle removal."""

QUOTE_FALLBACK: Final[str] = "핵심 내용을 확인하세요."
"""Quote used when cleanup leaves nothing."""


# =============================================================================
# FACT LIMITS
# =============================================================================

FACT_MAX_COUNT: Final[int] = 5
"""Maximum facts on the key-fact card."""

FACT_MIN_AI_COUNT: Final[int] = 3
"""AI facts needed before pattern extraction is skipped."""

FACT_LABEL_MIN_LENGTH: Final[int] = 2
FACT_LABEL_MAX_LENGTH: Final[int] = 8
FACT_VALUE_MAX_LENGTH: Final[int] = 24
FACT_VALUE_MAX_WORDS: Final[int] = 7

FACT_PERCENT_MIN: Final[float] = 0.0
FACT_PERCENT_MAX: Final[float] = 100.0


# =============================================================================
# IMAGE LIMITS
# =============================================================================

IMAGE_SLOT_COUNT: Final[int] = 7
"""Number of image slots in the canonical deck."""

IMAGE_PROMPT_MAX_LENGTH: Final[int] = 4000
"""Image generation prompt limit (DALL-E 3)."""

IMAGE_REQUEST_DELAY_SECONDS: Final[float] = 0.8
"""Delay between sequential image generation requests."""


# =============================================================================
# DECK LIMITS
# =============================================================================

DECK_SIZES: Final[tuple[int, ...]] = (5, 7, 9)
"""Supported deck sizes."""

DECK_DEFAULT_SIZE: Final[int] = 7

DECK_SUMMARY_MAX_LENGTH: Final[int] = 200


# =============================================================================
# PROVIDER LIMITS
# =============================================================================

AI_TIMEOUT_SECONDS: Final[int] = 60
"""Timeout for a single provider attempt in seconds."""

AI_ARTICLE_BODY_MAX_LENGTH: Final[int] = 8000
"""Article body characters sent in the generation prompt."""

AI_KEYWORD_BODY_MAX_LENGTH: Final[int] = 1500
"""Article body characters sent in the keyword prompt."""

KEYWORD_MAX_COUNT: Final[int] = 5


# =============================================================================
# FIELD CONTRACTS
# =============================================================================

FIELD_CONTRACTS: Final[dict[str, FieldContract]] = {
    "quote_speaker": FieldContract("quote_speaker", 30, ""),
    "quote_context": FieldContract("quote_context", 60, "기사 속 발언의 배경을 확인하세요."),
    "context_key_line": FieldContract(
        "context_key_line", 80, "기사의 핵심 내용을 정리했습니다.", sentence_final=True
    ),
    "core_problem": FieldContract("core_problem", 60, "기사 내용을 확인하세요."),
    "card4_key_sentence": FieldContract(
        "card4_key_sentence", 45, "기사에서 드러나는 문제를 요약합니다."
    ),
    "card4_explanation": FieldContract(
        "card4_explanation", 90, "상세한 설명은 기사를 참조하세요.", sentence_final=True
    ),
    "before_after": FieldContract(
        "before_after", 80, "BEFORE: 이전 | AFTER: 이후 | 변화 정보를 확인하세요"
    ),
    "why_important": FieldContract(
        "why_important", 120, "상세 내용은 기사를 참조하세요.", sentence_final=True
    ),
    "pros_cons_question": FieldContract("pros_cons_question", 20, "이 주제의 장단점은?"),
    "pros_cons_pros": FieldContract("pros_cons_pros", 20, "긍정적 관점"),
    "pros_cons_cons": FieldContract("pros_cons_cons", 28, "대조되는 관점"),
    "reader_question": FieldContract("reader_question", 60, "당신의 생각은 어떠신가요?"),
}
