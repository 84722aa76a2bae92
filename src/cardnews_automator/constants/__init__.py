"""Global constants package for the card news pipeline.

PACKAGE STRUCTURE:
-----------------
- limits.py   : Field contracts, headline/quote/fact/image limits, timeouts
- types.py    : The Success / Failure result type

USAGE EXAMPLES:
--------------
    from cardnews_automator.constants import FIELD_CONTRACTS, IMAGE_SLOT_COUNT
    from cardnews_automator.constants import Success, Failure
"""

from .limits import (
    AI_ARTICLE_BODY_MAX_LENGTH,
    AI_KEYWORD_BODY_MAX_LENGTH,
    AI_TIMEOUT_SECONDS,
    DECK_DEFAULT_SIZE,
    DECK_SIZES,
    DECK_SUMMARY_MAX_LENGTH,
    FACT_LABEL_MAX_LENGTH,
    FACT_LABEL_MIN_LENGTH,
    FACT_MAX_COUNT,
    FACT_MIN_AI_COUNT,
    FACT_PERCENT_MAX,
    FACT_PERCENT_MIN,
    FACT_VALUE_MAX_LENGTH,
    FACT_VALUE_MAX_WORDS,
    FIELD_CONTRACTS,
    HEADLINE_GENERIC_FALLBACK,
    HEADLINE_GENERIC_SUFFIX,
    HEADLINE_LINE_MAX_LENGTH,
    HEADLINE_LINE_MIN_LENGTH,
    HEADLINE_MAX_LINES,
    HEADLINE_TITLE_PREFIX_LENGTH,
    HEADLINE_TRIM_MAX_ITERATIONS,
    IMAGE_PROMPT_MAX_LENGTH,
    IMAGE_REQUEST_DELAY_SECONDS,
    IMAGE_SLOT_COUNT,
    KEYWORD_MAX_COUNT,
    QUOTE_FALLBACK,
    QUOTE_MAX_LENGTH,
    QUOTE_TRIM_MAX_PASSES,
    FieldContract,
)
from .types import Failure, Result, Success

__all__ = [
    # Limits
    "AI_ARTICLE_BODY_MAX_LENGTH",
    "AI_KEYWORD_BODY_MAX_LENGTH",
    "AI_TIMEOUT_SECONDS",
    "DECK_DEFAULT_SIZE",
    "DECK_SIZES",
    "DECK_SUMMARY_MAX_LENGTH",
    "FACT_LABEL_MAX_LENGTH",
    "FACT_LABEL_MIN_LENGTH",
    "FACT_MAX_COUNT",
    "FACT_MIN_AI_COUNT",
    "FACT_PERCENT_MAX",
    "FACT_PERCENT_MIN",
    "FACT_VALUE_MAX_LENGTH",
    "FACT_VALUE_MAX_WORDS",
    "FIELD_CONTRACTS",
    "HEADLINE_GENERIC_FALLBACK",
    "HEADLINE_GENERIC_SUFFIX",
    "HEADLINE_LINE_MAX_LENGTH",
    "HEADLINE_LINE_MIN_LENGTH",
    "HEADLINE_MAX_LINES",
    "HEADLINE_TITLE_PREFIX_LENGTH",
    "HEADLINE_TRIM_MAX_ITERATIONS",
    "IMAGE_PROMPT_MAX_LENGTH",
    "IMAGE_REQUEST_DELAY_SECONDS",
    "IMAGE_SLOT_COUNT",
    "KEYWORD_MAX_COUNT",
    "QUOTE_FALLBACK",
    "QUOTE_MAX_LENGTH",
    "QUOTE_TRIM_MAX_PASSES",
    "FieldContract",
    # Types
    "Failure",
    "Result",
    "Success",
]
