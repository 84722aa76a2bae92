"""Generate-specific validators."""

from __future__ import annotations

from typing import List

from ...constants import DECK_SIZES
from ..core.types import Failure, Result, Success
from .params import DeckGenerationParams

VALID_LENGTHS: List[str] = ["auto", "short", "explanatory"]

VALID_SPEECH_STYLES: List[str] = ["auto", "report", "cardnews"]


def validate_deck_generation_params(params: DeckGenerationParams) -> Result[DeckGenerationParams]:
    """Validate all deck generation parameters.

    Returns Result with params if valid, or Failure with error.
    """
    if not params.article_path.is_file():
        return Failure(
            f"Article file not found: {params.article_path}",
            {"hint": "Pass a JSON file with title, bodyText, sourceUrl and imageUrls"},
        )

    if params.card_count not in DECK_SIZES:
        return Failure(
            f"Invalid card count: {params.card_count}",
            {"hint": f"Card count must be one of {', '.join(str(n) for n in DECK_SIZES)}"},
        )

    if not 0 <= params.tone <= 100:
        return Failure(
            f"Invalid tone: {params.tone}",
            {"hint": "Tone must be between 0 (informational) and 100 (emotional)"},
        )

    if params.length not in VALID_LENGTHS:
        return Failure(
            f"Invalid length: {params.length}",
            {"valid": ", ".join(VALID_LENGTHS)},
        )

    if params.speech_style not in VALID_SPEECH_STYLES:
        return Failure(
            f"Invalid speech style: {params.speech_style}",
            {"valid": ", ".join(VALID_SPEECH_STYLES)},
        )

    if params.config_path is not None and not params.config_path.is_file():
        return Failure(
            f"Provider config not found: {params.config_path}",
            {"hint": "See config/providers.yaml for the expected format"},
        )

    return Success(params)
