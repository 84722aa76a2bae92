"""Stateless service for deck generation."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

import yaml
from pydantic import ValidationError

from ..core.types import Failure, Result, Success
from .params import DeckGenerationParams

if TYPE_CHECKING:
    from cardnews_automator.content import ArticleRecord, DeckResult


@dataclass(frozen=True)
class DeckGenerationOutput:
    """What a successful generation produced."""

    result: "DeckResult"
    output_path: Path


def load_article(path: Path) -> Result["ArticleRecord"]:
    """Read an article JSON file (camelCase or snake_case keys)."""
    from cardnews_automator.content import ArticleRecord

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        return Failure(f"Cannot read article file: {e}", {"path": str(path)})
    except json.JSONDecodeError as e:
        return Failure(
            f"Article file is not valid JSON: {e.msg} (line {e.lineno})",
            {"path": str(path)},
        )

    if not isinstance(data, dict):
        return Failure("Article JSON must be an object", {"path": str(path)})

    try:
        return Success(ArticleRecord.model_validate(data))
    except ValidationError as e:
        return Failure(
            f"Article JSON has invalid fields ({e.error_count()} errors)",
            {"path": str(path), "first": e.errors()[0]["msg"]},
        )


class DeckGeneratorService:
    """Stateless service for deck generation.

    All state is passed via params - no instance state.
    """

    async def generate(self, params: DeckGenerationParams) -> Result[DeckGenerationOutput]:
        """Generate one deck and save it.

        Returns:
            Result containing DeckGenerationOutput or Failure
        """
        from cardnews_automator.content import CardNewsPipeline, GenerationOptions
        from cardnews_automator.providers import load_provider_config
        from cardnews_automator.services import DeckOutputService

        article_result = load_article(params.article_path)
        if isinstance(article_result, Failure):
            return article_result
        article = article_result.value

        try:
            config = load_provider_config(params.config_path)
        except (OSError, ValueError, yaml.YAMLError) as e:
            return Failure(f"Invalid provider config: {e}", {"path": str(params.config_path)})

        options = GenerationOptions(
            tone=params.tone,
            length=params.length,
            speech_style=params.speech_style,
            keyword_emphasis=params.keyword_emphasis,
        )

        async with CardNewsPipeline.from_config(config) as pipeline:
            result = await pipeline.run(
                article,
                options,
                card_count=params.card_count,
                generate_images=params.generate_images,
            )

        output = DeckOutputService(params.output_dir)
        try:
            if params.output_file is not None:
                output_path = output.write_payload(result, params.output_file)
            else:
                output_path = output.save(result, title=article.title)
        except OSError as e:
            return Failure(
                f"Cannot write deck output: {e}",
                {"path": str(params.output_file or params.output_dir)},
            )

        return Success(DeckGenerationOutput(result=result, output_path=output_path))
