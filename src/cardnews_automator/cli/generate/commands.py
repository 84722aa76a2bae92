"""Generate CLI commands - thin wrappers orchestrating params, validation, display, and service."""

from __future__ import annotations

import asyncio
from typing import Optional

import typer

from ..core.console import console
from ..core.types import Failure
from .display import show_deck_result, show_generate_config, show_generate_error, show_key_status
from .params import DeckGenerationParams
from .service import DeckGeneratorService
from .validators import validate_deck_generation_params


def generate(
    article: str = typer.Argument(..., help="Article JSON file"),
    cards: int = typer.Option(7, "--cards", "-c", help="Deck size: 5, 7 or 9"),
    tone: int = typer.Option(50, "--tone", "-t", help="0 informational ... 100 emotional"),
    length: str = typer.Option("auto", "--length", "-l", help="auto, short or explanatory"),
    speech_style: str = typer.Option("auto", "--speech", help="auto, report or cardnews"),
    keyword_emphasis: bool = typer.Option(False, "--keyword-emphasis", help="Emphasize key terms"),
    no_images: bool = typer.Option(False, "--no-images", help="Skip AI image generation"),
    output_dir: str = typer.Option("output", "--output-dir", "-o", help="Directory for saved decks"),
    output_file: Optional[str] = typer.Option(None, "--output-file", help="Write only the JSON payload here"),
    config: Optional[str] = typer.Option(None, "--config", help="Provider config YAML"),
) -> None:
    """Generate a card news deck from an article.

    Text comes from the configured AI providers in priority order, falling
    back to an extractive summary when every provider fails. Slots without
    article images get AI images when OPENAI_API_KEY is usable.
    """
    params = DeckGenerationParams.from_cli(
        article=article,
        cards=cards,
        tone=tone,
        length=length,
        speech_style=speech_style,
        keyword_emphasis=keyword_emphasis,
        no_images=no_images,
        output_dir=output_dir,
        output_file=output_file,
        config=config,
    )

    validation = validate_deck_generation_params(params)
    if isinstance(validation, Failure):
        show_generate_error(console, validation.error, validation.details)
        raise typer.Exit(1)

    show_generate_config(console, params)

    result = asyncio.run(DeckGeneratorService().generate(params))
    if isinstance(result, Failure):
        show_generate_error(console, result.error, result.details)
        raise typer.Exit(1)

    show_deck_result(console, result.value)


def check_keys(
    config: Optional[str] = typer.Option(None, "--config", help="Provider config YAML"),
) -> None:
    """Show which provider credentials are available."""
    from pathlib import Path

    from cardnews_automator.providers import describe_openai_key, load_provider_config

    provider_config = load_provider_config(Path(config) if config else None)
    text_providers = [
        (name, bool(provider.get_api_key()), provider.models)
        for name, provider in provider_config.get_enabled_text_providers()
    ]
    show_key_status(
        console,
        describe_openai_key(provider_config.image_provider.get_api_key() or ""),
        text_providers,
    )
