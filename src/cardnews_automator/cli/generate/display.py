"""Display functions for generate commands - pure functions for Rich output."""

from __future__ import annotations

from typing import Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ...providers import KeyStatus
from .params import DeckGenerationParams
from .service import DeckGenerationOutput


def show_generate_config(console: Console, params: DeckGenerationParams) -> None:
    """Display deck generation configuration panel."""
    images_info = "Enabled" if params.generate_images else "Disabled"
    images_style = "green" if params.generate_images else "dim"

    console.print(Panel(
        f"Article: [cyan]{params.article_path}[/cyan]\n"
        f"Cards: [yellow]{params.card_count}[/yellow]\n"
        f"Tone: [yellow]{params.tone}[/yellow]\n"
        f"Length: [yellow]{params.length}[/yellow]\n"
        f"Speech: [yellow]{params.speech_style}[/yellow]\n"
        f"Keyword emphasis: [yellow]{'on' if params.keyword_emphasis else 'off'}[/yellow]\n"
        f"AI images: [{images_style}]{images_info}[/{images_style}]",
        title="Card News Generation",
    ))


def show_deck_result(console: Console, output: DeckGenerationOutput) -> None:
    """Display the generated deck as a table plus a summary panel."""
    result = output.result

    table = Table(title=result.deck.template_id)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Type", style="cyan")
    table.add_column("Title")
    table.add_column("Image", style="dim")

    for card in result.deck.cards:
        table.add_row(
            str(card.slot),
            card.card_type.value,
            card.title.replace("\n", " / "),
            "(inline)" if card.image.startswith("data:") else card.image[:40],
        )
    console.print(table)

    generation = result.generation
    strategy = generation.strategy if generation else "unknown"
    model = (generation.model if generation else None) or "-"
    failed = len(generation.failed_attempts) if generation else 0

    console.print(Panel(
        f"Headline: [green]{result.normalized_content.headline.replace(chr(10), ' / ')}[/green]\n"
        f"Strategy: [yellow]{strategy}[/yellow] (model: {model}, failed attempts: {failed})\n"
        f"Facts: [yellow]{result.fact_selection.source}[/yellow] "
        f"({len(result.fact_selection.facts)})\n"
        f"Category: [yellow]{result.category_label}[/yellow]\n"
        f"Placeholders: [yellow]{result.images.placeholder_count}[/yellow]\n"
        f"Saved: [cyan]{output.output_path}[/cyan]",
        title="[green]Deck Generated[/green]",
    ))


def show_generate_error(console: Console, error: str, details: Optional[dict] = None) -> None:
    """Display generation error."""
    console.print(f"[red]Error: {error}[/red]")
    if details:
        for key, value in details.items():
            console.print(f"  [dim]{key}:[/dim] [yellow]{value}[/yellow]")


def show_key_status(console: Console, image_status: KeyStatus, text_providers: list[tuple[str, bool, list[str]]]) -> None:
    """Display credential status for text providers and image generation."""
    table = Table(title="Providers")
    table.add_column("Provider", style="cyan")
    table.add_column("Key")
    table.add_column("Models", style="dim")

    for name, configured, models in text_providers:
        key_info = "[green]set[/green]" if configured else "[red]missing[/red]"
        table.add_row(name, key_info, ", ".join(models))
    console.print(table)

    style = "green" if image_status.image_generation_available else "yellow"
    console.print(Panel(
        f"[{style}]{image_status.message}[/{style}]",
        title="Image Generation",
    ))
