"""Immutable parameter dataclasses for generate commands."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass(frozen=True)
class DeckGenerationParams:
    """Immutable parameters for deck generation."""

    article_path: Path
    card_count: int
    tone: int
    length: str
    speech_style: str
    keyword_emphasis: bool
    generate_images: bool
    output_dir: Path
    output_file: Optional[Path]
    config_path: Optional[Path]

    @classmethod
    def from_cli(
        cls,
        article: str,
        cards: int = 7,
        tone: int = 50,
        length: str = "auto",
        speech_style: str = "auto",
        keyword_emphasis: bool = False,
        no_images: bool = False,
        output_dir: str = "output",
        output_file: Optional[str] = None,
        config: Optional[str] = None,
        **kwargs,
    ) -> "DeckGenerationParams":
        """Create from CLI arguments with parsing and defaults."""
        return cls(
            article_path=Path(article),
            card_count=cards,
            tone=tone,
            length=length.strip().lower(),
            speech_style=speech_style.strip().lower(),
            keyword_emphasis=keyword_emphasis,
            generate_images=not no_images,
            output_dir=Path(output_dir),
            output_file=Path(output_file) if output_file else None,
            config_path=Path(config) if config else None,
        )
