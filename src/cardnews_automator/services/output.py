"""Output service for saving generated decks.

Keeps file I/O out of the pipeline: the pipeline returns a DeckResult and
this service decides where and how it lands on disk.
"""

from __future__ import annotations

import json
import re
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..content.models import DeckResult

_SLUG_DROP = re.compile(r"[^\w가-힣\s-]")
_SLUG_SPACE = re.compile(r"[\s_-]+")
_SLUG_MAX_LENGTH = 40


def slugify(text: str) -> str:
    """Filesystem-safe slug that keeps Hangul."""
    slug = _SLUG_SPACE.sub("-", _SLUG_DROP.sub("", text or "").strip()).strip("-")
    return slug[:_SLUG_MAX_LENGTH].rstrip("-") or "deck"


class DeckOutputService:
    """Handles saving generated decks to disk.

    Files written per deck:
    - deck.json      : full camelCase payload for the renderer
    - instagram.txt  : Instagram caption (when share copy exists)
    - facebook.txt   : Facebook caption (when share copy exists)
    - hashtags.txt   : one hashtag per line

    Usage:
        service = DeckOutputService(Path("output"))
        path = service.save(result, title=article.title)
    """

    def __init__(self, output_dir: Path | None = None):
        self.output_dir = Path(output_dir or "output")

    def get_output_path(self, title: str, now: datetime | None = None) -> Path:
        """``<output_dir>/<YYYY-MM-DD>/<HHMMSS>-<slug>``."""
        now = now or datetime.now()
        return self.output_dir / now.strftime("%Y-%m-%d") / f"{now.strftime('%H%M%S')}-{slugify(title)}"

    def save(self, result: "DeckResult", title: str = "", output_path: Path | None = None) -> Path:
        """Save a deck and return the directory it was written to."""
        output_path = Path(output_path) if output_path else self.get_output_path(title)
        output_path.mkdir(parents=True, exist_ok=True)

        self.write_payload(result, output_path / "deck.json")

        if result.sns is not None:
            (output_path / "instagram.txt").write_text(result.sns.instagram, encoding="utf-8")
            (output_path / "facebook.txt").write_text(result.sns.facebook, encoding="utf-8")
            (output_path / "hashtags.txt").write_text("\n".join(result.sns.hashtags), encoding="utf-8")

        return output_path

    @staticmethod
    def write_payload(result: "DeckResult", path: Path) -> Path:
        """Write only the JSON payload to ``path``."""
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(
            json.dumps(result.to_payload(), ensure_ascii=False, indent=2),
            encoding="utf-8",
        )
        return path
