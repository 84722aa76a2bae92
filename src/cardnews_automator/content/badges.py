"""Corner badges carried in article titles, e.g. ``[단독] ...``."""

from __future__ import annotations

import re

from .models import Badge

_BADGE_PATTERN = re.compile(r"\[([^\]]+)\]")
_BADGE_STRIP_PATTERN = re.compile(r"\[[^\]]+\]\s*")

_DEFAULT_COLORS = ("#ffffff", "#6b7280")

# corner text -> (display text, text color, background color)
SPECIAL_BADGES: dict[str, tuple[str | None, str, str]] = {
    "단독": ("EXCLUSIVE", "#ffffff", "#dc2626"),
    "심층기획": ("IN-DEPTH", "#ffffff", "#2563eb"),
    "속보": ("BREAKING", "#ffffff", "#ea580c"),
    "특집": ("SPECIAL", "#ffffff", "#7c3aed"),
    "포토": (None, "#ffffff", "#059669"),
    "영상": (None, "#ffffff", "#0891b2"),
    "인터뷰": (None, "#ffffff", "#d97706"),
}


def extract_badge(title: str | None) -> Badge | None:
    """Return the first bracketed badge in the title, if any."""
    if not title:
        return None
    match = _BADGE_PATTERN.search(title)
    if not match:
        return None

    corner_text = match.group(1).strip()
    display, color, bg_color = SPECIAL_BADGES.get(corner_text, (None, *_DEFAULT_COLORS))
    return Badge(
        type=corner_text,
        text=display or corner_text,
        color=color,
        bg_color=bg_color,
    )


def strip_badges(title: str | None) -> str:
    """Remove every bracketed badge from the title."""
    if not title:
        return ""
    return _BADGE_STRIP_PATTERN.sub("", title).strip()
