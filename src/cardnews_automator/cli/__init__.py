"""Command line interface, one package per feature.

- core/: Shared console and result types
- generate/: Deck generation and credential checks

Usage:
    python -m cardnews_automator.cli --help
    python -m cardnews_automator.cli generate article.json --cards 5
"""

from .app import app, main

__all__ = ["app", "main"]
