"""Services for cross-cutting concerns.

- DeckOutputService: Saves finished decks and their share copy to disk
"""

from .output import DeckOutputService

__all__ = ["DeckOutputService"]
