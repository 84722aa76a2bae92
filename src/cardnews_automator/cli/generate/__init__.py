"""Deck generation commands."""

from .commands import check_keys, generate

__all__ = ["check_keys", "generate"]
