"""Cardnews Automator - turn one news article into a 5, 7 or 9 card news deck."""

__version__ = "0.1.0"
