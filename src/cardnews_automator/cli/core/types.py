"""Result types re-exported for CLI modules."""

from ...constants.types import Failure, Result, Success

__all__ = ["Failure", "Result", "Success"]
