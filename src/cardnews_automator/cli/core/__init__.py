"""Shared CLI utilities."""

from .console import console, print_error, print_info, print_success, print_warning
from .types import Failure, Result, Success

__all__ = [
    "console",
    "print_error",
    "print_info",
    "print_success",
    "print_warning",
    "Failure",
    "Result",
    "Success",
]
