"""Typer app configuration and logging setup."""

from __future__ import annotations

import logging
import warnings
from pathlib import Path

import typer
from dotenv import load_dotenv

from ..providers import RuntimeSettings

# Load environment variables from .env file
load_dotenv()

# httpx cleanup after asyncio.run() closes the loop
warnings.filterwarnings("ignore", message=".*Event loop is closed.*")
warnings.filterwarnings("ignore", category=ResourceWarning)

app = typer.Typer(
    name="cardnews",
    help="Turn news articles into 5, 7 or 9 card news decks",
    add_completion=False,
)

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(message)s"


def register_commands() -> None:
    """Register all commands from feature modules."""
    from .generate.commands import check_keys, generate

    app.command(name="generate")(generate)
    app.command(name="check-keys")(check_keys)


def _file_logger(name: str, path: Path) -> None:
    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    logger.handlers = []
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)


def setup_logging(log_dir: Path | None = None) -> None:
    """Configure logging for CLI.

    - Suppresses console output from libraries
    - ``ai_calls`` logger -> ai_calls.log (full provider requests/responses)
    - ``cardnews`` logger -> cardnews.log (pipeline steps)
    """
    log_dir = log_dir or RuntimeSettings().log_dir
    log_dir.mkdir(parents=True, exist_ok=True)

    root_logger = logging.getLogger()
    root_logger.handlers = []
    root_logger.setLevel(logging.CRITICAL)

    for logger_name in ["httpx", "httpcore", "urllib3", "asyncio"]:
        logger = logging.getLogger(logger_name)
        logger.setLevel(logging.WARNING)
        logger.propagate = False

    _file_logger("ai_calls", log_dir / "ai_calls.log")
    _file_logger("cardnews", log_dir / "cardnews.log")


# Initialize logging on module import
setup_logging()

# Register all commands
register_commands()


def main() -> None:
    """CLI entry point."""
    app()
