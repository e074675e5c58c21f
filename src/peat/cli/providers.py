"""Settings and logging setup for the CLI.

Centralizes creation of session settings from environment variables and
command-line overrides. Hides configuration details from command
implementations.
"""

import logging
import sys
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler

from ..config import TutorSettings, load_settings

# Default console for output
_console = Console()

LOG_LEVELS = ("debug", "info", "warning", "error")


def get_settings(
    backend: str | None = None,
    url: str | None = None,
    api_key: str | None = None,
    model: str | None = None,
    locale: str | None = None,
) -> TutorSettings:
    """Create session settings from the environment plus CLI overrides.

    Args:
        backend: Backend override (ollama, gemini, openai)
        url: Ollama URL override
        api_key: API key override for the selected backend
        model: Model override for the selected backend
        locale: Locale override for user-facing notices

    Returns:
        Settings for a new TutorSession
    """
    settings = load_settings()
    if backend:
        settings.set_backend(backend)
    if url:
        settings.url = url
    if api_key:
        settings.api_key = api_key
    if model:
        settings.model = model
    if locale:
        settings.locale = locale
    return settings


def configure_logging(level: str | None, console: Console | None = None) -> None:
    """Route library logging through Rich.

    Args:
        level: debug, info, warning or error; None keeps logging quiet
            (warnings and above only)
        console: Optional Rich console for output (defaults to stderr)
    """
    numeric_level = logging.WARNING
    if level:
        numeric_level = getattr(logging, level.upper(), logging.WARNING)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    logging.basicConfig(
        level=numeric_level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[handler],
        force=True,
    )
    # SDK transport logs are noisy at debug level
    for name in ("httpx", "httpcore", "openai", "google_genai"):
        logging.getLogger(name).setLevel(max(numeric_level, logging.WARNING))


def read_article(path: Path | None, console: Console | None = None) -> str:
    """Read an article from a file, or from stdin when no path is given.

    Raises:
        typer.Exit: If the article is empty
    """
    con = console or _console
    if path is None:
        text = sys.stdin.read()
    else:
        text = path.read_text(encoding="utf-8")

    if not text.strip():
        con.print("[red]Error: the article is empty[/red]")
        raise typer.Exit(code=1)
    return text
