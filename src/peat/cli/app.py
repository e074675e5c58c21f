"""Main CLI application using Typer."""
import asyncio
from pathlib import Path

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.markdown import Markdown
from rich.panel import Panel
from rich.table import Table

from ..config import BackendKind, TutorSettings
from ..errors import ConfigurationError, SessionNotReadyError
from ..llm import create_provider_from_config
from ..llm.models import ChatMessage
from ..tutor import AnalysisResult, TutorSession
from .providers import LOG_LEVELS, configure_logging, get_settings, read_article

# Load environment variables
load_dotenv()

# Create Typer app
app = typer.Typer(
    name="peat",
    help="Proactive English Article Tutor: discuss an article with an LLM to practice English",
    no_args_is_help=True,
    add_completion=True,
)

# Console for rich output
console = Console()

EXIT_COMMANDS = ("exit", "quit", "q")


@app.callback()
def main_options(
    ctx: typer.Context,
    backend: str | None = typer.Option(
        None,
        "--backend",
        "-b",
        help="LLM backend: ollama, gemini or openai (default: $PEAT_BACKEND or ollama)"
    ),
    url: str | None = typer.Option(
        None,
        "--url",
        "-u",
        help="Ollama server URL (default: $OLLAMA_URL or http://localhost:11434)"
    ),
    api_key: str | None = typer.Option(
        None,
        "--api-key",
        "-k",
        help="API key for cloud backends (default: $GEMINI_API_KEY / $OPENAI_API_KEY)"
    ),
    model: str | None = typer.Option(
        None,
        "--model",
        "-m",
        help="Model override for the selected backend"
    ),
    locale: str | None = typer.Option(
        None,
        "--locale",
        help="Language of notices: zh-TW or en (default: $PEAT_LOCALE or zh-TW)"
    ),
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        "-l",
        envvar="PEAT_LOG_LEVEL",
        help=f"Log level: {', '.join(LOG_LEVELS)}"
    ),
):
    """Common backend options, shared by all commands."""
    if log_level and log_level.lower() not in LOG_LEVELS:
        raise typer.BadParameter(f"must be one of: {', '.join(LOG_LEVELS)}", param_hint="--log-level")
    configure_logging(log_level)
    try:
        ctx.obj = get_settings(backend=backend, url=url, api_key=api_key, model=model, locale=locale)
    except ConfigurationError as e:
        raise typer.BadParameter(str(e), param_hint="environment") from e


def _print_analysis(result: AnalysisResult) -> None:
    """Render an analysis result."""
    if not result.is_usable:
        console.print(f"[red]{result.summary}[/red]")
        return

    console.print(Panel(result.summary, title="Summary", border_style="cyan"))
    table = Table(show_header=False, box=None)
    table.add_column("#", style="bold cyan", width=3)
    table.add_column("Conversation starter")
    for i, starter in enumerate(result.starters, 1):
        table.add_row(str(i), starter)
    console.print(table)


def _print_reply(message: ChatMessage | None) -> None:
    if message is None:
        return
    # Model output goes through Markdown, which does not interpret raw HTML
    console.print("[bold green]Tutor:[/bold green]")
    console.print(Markdown(message.content))
    console.print()


@app.command()
def analyze(
    ctx: typer.Context,
    article: Path | None = typer.Argument(
        None,
        exists=True,
        file_okay=True,
        dir_okay=False,
        help="Article file (reads stdin when omitted)"
    ),
):
    """Summarize an article and suggest conversation starters."""
    settings: TutorSettings = ctx.obj
    text = read_article(article, console)

    async def _analyze():
        session = TutorSession(settings)
        with console.status("[dim]Analyzing...[/dim]"):
            result = await session.analyze(text)
        _print_analysis(result)
        if not result.is_usable:
            raise typer.Exit(code=1)

    asyncio.run(_analyze())


@app.command()
def chat(
    ctx: typer.Context,
    article: Path = typer.Argument(
        ...,
        exists=True,
        file_okay=True,
        dir_okay=False,
        help="Article file to discuss"
    ),
):
    """Analyze an article, then discuss it interactively."""
    settings: TutorSettings = ctx.obj
    text = read_article(article, console)

    async def _chat():
        session = TutorSession(settings)

        with console.status("[dim]Analyzing...[/dim]"):
            result = await session.analyze(text)
        _print_analysis(result)
        if not session.is_ready:
            raise typer.Exit(code=1)

        console.print()
        console.print("[bold cyan]PEAT Interactive Chat[/bold cyan]")
        console.print("[dim]Type a starter number to use it, '/reset' to restart the chat, "
                      "'exit', 'quit', or 'q' to leave[/dim]\n")

        while True:
            try:
                user_input = console.input("[bold yellow]You:[/bold yellow] ").strip()
            except (KeyboardInterrupt, EOFError):
                console.print("\n[dim]Goodbye![/dim]")
                break

            if not user_input:
                continue

            if user_input.lower() in EXIT_COMMANDS:
                console.print("[dim]Goodbye![/dim]")
                break

            if user_input == "/reset":
                session.reset_conversation()
                console.print("[dim]Chat history cleared.[/dim]\n")
                continue

            if user_input.isdigit() and 1 <= int(user_input) <= len(result.starters):
                user_input = result.starters[int(user_input) - 1]
                console.print(f"[dim]> {user_input}[/dim]")

            try:
                with console.status("[dim]Thinking...[/dim]"):
                    reply = await session.send_message(user_input)
            except SessionNotReadyError as e:
                console.print(f"[red]Error: {e}[/red]")
                continue
            _print_reply(reply)

    asyncio.run(_chat())


@app.command(name="tui")
def tui_command(
    ctx: typer.Context,
    article: Path | None = typer.Argument(
        None,
        exists=True,
        file_okay=True,
        dir_okay=False,
        help="Optional article file to preload"
    ),
):
    """Launch the interactive TUI with analysis and chat panels."""
    from ..ui import run_textual_tui

    settings: TutorSettings = ctx.obj
    text = read_article(article, console) if article else ""

    try:
        asyncio.run(run_textual_tui(settings, article=text))
    except KeyboardInterrupt:
        pass
    console.print("[dim]Goodbye![/dim]")


@app.command()
def check(ctx: typer.Context):
    """Validate the backend settings without calling the backend."""
    settings: TutorSettings = ctx.obj
    config = settings.backend_config()

    table = Table(show_header=False, box=None)
    table.add_column("Setting", style="bold cyan", width=12)
    table.add_column("Value")
    table.add_row("Backend", settings.backend_value)
    if settings.backend == BackendKind.OLLAMA:
        table.add_row("URL", config.url or "(not set)")
    else:
        table.add_row("API key", "SET" if config.api_key else "NOT SET")
    table.add_row("Model", config.model or "(backend default)")
    table.add_row("Locale", settings.locale)
    console.print(table)

    async def _check():
        try:
            provider = create_provider_from_config(config)
        except ConfigurationError as e:
            console.print(f"[red]x[/red] Configuration: {e}")
            raise typer.Exit(code=1)
        async with provider:
            console.print(f"[green]+[/green] Configuration: OK ({getattr(provider, 'model', 'default model')})")

    asyncio.run(_check())


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
