"""Main Textual TUI application.

Orchestrates the UI components and routes user interaction to a
TutorSession. The session owns all tutoring state; the app only renders it
after each change and gates input on the session's loading flags.
"""

import asyncio

from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.widgets import Footer, Header

from ..config import TutorSettings
from ..errors import PeatError
from ..llm.models import MessageRole
from ..tutor import PendingTurn, TutorSession
from .styles import APP_CSS
from .themes import LIGHT_CORAL
from .widgets import (
    AnalysisPanel,
    ChatHistoryWidget,
    ChatInputBar,
    SettingsBar,
    TypingIndicator,
)


class TutorApp(App):
    """Textual TUI for article analysis and tutoring chat."""

    CSS = APP_CSS
    TITLE = "PEAT"
    SUB_TITLE = "Proactive English Article Tutor"

    BINDINGS = [
        Binding("ctrl+c", "quit", "Quit"),
        Binding("ctrl+k", "clear_chat", "Clear Chat", priority=True),
        Binding("ctrl+r", "copy_last_response", "Copy Response", priority=True),
    ]

    def __init__(self, settings: TutorSettings, article: str = "") -> None:
        super().__init__()
        self.session = TutorSession(settings)
        self._article = article

    def compose(self) -> ComposeResult:
        yield Header()
        yield SettingsBar(self.session.settings, id="settings-bar")
        yield AnalysisPanel(id="analysis-panel", article=self._article)
        with Vertical(id="chat-panel"):
            yield ChatHistoryWidget(id="chat-history")
            yield TypingIndicator(id="typing-indicator")
            yield ChatInputBar(id="chat-input-bar")
        yield Footer()

    def on_mount(self) -> None:
        """Called when app is mounted."""
        self.register_theme(LIGHT_CORAL)
        self.theme = LIGHT_CORAL.name
        self._refresh_state()

    def _refresh_state(self) -> None:
        """Render the session state and gate inputs on it."""
        session = self.session
        analysis = self.query_one("#analysis-panel", AnalysisPanel)
        chat = self.query_one("#chat-history", ChatHistoryWidget)
        input_bar = self.query_one("#chat-input-bar", ChatInputBar)

        analysis.set_loading(session.is_analysis_loading)
        chat.sync(session.history)
        self.query_one("#typing-indicator", TypingIndicator).display = session.is_chat_loading

        can_chat = session.is_ready and not session.is_chat_loading
        input_bar.set_enabled(can_chat)
        analysis.set_starters_enabled(can_chat)

    def on_analysis_panel_analyze_requested(self, event: AnalysisPanel.AnalyzeRequested) -> None:
        self._run_analysis(event.article)

    def on_analysis_panel_starter_selected(self, event: AnalysisPanel.StarterSelected) -> None:
        self._send(event.starter)

    def on_chat_input_bar_submitted(self, event: ChatInputBar.Submitted) -> None:
        self._send(event.value)

    def _send(self, text: str) -> None:
        try:
            turn = self.session.begin_turn(text)
        except PeatError as e:
            self.notify(str(e), severity="warning", timeout=3)
            return
        self._refresh_state()
        self._run_turn(turn)

    @work(exclusive=True, group="analysis")
    async def _run_analysis(self, article: str) -> None:
        """Run the analysis as a background async worker."""
        analysis = self.query_one("#analysis-panel", AnalysisPanel)
        generation = self.session.begin_analysis(article)
        analysis.show_result(None)
        self._refresh_state()

        result = await self.session.complete_analysis(generation, article)
        if result is not None:
            analysis.show_result(result)
            if not result.is_usable:
                self.notify("Analysis unusable, you can retry.", severity="error", timeout=5)
        self._refresh_state()
        if self.session.is_ready:
            self.query_one("#chat-input-bar", ChatInputBar).focus_input()

    @work(group="chat")
    async def _run_turn(self, turn: PendingTurn) -> None:
        """Wait for the tutor's reply as a background async worker."""
        await self.session.complete_turn(turn)
        self._refresh_state()
        self.query_one("#chat-input-bar", ChatInputBar).focus_input()

    def action_clear_chat(self) -> None:
        """Clear the chat history."""
        self.session.reset_conversation()
        self._refresh_state()
        self.notify("Chat cleared", timeout=2)

    def action_copy_last_response(self) -> None:
        """Copy last tutor response to clipboard."""
        for msg in reversed(self.session.history.messages):
            if msg.role == MessageRole.AI:
                self.copy_to_clipboard(msg.content)
                self.notify("Response copied")
                return
        self.notify("No response to copy", severity="warning")


async def run_textual_tui(settings: TutorSettings, article: str = "") -> None:
    """Run the Textual TUI.

    Args:
        settings: Session settings (backend, credentials, locale)
        article: Optional article text to preload into the analysis panel
    """
    app = TutorApp(settings, article=article)
    try:
        await app.run_async()
    except (KeyboardInterrupt, asyncio.CancelledError):
        pass
