"""Custom Textual widgets for the TUI.

Hides widget implementation details:
- Backend settings entry
- Article entry and analysis result display
- Chat message rendering and the typing indicator
"""

from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.message import Message
from textual.widgets import Button, Input, LoadingIndicator, Markdown, Select, Static, TextArea

from ..config import BackendKind, TutorSettings
from ..llm.models import ChatMessage, MessageRole
from ..tutor import AnalysisResult, ChatHistory

BACKEND_LABELS = {
    BackendKind.OLLAMA: "Ollama (local)",
    BackendKind.GEMINI: "Gemini",
    BackendKind.OPENAI: "OpenAI",
}


class SettingsBar(Horizontal):
    """Backend selector with the credential field for the selected backend.

    Ollama needs a URL; cloud backends need an API key, entered masked.
    Edits are written straight into the shared settings object and are
    validated only when the next backend call is made.
    """

    def __init__(self, settings: TutorSettings, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._settings = settings

    def compose(self):
        current = self._settings.backend if isinstance(self._settings.backend, BackendKind) else BackendKind.OLLAMA
        yield Static("Light English Teacher", id="app-title")
        yield Select(
            [(label, kind.value) for kind, label in BACKEND_LABELS.items()],
            value=current.value,
            allow_blank=False,
            id="backend-select",
        )
        yield Input(id="credential-input")

    def on_mount(self) -> None:
        self._sync_credential_input()

    def _sync_credential_input(self) -> None:
        credential = self.query_one("#credential-input", Input)
        if self._settings.backend == BackendKind.OLLAMA:
            credential.password = False
            credential.placeholder = "Ollama URL"
            credential.value = self._settings.url
        else:
            credential.password = True
            credential.placeholder = f"{BACKEND_LABELS.get(self._settings.backend, 'API')} API Key"
            credential.value = self._settings.api_key

    def on_select_changed(self, event: Select.Changed) -> None:
        if event.select.id == "backend-select" and event.value is not Select.BLANK:
            self._settings.set_backend(str(event.value))
            self._sync_credential_input()

    def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id != "credential-input":
            return
        if self._settings.backend == BackendKind.OLLAMA:
            self._settings.url = event.value
        else:
            self._settings.api_key = event.value


class AnalysisPanel(Vertical):
    """Article entry, analyze button and the analysis result."""

    BORDER_TITLE = "Article Analysis"

    class AnalyzeRequested(Message):
        """Posted when the user asks for an article to be analyzed."""

        def __init__(self, article: str) -> None:
            super().__init__()
            self.article = article

    class StarterSelected(Message):
        """Posted when the user clicks a conversation starter."""

        def __init__(self, starter: str) -> None:
            super().__init__()
            self.starter = starter

    def __init__(self, *args, article: str = "", **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._article = article
        self._starters: list[str] = []

    def compose(self):
        text_area = TextArea(self._article, id="article-input", show_line_numbers=False)
        text_area.border_title = "Paste an English article here"
        yield text_area
        yield Button("Analyze", id="analyze-btn", variant="primary")
        yield LoadingIndicator(id="analysis-loading")
        with VerticalScroll(id="analysis-result"):
            yield Static(id="summary")
            yield Vertical(id="starters")

    def on_mount(self) -> None:
        self.query_one("#analysis-loading", LoadingIndicator).display = False
        self.query_one("#analysis-result").display = False

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        if event.button.id == "analyze-btn":
            article = self.query_one("#article-input", TextArea).text
            if article.strip():
                self.post_message(self.AnalyzeRequested(article))
        elif event.button.has_class("starter") and event.button.name is not None:
            index = int(event.button.name)
            if index < len(self._starters):
                self.post_message(self.StarterSelected(self._starters[index]))

    def set_loading(self, loading: bool) -> None:
        button = self.query_one("#analyze-btn", Button)
        button.disabled = loading
        button.label = "Analyzing..." if loading else "Analyze"
        self.query_one("#analysis-loading", LoadingIndicator).display = loading
        if loading:
            self.query_one("#analysis-result").display = False

    def show_result(self, result: AnalysisResult | None) -> None:
        """Render a result; a failed result shows only its summary."""
        container = self.query_one("#analysis-result")
        starters = self.query_one("#starters", Vertical)
        starters.remove_children()
        self._starters = []

        if result is None:
            container.display = False
            return

        summary = self.query_one("#summary", Static)
        summary.update(result.summary)
        summary.set_class(not result.is_usable, "-failed")

        self._starters = list(result.starters)
        if result.is_usable:
            starters.mount(Static("Click a question below to start the conversation!", classes="hint"))
            starters.mount_all(
                Button(starter, name=str(i), classes="starter")
                for i, starter in enumerate(self._starters)
            )
        container.display = True

    def set_starters_enabled(self, enabled: bool) -> None:
        for button in self.query(".starter").results(Button):
            button.disabled = not enabled


class ChatHistoryWidget(VerticalScroll):
    """Scrollable chat history mirroring the session's ChatHistory.

    The widget only ever appends rendered messages; when the session's
    history shrinks (after a reset) it re-renders from scratch.
    """

    BORDER_TITLE = "Chat"
    BORDER_SUBTITLE = "Conversation history"

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._rendered = 0

    def sync(self, history: ChatHistory) -> None:
        """Render messages added to ``history`` since the last sync."""
        if len(history) < self._rendered:
            self.remove_children()
            self._rendered = 0

        for msg in history.messages[self._rendered:]:
            self._render_message(msg)
        self._rendered = len(history)
        self.border_subtitle = f"{self._rendered} messages"
        self.scroll_end(animate=False)

    def _render_message(self, msg: ChatMessage) -> None:
        """Render a single message to the display."""
        if msg.role == MessageRole.HUMAN:
            css_class = "user-message"
        elif msg.role == MessageRole.AI:
            css_class = "assistant-message"
        else:
            return

        # Textual's Markdown renders markup only; raw HTML in model output is not interpreted
        self.mount(Markdown(msg.content, classes=f"chat-message {css_class}"))


class TypingIndicator(Static):
    """Shown while the tutor is composing a reply."""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__("Tutor is typing...", *args, **kwargs)


class ChatInputBar(Horizontal):
    """Chat input with Send button."""

    class Submitted(Message):
        """Message sent when user submits input."""

        def __init__(self, value: str) -> None:
            super().__init__()
            self.value = value

    def compose(self):
        yield Input(placeholder="Type your message in English...", id="chat-input")
        yield Button("Send", id="send-btn", variant="success")

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        self._submit()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        if event.button.id == "send-btn":
            self._submit()

    def _submit(self) -> None:
        chat_input = self.query_one("#chat-input", Input)
        value = chat_input.value.strip()
        if value:
            chat_input.value = ""
            self.post_message(self.Submitted(value))

    def set_enabled(self, enabled: bool) -> None:
        self.query_one("#chat-input", Input).disabled = not enabled
        self.query_one("#send-btn", Button).disabled = not enabled

    def focus_input(self) -> None:
        """Focus the text input."""
        self.query_one("#chat-input", Input).focus()
