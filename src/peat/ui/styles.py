"""CSS styles for the TUI.

Hides layout and styling decisions from the application logic.
Two-column layout: article analysis on the left, chat on the right,
with the backend settings bar across the top.
"""

APP_CSS = """
/* ============================================
   Main Screen Layout - 2 columns under a settings bar
   ============================================ */
Screen {
    layout: grid;
    grid-size: 2 2;
    grid-columns: 1fr 1fr;
    grid-rows: auto 1fr;
    background: $background;
}

/* ============================================
   Settings Bar - Backend + Credential
   ============================================ */
#settings-bar {
    column-span: 2;
    height: auto;
    padding: 0 1;
    background: $secondary;
}

#app-title {
    width: 1fr;
    padding: 1 0;
    color: $text;
    text-style: bold;
}

#backend-select {
    width: 24;
}

#credential-input {
    width: 40;
}

/* ============================================
   Analysis Panel - Article + Result
   ============================================ */
#analysis-panel {
    height: 100%;
    background: $surface;
    border: round $primary 60%;
    border-title-color: $primary;
    border-title-style: bold;
    padding: 0 1;
}

#article-input {
    height: 1fr;
    min-height: 8;
    border: round $border;

    &:focus {
        border: round $primary;
    }
}

#analyze-btn {
    width: 100%;
    margin: 1 0;
}

#analysis-loading {
    height: 3;
    color: $primary;
}

#analysis-result {
    height: 1fr;
}

#summary {
    padding: 1;
    margin-bottom: 1;
    background: $panel;
    border: round $border;

    &.-failed {
        color: $error;
        border: round $error;
    }
}

.hint {
    color: $text-muted;
    margin-bottom: 1;
}

Button.starter {
    width: 100%;
    height: auto;
    min-height: 3;
    margin-bottom: 1;
    background: $primary 20%;
    border: tall $primary 50%;
    content-align: left middle;

    &:hover {
        background: $accent;
    }
}

/* ============================================
   Chat Panel - History, Typing Indicator, Input
   ============================================ */
#chat-panel {
    height: 100%;
    background: $panel;
    border: round $primary 60%;
    padding: 0 1;
}

#chat-history {
    height: 1fr;
    border-title-color: $primary;
    border-title-style: bold;
    border-subtitle-color: $text-muted;
    scrollbar-gutter: stable;
}

.chat-message {
    margin: 1 0 0 0;
    padding: 0 1;
    height: auto;
}

.user-message {
    margin-left: 8;
    background: $primary;
    color: $surface;
}

.assistant-message {
    margin-right: 8;
    background: $surface;
    border: round $border;
}

#typing-indicator {
    height: 1;
    color: $text-muted;
    text-style: italic;
}

ChatInputBar {
    height: auto;
    margin-top: 1;
}

#chat-input {
    width: 1fr;
}

#send-btn {
    min-width: 10;
    margin-left: 1;
}
"""
