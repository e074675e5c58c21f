"""Terminal UI module for peat.

Provides a Textual-based TUI with an article analysis panel and a tutoring
chat panel.

Module structure (each module hides a design decision):
- widgets.py: Custom widgets (settings bar, analysis panel, chat rendering)
- styles.py: CSS styling (layout decisions)
- themes.py: Color palettes and theme configuration
- app.py: Application orchestration (user interaction flow)
"""

from .app import TutorApp, run_textual_tui
from .widgets import AnalysisPanel, ChatHistoryWidget, ChatInputBar, SettingsBar

__all__ = [
    "AnalysisPanel",
    "ChatHistoryWidget",
    "ChatInputBar",
    "SettingsBar",
    "TutorApp",
    "run_textual_tui",
]
