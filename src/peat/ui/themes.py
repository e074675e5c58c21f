"""Theme definitions for the TUI.

This module hides the design decisions about:
- Color palettes and visual appearance
- Theme variables (borders, scrollbars, etc.)

To add a new theme, define it here and register in the app.
"""

from textual.theme import Theme

# Warm light theme built around the tutor's coral accent
LIGHT_CORAL = Theme(
    name="light-coral",
    primary="#E57373",      # Coral - buttons, user messages
    secondary="#4B5563",    # Slate - header bar
    accent="#EF9A9A",       # Light coral - hover states
    foreground="#1F2937",   # Near-black text
    background="#F8F7F4",   # Paper
    success="#66BB6A",
    warning="#FFA726",
    error="#E53935",
    surface="#FFFFFF",      # Cards and panels
    panel="#F3F4F6",        # Chat panel background
    dark=False,
    variables={
        "border": "#D1D5DB",
        "scrollbar": "#D1D5DB",
        "scrollbar-hover": "#9CA3AF",
        "footer-key-foreground": "#E57373",
        "input-selection-background": "#E57373 35%",
    },
)
