"""Theme definitions for the TUI.

This module hides the color palette. To add a new theme, define it here and
register it in the app.
"""

from textual.theme import Theme

# Blue-to-violet palette matching the FGPT branding
FGPT_AURORA = Theme(
    name="fgpt-aurora",
    primary="#2563eb",      # Blue 600 - main accent
    secondary="#9333ea",    # Purple 600 - secondary accent
    accent="#facc15",       # Yellow 400 - highlights
    foreground="#e2e8f0",   # Slate 200 - text
    background="#0f172a",   # Slate 900
    success="#16a34a",      # Green 600 - completed stages
    warning="#f59e0b",
    error="#ef4444",
    surface="#1e293b",      # Slate 800
    panel="#172033",
    dark=True,
    variables={
        "border": "#334155",
        "border-blurred": "#1e293b",
        "scrollbar": "#1e293b",
        "scrollbar-hover": "#334155",
        "scrollbar-active": "#2563eb",
        "footer-key-foreground": "#facc15",
        "text-muted": "#64748b",
        "input-selection-background": "#2563eb 30%",
    },
)
