"""Terminal UI module for FGPT.

Provides a Textual-based TUI on top of the conversation state machine.

Module structure (each module hides a design decision):
- widgets.py: Custom widgets (prompt bar, chat, progress, form preview, log)
- styles.py: CSS styling (layout decisions)
- themes.py: Color palette
- config.py: Display constants and sample prompts
- app.py: Application orchestration (user interaction flow)
"""

from .app import FormGeneratorApp, run_textual_tui
from .config import SAMPLE_PROMPTS, LogLevel
from .widgets import ChatHistoryWidget, DebugPanel, FormPreview, ProgressPanel, PromptBar

__all__ = [
    "ChatHistoryWidget",
    "DebugPanel",
    "FormGeneratorApp",
    "FormPreview",
    "LogLevel",
    "ProgressPanel",
    "PromptBar",
    "SAMPLE_PROMPTS",
    "run_textual_tui",
]
