"""Main Textual TUI application.

Renders conversation snapshots and forwards user actions to the state machine.
"""

import asyncio
import contextlib

from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.widgets import Footer, Header

from ..conversation import ConversationState, ConversationStateMachine, Phase
from ..exceptions import FGPTError
from ..generation import GenerationClient
from .config import LogLevel
from .styles import APP_CSS
from .themes import FGPT_AURORA
from .widgets import ChatHistoryWidget, DebugPanel, FormPreview, ProgressPanel, PromptBar, SamplePrompt


class FormGeneratorApp(App):
    """Textual TUI for chatting a form into existence."""

    CSS = APP_CSS
    TITLE = "FGPT"
    SUB_TITLE = "AI-Powered Form Generator"

    BINDINGS = [
        Binding("ctrl+c", "quit", "Quit"),
        Binding("ctrl+n", "new_form", "Create New Form"),
        Binding("ctrl+d", "toggle_debug", "Debug", priority=True),
    ]

    def __init__(
        self,
        client: GenerationClient,
        log_level: str | None = None,
    ) -> None:
        super().__init__()
        self._client = client
        self._log_level = log_level
        self._machine = ConversationStateMachine(client)

    @property
    def machine(self) -> ConversationStateMachine:
        """State machine driving this app."""
        return self._machine

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)

        yield ChatHistoryWidget(id="chat-history")

        with Vertical(id="right-panel"):
            yield ProgressPanel(id="progress-panel")
            yield FormPreview(id="form-preview")

        with Vertical(id="bottom-bar"):
            yield PromptBar(id="prompt-bar")
            yield DebugPanel(id="debug-panel")

        yield Footer()

    def on_mount(self) -> None:
        """Register theme and hook the state machine up to the widgets."""
        self.register_theme(FGPT_AURORA)
        self.theme = "fgpt-aurora"

        log_panel = self.query_one("#debug-panel", DebugPanel)
        if self._log_level is not None:
            log_panel.threshold = LogLevel.parse(self._log_level)
            log_panel.toggle()
            log_panel.trace("info", "TUI", f"Log panel enabled with level: {log_panel.threshold.name}")

        self._machine.set_debug_callback(log_panel.trace)
        if hasattr(self._client, "set_debug_callback"):
            self._client.set_debug_callback(log_panel.trace)

        self._machine.add_listener(self._render_state)
        self.query_one("#prompt-bar", PromptBar).focus_input()

    def _render_state(self, state: ConversationState) -> None:
        """Redraw every widget from a snapshot."""
        self.query_one("#chat-history", ChatHistoryWidget).sync(state.messages)

        progress = self.query_one("#progress-panel", ProgressPanel)
        if state.phase is Phase.GENERATING:
            progress.show_stage(state.stage_index)
        else:
            progress.hide()

        preview = self.query_one("#form-preview", FormPreview)
        if state.phase is Phase.PRESENTING:
            preview.show_questions(state.committed_questions)
        elif not state.committed_questions:
            preview.clear_questions()

        self.query_one("#prompt-bar", PromptBar).set_busy(state.phase is Phase.GENERATING)

    def on_sample_prompt_chosen(self, event: SamplePrompt.Chosen) -> None:
        """Prefill the prompt bar with a sample prompt."""
        self.query_one("#prompt-bar", PromptBar).set_prompt(event.prompt)

    def on_prompt_bar_submitted(self, event: PromptBar.Submitted) -> None:
        """Handle prompt submission."""
        self._generate(event.value)

    @work(group="generation")
    async def _generate(self, prompt: str) -> None:
        """Run the generation as a background async worker."""
        try:
            if self._machine.state.phase is Phase.PRESENTING:
                state = await self._machine.regenerate(prompt)
            else:
                state = await self._machine.submit(prompt)
        except FGPTError as e:
            self.notify(str(e), severity="warning", timeout=3)
            return

        if state.phase is Phase.PRESENTING:
            self.notify("Your form is ready", severity="information", timeout=3)
        elif state.last_error is not None:
            self.notify(f"Generation failed ({state.last_error.value})", severity="error", timeout=5)

    def action_new_form(self) -> None:
        """Reset the conversation to start a new form."""
        self._machine.reset()
        self.query_one("#prompt-bar", PromptBar).focus_input()
        self.notify("Ready for a new form", timeout=2)

    def action_toggle_debug(self) -> None:
        """Toggle the log panel visibility."""
        log_panel = self.query_one("#debug-panel", DebugPanel)
        is_visible = log_panel.toggle()
        self.notify(f"Log panel {'shown' if is_visible else 'hidden'}", timeout=2)

    def on_unmount(self) -> None:
        """Detach from the state machine when the app exits."""
        self._machine.remove_listener(self._render_state)
        self._machine.reset()


async def run_textual_tui(client: GenerationClient, log_level: str | None = None) -> None:
    """Run the Textual TUI.

    Args:
        client: Generation client used for every submission
        log_level: Log level for panel (debug/info/warning/error), None to hide
    """
    app = FormGeneratorApp(client=client, log_level=log_level)
    with contextlib.suppress(KeyboardInterrupt, asyncio.CancelledError):
        await app.run_async()
