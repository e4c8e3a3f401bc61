"""Custom Textual widgets for the TUI.

Hides widget implementation details:
- Prompt input with history
- Chat message rendering
- Stage-by-stage progress display
- Read-only form preview
- Level-filtered trace log
"""

from collections import deque
from datetime import datetime

from rich.markup import escape
from textual.binding import Binding
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.events import Click
from textual.message import Message
from textual.widgets import Button, Input, RichLog, Static

from ..conversation import ChatMessage, MessageRole
from ..forms import Question
from ..progress import LOADING_STAGES
from .config import (
    COMPONENT_COLORS,
    INPUT_HISTORY_MAX_SIZE,
    LOG_MAX_MESSAGE_LENGTH,
    LOG_TIMESTAMP_FORMAT,
    MESSAGE_TIMESTAMP_FORMAT,
    QUESTION_TYPE_LABELS,
    SAMPLE_PROMPTS,
    LogLevel,
)


class HistoryInput(Input):
    """Prompt input that recalls earlier prompts with Up/Down."""

    BINDINGS = [
        Binding("up", "recall(-1)", "Previous prompt", show=False),
        Binding("down", "recall(1)", "Next prompt", show=False),
    ]

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._history: deque[str] = deque(maxlen=INPUT_HISTORY_MAX_SIZE)
        # Position in history while browsing; None means editing a fresh draft
        self._cursor: int | None = None
        self._draft = ""

    @property
    def history(self) -> tuple[str, ...]:
        """Submitted prompts, oldest first."""
        return tuple(self._history)

    def remember(self, prompt: str) -> None:
        """Record a submitted prompt, skipping immediate repeats."""
        if prompt and (not self._history or self._history[-1] != prompt):
            self._history.append(prompt)
        self._cursor = None
        self._draft = ""

    def action_recall(self, step: int) -> None:
        if not self._history:
            return
        if self._cursor is None:
            if step > 0:
                return
            self._draft = self.value
            position = len(self._history) - 1
        else:
            position = self._cursor + step

        if position >= len(self._history):
            self._cursor = None
            self.value = self._draft
        else:
            self._cursor = max(position, 0)
            self.value = self._history[self._cursor]
        self.cursor_position = len(self.value)


class PromptBar(Horizontal):
    """Prompt input with a Send button. Enter submits."""

    class Submitted(Message):
        """Message sent when the user submits a prompt."""

        def __init__(self, value: str) -> None:
            super().__init__()
            self.value = value

    def compose(self):
        yield HistoryInput(
            placeholder="Describe your dream form... (e.g. 'Create a customer satisfaction survey')",
            id="prompt-input",
        )
        yield Button("Send", id="send-btn", variant="primary")

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        self._submit()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "send-btn":
            self._submit()

    def _submit(self) -> None:
        prompt_input = self.query_one("#prompt-input", HistoryInput)
        value = prompt_input.value.strip()
        if value:
            prompt_input.remember(value)
            prompt_input.value = ""
            self.post_message(self.Submitted(value))

    def set_prompt(self, value: str) -> None:
        """Prefill the input, e.g. from a sample prompt."""
        prompt_input = self.query_one("#prompt-input", HistoryInput)
        prompt_input.value = value
        prompt_input.cursor_position = len(value)
        prompt_input.focus()

    def set_busy(self, busy: bool) -> None:
        """Disable input while a form is being generated."""
        self.query_one("#prompt-input", HistoryInput).disabled = busy
        self.query_one("#send-btn", Button).disabled = busy

    def focus_input(self) -> None:
        """Focus the prompt input."""
        self.query_one("#prompt-input", HistoryInput).focus()


class SamplePrompt(Static):
    """Clickable sample prompt shown in the empty chat."""

    class Chosen(Message):
        """Message sent when a sample prompt is clicked."""

        def __init__(self, prompt: str) -> None:
            super().__init__()
            self.prompt = prompt

    def __init__(self, prompt: str, *args, **kwargs) -> None:
        super().__init__(f"⚡ {prompt}", *args, **kwargs)
        self._prompt = prompt

    def on_click(self, event: Click) -> None:
        event.stop()
        self.post_message(self.Chosen(self._prompt))


class ChatHistoryWidget(VerticalScroll):
    """Scrollable chat history rendered from conversation snapshots."""

    BORDER_TITLE = "Chat"
    BORDER_SUBTITLE = "Describe the form you need"
    ALLOW_MAXIMIZE = True

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._rendered_ids: list[str] = []

    def on_mount(self) -> None:
        self._render_welcome()

    def sync(self, messages: tuple[ChatMessage, ...]) -> None:
        """Bring the display in line with the message log.

        Messages are append-only, so only new ones are mounted. A shorter log
        means the conversation was reset.
        """
        ids = [msg.id for msg in messages]
        if ids[:len(self._rendered_ids)] != self._rendered_ids:
            self.clear_history()

        for msg in messages[len(self._rendered_ids):]:
            self._render_message(msg)
            self._rendered_ids.append(msg.id)

        if self._rendered_ids:
            self.border_subtitle = f"{len(self._rendered_ids)} messages"
            self.scroll_end(animate=False)

    def clear_history(self) -> None:
        """Remove all messages and show the welcome screen again."""
        self._rendered_ids.clear()
        self.remove_children()
        self.border_subtitle = self.BORDER_SUBTITLE
        self._render_welcome()

    def _render_welcome(self) -> None:
        welcome = Vertical(classes="welcome")
        welcome.compose_add_child(Static("Welcome to FGPT!", classes="welcome-title"))
        welcome.compose_add_child(Static(
            "Your intelligent form creation assistant. Describe what you need "
            "and a professional form will be generated for you.",
            classes="welcome-text",
        ))
        welcome.compose_add_child(Static("★ Popular Form Types ★", classes="welcome-subtitle"))
        for prompt in SAMPLE_PROMPTS:
            welcome.compose_add_child(SamplePrompt(prompt, classes="sample-prompt"))
        self.mount(welcome)

    def _render_message(self, msg: ChatMessage) -> None:
        if not self._rendered_ids:
            for welcome in self.query(".welcome"):
                welcome.remove()

        if msg.role is MessageRole.USER:
            header = "You"
            border_class = "user-message"
        else:
            header = "FGPT"
            border_class = "assistant-message"

        timestamp = msg.timestamp.strftime(MESSAGE_TIMESTAMP_FORMAT)
        container = Vertical(classes=f"chat-message {border_class}")
        container.compose_add_child(Static(f"{header} [{timestamp}]", classes="message-header", markup=False))
        container.compose_add_child(Static(msg.content, classes="message-content", markup=False))
        self.mount(container)


class ProgressPanel(Static):
    """Stage list for the generation in flight.

    Completed stages get a check mark, the current stage a spinner glyph and
    pending stages a clock.
    """

    BORDER_TITLE = "FGPT is Creating Your Form"

    def on_mount(self) -> None:
        self.display = False

    def show_stage(self, stage_index: int) -> None:
        """Render the stage list with `stage_index` as the current stage."""
        lines = []
        for index, stage in enumerate(LOADING_STAGES):
            if index < stage_index:
                marker = "[green]✔[/]"
                text = stage.text
            elif index == stage_index:
                marker = "[bold blue]⟳[/]"
                text = f"[bold]{stage.text}[/]"
            else:
                marker = "[dim]◷[/]"
                text = f"[dim]{stage.text}[/]"
            lines.append(f"{marker} {stage.icon} {text}")
        self.update("\n".join(lines))
        self.display = True

    def hide(self) -> None:
        """Hide the panel once nothing is generating."""
        self.display = False


class FormPreview(VerticalScroll):
    """Read-only listing of the committed questions."""

    BORDER_TITLE = "FGPT Generated Form"
    BORDER_SUBTITLE = "Intelligently crafted for optimal user experience"

    def on_mount(self) -> None:
        self.display = False

    def show_questions(self, questions: tuple[Question, ...]) -> None:
        """Replace the preview with a new question list."""
        self.remove_children()
        for number, question in enumerate(questions, 1):
            self.mount(Static(self._format_question(number, question), classes="form-question"))
        self.border_subtitle = f"{len(questions)} questions"
        self.display = True

    def clear_questions(self) -> None:
        """Remove the preview."""
        self.remove_children()
        self.border_subtitle = self.BORDER_SUBTITLE
        self.display = False

    @staticmethod
    def _format_question(number: int, question: Question) -> str:
        required = " [red]*[/]" if question.required else ""
        label = QUESTION_TYPE_LABELS.get(question.type.value, question.type.value)
        lines = [f"[bold]{number}. {escape(question.text)}[/]{required}", f"[dim]{label}[/]"]
        for option in question.options or ():
            lines.append(f"  ○ {escape(option)}")
        return "\n".join(lines)


class DebugPanel(RichLog):
    """Trace panel fed directly by the debug callbacks.

    `trace` has the debug-callback signature, so the panel can be handed to
    set_debug_callback() as is. Hidden until --log-level or Ctrl+D.
    """

    BORDER_TITLE = "Log"

    def __init__(self, *args, threshold: LogLevel = LogLevel.DEBUG, **kwargs) -> None:
        super().__init__(*args, markup=True, highlight=False, wrap=False, **kwargs)
        self._threshold = threshold
        self.display = False
        self._refresh_subtitle()

    @property
    def threshold(self) -> LogLevel:
        """Lowest level written to the panel."""
        return self._threshold

    @threshold.setter
    def threshold(self, level: LogLevel) -> None:
        self._threshold = level
        self._refresh_subtitle()

    def trace(self, level: str, component: str, message: str) -> None:
        """Write one entry unless it falls below the threshold."""
        severity = LogLevel.parse(level)
        if severity < self._threshold:
            return
        if len(message) > LOG_MAX_MESSAGE_LENGTH:
            message = message[:LOG_MAX_MESSAGE_LENGTH] + "..."

        tag_color = COMPONENT_COLORS.get(component, "white")
        self.write(
            f"[dim]{datetime.now():{LOG_TIMESTAMP_FORMAT}}[/] "
            f"[{severity.color}]{severity.name:<7}[/] "
            f"[{tag_color}]\\[{component}][/] {escape(message)}"
        )

    def toggle(self) -> bool:
        """Flip visibility and return whether the panel is now shown."""
        self.display = not self.display
        self._refresh_subtitle()
        return self.display

    def _refresh_subtitle(self) -> None:
        self.border_subtitle = f"Level: {self._threshold.name}" if self.display else "Hidden"
