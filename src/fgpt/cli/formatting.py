"""Rich renderables for generated forms and chat messages."""

from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from ..conversation import ChatMessage, MessageRole
from ..forms import Question
from ..progress import LOADING_STAGES
from ..ui.config import MESSAGE_TIMESTAMP_FORMAT, QUESTION_TYPE_LABELS


def format_stage(stage_index: int) -> str:
    """Status line for the current progress stage."""
    stage = LOADING_STAGES[min(stage_index, len(LOADING_STAGES) - 1)]
    return f"{stage.icon} {stage.text} [dim]({stage_index + 1}/{len(LOADING_STAGES)})[/dim]"


def format_message(msg: ChatMessage) -> str:
    """One chat message as Rich markup."""
    timestamp = msg.timestamp.strftime(MESSAGE_TIMESTAMP_FORMAT)
    if msg.role is MessageRole.USER:
        return f"[bold yellow]You[/bold yellow] [dim]{timestamp}[/dim]\n{escape(msg.content)}"
    return f"[bold magenta]FGPT[/bold magenta] [dim]{timestamp}[/dim]\n{escape(msg.content)}"


def questions_table(questions: tuple[Question, ...]) -> Panel:
    """Render a question list as a table inside a panel."""
    table = Table(show_header=True, header_style="bold cyan", expand=True)
    table.add_column("#", style="dim", width=3)
    table.add_column("Question", ratio=3)
    table.add_column("Type", width=16)
    table.add_column("Options", ratio=2)
    table.add_column("Req", width=4, justify="center")

    for number, question in enumerate(questions, 1):
        table.add_row(
            str(number),
            escape(question.text),
            QUESTION_TYPE_LABELS.get(question.type.value, question.type.value),
            escape("\n".join(question.options)) if question.options else "[dim]-[/dim]",
            "[red]*[/red]" if question.required else "",
        )

    return Panel(
        table,
        title="[bold]FGPT Generated Form[/bold]",
        subtitle=f"{len(questions)} questions",
        border_style="blue",
    )
