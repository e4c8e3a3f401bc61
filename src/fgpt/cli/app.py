"""Main CLI application using Typer."""
import asyncio
import json

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape

from ..conversation import ConversationState, ConversationStateMachine, Phase
from ..exceptions import FGPTError
from ..ui.config import SAMPLE_PROMPTS, LogLevel
from .formatting import format_message, format_stage, questions_table
from .providers import get_generation_client

# Load environment variables
load_dotenv()

# Create Typer app
app = typer.Typer(
    name="fgpt",
    help="AI-powered form generator: describe a form, get a structured question list",
    no_args_is_help=True,
    add_completion=True,
)

# Console for rich output
console = Console()


def _console_debug_callback(log_level: str | None):
    """Build a debug callback printing to the console, or None when disabled."""
    if log_level is None:
        return None
    threshold = LogLevel.parse(log_level)

    def _callback(level: str, component: str, message: str) -> None:
        severity = LogLevel.parse(level)
        if severity < threshold:
            return
        console.print(f"[{severity.color}]{severity.name:<7}[/] [bold]\\[{component}][/bold] {escape(message)}", markup=True, highlight=False)

    return _callback


def _print_reply(state: ConversationState) -> None:
    """Print the assistant reply and, on success, the form."""
    if state.last_message is not None:
        console.print(format_message(state.last_message))
    if state.phase is Phase.PRESENTING:
        console.print(questions_table(state.committed_questions))


async def _submit_with_status(machine: ConversationStateMachine, prompt: str) -> ConversationState:
    """Run a submission while showing the current stage in a status spinner."""
    with console.status(format_stage(0)) as status:
        def _show_stage(state: ConversationState) -> None:
            if state.phase is Phase.GENERATING:
                status.update(format_stage(state.stage_index))

        machine.add_listener(_show_stage)
        try:
            if machine.state.phase is Phase.PRESENTING:
                return await machine.regenerate(prompt)
            return await machine.submit(prompt)
        finally:
            machine.remove_listener(_show_stage)


@app.command()
def generate(
    prompt: str = typer.Argument(..., help="Natural-language description of the form"),
    as_json: bool = typer.Option(
        False,
        "--json",
        help="Print the generated questions as JSON instead of a table"
    ),
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Print trace output with level: debug (all), info, warning, or error"
    ),
):
    """Generate a form from a single prompt."""
    async def _generate():
        client = get_generation_client(console)
        machine = ConversationStateMachine(client)
        debug_callback = _console_debug_callback(log_level)
        machine.set_debug_callback(debug_callback)
        client.set_debug_callback(debug_callback)

        try:
            if as_json:
                state = await machine.submit(prompt)
            else:
                state = await _submit_with_status(machine, prompt)
        except FGPTError as e:
            console.print(f"[red]Error: {e}[/red]")
            raise typer.Exit(code=1)
        finally:
            await client.close()

        if state.phase is not Phase.PRESENTING:
            error_kind = state.last_error.value if state.last_error else "unknown"
            console.print(f"[red]Error: form generation failed ({error_kind})[/red]")
            raise typer.Exit(code=1)

        if as_json:
            payload = [q.to_payload() for q in state.committed_questions]
            console.print_json(json.dumps(payload))
        else:
            _print_reply(state)

    asyncio.run(_generate())


@app.command()
def chat(
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Print trace output with level: debug (all), info, warning, or error"
    ),
):
    """Interactive chat mode: describe forms and refine them."""
    async def _chat():
        client = get_generation_client(console)
        machine = ConversationStateMachine(client)
        debug_callback = _console_debug_callback(log_level)
        machine.set_debug_callback(debug_callback)
        client.set_debug_callback(debug_callback)

        console.print("[bold cyan]FGPT Interactive Chat[/bold cyan]")
        console.print("[dim]Type '/new' to start a new form, 'exit', 'quit', or 'q' to leave[/dim]\n")
        console.print("[bold]Popular form types:[/bold]")
        for sample in SAMPLE_PROMPTS:
            console.print(f"  [blue]⚡[/blue] {sample}")
        console.print()

        try:
            while True:
                try:
                    user_input = console.input("[bold yellow]You:[/bold yellow] ")
                except (KeyboardInterrupt, EOFError):
                    console.print("\n[dim]Goodbye![/dim]")
                    break

                command = user_input.strip().lower()
                if not command:
                    continue
                if command in ("exit", "quit", "q"):
                    console.print("[dim]Goodbye![/dim]")
                    break
                if command == "/new":
                    machine.reset()
                    console.print("[dim]Started a new form.[/dim]\n")
                    continue

                try:
                    state = await _submit_with_status(machine, user_input)
                except FGPTError as e:
                    console.print(f"[yellow]{e}[/yellow]")
                    continue

                _print_reply(state)
                console.print()
        finally:
            await client.close()

    asyncio.run(_chat())


@app.command(name="tui")
def tui_command(
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Show log panel with level: debug (all), info, warning, or error"
    ),
):
    """Launch interactive TUI."""
    async def _tui():
        from ..ui import run_textual_tui

        client = get_generation_client(console)
        try:
            await run_textual_tui(client=client, log_level=log_level)
        finally:
            await client.close()
            console.print("\n[dim]Goodbye![/dim]")

    try:
        asyncio.run(_tui())
    except KeyboardInterrupt:
        pass


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
