"""Provider factory functions for CLI.

Centralizes creation of the generation client from environment variables.
Hides configuration details from command implementations.
"""

import os

from pydantic import ValidationError
from rich.console import Console

from ..generation import GenerationConfig, HTTPGenerationClient

# Default console for output
_console = Console()


def get_generation_config(console: Console | None = None) -> GenerationConfig:
    """Build the generation config from environment variables.

    Args:
        console: Optional Rich console for output

    Returns:
        Validated generation config

    Raises:
        SystemExit: If FGPT_BASE_URL is missing or the values are invalid

    Environment variables:
        FGPT_BASE_URL: Base URL of the generation service (required)
        FGPT_TIMEOUT: Request timeout in seconds, or 'none' to wait forever (default: 30)
    """
    import typer

    con = console or _console
    base_url = os.getenv("FGPT_BASE_URL")
    if not base_url:
        con.print("[red]Error: FGPT_BASE_URL not set in environment[/red]")
        raise typer.Exit(code=1)

    timeout_raw = os.getenv("FGPT_TIMEOUT", "30").strip().lower()
    try:
        timeout = None if timeout_raw in ("", "none", "0") else float(timeout_raw)
        return GenerationConfig(base_url=base_url, timeout=timeout)
    except (ValueError, ValidationError) as e:
        con.print(f"[red]Error: Invalid generation configuration: {e}[/red]")
        raise typer.Exit(code=1)


def get_generation_client(console: Console | None = None) -> HTTPGenerationClient:
    """Create the HTTP generation client from environment variables.

    Args:
        console: Optional Rich console for output

    Returns:
        HTTP generation client instance
    """
    return HTTPGenerationClient(get_generation_config(console))
