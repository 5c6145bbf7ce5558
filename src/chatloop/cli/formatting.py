"""Rich formatting helpers for the chatloop CLI.

Rich auto-detects TTY and degrades gracefully when piped (no ANSI codes).
"""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.table import Table


def get_console() -> Console:
    """Create a Rich Console that auto-detects TTY for graceful pipe degradation."""
    return Console(stderr=False)


def format_answer(content: str | None, console: Console) -> None:
    """Display a final answer, or a placeholder for an empty result."""
    if not content:
        console.print("[dim]No response.[/dim]")
        return
    console.print(content, markup=False, highlight=False)


def format_fragment(text: str, console: Console) -> None:
    """Display one streamed text fragment without a trailing newline."""
    console.print(text, end="", markup=False, highlight=False, soft_wrap=True)


def format_models(response: dict, console: Console) -> None:
    """Display the model list as a table."""
    models = response.get("data") or []
    if not models:
        console.print("[dim]No models.[/dim]")
        return

    table = Table(show_header=True, header_style="bold", box=None, pad_edge=False)
    table.add_column("Model", style="cyan")
    table.add_column("Owner", style="dim")
    table.add_column("Context", justify="right", style="green")

    for model in sorted(models, key=lambda m: str(m.get("id", ""))):
        context = model.get("context_window")
        table.add_row(
            escape(str(model.get("id", ""))),
            escape(str(model.get("owned_by", ""))),
            str(context) if context is not None else "",
        )

    console.print(table)


def format_error(message: str, console: Console) -> None:
    """Display an error message."""
    console.print(f"[red]Error:[/red] {escape(message)}", highlight=False)
