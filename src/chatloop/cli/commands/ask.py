"""chatloop ask -- run one conversation and print the final answer."""

from __future__ import annotations

import asyncio

import click

from chatloop.cli.formatting import format_answer, format_error, get_console


@click.command()
@click.argument("prompt")
@click.option("--system", "system_message", default=None, help="System message.")
@click.option(
    "--temperature",
    type=float,
    default=0.7,
    show_default=True,
    help="Sampling temperature.",
)
@click.option(
    "--max-turns",
    type=click.IntRange(min=1),
    default=None,
    help="Fail if the model is still calling tools after N turns.",
)
@click.pass_context
def ask(
    ctx: click.Context,
    prompt: str,
    system_message: str | None,
    temperature: float,
    max_turns: int | None,
) -> None:
    """Send PROMPT and print the model's final answer."""
    from chatloop.cli import _get_client
    from chatloop.orchestrator import Orchestrator, OrchestratorConfig

    console = get_console()

    async def _run() -> str | None:
        async with _get_client(ctx) as client:
            config = OrchestratorConfig(temperature=temperature, max_turns=max_turns)
            return await Orchestrator(client, config).run_conversation(
                prompt, (), ctx.obj["model"], system_message
            )

    try:
        content = asyncio.run(_run())
        format_answer(content, console)
    except SystemExit:
        raise
    except Exception as e:
        format_error(str(e), console)
        raise SystemExit(1) from None
