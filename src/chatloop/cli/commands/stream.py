"""chatloop stream -- print a completion as it is generated."""

from __future__ import annotations

import asyncio

import click

from chatloop.cli.formatting import format_error, format_fragment, get_console


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
@click.pass_context
def stream(
    ctx: click.Context,
    prompt: str,
    system_message: str | None,
    temperature: float,
) -> None:
    """Stream the reply to PROMPT fragment by fragment."""
    from chatloop.cli import _get_client

    console = get_console()

    async def _run() -> None:
        async with _get_client(ctx) as client:
            async for text in client.stream_text(
                prompt,
                model=ctx.obj["model"],
                system_message=system_message,
                temperature=temperature,
            ):
                format_fragment(text, console)
        console.print()

    try:
        asyncio.run(_run())
    except SystemExit:
        raise
    except Exception as e:
        console.print()
        format_error(str(e), console)
        raise SystemExit(1) from None
