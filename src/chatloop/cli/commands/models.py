"""chatloop models -- list the models available to the API key."""

from __future__ import annotations

import asyncio

import click

from chatloop.cli.formatting import format_error, format_models, get_console


@click.command()
@click.pass_context
def models(ctx: click.Context) -> None:
    """List available models."""
    from chatloop.cli import _get_client

    console = get_console()

    async def _run() -> dict:
        async with _get_client(ctx) as client:
            return await client.list_models()

    try:
        format_models(asyncio.run(_run()), console)
    except SystemExit:
        raise
    except Exception as e:
        format_error(str(e), console)
        raise SystemExit(1) from None
