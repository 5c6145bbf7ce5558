"""chatloop CLI -- terminal interface for one-shot and streamed chats.

This module is NEVER imported from chatloop/__init__.py.
It is only loaded via the ``chatloop`` entry point defined in pyproject.toml.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

try:
    import click
except ImportError:
    raise ImportError(
        "CLI dependencies not installed. Install with: pip install chatloop[cli]"
    ) from None

from chatloop.logging_config import configure_logging
from chatloop.models.config import ENV_API_KEY, ENV_BASE_URL, ENV_MODEL

if TYPE_CHECKING:
    from chatloop.llm.client import AsyncOpenAIClient


@click.group()
@click.option(
    "--api-key",
    default=None,
    envvar=ENV_API_KEY,
    help="API key for the chat-completion endpoint.",
)
@click.option(
    "--base-url",
    default=None,
    envvar=ENV_BASE_URL,
    help="Base URL of the OpenAI-compatible API.",
)
@click.option(
    "--model",
    default=None,
    envvar=ENV_MODEL,
    help="Model to use (client default if omitted).",
)
@click.option("-v", "--verbose", is_flag=True, help="Show debug logging.")
@click.pass_context
def cli(
    ctx: click.Context,
    api_key: str | None,
    base_url: str | None,
    model: str | None,
    verbose: bool,
) -> None:
    """chatloop: tool-calling conversations over OpenAI-compatible APIs."""
    ctx.ensure_object(dict)
    ctx.obj["api_key"] = api_key
    ctx.obj["base_url"] = base_url
    ctx.obj["model"] = model
    if verbose:
        configure_logging(logging.DEBUG)


def _get_client(ctx: click.Context) -> AsyncOpenAIClient:
    """Build an AsyncOpenAIClient from Click context options."""
    from chatloop.llm.client import AsyncOpenAIClient
    from chatloop.models.config import ClientConfig

    config = ClientConfig.from_env(
        api_key=ctx.obj["api_key"],
        base_url=ctx.obj["base_url"],
        default_model=ctx.obj["model"],
    )
    return AsyncOpenAIClient.from_config(config)


# Register subcommands after cli group is defined
from chatloop.cli.commands.ask import ask  # noqa: E402
from chatloop.cli.commands.models import models  # noqa: E402
from chatloop.cli.commands.stream import stream  # noqa: E402

cli.add_command(ask)
cli.add_command(stream)
cli.add_command(models)
