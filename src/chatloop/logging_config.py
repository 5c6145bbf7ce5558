"""Logging configuration for chatloop command-line use.

The library itself only creates module loggers; applications decide where
records go. The CLI calls :func:`configure_logging` to route chatloop
records through rich and keep HTTP client chatter down.
"""

from __future__ import annotations

import logging

NOISY_LOGGERS = ["httpx", "httpcore", "asyncio"]


def configure_logging(level: int | str = logging.WARNING) -> None:
    """Attach a rich console handler to the ``chatloop`` logger.

    Args:
        level: Log level for chatloop loggers (name or number).

    Raises:
        ImportError: If rich (the ``cli`` extra) is not installed.
    """
    try:
        from rich.logging import RichHandler
    except ImportError:
        raise ImportError(
            "Rich logging requires the CLI dependencies. "
            "Install with: pip install chatloop[cli]"
        ) from None

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())

    app_logger = logging.getLogger("chatloop")
    app_logger.setLevel(level)
    app_logger.handlers.clear()
    handler = RichHandler(show_path=False, rich_tracebacks=True)
    handler.setFormatter(logging.Formatter("%(name)s | %(message)s"))
    app_logger.addHandler(handler)
    app_logger.propagate = False

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
