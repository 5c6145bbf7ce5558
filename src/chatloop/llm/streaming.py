"""Server-sent event decoding for streamed chat completions.

Turns the line-oriented body of a ``"stream": true`` chat completion into a
lazy, forward-only sequence of JSON events. Only ``data: `` lines carry
payloads; the literal ``[DONE]`` payload ends the stream and is never yielded.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from chatloop.llm.errors import StreamDecodeError, StreamTruncatedError

if TYPE_CHECKING:
    from collections.abc import AsyncIterable, AsyncIterator, Iterable, Iterator

DATA_PREFIX = "data: "
DONE_SENTINEL = "[DONE]"

# Markers returned by parse_event_line.
DONE = object()
SKIP = object()


def parse_event_line(line: str) -> Any:
    """Decode a single stream line.

    Returns:
        The ``SKIP`` marker for lines that carry no event (blank
        keep-alives, comments, non-data fields), the ``DONE`` marker for the
        sentinel, or the parsed JSON payload.

    Raises:
        StreamDecodeError: If a data payload is not valid JSON.
    """
    line = line.rstrip("\r\n")
    if not line.startswith(DATA_PREFIX):
        return SKIP
    payload = line[len(DATA_PREFIX):]
    if payload == DONE_SENTINEL:
        return DONE
    try:
        return json.loads(payload)
    except json.JSONDecodeError as exc:
        raise StreamDecodeError(payload) from exc


async def decode_event_stream(lines: AsyncIterable[str]) -> AsyncIterator[Any]:
    """Yield decoded events from an async line source until ``[DONE]``.

    Raises:
        StreamDecodeError: On a malformed data payload.
        StreamTruncatedError: If the source ends before ``[DONE]``.
    """
    async for line in lines:
        event = parse_event_line(line)
        if event is SKIP:
            continue
        if event is DONE:
            return
        yield event
    raise StreamTruncatedError()


def iter_events(lines: Iterable[str]) -> Iterator[Any]:
    """Synchronous counterpart of :func:`decode_event_stream`."""
    for line in lines:
        event = parse_event_line(line)
        if event is SKIP:
            continue
        if event is DONE:
            return
        yield event
    raise StreamTruncatedError()
