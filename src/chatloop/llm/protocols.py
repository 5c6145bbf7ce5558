"""Completion invoker protocol.

The orchestrator only needs an object with an async ``chat()`` returning an
OpenAI-style response dict. The built-in AsyncOpenAIClient implements it;
tests and custom backends can supply their own.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class CompletionInvoker(Protocol):
    """Protocol for pluggable chat-completion backends.

    Implementations raise an ``LLMClientError`` subclass on failure and
    return the parsed response body on success.
    """

    async def chat(
        self,
        messages: list[dict[str, Any]],
        *,
        model: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
        **kwargs: Any,
    ) -> dict:
        """Send messages, return response dict."""
        ...
