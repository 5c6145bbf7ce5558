"""LLM client infrastructure for chatloop.

Provides an OpenAI-compatible async HTTP client, the completion invoker
protocol, the server-sent event decoder, and the LLM error hierarchy.
"""

from chatloop.llm.client import AsyncOpenAIClient
from chatloop.llm.errors import (
    LLMAPIError,
    LLMAuthError,
    LLMClientError,
    LLMConfigError,
    LLMRateLimitError,
    LLMResponseError,
    LLMTransportError,
    StreamDecodeError,
    StreamTruncatedError,
)
from chatloop.llm.protocols import CompletionInvoker
from chatloop.llm.streaming import decode_event_stream, iter_events

__all__ = [
    "AsyncOpenAIClient",
    "CompletionInvoker",
    "decode_event_stream",
    "iter_events",
    "LLMClientError",
    "LLMConfigError",
    "LLMTransportError",
    "StreamTruncatedError",
    "LLMAPIError",
    "LLMAuthError",
    "LLMRateLimitError",
    "LLMResponseError",
    "StreamDecodeError",
]
