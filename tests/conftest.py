"""Shared test fixtures and helpers for chatloop.

Provides canned OpenAI-style responses, a scripted completion invoker for
orchestrator tests, and httpx mock-transport clients for HTTP tests.
"""

from __future__ import annotations

import copy
import json

import httpx
import pytest

from chatloop.llm.client import AsyncOpenAIClient


# ------------------------------------------------------------------
# Response builders
# ------------------------------------------------------------------

def text_response(content: str | None = "Hello!", model: str = "test-model") -> dict:
    """A chat completion whose message has content and no tool calls."""
    return {
        "id": "chatcmpl-test123",
        "object": "chat.completion",
        "model": model,
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": content},
                "finish_reason": "stop",
            }
        ],
        "usage": {"prompt_tokens": 10, "completion_tokens": 5, "total_tokens": 15},
    }


def tool_calls_response(calls: list[tuple[str, str, str]], content: str | None = None) -> dict:
    """A chat completion requesting tools.

    Args:
        calls: List of (call_id, function_name, raw_arguments) tuples.
        content: Optional assistant content sent alongside the calls.
    """
    return {
        "choices": [
            {
                "index": 0,
                "message": {
                    "role": "assistant",
                    "content": content,
                    "tool_calls": [
                        {
                            "id": call_id,
                            "type": "function",
                            "function": {"name": name, "arguments": arguments},
                        }
                        for call_id, name, arguments in calls
                    ],
                },
                "finish_reason": "tool_calls",
            }
        ]
    }


def sse_body(*events: dict | str, done: bool = True) -> bytes:
    """Encode events as a server-sent event body."""
    lines = []
    for event in events:
        payload = event if isinstance(event, str) else json.dumps(event)
        lines.append(f"data: {payload}\n\n")
    if done:
        lines.append("data: [DONE]\n\n")
    return "".join(lines).encode()


def chunk(content: str | None) -> dict:
    """A streamed completion chunk carrying one content delta."""
    return {"choices": [{"index": 0, "delta": {"content": content}}]}


# ------------------------------------------------------------------
# Fakes
# ------------------------------------------------------------------

class ScriptedInvoker:
    """A completion invoker that replays canned responses in order.

    Records a deep copy of every request so tests can inspect the history
    each model call saw.
    """

    def __init__(self, responses: list[dict | Exception]):
        self._responses = list(responses)
        self.calls: list[dict] = []

    async def chat(self, messages, *, model=None, temperature=None, max_tokens=None, **kwargs):
        self.calls.append({
            "messages": copy.deepcopy(messages),
            "model": model,
            "temperature": temperature,
            "max_tokens": max_tokens,
            **copy.deepcopy(kwargs),
        })
        if not self._responses:
            raise AssertionError("ScriptedInvoker ran out of responses")
        response = self._responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


def make_client(handler, **kwargs) -> AsyncOpenAIClient:
    """Create an AsyncOpenAIClient backed by an httpx mock transport."""
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return AsyncOpenAIClient(
        api_key=kwargs.pop("api_key", "test-key"),
        base_url=kwargs.pop("base_url", "http://test-api"),
        http_client=http_client,
        **kwargs,
    )


@pytest.fixture
def clean_env(monkeypatch):
    """Remove CHATLOOP_* variables so tests do not see the caller's shell."""
    for name in ("CHATLOOP_API_KEY", "CHATLOOP_BASE_URL", "CHATLOOP_MODEL", "CHATLOOP_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch
