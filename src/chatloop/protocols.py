"""Message and tool-call types exchanged with the chat-completion API.

Frozen dataclasses: a message is never mutated once it has been appended to
a conversation history. Both types round-trip through the OpenAI wire
format via ``from_openai()`` / ``to_openai()``.
"""

from __future__ import annotations

import json as _json
import uuid
from dataclasses import dataclass
from typing import Any, Literal, TypedDict

Role = Literal["system", "user", "assistant", "tool"]

ROLES: frozenset[str] = frozenset({"system", "user", "assistant", "tool"})


class _ToolCallOpenAIFunction(TypedDict):
    """OpenAI function sub-object."""

    name: str
    arguments: str


class ToolCallOpenAIDict(TypedDict):
    """OpenAI wire format for a single tool call."""

    id: str
    type: str
    function: _ToolCallOpenAIFunction


@dataclass(frozen=True)
class ToolCall:
    """A tool/function invocation requested by the model.

    ``arguments`` is kept as the raw text the model produced; its encoding
    is up to the tool (usually a JSON object). ``id`` correlates the later
    ``tool`` message back to this request.
    """

    id: str
    name: str
    arguments: str = ""
    type: str = "function"

    @classmethod
    def from_openai(cls, tc: dict) -> ToolCall:
        """Parse from OpenAI/compatible format.

        Some providers send ``arguments`` as an object instead of a JSON
        string; those are re-serialised so executors always get text.
        """
        func = tc.get("function") or {}
        raw_args = func.get("arguments")
        if raw_args is None:
            arguments = ""
        elif isinstance(raw_args, str):
            arguments = raw_args
        else:
            arguments = _json.dumps(raw_args)
        return cls(
            id=str(tc.get("id") or f"call_{uuid.uuid4().hex[:8]}"),
            name=str(func.get("name") or ""),
            arguments=arguments,
            type=tc.get("type") or "function",
        )

    def to_openai(self) -> ToolCallOpenAIDict:
        """Serialize to OpenAI wire format."""
        return {
            "id": self.id,
            "type": self.type,
            "function": {
                "name": self.name,
                "arguments": self.arguments,
            },
        }

    def parsed_arguments(self) -> dict[str, Any]:
        """Decode ``arguments`` as a JSON object.

        Returns an empty dict for empty arguments.

        Raises:
            ValueError: If the arguments are not valid JSON.
        """
        if not self.arguments.strip():
            return {}
        return _json.loads(self.arguments)


@dataclass(frozen=True)
class Message:
    """A single message in a conversation history."""

    role: Role
    content: str | None = None
    tool_calls: tuple[ToolCall, ...] | None = None
    tool_call_id: str | None = None
    name: str | None = None

    def __post_init__(self) -> None:
        if self.role not in ROLES:
            raise ValueError(f"Unknown message role: {self.role!r}")
        if self.role == "tool" and (self.tool_call_id is None or self.name is None):
            raise ValueError("A tool message requires tool_call_id and name")
        if self.tool_calls is not None and not isinstance(self.tool_calls, tuple):
            object.__setattr__(self, "tool_calls", tuple(self.tool_calls))

    @property
    def has_tool_calls(self) -> bool:
        return bool(self.tool_calls)

    @classmethod
    def system(cls, content: str) -> Message:
        return cls(role="system", content=content)

    @classmethod
    def user(cls, content: str) -> Message:
        return cls(role="user", content=content)

    @classmethod
    def tool(cls, tool_call_id: str, name: str, content: str) -> Message:
        return cls(role="tool", content=content, tool_call_id=tool_call_id, name=name)

    @classmethod
    def from_openai(cls, data: dict) -> Message:
        """Parse a response message dict (``choices[i].message``)."""
        raw_calls = data.get("tool_calls") or []
        tool_calls = tuple(ToolCall.from_openai(tc) for tc in raw_calls)
        return cls(
            role=data.get("role") or "assistant",
            content=_content_text(data.get("content")),
            tool_calls=tool_calls or None,
            tool_call_id=data.get("tool_call_id"),
            name=data.get("name"),
        )

    def to_openai(self) -> dict[str, Any]:
        """Serialize to the OpenAI request format."""
        out: dict[str, Any] = {"role": self.role, "content": self.content}
        if self.tool_calls:
            out["tool_calls"] = [tc.to_openai() for tc in self.tool_calls]
        if self.tool_call_id is not None:
            out["tool_call_id"] = self.tool_call_id
        if self.name is not None:
            out["name"] = self.name
        return out


def _content_text(content: object) -> str | None:
    """Normalise message content to text.

    Some providers return a list of typed parts instead of a string.
    """
    if content is None or isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = [
            str(part.get("text", ""))
            for part in content
            if isinstance(part, dict) and part.get("type") == "text"
        ]
        return "\n".join(p for p in parts if p)
    return str(content)
