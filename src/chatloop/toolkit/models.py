"""Toolkit data models.

Frozen dataclasses for caller-registered tools and their execution results.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Union

from chatloop.protocols import Message

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    ToolExecutorFn = Callable[[str], Union[Awaitable[Any], Any]]


@dataclass(frozen=True)
class Tool:
    """A caller-supplied capability the model may invoke.

    Attributes:
        name: Function name the model calls it by.
        description: Human-readable description of when/why to use it.
        parameters: JSON Schema dict describing the arguments.
        executor: Called with the raw argument text; returns the result
            text. May be ``async def`` or a plain function.
    """

    name: str
    description: str
    parameters: dict = field(default_factory=lambda: {"type": "object", "properties": {}})
    executor: ToolExecutorFn | None = field(default=None, compare=False, repr=False)

    def to_openai(self) -> dict:
        """Convert to OpenAI function-calling format.

        Returns:
            Dict with "type": "function" and nested "function" object.
        """
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": self.parameters,
            },
        }


@dataclass(frozen=True)
class ToolResult:
    """Structured result from executing one tool call.

    Attributes:
        tool_call_id: Id of the originating tool call.
        tool_name: Function name the model requested.
        success: Whether execution succeeded.
        output: String output on success.
        error: Error text on failure (unknown tool or executor exception).
    """

    tool_call_id: str
    tool_name: str
    success: bool
    output: str = ""
    error: str = ""

    @property
    def content(self) -> str:
        return self.output if self.success else self.error

    def to_message(self) -> Message:
        """Build the ``tool`` role message that reports this result."""
        return Message.tool(self.tool_call_id, self.tool_name, self.content)
