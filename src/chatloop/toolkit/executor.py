"""ToolExecutor: dispatches model tool calls to caller-supplied tools.

Looks up each call's tool by name, invokes its executor with the raw
argument text, and returns a structured ``ToolResult``. Failures (unknown
tool, executor exception) become error results instead of exceptions, so
one broken tool never aborts a conversation.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from typing import TYPE_CHECKING

from chatloop.toolkit.models import ToolResult

if TYPE_CHECKING:
    from collections.abc import Sequence

    from chatloop.protocols import ToolCall
    from chatloop.toolkit.models import Tool

logger = logging.getLogger(__name__)


def find_tool(tools: Sequence[Tool], name: str) -> Tool | None:
    """Return the first tool named ``name``, scanning in list order."""
    for tool in tools:
        if tool.name == name:
            return tool
    return None


def tool_not_found_message(name: str) -> str:
    return f"Error: Tool '{name}' not found."


class ToolExecutor:
    """Executes tool calls against a read-only list of tools.

    Usage::

        executor = ToolExecutor([weather_tool])
        results = await executor.execute_all(message.tool_calls)
        for result in results:
            history.append(result.to_message())
    """

    def __init__(self, tools: Sequence[Tool]) -> None:
        self._tools = tuple(tools)

    @property
    def tools(self) -> tuple[Tool, ...]:
        return self._tools

    def available_tools(self) -> list[str]:
        """Return the names of all available tools."""
        return [tool.name for tool in self._tools]

    def definitions(self) -> list[dict]:
        """Return the tool definitions in OpenAI format."""
        return [tool.to_openai() for tool in self._tools]

    async def execute(self, call: ToolCall) -> ToolResult:
        """Execute a single tool call.

        Never raises for tool-level failures; ``asyncio.CancelledError``
        still propagates.
        """
        tool = find_tool(self._tools, call.name)
        if tool is None or tool.executor is None:
            logger.warning("Tool %r requested by model is not registered", call.name)
            return ToolResult(
                tool_call_id=call.id,
                tool_name=call.name,
                success=False,
                error=tool_not_found_message(call.name),
            )

        logger.debug("Executing tool %s (%s) with args: %s", call.name, call.id, call.arguments)
        try:
            if inspect.iscoroutinefunction(tool.executor):
                result = await tool.executor(call.arguments)
            else:
                result = await asyncio.to_thread(tool.executor, call.arguments)
                if inspect.isawaitable(result):
                    result = await result
        except Exception as exc:
            logger.debug("Tool %s failed: %s", call.name, exc, exc_info=True)
            return ToolResult(
                tool_call_id=call.id,
                tool_name=call.name,
                success=False,
                error=f"Error: {type(exc).__name__}: {exc}",
            )

        output = result if isinstance(result, str) else str(result)
        logger.debug("Tool %s executed. Result: %s", call.name, output)
        return ToolResult(
            tool_call_id=call.id,
            tool_name=call.name,
            success=True,
            output=output,
        )

    async def execute_all(self, calls: Sequence[ToolCall]) -> list[ToolResult]:
        """Execute calls concurrently; results come back in call order."""
        return list(await asyncio.gather(*(self.execute(call) for call in calls)))
