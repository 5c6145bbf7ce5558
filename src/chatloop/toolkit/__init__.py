"""Toolkit -- caller-registered tools and concurrent tool dispatch."""

from chatloop.toolkit.executor import ToolExecutor, find_tool
from chatloop.toolkit.models import Tool, ToolResult

__all__ = [
    "Tool",
    "ToolResult",
    "ToolExecutor",
    "find_tool",
]
