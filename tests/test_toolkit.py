"""Tests for Tool, ToolResult and ToolExecutor."""

from __future__ import annotations

import asyncio
import json
import threading

import pytest

from chatloop.protocols import ToolCall
from chatloop.toolkit import Tool, ToolExecutor, ToolResult, find_tool


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _call(name: str, arguments: str = "{}", call_id: str = "call_1") -> ToolCall:
    return ToolCall(id=call_id, name=name, arguments=arguments)


def _echo_tool(name: str = "echo", prefix: str = "") -> Tool:
    return Tool(
        name=name,
        description="Echo the arguments back",
        executor=lambda args: f"{prefix}{args}",
    )


# ---------------------------------------------------------------------------
# Tool / ToolResult
# ---------------------------------------------------------------------------

class TestTool:
    """Test tool definitions."""

    def test_to_openai(self):
        params = {
            "type": "object",
            "properties": {"location": {"type": "string"}},
            "required": ["location"],
        }
        tool = Tool(name="get_current_weather", description="Weather", parameters=params)
        assert tool.to_openai() == {
            "type": "function",
            "function": {
                "name": "get_current_weather",
                "description": "Weather",
                "parameters": params,
            },
        }

    def test_default_parameters(self):
        assert Tool(name="t", description="d").parameters == {"type": "object", "properties": {}}


class TestToolResult:
    """Test result-to-message conversion."""

    def test_success_message(self):
        msg = ToolResult("c1", "f", True, output="ok").to_message()
        assert (msg.role, msg.tool_call_id, msg.name, msg.content) == ("tool", "c1", "f", "ok")

    def test_error_message_carries_error_text(self):
        result = ToolResult("c1", "f", False, error="Error: boom")
        assert result.content == "Error: boom"
        assert result.to_message().content == "Error: boom"


class TestFindTool:
    """Test name lookup."""

    def test_first_match_wins(self):
        tools = [_echo_tool("dup", "first:"), _echo_tool("dup", "second:")]
        assert find_tool(tools, "dup") is tools[0]

    def test_no_match(self):
        assert find_tool([_echo_tool()], "missing") is None


# ---------------------------------------------------------------------------
# ToolExecutor
# ---------------------------------------------------------------------------

class TestToolExecutor:
    """Test single and concurrent tool execution."""

    @pytest.mark.asyncio
    async def test_sync_executor_gets_raw_arguments(self):
        executor = ToolExecutor([_echo_tool()])
        result = await executor.execute(_call("echo", '{"location":"SF"}'))
        assert result.success
        assert result.output == '{"location":"SF"}'
        assert result.tool_call_id == "call_1"
        assert result.tool_name == "echo"

    @pytest.mark.asyncio
    async def test_sync_executor_runs_off_the_event_loop(self):
        loop_thread = threading.get_ident()
        tool = Tool(name="where", description="d", executor=lambda _: threading.get_ident())
        result = await ToolExecutor([tool]).execute(_call("where"))
        assert result.output != str(loop_thread)

    @pytest.mark.asyncio
    async def test_async_executor(self):
        async def weather(args: str) -> str:
            await asyncio.sleep(0)
            return json.dumps({"temperature": 72, "location": json.loads(args)["location"]})

        tool = Tool(name="get_current_weather", description="d", executor=weather)
        result = await ToolExecutor([tool]).execute(
            _call("get_current_weather", '{"location":"SF"}')
        )
        assert json.loads(result.output) == {"temperature": 72, "location": "SF"}

    @pytest.mark.asyncio
    async def test_non_string_output_is_stringified(self):
        tool = Tool(name="n", description="d", executor=lambda _: 42)
        assert (await ToolExecutor([tool]).execute(_call("n"))).output == "42"

    @pytest.mark.asyncio
    async def test_unknown_tool(self):
        result = await ToolExecutor([_echo_tool()]).execute(_call("nope"))
        assert not result.success
        assert result.content == "Error: Tool 'nope' not found."

    @pytest.mark.asyncio
    async def test_tool_without_executor_is_not_found(self):
        tool = Tool(name="bare", description="d")
        result = await ToolExecutor([tool]).execute(_call("bare"))
        assert result.error == "Error: Tool 'bare' not found."

    @pytest.mark.asyncio
    async def test_executor_exception_becomes_error_result(self):
        def broken(args: str) -> str:
            raise RuntimeError("disk on fire")

        tool = Tool(name="broken", description="d", executor=broken)
        result = await ToolExecutor([tool]).execute(_call("broken"))
        assert not result.success
        assert result.error == "Error: RuntimeError: disk on fire"

    @pytest.mark.asyncio
    async def test_duplicate_names_use_first_tool(self):
        executor = ToolExecutor([_echo_tool("dup", "first:"), _echo_tool("dup", "second:")])
        result = await executor.execute(_call("dup", "x"))
        assert result.output == "first:x"

    @pytest.mark.asyncio
    async def test_execute_all_preserves_call_order(self):
        async def slow(args: str) -> str:
            await asyncio.sleep(float(args))
            return args

        executor = ToolExecutor([Tool(name="slow", description="d", executor=slow)])
        calls = [
            _call("slow", "0.03", "a"),
            _call("slow", "0.02", "b"),
            _call("slow", "0.01", "c"),
        ]
        results = await executor.execute_all(calls)
        assert [r.tool_call_id for r in results] == ["a", "b", "c"]
        assert [r.output for r in results] == ["0.03", "0.02", "0.01"]

    def test_definitions_and_names(self):
        executor = ToolExecutor([_echo_tool("a"), _echo_tool("b")])
        assert executor.available_tools() == ["a", "b"]
        assert [d["function"]["name"] for d in executor.definitions()] == ["a", "b"]
