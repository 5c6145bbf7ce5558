"""Tests for Message and ToolCall wire-format types."""

from __future__ import annotations

import dataclasses

import pytest

from chatloop.protocols import Message, ToolCall


class TestToolCall:
    """Test ToolCall parsing and serialisation."""

    def test_from_openai(self):
        tc = ToolCall.from_openai({
            "id": "call_1",
            "type": "function",
            "function": {"name": "get_current_weather", "arguments": '{"location":"SF"}'},
        })
        assert tc.id == "call_1"
        assert tc.name == "get_current_weather"
        assert tc.arguments == '{"location":"SF"}'
        assert tc.parsed_arguments() == {"location": "SF"}

    def test_object_arguments_are_serialised(self):
        tc = ToolCall.from_openai({"id": "c", "function": {"name": "f", "arguments": {"a": 1}}})
        assert tc.arguments == '{"a": 1}'
        assert tc.type == "function"

    def test_missing_arguments_are_empty(self):
        tc = ToolCall.from_openai({"id": "c", "function": {"name": "f"}})
        assert tc.arguments == ""
        assert tc.parsed_arguments() == {}

    def test_missing_id_is_generated(self):
        tc = ToolCall.from_openai({"function": {"name": "f", "arguments": "{}"}})
        assert tc.id.startswith("call_")

    def test_null_name_becomes_empty(self):
        tc = ToolCall.from_openai({"id": "c", "function": {"name": None, "arguments": "{}"}})
        assert tc.name == ""

    def test_arguments_are_kept_verbatim(self):
        tc = ToolCall(id="c", name="f", arguments="not json")
        assert tc.to_openai()["function"]["arguments"] == "not json"
        with pytest.raises(ValueError):
            tc.parsed_arguments()

    def test_to_openai(self):
        tc = ToolCall(id="c", name="f", arguments="{}")
        assert tc.to_openai() == {
            "id": "c",
            "type": "function",
            "function": {"name": "f", "arguments": "{}"},
        }


class TestMessage:
    """Test Message invariants and wire format."""

    def test_factories(self):
        assert Message.system("s").to_openai() == {"role": "system", "content": "s"}
        assert Message.user("u").to_openai() == {"role": "user", "content": "u"}
        assert Message.tool("c1", "f", "out").to_openai() == {
            "role": "tool",
            "content": "out",
            "tool_call_id": "c1",
            "name": "f",
        }

    def test_unknown_role_rejected(self):
        with pytest.raises(ValueError, match="role"):
            Message(role="robot", content="beep")

    def test_tool_message_requires_id_and_name(self):
        with pytest.raises(ValueError):
            Message(role="tool", content="x", name="f")
        with pytest.raises(ValueError):
            Message(role="tool", content="x", tool_call_id="c1")

    def test_tool_message_allows_empty_name(self):
        assert Message.tool("c1", "", "x").name == ""

    def test_is_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            Message.user("u").content = "changed"

    def test_tool_calls_list_becomes_tuple(self):
        msg = Message(role="assistant", tool_calls=[ToolCall(id="c", name="f")])
        assert isinstance(msg.tool_calls, tuple)
        assert msg.has_tool_calls

    def test_from_openai_assistant_with_tool_calls(self):
        msg = Message.from_openai({
            "role": "assistant",
            "content": None,
            "tool_calls": [
                {"id": "a", "type": "function", "function": {"name": "f", "arguments": "{}"}},
                {"id": "b", "type": "function", "function": {"name": "g", "arguments": "{}"}},
            ],
        })
        assert msg.content is None
        assert [tc.id for tc in msg.tool_calls] == ["a", "b"]

    def test_from_openai_empty_tool_calls(self):
        msg = Message.from_openai({"role": "assistant", "content": "hi", "tool_calls": []})
        assert msg.tool_calls is None
        assert not msg.has_tool_calls

    def test_from_openai_content_parts(self):
        msg = Message.from_openai({
            "role": "assistant",
            "content": [
                {"type": "text", "text": "one"},
                {"type": "image_url", "image_url": {}},
                {"type": "text", "text": "two"},
            ],
        })
        assert msg.content == "one\ntwo"

    def test_to_openai_assistant_keeps_null_content(self):
        msg = Message(role="assistant", tool_calls=(ToolCall(id="c", name="f", arguments="{}"),))
        out = msg.to_openai()
        assert out["content"] is None
        assert out["tool_calls"][0]["id"] == "c"
        assert "tool_call_id" not in out
