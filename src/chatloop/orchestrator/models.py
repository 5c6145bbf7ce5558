"""Orchestrator result models.

Provides TurnResult and ConversationResult, the immutable records of a
conversation run.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from chatloop.orchestrator.config import ConversationState, StopReason

if TYPE_CHECKING:
    from chatloop.protocols import Message
    from chatloop.toolkit.models import ToolResult


@dataclass(frozen=True)
class TurnResult:
    """One tool turn: the assistant's tool-call message and its results.

    ``tool_results`` is in the order the calls appeared in the assistant
    message.
    """

    turn: int
    assistant_message: Message
    tool_results: tuple[ToolResult, ...] = ()

    @property
    def failed(self) -> list[ToolResult]:
        """Return the tool results that carry an error."""
        return [r for r in self.tool_results if not r.success]


@dataclass(frozen=True)
class ConversationResult:
    """Final result of a conversation run.

    Attributes:
        content: Final assistant text, or None for a degenerate response.
        messages: Full history: system, user, tool turns, final assistant.
        turns: Tool turns executed before the final response.
        model_calls: Number of completion requests made.
        stop_reason: Why the run ended.
        state: Terminal state (always DONE for a returned result).
    """

    content: str | None
    messages: tuple[Message, ...] = ()
    turns: tuple[TurnResult, ...] = ()
    model_calls: int = 0
    stop_reason: StopReason = StopReason.COMPLETED
    state: ConversationState = field(default=ConversationState.DONE)

    @property
    def total_tool_calls(self) -> int:
        return sum(len(t.tool_results) for t in self.turns)
