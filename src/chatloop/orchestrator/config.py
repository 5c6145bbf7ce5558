"""Orchestrator configuration types.

Provides ConversationState, StopReason and OrchestratorConfig for the
tool-calling conversation loop.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from chatloop.orchestrator.models import TurnResult

DEFAULT_TEMPERATURE = 0.7


class ConversationState(str, enum.Enum):
    """States a conversation run moves through."""

    INIT = "init"
    AWAIT_MODEL = "await_model"
    DISPATCH_TOOLS = "dispatch_tools"
    AWAIT_TOOLS = "await_tools"
    DONE = "done"
    FAILED = "failed"


class StopReason(str, enum.Enum):
    """Why a finished run stopped."""

    COMPLETED = "completed"
    EMPTY_RESPONSE = "empty_response"
    NO_CHOICES = "no_choices"


@dataclass
class OrchestratorConfig:
    """Configuration for the conversation orchestrator.

    Mutable dataclass -- users may adjust settings between runs.

    Attributes:
        temperature: Sampling temperature sent with every model call.
        tool_choice: ``tool_choice`` value sent when tools are registered.
        max_turns: Maximum number of model calls per run. None means the
            run ends only when the model stops requesting tools.
        max_tokens: Maximum tokens per model response.
        extra_llm_kwargs: Additional payload parameters (top_p, seed, etc.)
            forwarded to ``client.chat()``.
        on_turn: Callback invoked after each tool turn is folded into
            history.
    """

    temperature: float = DEFAULT_TEMPERATURE
    tool_choice: str | dict = "auto"
    max_turns: int | None = None
    max_tokens: int | None = None
    extra_llm_kwargs: dict | None = None
    on_turn: Callable[[TurnResult], None] | None = None

    def __post_init__(self) -> None:
        if self.max_turns is not None and self.max_turns < 1:
            raise ValueError(f"max_turns must be >= 1, got {self.max_turns}")
