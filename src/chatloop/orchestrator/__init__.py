"""Orchestrator package -- the tool-calling conversation loop.

Provides the Orchestrator class, its configuration, and the turn and
conversation result types.
"""

from chatloop.orchestrator.config import (
    ConversationState,
    OrchestratorConfig,
    StopReason,
)
from chatloop.orchestrator.loop import Orchestrator, run_conversation
from chatloop.orchestrator.models import ConversationResult, TurnResult

__all__ = [
    # Core
    "Orchestrator",
    "run_conversation",
    # Config
    "OrchestratorConfig",
    "ConversationState",
    "StopReason",
    # Models
    "TurnResult",
    "ConversationResult",
]
