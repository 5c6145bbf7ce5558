"""Chatloop exception hierarchy.

All chatloop-specific exceptions inherit from ChatloopError.
"""


class ChatloopError(Exception):
    """Base exception for all chatloop errors."""


class OrchestratorError(ChatloopError):
    """Raised when the orchestrator encounters an unrecoverable error."""


class MaxTurnsExceededError(OrchestratorError):
    """Raised when a conversation keeps requesting tools past ``max_turns``."""

    def __init__(self, turns: int) -> None:
        self.turns = turns
        super().__init__(
            f"Conversation did not finish within {turns} model turn(s)"
        )
