"""chatloop: tool-calling conversations over OpenAI-compatible chat APIs.

Drives a model through any number of tool calls until it produces a final
answer, and decodes streamed completions into a lazy sequence of events.
"""

from chatloop._version import __version__

# Core entry points
from chatloop.orchestrator import (
    ConversationResult,
    ConversationState,
    Orchestrator,
    OrchestratorConfig,
    StopReason,
    TurnResult,
    run_conversation,
)

# LLM client and stream decoding
from chatloop.llm import (
    AsyncOpenAIClient,
    CompletionInvoker,
    decode_event_stream,
    iter_events,
)

# Data model
from chatloop.protocols import Message, ToolCall
from chatloop.toolkit import Tool, ToolExecutor, ToolResult

# Configuration
from chatloop.models.config import VISION_MODELS, ClientConfig

# Errors
from chatloop.exceptions import ChatloopError, MaxTurnsExceededError, OrchestratorError
from chatloop.llm.errors import (
    LLMAPIError,
    LLMAuthError,
    LLMClientError,
    LLMConfigError,
    LLMRateLimitError,
    LLMResponseError,
    LLMTransportError,
    StreamDecodeError,
    StreamTruncatedError,
)

__all__ = [
    "__version__",
    # Orchestrator
    "Orchestrator",
    "OrchestratorConfig",
    "ConversationResult",
    "ConversationState",
    "StopReason",
    "TurnResult",
    "run_conversation",
    # LLM
    "AsyncOpenAIClient",
    "CompletionInvoker",
    "decode_event_stream",
    "iter_events",
    # Data model
    "Message",
    "ToolCall",
    "Tool",
    "ToolExecutor",
    "ToolResult",
    # Config
    "ClientConfig",
    "VISION_MODELS",
    # Errors
    "ChatloopError",
    "OrchestratorError",
    "MaxTurnsExceededError",
    "LLMClientError",
    "LLMConfigError",
    "LLMTransportError",
    "StreamTruncatedError",
    "LLMAPIError",
    "LLMAuthError",
    "LLMRateLimitError",
    "LLMResponseError",
    "StreamDecodeError",
]
