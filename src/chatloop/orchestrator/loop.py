"""Core orchestrator loop for tool-calling conversations.

Provides the Orchestrator class that runs a tool-calling loop: send the
history and tool definitions to the model, execute any requested tool
calls concurrently, fold the results back into history in call order, and
repeat until the model answers without tool calls.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from chatloop.exceptions import MaxTurnsExceededError
from chatloop.orchestrator.config import (
    ConversationState,
    OrchestratorConfig,
    StopReason,
)
from chatloop.orchestrator.models import ConversationResult, TurnResult
from chatloop.protocols import Message
from chatloop.toolkit.executor import ToolExecutor

if TYPE_CHECKING:
    from collections.abc import Sequence

    from chatloop.llm.protocols import CompletionInvoker
    from chatloop.toolkit.models import Tool

logger = logging.getLogger(__name__)


class Orchestrator:
    """Runs single-request, multi-turn tool-calling conversations.

    The orchestrator holds no per-conversation state: every call to
    :meth:`run` builds a private history that is discarded with the run, so
    one instance may serve several conversations.

    Usage::

        from chatloop import AsyncOpenAIClient, Orchestrator, Tool

        async with AsyncOpenAIClient() as client:
            orch = Orchestrator(client)
            answer = await orch.run_conversation(
                "What's the weather in SF?", [weather_tool], "llama-3.3-70b-versatile"
            )
    """

    def __init__(
        self,
        client: CompletionInvoker,
        config: OrchestratorConfig | None = None,
    ) -> None:
        self._client = client
        self._config = config or OrchestratorConfig()

    @property
    def config(self) -> OrchestratorConfig:
        return self._config

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def run_conversation(
        self,
        prompt: str,
        tools: Sequence[Tool] = (),
        model: str | None = None,
        system_message: str | None = None,
    ) -> str | None:
        """Run a conversation and return the final answer text.

        Returns:
            The model's final content, or None when the model produced
            neither content nor tool calls.

        Raises:
            LLMClientError: If a completion request fails (not retried).
            MaxTurnsExceededError: If ``config.max_turns`` is exhausted.
        """
        result = await self.run(prompt, tools, model, system_message)
        return result.content

    async def run(
        self,
        prompt: str,
        tools: Sequence[Tool] = (),
        model: str | None = None,
        system_message: str | None = None,
    ) -> ConversationResult:
        """Run a conversation and return the full record of it.

        Args:
            prompt: The user's request.
            tools: Tools the model may call. Read-only; if two share a name
                the first one wins.
            model: Model to use. None lets the client pick its default.
            system_message: Optional system message (skipped when blank).

        Returns:
            ConversationResult with final content, history and turns.
        """
        run = _ConversationRun(self._client, self._config, tools, model)
        return await run.execute(prompt, system_message)


async def run_conversation(
    client: CompletionInvoker,
    prompt: str,
    tools: Sequence[Tool] = (),
    model: str | None = None,
    system_message: str | None = None,
    *,
    config: OrchestratorConfig | None = None,
) -> str | None:
    """Convenience wrapper: ``Orchestrator(client, config).run_conversation(...)``."""
    return await Orchestrator(client, config).run_conversation(
        prompt, tools, model, system_message
    )


class _ConversationRun:
    """State for one conversation: history, turn records, current state."""

    def __init__(
        self,
        client: CompletionInvoker,
        config: OrchestratorConfig,
        tools: Sequence[Tool],
        model: str | None,
    ) -> None:
        self._client = client
        self._config = config
        self._executor = ToolExecutor(tools)
        self._model = model
        self.history: list[Message] = []
        self.turns: list[TurnResult] = []
        self.state = ConversationState.INIT
        self.model_calls = 0

    async def execute(self, prompt: str, system_message: str | None) -> ConversationResult:
        if system_message and system_message.strip():
            self.history.append(Message.system(system_message))
        self.history.append(Message.user(prompt))

        try:
            while True:
                self.state = ConversationState.AWAIT_MODEL
                response = await self._call_model()
                message = self._first_message(response)

                if message is None:
                    logger.warning("Model returned no choices; ending conversation")
                    return self._finish(None, StopReason.NO_CHOICES)

                if not message.has_tool_calls:
                    if message.content:
                        self.history.append(
                            Message(role="assistant", content=message.content)
                        )
                        return self._finish(message.content, StopReason.COMPLETED)
                    logger.warning(
                        "Model returned no tool calls and no content; "
                        "ending conversation to prevent a loop"
                    )
                    return self._finish(None, StopReason.EMPTY_RESPONSE)

                max_turns = self._config.max_turns
                if max_turns is not None and self.model_calls >= max_turns:
                    raise MaxTurnsExceededError(self.model_calls)

                self.history.append(message)
                await self._dispatch_tools(message)
        except Exception:
            self.state = ConversationState.FAILED
            logger.debug(
                "Conversation failed after %d model call(s)", self.model_calls,
                exc_info=True,
            )
            raise

    # ------------------------------------------------------------------
    # Internal methods
    # ------------------------------------------------------------------

    async def _call_model(self) -> dict:
        kwargs: dict[str, Any] = {
            "model": self._model,
            "temperature": self._config.temperature,
        }
        if self._executor.tools:
            kwargs["tools"] = self._executor.definitions()
            kwargs["tool_choice"] = self._config.tool_choice
        if self._config.max_tokens is not None:
            kwargs["max_tokens"] = self._config.max_tokens
        if self._config.extra_llm_kwargs:
            kwargs.update(self._config.extra_llm_kwargs)

        self.model_calls += 1
        logger.debug(
            "Model call %d with %d message(s)", self.model_calls, len(self.history)
        )
        return await self._client.chat(
            [m.to_openai() for m in self.history], **kwargs
        )

    @staticmethod
    def _first_message(response: dict) -> Message | None:
        """Parse ``choices[0].message``; None when there are no choices."""
        choices = response.get("choices") if isinstance(response, dict) else None
        if not choices or not isinstance(choices, list):
            return None
        first = choices[0] if isinstance(choices[0], dict) else {}
        raw = first.get("message")
        if not isinstance(raw, dict):
            return Message(role="assistant")
        return Message.from_openai({**raw, "role": "assistant"})

    async def _dispatch_tools(self, message: Message) -> None:
        calls = message.tool_calls or ()
        self.state = ConversationState.DISPATCH_TOOLS
        logger.debug(
            "Dispatching %d tool call(s): %s",
            len(calls),
            ", ".join(c.name for c in calls),
        )

        self.state = ConversationState.AWAIT_TOOLS
        results = await self._executor.execute_all(calls)
        self.history.extend(r.to_message() for r in results)

        turn = TurnResult(
            turn=len(self.turns) + 1,
            assistant_message=message,
            tool_results=tuple(results),
        )
        self.turns.append(turn)

        if self._config.on_turn is not None:
            try:
                self._config.on_turn(turn)
            except Exception:
                logger.debug("on_turn callback error", exc_info=True)

    def _finish(self, content: str | None, reason: StopReason) -> ConversationResult:
        self.state = ConversationState.DONE
        logger.debug(
            "Conversation finished (%s) after %d model call(s)",
            reason.value,
            self.model_calls,
        )
        return ConversationResult(
            content=content,
            messages=tuple(self.history),
            turns=tuple(self.turns),
            model_calls=self.model_calls,
            stop_reason=reason,
            state=self.state,
        )
