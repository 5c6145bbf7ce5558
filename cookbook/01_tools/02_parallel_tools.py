"""Parallel Tool Calls

Asks about several cities at once. When the model requests more than one
tool call in a turn, the calls run concurrently and their results are
appended in the order the model asked for them. An on_turn callback prints
each turn as it completes, and run() returns the full ConversationResult.

Demonstrates: run(), OrchestratorConfig(on_turn=, max_turns=),
              ConversationResult, TurnResult.failed
"""

import asyncio
import json
import os
import random

from dotenv import load_dotenv

from chatloop import AsyncOpenAIClient, Orchestrator, OrchestratorConfig, Tool, TurnResult

load_dotenv()

CHATLOOP_API_KEY = os.environ["CHATLOOP_API_KEY"]
MODEL_ID = os.environ.get("CHATLOOP_MODEL", "llama-3.3-70b-versatile")


async def get_current_weather(arguments: str) -> str:
    location = json.loads(arguments)["location"]
    # Simulated latency: slower lookups finish later but still fold in order.
    await asyncio.sleep(random.uniform(0.1, 1.0))
    return json.dumps({"location": location, "temperature": random.randint(50, 90)})


def print_turn(turn: TurnResult) -> None:
    print(f"--- turn {turn.turn}: {len(turn.tool_results)} tool call(s)")
    for result in turn.tool_results:
        status = "ok" if result.success else "FAILED"
        print(f"    {result.tool_name} [{status}] {result.content}")


async def main():
    tool = Tool(
        name="get_current_weather",
        description="Get the current temperature for one city",
        parameters={
            "type": "object",
            "properties": {"location": {"type": "string"}},
            "required": ["location"],
        },
        executor=get_current_weather,
    )
    config = OrchestratorConfig(temperature=0.2, max_turns=5, on_turn=print_turn)

    async with AsyncOpenAIClient(api_key=CHATLOOP_API_KEY) as client:
        result = await Orchestrator(client, config).run(
            "Compare the weather in Tokyo, Paris and Lima.", [tool], MODEL_ID
        )

    print()
    print(f"Stop reason: {result.stop_reason.value}")
    print(f"Model calls: {result.model_calls}, tool calls: {result.total_tool_calls}")
    print("=" * 60)
    print(result.content)


if __name__ == "__main__":
    asyncio.run(main())
