"""Weather Tools

The model answers a weather question by calling a local tool. The
orchestrator sends the tool definition, runs the requested call, folds the
result back into the conversation, and returns the model's final answer.

Demonstrates: Tool, Orchestrator.run_conversation(), AsyncOpenAIClient
"""

import asyncio
import json
import os

from dotenv import load_dotenv

from chatloop import AsyncOpenAIClient, Orchestrator, Tool

load_dotenv()

CHATLOOP_API_KEY = os.environ["CHATLOOP_API_KEY"]
MODEL_ID = os.environ.get("CHATLOOP_MODEL", "llama-3.3-70b-versatile")


def get_current_weather(arguments: str) -> str:
    location = json.loads(arguments or "{}").get("location", "unknown")
    # Canned data; swap in a real weather API here.
    return json.dumps({"location": location, "temperature": 72, "unit": "fahrenheit"})


weather_tool = Tool(
    name="get_current_weather",
    description="Get the current weather in a given location",
    parameters={
        "type": "object",
        "properties": {
            "location": {
                "type": "string",
                "description": "The city and state, e.g. San Francisco, CA",
            },
        },
        "required": ["location"],
    },
    executor=get_current_weather,
)


async def main():
    async with AsyncOpenAIClient(api_key=CHATLOOP_API_KEY) as client:
        orch = Orchestrator(client)
        answer = await orch.run_conversation(
            "What's the weather like in San Francisco?",
            [weather_tool],
            MODEL_ID,
            system_message="You are a helpful assistant. Use tools when needed.",
        )

    print("=" * 60)
    print(answer or "(no answer)")


if __name__ == "__main__":
    asyncio.run(main())
