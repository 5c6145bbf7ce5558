"""Streaming Text

Streams a completion and prints each content fragment as it arrives. The
raw chunks are also available through stream_chat() for callers that need
finish reasons or other delta fields.

Demonstrates: stream_text(), stream_chat(), extract_chunk_content()
"""

import asyncio
import os

from dotenv import load_dotenv

from chatloop import AsyncOpenAIClient

load_dotenv()

CHATLOOP_API_KEY = os.environ["CHATLOOP_API_KEY"]
MODEL_ID = os.environ.get("CHATLOOP_MODEL", "llama-3.3-70b-versatile")


async def main():
    async with AsyncOpenAIClient(api_key=CHATLOOP_API_KEY) as client:
        print("=" * 60)
        print("stream_text(): content fragments only")
        print("=" * 60)
        async for text in client.stream_text(
            "Write a haiku about rivers.", model=MODEL_ID
        ):
            print(text, end="", flush=True)
        print()

        print()
        print("=" * 60)
        print("stream_chat(): raw chunks")
        print("=" * 60)
        chunks = 0
        messages = [{"role": "user", "content": "Count from one to five."}]
        async for chunk in client.stream_chat(messages, model=MODEL_ID):
            chunks += 1
            text = AsyncOpenAIClient.extract_chunk_content(chunk)
            finish = chunk["choices"][0].get("finish_reason") if chunk.get("choices") else None
            if text:
                print(text, end="", flush=True)
            if finish:
                print(f"\n[finish_reason={finish}]")
        print(f"{chunks} chunk(s) received")


if __name__ == "__main__":
    asyncio.run(main())
