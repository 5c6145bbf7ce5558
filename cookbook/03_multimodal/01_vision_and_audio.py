"""Vision and Audio

Asks a vision model about an image URL, then transcribes a local audio
file when one is given in CHATLOOP_AUDIO_FILE.

Demonstrates: vision_chat(), extract_content(), transcribe()
"""

import asyncio
import os
from pathlib import Path

from dotenv import load_dotenv

from chatloop import AsyncOpenAIClient
from chatloop.models.config import VISION_MODEL_11B

load_dotenv()

CHATLOOP_API_KEY = os.environ["CHATLOOP_API_KEY"]
IMAGE_URL = os.environ.get(
    "CHATLOOP_IMAGE_URL",
    "https://upload.wikimedia.org/wikipedia/commons/f/f2/LPU-v1-die.jpg",
)
AUDIO_FILE = os.environ.get("CHATLOOP_AUDIO_FILE")
AUDIO_MODEL = os.environ.get("CHATLOOP_AUDIO_MODEL", "whisper-large-v3")


async def main():
    async with AsyncOpenAIClient(api_key=CHATLOOP_API_KEY) as client:
        print("=" * 60)
        print("vision_chat()")
        print("=" * 60)
        response = await client.vision_chat(
            "Describe this image in two sentences.",
            IMAGE_URL,
            model=VISION_MODEL_11B,
        )
        print(AsyncOpenAIClient.extract_content(response))

        if not AUDIO_FILE:
            print("\nSet CHATLOOP_AUDIO_FILE to try transcribe().")
            return

        print()
        print("=" * 60)
        print("transcribe()")
        print("=" * 60)
        path = Path(AUDIO_FILE)
        with path.open("rb") as audio:
            result = await client.transcribe(audio, path.name, AUDIO_MODEL, language="en")
        print(result.get("text", ""))


if __name__ == "__main__":
    asyncio.run(main())
