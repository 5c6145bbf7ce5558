"""Configuration models for chatloop.

ClientConfig holds the connection settings for the chat-completion API.
Values can be given directly or read from ``CHATLOOP_*`` environment
variables with :meth:`ClientConfig.from_env`.
"""

from __future__ import annotations

import os
from typing import Optional

from pydantic import BaseModel

DEFAULT_BASE_URL = "https://api.groq.com/openai/v1"
DEFAULT_MODEL = "llama-3.3-70b-versatile"

VISION_MODEL_90B = "llama-3.2-90b-vision-preview"
VISION_MODEL_11B = "llama-3.2-11b-vision-preview"
VISION_MODELS: frozenset[str] = frozenset({VISION_MODEL_90B, VISION_MODEL_11B})

ENV_API_KEY = "CHATLOOP_API_KEY"
ENV_BASE_URL = "CHATLOOP_BASE_URL"
ENV_MODEL = "CHATLOOP_MODEL"
ENV_TIMEOUT = "CHATLOOP_TIMEOUT"


class ClientConfig(BaseModel):
    """Connection settings for an OpenAI-compatible endpoint."""

    api_key: Optional[str] = None
    base_url: str = DEFAULT_BASE_URL
    default_model: str = DEFAULT_MODEL
    timeout: float = 120.0
    connect_timeout: float = 30.0

    @classmethod
    def from_env(cls, **overrides: object) -> ClientConfig:
        """Build a config from environment variables.

        Keyword overrides that are not None win over the environment.
        """
        values: dict[str, object] = {}
        if os.environ.get(ENV_API_KEY):
            values["api_key"] = os.environ[ENV_API_KEY]
        if os.environ.get(ENV_BASE_URL):
            values["base_url"] = os.environ[ENV_BASE_URL]
        if os.environ.get(ENV_MODEL):
            values["default_model"] = os.environ[ENV_MODEL]
        if os.environ.get(ENV_TIMEOUT):
            values["timeout"] = os.environ[ENV_TIMEOUT]
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)
