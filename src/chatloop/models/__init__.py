"""Configuration models for chatloop."""

from chatloop.models.config import (
    VISION_MODEL_11B,
    VISION_MODEL_90B,
    VISION_MODELS,
    ClientConfig,
)

__all__ = ["ClientConfig", "VISION_MODELS", "VISION_MODEL_90B", "VISION_MODEL_11B"]
