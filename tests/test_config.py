"""Tests for ClientConfig, OrchestratorConfig and logging setup."""

from __future__ import annotations

import logging
import sys

import pytest
from pydantic import ValidationError

from chatloop.models.config import DEFAULT_BASE_URL, DEFAULT_MODEL, ClientConfig
from chatloop.orchestrator import OrchestratorConfig


class TestClientConfig:
    """Test ClientConfig defaults and env loading."""

    def test_defaults(self):
        config = ClientConfig()
        assert config.api_key is None
        assert config.base_url == DEFAULT_BASE_URL == "https://api.groq.com/openai/v1"
        assert config.default_model == DEFAULT_MODEL
        assert config.timeout == 120.0
        assert config.connect_timeout == 30.0

    def test_from_env(self, clean_env):
        clean_env.setenv("CHATLOOP_API_KEY", "env-key")
        clean_env.setenv("CHATLOOP_MODEL", "env-model")
        clean_env.setenv("CHATLOOP_TIMEOUT", "15")
        config = ClientConfig.from_env()
        assert config.api_key == "env-key"
        assert config.default_model == "env-model"
        assert config.timeout == 15.0
        assert config.base_url == DEFAULT_BASE_URL

    def test_overrides_win_over_env(self, clean_env):
        clean_env.setenv("CHATLOOP_API_KEY", "env-key")
        config = ClientConfig.from_env(api_key="cli-key", base_url=None)
        assert config.api_key == "cli-key"
        assert config.base_url == DEFAULT_BASE_URL

    def test_invalid_timeout(self, clean_env):
        clean_env.setenv("CHATLOOP_TIMEOUT", "soon")
        with pytest.raises(ValidationError):
            ClientConfig.from_env()


class TestOrchestratorConfig:
    """Test OrchestratorConfig defaults."""

    def test_defaults(self):
        config = OrchestratorConfig()
        assert config.temperature == 0.7
        assert config.tool_choice == "auto"
        assert config.max_turns is None
        assert config.on_turn is None


class TestConfigureLogging:
    """Test rich logging setup."""

    def test_attaches_single_handler(self):
        from chatloop.logging_config import configure_logging

        logger = logging.getLogger("chatloop")
        saved = (logger.level, list(logger.handlers), logger.propagate)
        try:
            configure_logging("debug")
            configure_logging(logging.INFO)
            assert logger.level == logging.INFO
            assert len(logger.handlers) == 1
            assert logger.propagate is False
            assert logging.getLogger("httpx").level == logging.WARNING
        finally:
            logger.setLevel(saved[0])
            logger.handlers[:] = saved[1]
            logger.propagate = saved[2]

    def test_missing_rich_names_cli_extra(self, monkeypatch):
        from chatloop.logging_config import configure_logging

        monkeypatch.setitem(sys.modules, "rich.logging", None)
        with pytest.raises(ImportError, match=r"chatloop\[cli\]"):
            configure_logging()
