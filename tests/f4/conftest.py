"""Fixtures for F4 tests - LLM client and AI mentor."""

from unittest.mock import MagicMock

import pytest

from skillup.llm.client import LLMResponse


@pytest.fixture
def mock_completion():
    """Fake openai chat completion object."""

    def _make(content: str | None = "Practice one problem a day.", model: str = "gemini-2.0-flash"):
        completion = MagicMock()
        choice = MagicMock()
        choice.message.content = content
        completion.choices = [choice]
        completion.model = model
        completion.usage.prompt_tokens = 40
        completion.usage.completion_tokens = 10
        completion.usage.total_tokens = 50
        return completion

    return _make


@pytest.fixture
def mock_llm_client():
    """Mock LLM client that returns a fixed reply without calling a real LLM."""
    client = MagicMock()
    client.config = MagicMock()
    client.config.provider = "gemini"
    client.config.model = "gemini-2.0-flash"
    client.simple_chat.return_value = LLMResponse(
        content="Focus on data structures first.",
        model="gemini-2.0-flash",
        provider="gemini",
        latency_ms=120,
    )
    return client
