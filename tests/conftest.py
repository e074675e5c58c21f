"""Pytest configuration and shared fixtures."""
import asyncio
import os
from typing import Any

import pytest

from peat.llm.base import LLMProvider
from peat.llm.models import ChatMessage, LLMResponse
from peat.prompts import clear_cache


class ScriptedProvider(LLMProvider):
    """LLM provider that answers from a script instead of a backend.

    Each reply is a string (returned as content) or an exception (raised).
    Every request is recorded. When a gate is set, calls wait on it before
    answering so tests can interleave other work with an in-flight call.
    """

    backend_name = "scripted"

    def __init__(self, replies: list[Any] | None = None, gate: asyncio.Event | None = None):
        self.replies = list(replies or [])
        self.requests: list[list[ChatMessage]] = []
        self.gate = gate
        self.close_count = 0

    async def chat_completion(
        self,
        messages: list[ChatMessage],
        model: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
        **kwargs: Any
    ) -> LLMResponse:
        self.requests.append(list(messages))
        if self.gate is not None:
            await self.gate.wait()
        reply = self.replies.pop(0) if self.replies else ""
        if isinstance(reply, BaseException):
            raise reply
        return LLMResponse(content=reply, model="scripted")

    async def close(self) -> None:
        self.close_count += 1


@pytest.fixture
def scripted_provider():
    """Return a factory building a ScriptedProvider and a provider_factory for it."""
    def _make(*replies: Any, gate: asyncio.Event | None = None):
        provider = ScriptedProvider(list(replies), gate=gate)
        return provider, lambda: provider
    return _make


@pytest.fixture
def isolated_environment(monkeypatch, tmp_path):
    """Keep tests independent of the developer's environment and prompt overrides."""
    for name in (
        "PEAT_BACKEND", "PEAT_LOCALE", "PEAT_TEMPERATURE", "PEAT_LOG_LEVEL",
        "OLLAMA_URL", "OLLAMA_MODEL",
        "GEMINI_API_KEY", "GEMINI_MODEL",
        "OPENAI_API_KEY", "OPENAI_MODEL",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    clear_cache()
    yield
    clear_cache()


@pytest.fixture(scope="session")
def api_keys():
    """Return API keys from environment."""
    return {
        "gemini": os.getenv("GEMINI_API_KEY"),
        "openai": os.getenv("OPENAI_API_KEY"),
    }


@pytest.fixture
def sample_article():
    """Return a short article for testing."""
    return (
        "Honeybees live in colonies of tens of thousands. Worker bees build "
        "wax combs, collect nectar and defend the hive together. Scientists "
        "believe this cooperation helps colonies survive harsh winters."
    )


@pytest.fixture
def analysis_output():
    """Return well-formed analysis output."""
    return (
        "SUMMARY: Bees build hives.\n"
        "STARTER 1: Why cooperative?\n"
        "STARTER 2: What risks?"
    )
