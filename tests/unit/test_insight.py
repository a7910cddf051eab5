"""
Tests for InsightService and the LLM factory.

A fake LLMPort stands in for the remote providers.
"""

from pathlib import Path
from types import SimpleNamespace

import pytest

import sys
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))

from coherence_core.adapters.claude_llm import ClaudeLLM
from coherence_core.adapters.llm_factory import create_llm, get_available_providers, get_default_provider
from coherence_core.domain.models import Standard
from coherence_core.errors import RemoteServiceError
from coherence_core.ports.llm_port import LLMPort, LLMProvider, LLMResponse, Message
from coherence_core.services.insight import (
    InsightService, NO_INSIGHT_TEXT, SYSTEM_INSTRUCTION, INSIGHT_TEMPERATURE, build_prompt,
)


class FakeLLM(LLMPort):
    def __init__(self, response=None, available=True):
        self.response = response or LLMResponse(content="**Try counting beads.**")
        self.available = available
        self.calls = []

    def chat(self, messages, temperature=0.7, max_tokens=2000):
        self.calls.append((messages, temperature))
        return self.response

    def get_provider(self):
        return LLMProvider.GEMINI

    def get_model_name(self):
        return "fake-model"

    def is_available(self):
        return self.available


STANDARD = Standard(code="K.CC.1", description="Count to 100 by ones and by tens.")


class TestInsightService:

    def test_returns_text(self):
        llm = FakeLLM(LLMResponse(content="  **Try counting beads.**\n"))
        assert InsightService(llm).generate_insight(STANDARD) == "**Try counting beads.**"

    def test_prompt_and_system_instruction(self):
        llm = FakeLLM()
        InsightService(llm).generate_insight(STANDARD)
        messages, temperature = llm.calls[0]
        assert messages[0].role == "system"
        assert messages[0].content == SYSTEM_INSTRUCTION
        assert messages[1].role == "user"
        assert "K.CC.1" in messages[1].content
        assert "Count to 100" in messages[1].content
        assert temperature == INSIGHT_TEMPERATURE

    def test_build_prompt_mentions_activity(self):
        assert "hands-on activity" in build_prompt(STANDARD)

    def test_empty_response(self):
        llm = FakeLLM(LLMResponse(content="   "))
        assert InsightService(llm).generate_insight(STANDARD) == NO_INSIGHT_TEXT

    def test_error_response_raises(self):
        llm = FakeLLM(LLMResponse(content="quota exceeded", finish_reason="error"))
        with pytest.raises(RemoteServiceError, match="quota exceeded") as exc_info:
            InsightService(llm).generate_insight(STANDARD)
        assert exc_info.value.provider == "gemini"

    def test_unavailable_provider_raises(self):
        llm = FakeLLM(available=False)
        with pytest.raises(RemoteServiceError):
            InsightService(llm).generate_insight(STANDARD)
        assert llm.calls == []


class TestLLMFactory:
    """Provider discovery from the environment."""

    def test_no_keys_means_no_provider(self, monkeypatch):
        monkeypatch.delenv("GOOGLE_API_KEY", raising=False)
        monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)
        assert get_default_provider() is None
        assert all(not p["available"] for p in get_available_providers())

    def test_unknown_provider(self):
        with pytest.raises(ValueError):
            create_llm("openai")

    def test_preferred_provider_is_created(self, monkeypatch):
        monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)
        llm = get_default_provider("claude", "claude-test")
        assert llm.get_provider() == LLMProvider.CLAUDE
        assert llm.get_model_name() == "claude-test"
        assert not llm.is_available()


class FakeMessages:
    """Stands in for anthropic's client.messages."""

    def __init__(self, reply=None, error=None):
        self.reply = reply
        self.error = error
        self.requests = []

    def create(self, **kwargs):
        self.requests.append(kwargs)
        if self.error:
            raise self.error
        return self.reply


class TestClaudeLLM:
    """Request shaping and reply parsing with a stubbed client."""

    def make_llm(self, messages_api):
        llm = ClaudeLLM(model="claude-test", api_key="test-key")
        llm._client = SimpleNamespace(messages=messages_api)
        return llm

    def test_system_instruction_sent_separately(self):
        reply = SimpleNamespace(
            content=[SimpleNamespace(type="text", text="Use ten frames.")],
            stop_reason="end_turn",
            usage=SimpleNamespace(input_tokens=40, output_tokens=5),
        )
        api = FakeMessages(reply=reply)
        llm = self.make_llm(api)

        response = llm.chat([
            Message(role="system", content=SYSTEM_INSTRUCTION),
            Message(role="user", content=build_prompt(STANDARD)),
        ], temperature=INSIGHT_TEMPERATURE)

        request = api.requests[0]
        assert request["system"] == SYSTEM_INSTRUCTION
        assert request["messages"] == [{"role": "user", "content": build_prompt(STANDARD)}]
        assert request["temperature"] == INSIGHT_TEMPERATURE
        assert response.content == "Use ten frames."
        assert response.finish_reason == "stop"
        assert response.usage == {"prompt_tokens": 40, "completion_tokens": 5}

    def test_truncated_reply(self):
        reply = SimpleNamespace(
            content=[SimpleNamespace(type="text", text="Partial")],
            stop_reason="max_tokens",
            usage=SimpleNamespace(input_tokens=1, output_tokens=1),
        )
        api = FakeMessages(reply=reply)
        response = self.make_llm(api).chat([Message(role="user", content="hi")])
        assert response.finish_reason == "length"
        assert "system" not in api.requests[0]

    def test_request_failure_becomes_error_response(self):
        llm = self.make_llm(FakeMessages(error=RuntimeError("overloaded")))
        response = llm.chat([Message(role="user", content="hi")])
        assert response.finish_reason == "error"
        assert "overloaded" in response.content
