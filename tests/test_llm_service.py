"""Tests for the LLM service and its fallback to the rule-based engine."""

from types import SimpleNamespace
from unittest.mock import MagicMock

import anthropic
import httpx
import pytest

from email_agent.config_schema import LLMConfig
from email_agent.engine import Message, produce_response
from email_agent.llm.service import LLMService, build_llm_service

PROMPT = "Subject: Server\nFrom: IT\nBody: URGENT maintenance tonight\n\n[ACTION:PRIORITY]"


def _response(*texts: str) -> SimpleNamespace:
    return SimpleNamespace(
        content=[SimpleNamespace(type="text", text=t) for t in texts],
        usage=SimpleNamespace(input_tokens=10, output_tokens=5),
        model="claude-test",
    )


@pytest.fixture
def client() -> MagicMock:
    return MagicMock(spec=["messages"])


@pytest.fixture
def service(client: MagicMock) -> LLMService:
    return LLMService(LLMConfig(model="claude-test"), client=client, api_key="sk-ant-test-123456")


class TestCompleteWithClient:
    def test_returns_model_text(self, service: LLMService, client: MagicMock):
        client.messages.create.return_value = _response("  medium  ")
        assert service.complete(PROMPT) == "medium"

    def test_prompt_string_is_sent_as_user_turn(self, service: LLMService, client: MagicMock):
        client.messages.create.return_value = _response("ok")
        service.complete(PROMPT)
        kwargs = client.messages.create.call_args.kwargs
        assert kwargs["messages"] == [{"role": "user", "content": PROMPT}]
        assert "system" not in kwargs
        assert kwargs["model"] == "claude-test"
        assert kwargs["max_tokens"] == 1000

    def test_system_messages_become_system_prompt(self, service: LLMService, client: MagicMock):
        client.messages.create.return_value = _response("ok")
        service.complete([Message("system", "persona"), Message("user", "question")])
        kwargs = client.messages.create.call_args.kwargs
        assert kwargs["system"] == "persona"
        assert kwargs["messages"] == [{"role": "user", "content": "question"}]

    def test_joins_multiple_text_blocks(self, service: LLMService, client: MagicMock):
        client.messages.create.return_value = _response("Hi Sam,", "Best regards,")
        assert service.complete(PROMPT) == "Hi Sam,\nBest regards,"

    def test_api_error_falls_back_to_engine(self, service: LLMService, client: MagicMock):
        request = httpx.Request("POST", "https://api.anthropic.com/v1/messages")
        client.messages.create.side_effect = anthropic.APIConnectionError(request=request)
        assert service.complete(PROMPT) == produce_response(PROMPT) == "high"

    def test_empty_payload_falls_back_to_engine(self, service: LLMService, client: MagicMock):
        client.messages.create.return_value = _response("   ")
        assert service.complete(PROMPT) == "high"

    def test_status_masks_key(self, service: LLMService):
        status = service.status()
        assert status["provider"] == "anthropic"
        assert status["mock"] is False
        assert status["api_key_configured"] is True
        assert status["api_key_prefix"] == "sk-ant-..."
        assert status["model"] == "claude-test"


class TestMockMode:
    def test_mock_service_uses_engine(self, mock_llm: LLMService):
        assert mock_llm.is_mock
        assert mock_llm.complete(PROMPT) == "high"
        assert mock_llm.status()["provider"] == "mock"

    def test_no_api_key_builds_mock(self):
        assert build_llm_service(LLMConfig()).is_mock

    def test_config_flag_forces_mock(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-ant-test-123456")
        service = build_llm_service(LLMConfig(use_mock=True))
        assert service.is_mock
        assert service.status()["api_key_configured"] is True

    def test_env_flag_forces_mock(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-ant-test-123456")
        monkeypatch.setenv("EMAIL_AGENT_USE_MOCK_LLM", "true")
        assert build_llm_service(LLMConfig()).is_mock

    def test_api_key_builds_anthropic_client(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-ant-test-123456")
        service = build_llm_service(LLMConfig(max_retries=1, timeout_seconds=5))
        assert not service.is_mock
        assert service.provider == "anthropic"
