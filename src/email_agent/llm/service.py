"""Text generation service backed by Claude or the rule-based engine.

Every email action and chat reply goes through ``LLMService.complete``.
With an API key and mock mode off, requests go to the Anthropic Messages
API. Any backend failure (connection, timeout, rate limit, error status,
or an empty text payload) is logged and answered by ``produce_response``
instead, so callers always get text back.

Error handling strategy:
- Transient errors (429, 5xx, network): Handled by Anthropic SDK (max_retries)
- Anything the SDK still raises: logged as a warning, answered by the engine

Usage:
    from email_agent.llm import build_llm_service

    llm = build_llm_service(config.llm)
    text = llm.complete("Subject: Hi\\nFrom: Jo\\nBody: ...\\n\\n[ACTION:SUMMARY]")
"""

from __future__ import annotations

import os
import time
from collections.abc import Iterable, Mapping
from typing import Any

import anthropic

from email_agent.config_schema import LLMConfig
from email_agent.core.logging import get_logger
from email_agent.engine import Message, as_conversation, produce_response

logger = get_logger(__name__)

MOCK_ENV_VAR = "EMAIL_AGENT_USE_MOCK_LLM"
API_KEY_ENV_VAR = "ANTHROPIC_API_KEY"

PROVIDER_MOCK = "mock"
PROVIDER_ANTHROPIC = "anthropic"

Source = str | Iterable[Message | Mapping[str, Any]] | None


def _env_forces_mock() -> bool:
    return os.environ.get(MOCK_ENV_VAR, "").strip().lower() in ("1", "true", "yes")


def _mask_key(api_key: str) -> str:
    """Show only the first few characters of an API key."""
    if len(api_key) <= 8:
        return "****"
    return f"{api_key[:7]}..."


class LLMService:
    """Generates response text for prompts and conversations.

    Args:
        config: Model parameters
        client: Anthropic client, or None to always use the rule-based engine
        api_key: Key the client was built with (only used for status reporting)
    """

    def __init__(
        self,
        config: LLMConfig,
        client: anthropic.Anthropic | None = None,
        api_key: str | None = None,
    ):
        self._config = config
        self._client = client
        self._api_key = api_key

    @property
    def is_mock(self) -> bool:
        return self._client is None

    @property
    def provider(self) -> str:
        return PROVIDER_MOCK if self.is_mock else PROVIDER_ANTHROPIC

    def status(self) -> dict[str, Any]:
        """Describe the active backend for the status endpoint."""
        return {
            "provider": self.provider,
            "mock": self.is_mock,
            "api_key_configured": bool(self._api_key),
            "api_key_prefix": _mask_key(self._api_key) if self._api_key else None,
            "model": PROVIDER_MOCK if self.is_mock else self._config.model,
        }

    def complete(self, source: Source) -> str:
        """Produce response text for a prompt string or a conversation.

        Never raises for backend failures; the rule-based engine answers
        instead.
        """
        if self._client is None:
            return produce_response(source)

        conversation = as_conversation(source)
        system, messages = _to_api_messages(conversation)
        start = time.monotonic()

        try:
            kwargs: dict[str, Any] = {
                "model": self._config.model,
                "messages": messages,
                "max_tokens": self._config.max_tokens,
                "temperature": self._config.temperature,
            }
            if system:
                kwargs["system"] = system
            response = self._client.messages.create(**kwargs)
        except anthropic.APIError as e:
            logger.warning(
                "llm_fallback_to_mock",
                reason=type(e).__name__,
                error=str(e),
                model=self._config.model,
            )
            return produce_response(conversation)

        text = _extract_text(response).strip()
        duration_ms = int((time.monotonic() - start) * 1000)

        if not text:
            logger.warning(
                "llm_fallback_to_mock",
                reason="empty_response",
                model=self._config.model,
            )
            return produce_response(conversation)

        logger.debug(
            "llm_completion",
            model=self._config.model,
            input_tokens=getattr(response.usage, "input_tokens", None),
            output_tokens=getattr(response.usage, "output_tokens", None),
            duration_ms=duration_ms,
        )
        return text


def _to_api_messages(conversation: list[Message]) -> tuple[str, list[dict[str, str]]]:
    """Split a conversation into a system prompt and Messages API turns.

    The API requires at least one user turn, so a system-only conversation
    (a bare prompt string) is sent as the user turn instead.
    """
    system_parts = [m.content for m in conversation if m.role == "system"]
    turns = [{"role": m.role, "content": m.content} for m in conversation if m.role != "system"]

    if not turns:
        return "", [{"role": "user", "content": "\n\n".join(system_parts)}]
    if turns[0]["role"] != "user":
        turns.insert(0, {"role": "user", "content": "(conversation continues)"})
    return "\n\n".join(system_parts), turns


def _extract_text(response: anthropic.types.Message) -> str:
    """Extract text content from a Claude response."""
    parts = []
    for block in response.content:
        if block.type == "text":
            parts.append(block.text)
    return "\n".join(parts)


def build_llm_service(config: LLMConfig) -> LLMService:
    """Create the service for the configured backend.

    Mock mode applies when ``config.use_mock`` is set, when
    ``EMAIL_AGENT_USE_MOCK_LLM`` is true, or when ``ANTHROPIC_API_KEY`` is
    missing.
    """
    api_key = os.environ.get(API_KEY_ENV_VAR, "").strip() or None

    if config.use_mock or _env_forces_mock() or api_key is None:
        logger.info(
            "llm_backend_selected",
            provider=PROVIDER_MOCK,
            api_key_configured=api_key is not None,
        )
        return LLMService(config, client=None, api_key=api_key)

    client = anthropic.Anthropic(
        api_key=api_key,
        max_retries=config.max_retries,
        timeout=config.timeout_seconds,
    )
    logger.info("llm_backend_selected", provider=PROVIDER_ANTHROPIC, model=config.model)
    return LLMService(config, client=client, api_key=api_key)
