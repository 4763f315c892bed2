"""Model client with transparent fallback to the rule-based engine."""

from email_agent.llm.service import LLMService, build_llm_service

__all__ = ["LLMService", "build_llm_service"]
