"""Prompt templates and prompt assembly for email actions and chat."""

from email_agent.prompts.builder import (
    build_action_prompt,
    build_chat_conversation,
    render_template,
)
from email_agent.prompts.defaults import DEFAULT_TEMPLATES, DefaultTemplate, TemplateType

__all__ = [
    "DEFAULT_TEMPLATES",
    "DefaultTemplate",
    "TemplateType",
    "build_action_prompt",
    "build_chat_conversation",
    "render_template",
]
