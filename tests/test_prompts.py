"""Tests for default templates and prompt assembly."""

import pytest

from email_agent.db.store import Email
from email_agent.engine import ActionTag
from email_agent.engine.fields import extract_fields, strip_action_tags
from email_agent.prompts import DEFAULT_TEMPLATES, build_action_prompt, build_chat_conversation
from email_agent.prompts.builder import render_template
from email_agent.prompts.defaults import EMAIL_BLOCK, TemplateType


@pytest.fixture
def email() -> Email:
    return Email(
        id=1,
        subject="Standup notes",
        from_email="david@company.com",
        from_name="David",
        to_email="you@example.com",
        body="Notes from today are in the shared doc.",
        date="2024-12-01T10:00:00+00:00",
    )


@pytest.mark.parametrize("default", DEFAULT_TEMPLATES, ids=lambda t: t.type.value)
def test_email_block_is_last(default):
    assert default.template.endswith(EMAIL_BLOCK)


@pytest.mark.parametrize(
    ("template_type", "tag"),
    [
        (TemplateType.SUMMARY, ActionTag.SUMMARY),
        (TemplateType.REPLY_DRAFT, ActionTag.REPLY),
        (TemplateType.ACTION_EXTRACTION, ActionTag.ACTIONS),
    ],
)
def test_parsed_body_is_the_stored_body(email: Email, template_type: TemplateType, tag: ActionTag):
    template = next(t for t in DEFAULT_TEMPLATES if t.type is template_type)
    prompt = build_action_prompt(template.template, email, tag)
    assert prompt.endswith(tag.marker)

    fields = extract_fields(strip_action_tags(prompt))
    assert fields.body == email.body
    assert fields.subject == email.subject
    assert fields.sender_name == email.from_name


def test_reply_guidance_comes_first(email: Email):
    template = next(t for t in DEFAULT_TEMPLATES if t.type is TemplateType.REPLY_DRAFT)
    prompt = build_action_prompt(template.template, email, ActionTag.REPLY)
    assert prompt.startswith("Formatting requirements:")
    assert 'e.g., "Hi David,"' in prompt


def test_render_replaces_every_occurrence(email: Email):
    rendered = render_template("{from_name} / {from_name} / {unknown}", email)
    assert rendered == "David / David / {unknown}"


def test_chat_context_ends_with_body(email: Email):
    system, user = build_chat_conversation("Summarize this", email)
    assert system.role == "system"
    assert system.content.endswith(f"Body: {email.body}")
    assert extract_fields(system.content).body == email.body
    assert user.content == "Summarize this"


def test_general_chat_has_no_email_block():
    system, _ = build_chat_conversation("hello")
    assert "Body:" not in system.content
