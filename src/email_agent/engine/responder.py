"""Rule-based stand-in for a generative model.

``produce_response`` is the single entry point: it accepts a prompt string
or a conversation, extracts the email in context, routes the request, and
returns text. It is total over its input (every string, including the empty
one, gets an answer) and has no side effects beyond debug logging, so it
doubles as the fallback path of the real model client.

Pipeline:
1. Find an explicit ``[ACTION:<NAME>]`` marker anywhere in the input
2. Extract subject/sender/body from the context text (marker removed)
3. Route to an intent (marker first, then phrase rules)
4. Run the selected classifier or composer

Usage:
    from email_agent.engine.responder import produce_response

    produce_response("Subject: Hi\\nFrom: Jo\\nBody: Lunch Friday?\\n\\n[ACTION:REPLY]")
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from email_agent.engine.actions import extract_actions
from email_agent.engine.classifiers import (
    Category,
    Priority,
    classify_category,
    classify_priority,
)
from email_agent.engine.composer import compose_reply
from email_agent.engine.fields import (
    StructuredEmail,
    extract_action_tag,
    extract_fields,
    strip_action_tags,
)
from email_agent.engine.router import (
    Conversation,
    Intent,
    Message,
    as_conversation,
    joined_text,
    route,
)
from email_agent.engine.summarizer import summarize

GENERIC_RESPONSE = (
    "I understand your request. I can summarize an email, categorize it, assess its "
    "priority, list action items, or draft a reply. Open an email and ask me about it."
)

TONE_BY_PRIORITY: Mapping[Priority, str] = {
    Priority.HIGH: "Respond promptly in a clear, direct tone and confirm the next steps.",
    Priority.MEDIUM: "A professional, courteous tone works well: acknowledge the request "
    "and give a timeline.",
    Priority.LOW: "A relaxed, friendly tone is fine and a short acknowledgement is enough.",
}

TONE_BY_CATEGORY: Mapping[Category, str] = {
    Category.PERSONAL: "Keep it warm and personal.",
    Category.FINANCE: "Be precise about amounts and dates.",
    Category.URGENT: "Keep it brief.",
    Category.NEWSLETTER: "A reply is usually optional.",
}


def context_text(conversation: Conversation) -> str:
    """Text the email fields are parsed from.

    System messages carry the attached email block; when there are none,
    the whole conversation is used. Action markers are always removed.
    """
    has_system = any(m.role == "system" for m in conversation)
    text = joined_text(conversation, roles=("system",) if has_system else None)
    return strip_action_tags(text)


def recommend_tone(email: StructuredEmail) -> str:
    """Combine category and priority into a tone recommendation."""
    category = classify_category(email)
    priority = classify_priority(email)
    sentence = (
        f"This reads as a {category.value} email with {priority.value} priority. "
        f"{TONE_BY_PRIORITY[priority]}"
    )
    extra = TONE_BY_CATEGORY.get(category)
    return f"{sentence} {extra}" if extra else sentence


def assess_risks(email: StructuredEmail) -> str:
    """Summary followed by the action list, for risk and concern questions."""
    return f"{summarize(email)}\n\n{extract_actions(email)}"


def respond_to_intent(intent: Intent, email: StructuredEmail) -> str:
    """Run the classifier or composer selected for an intent."""
    if intent is Intent.CATEGORY:
        return classify_category(email).value
    if intent is Intent.PRIORITY:
        return classify_priority(email).value
    if intent is Intent.ACTIONS:
        return extract_actions(email)
    if intent is Intent.REPLY:
        return compose_reply(email)
    if intent is Intent.SUMMARY:
        return summarize(email)
    if intent is Intent.RISK:
        return assess_risks(email)
    if intent is Intent.TONE:
        return recommend_tone(email)
    return GENERIC_RESPONSE


def produce_response(source: str | Iterable[Message | Mapping[str, Any]] | None) -> str:
    """Answer a prompt or conversation without calling a model.

    Args:
        source: Raw prompt string, or messages as ``Message`` objects or
            ``{"role": ..., "content": ...}`` mappings

    Returns:
        Response text (never raises for malformed input)
    """
    conversation = as_conversation(source)
    tag = extract_action_tag(joined_text(conversation))
    email = extract_fields(context_text(conversation))
    intent = route(conversation, explicit_tag=tag, has_email=not email.is_empty)
    return respond_to_intent(intent, email)
