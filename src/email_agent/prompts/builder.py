"""Prompt assembly for email actions and chat.

Button-triggered actions render a stored template against an email and
append an ``[ACTION:<NAME>]`` marker so the rule-based engine answers the
intended question regardless of how the template is worded. Chat builds a
two-message conversation: a system message with the assistant persona and
the email in context, and the user's question.

The email block always comes last (only the action marker follows it):
the engine reads ``Body:`` through to the end of the text, so instructions
placed after it would leak into the parsed body.

Usage:
    from email_agent.prompts import build_action_prompt

    prompt = build_action_prompt(template.template, email, ActionTag.SUMMARY)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from email_agent.engine import ActionTag, Message

if TYPE_CHECKING:
    from email_agent.db.store import Email

PLACEHOLDERS = ("subject", "from_name", "from_email", "body")

CHAT_PERSONA = (
    "You are an Email Productivity Assistant. Help the user manage their emails effectively."
)
CHAT_CLOSING = "Provide a helpful, concise response."

_REPLY_GUIDANCE = """
Formatting requirements:
- Begin with a friendly greeting that mentions {sender} (e.g., "Hi {greeting},")
- Provide 1-2 concise paragraphs that acknowledge the message, answer questions, \
and outline next steps
- Close with a professional sign-off such as "Best regards," followed by a placeholder \
for the user's name
- Keep the tone helpful, appreciative, and confident
"""


def render_template(template: str, email: Email) -> str:
    """Substitute every email placeholder in a template.

    Only the four known placeholders are replaced; any other braces are
    left untouched.
    """
    rendered = template
    for field in PLACEHOLDERS:
        rendered = rendered.replace(f"{{{field}}}", getattr(email, field) or "")
    return rendered


def reply_guidance(email: Email) -> str:
    """Formatting instructions placed ahead of the rendered reply template."""
    return _REPLY_GUIDANCE.format(
        sender=email.from_name or "the sender",
        greeting=email.from_name or "there",
    )


def build_action_prompt(template: str, email: Email, tag: ActionTag) -> str:
    """Render a template and mark which action it drives."""
    prompt = render_template(template, email)
    if tag is ActionTag.REPLY:
        prompt = f"{reply_guidance(email).strip()}\n\n{prompt}"
    return f"{prompt}\n\n{tag.marker}"


def email_context_block(email: Email) -> str:
    return (
        "Email Context:\n"
        f"Subject: {email.subject}\n"
        f"From: {email.from_name} <{email.from_email}>\n"
        f"Body: {email.body}"
    )


def build_chat_conversation(question: str, email: Email | None = None) -> list[Message]:
    """Build the conversation sent for one chat turn.

    Args:
        question: The user's message
        email: Email the chat is about, or None for the general chat
    """
    parts = [CHAT_PERSONA, CHAT_CLOSING]
    if email is not None:
        parts.append(email_context_block(email))
    return [
        Message("system", "\n\n".join(parts)),
        Message("user", question),
    ]
