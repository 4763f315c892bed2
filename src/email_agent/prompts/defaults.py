"""Default prompt templates seeded into a new database.

Templates use ``{subject}``, ``{from_name}``, ``{from_email}`` and ``{body}``
placeholders. Users can edit them through the prompts API; seeding only
adds templates whose name is missing.

The email block is always the last thing in a template. ``Body:`` is read
through to the end of the prompt, so any instruction placed after it would
be treated as part of the email.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class TemplateType(StrEnum):
    """Which email action a template drives."""

    CATEGORIZATION = "categorization"
    ACTION_EXTRACTION = "action_extraction"
    REPLY_DRAFT = "reply_draft"
    SUMMARY = "summary"
    PRIORITY = "priority"


@dataclass(frozen=True, slots=True)
class DefaultTemplate:
    name: str
    description: str
    template: str
    type: TemplateType


EMAIL_BLOCK = """\
Subject: {subject}
From: {from_name} <{from_email}>
Body: {body}"""


DEFAULT_TEMPLATES: tuple[DefaultTemplate, ...] = (
    DefaultTemplate(
        name="Email Categorization",
        description="Categorize emails into predefined categories",
        template=f"""\
Analyze the following email and categorize it into one of these categories:
- urgent: Requires immediate attention
- work: Work-related tasks and communications
- personal: Personal messages
- newsletter: Newsletters and subscriptions
- spam: Unwanted or suspicious emails
- finance: Bills, invoices, and financial matters
- social: Social invitations and casual messages

Respond with only the category name.

Email:
{EMAIL_BLOCK}""",
        type=TemplateType.CATEGORIZATION,
    ),
    DefaultTemplate(
        name="Action Extraction",
        description="Extract actionable items from emails",
        template=f"""\
Analyze the following email and extract any actionable items or tasks mentioned.
List all actionable items in a clear, concise format. If there are no actions, \
respond with "No actions required."

Email:
{EMAIL_BLOCK}""",
        type=TemplateType.ACTION_EXTRACTION,
    ),
    DefaultTemplate(
        name="Auto Reply Draft",
        description=(
            "Generate a polite, context-aware reply draft that the user can review "
            "and edit before sending"
        ),
        template=f"""\
You are an assistant that writes professional email replies on behalf of the user.

When drafting the reply:
- Start with a friendly greeting that references the sender's name (e.g., "Hi {{from_name}},")
- Use short paragraphs (blank line between them) that acknowledge the original message, \
address questions, and provide next steps
- Thank the sender when appropriate and keep a professional, helpful tone
- End with a professional closing such as "Best regards," followed by a placeholder for \
the user's name
- Never promise to send emails automatically; the user will review and send manually

Draft a reply email body only (no subject line).

Original Email:
{EMAIL_BLOCK}""",
        type=TemplateType.REPLY_DRAFT,
    ),
    DefaultTemplate(
        name="Email Summary",
        description="Create a concise summary of the email",
        template=f"""\
Summarize the following email in 2-3 sentences, highlighting:
- Main purpose or topic
- Key points or requests
- Any deadlines or important dates

Provide a concise summary.

Email:
{EMAIL_BLOCK}""",
        type=TemplateType.SUMMARY,
    ),
    DefaultTemplate(
        name="Priority Assessment",
        description="Assess the priority level of an email",
        template=f"""\
Analyze the following email and determine its priority level:
- high: Urgent, requires immediate attention, has deadlines
- medium: Important but not urgent, should be addressed soon
- low: Can be handled later, informational only

Respond with only the priority level (high, medium, or low).

Email:
{EMAIL_BLOCK}""",
        type=TemplateType.PRIORITY,
    ),
)
