"""Summary generator built on the ordered topic table.

Each topic produces a templated sentence naming the sender and restating
the salient fact of that kind of email. Templates use ``{sender}`` and are
filled with ``str.format``; the sender name itself is never re-parsed.
"""

from __future__ import annotations

from email_agent.engine.fields import StructuredEmail
from email_agent.engine.rules import (
    EmailView,
    Rule,
    find_rule,
    is_birthday,
    is_order_shipped,
    is_registration_confirmation,
    variant,
)

# Placeholders for absent fields
DEFAULT_SENDER = "the sender"
DEFAULT_SUBJECT = "the email"

# Maximum body preview length in the generic fallback summary
PREVIEW_MAX_LENGTH = 200


SUMMARY_TOPICS: tuple[Rule[str], ...] = (
    Rule(
        "birthday",
        is_birthday,
        variant(
            lambda e: e.body_has("celebrate", "weekend"),
            "{sender} sent birthday wishes and suggested celebrating this weekend.",
            "{sender} sent birthday wishes.",
        ),
    ),
    Rule(
        "registration_confirmed",
        is_registration_confirmation,
        "{sender} confirmed your registration. They will send schedule and venue details "
        "closer to the event date.",
    ),
    Rule(
        "maintenance",
        lambda e: e.body_has("maintenance"),
        "{sender} is warning about scheduled maintenance tonight. Systems will be unavailable "
        "during the window, so save work and log out beforehand.",
    ),
    Rule(
        "new_login",
        lambda e: e.body_has("new login", "secure your account"),
        "{sender} detected a new login to your account from a different device/location. "
        "If you don't recognize it, secure the account immediately.",
    ),
    Rule(
        "invoice",
        lambda e: e.body_has("invoice", "payment"),
        "{sender} sent an invoice for recent services and requests payment within the stated terms.",
    ),
    Rule(
        "meeting",
        lambda e: e.body_has("meeting", "available"),
        "{sender} is trying to schedule a meeting and is asking for your availability.",
    ),
    Rule(
        "interview",
        lambda e: e.body_has("interview", "application") or e.subject_has("application"),
        variant(
            lambda e: e.body_has("availability", "available"),
            "{sender} invited you for an interview and is asking for your availability next week.",
            "{sender} sent an interview invitation. Respond to confirm your interest and availability.",
        ),
    ),
    Rule(
        "feedback",
        lambda e: e.body_has("feedback", "review"),
        "{sender} shared materials and needs your review and feedback by the requested deadline.",
    ),
    Rule(
        "job_offer",
        lambda e: e.subject_has("job offer") or e.body_has("job offer", "pleased to offer"),
        "{sender} sent a job offer. Review the details and respond by the deadline.",
    ),
    Rule(
        "password_reset",
        lambda e: e.mentions("password reset"),
        "{sender} sent a password reset request. Follow the instructions if you requested it, "
        "or ignore if you didn't.",
    ),
    Rule(
        "invitation",
        lambda e: e.subject_has("invited") or e.body_has("you're invited", "rsvp"),
        "{sender} sent an event invitation. RSVP by the deadline if you plan to attend.",
    ),
    Rule(
        "donation_thanks",
        lambda e: e.body_has("thank you") and e.body_has("donation", "contribution"),
        "{sender} sent a thank you message for your donation or contribution.",
    ),
    Rule(
        "collaboration",
        lambda e: e.body_has("collaboration", "collaborating"),
        "{sender} is requesting a collaboration opportunity and wants to schedule a call.",
    ),
    Rule(
        "deadline",
        lambda e: e.subject_has("deadline") or e.body_has("deadline", "due tomorrow"),
        "{sender} sent a deadline reminder. Complete and submit the work by the specified deadline.",
    ),
    Rule(
        "welcome",
        lambda e: e.subject_has("welcome") or e.body_has("welcome to"),
        "{sender} sent a welcome message with resources to get started on the platform.",
    ),
    Rule(
        "subscription_renewal",
        lambda e: e.subject_has("subscription") and e.body_has("renew", "renewal"),
        "{sender} sent a subscription renewal notice. Review and update payment method if needed.",
    ),
    Rule(
        "support_ticket",
        lambda e: e.mentions("support ticket"),
        variant(
            lambda e: e.body_has("resolved"),
            "{sender} notified you that your support ticket has been resolved.",
            "{sender} sent an update about your support ticket.",
        ),
    ),
    Rule(
        "new_follower",
        lambda e: e.body_has("started following", "new follower"),
        "{sender} notified you about a new follower on the social platform.",
    ),
    Rule(
        "order_shipped",
        is_order_shipped,
        "{sender} notified you that your order has been shipped with tracking information.",
    ),
)


def body_preview(body: str, max_length: int = PREVIEW_MAX_LENGTH) -> str:
    """Collapse whitespace and cap the body at ``max_length`` characters.

    An ellipsis is appended only when the text was actually truncated.
    """
    flattened = " ".join(body.split())
    if len(flattened) <= max_length:
        return flattened
    return flattened[:max_length].rstrip() + "..."


def summarize(email: StructuredEmail) -> str:
    """Summarize an email in one or two sentences.

    Args:
        email: Structured email (any field may be absent)

    Returns:
        Topic-specific summary, or a generic sentence naming the sender and
        subject followed by a body preview
    """
    sender = email.sender_name or DEFAULT_SENDER
    subject = email.subject or DEFAULT_SUBJECT

    view = EmailView.of(email)
    rule = find_rule(SUMMARY_TOPICS, view)
    if rule is not None:
        return rule.resolve(view).format(sender=sender)

    summary = f'{sender} wrote about "{subject}".'
    preview = body_preview(email.body_text)
    if preview:
        summary += f" Preview: {preview}"
    return summary + " Review the details and respond as needed."
