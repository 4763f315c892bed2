"""Reply composer.

Wraps a topic-specific middle sentence in a fixed envelope::

    Hi {sender or "there"},

    {middle}

    Best regards,

Every middle sentence is a first-person acknowledgement plus a commitment
the user can keep. A draft never promises that the email will be sent
automatically: the user reviews and sends drafts manually, and
``FORBIDDEN_REPLY_PHRASES`` lists wording no entry may contain.
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

GREETING_FALLBACK = "there"
DEFAULT_SUBJECT = "your email"
SIGN_OFF = "Best regards,"

FORBIDDEN_REPLY_PHRASES = (
    "i will send this",
    "i'll send this",
    "sending this automatically",
    "will be sent automatically",
    "automatically send",
)

REPLY_TOPICS: tuple[Rule[str], ...] = (
    Rule(
        "birthday",
        is_birthday,
        variant(
            lambda e: e.body_has("celebrate", "weekend"),
            "Thank you so much for the birthday wishes! 🎉 I'd love to celebrate this weekend. "
            "Let me know what works for you!",
            "Thank you so much for the birthday wishes! 🎉 I really appreciate you thinking of me.",
        ),
    ),
    Rule(
        "registration_confirmed",
        is_registration_confirmation,
        "Thank you for the confirmation! I'm looking forward to attending. I'll await the "
        "schedule and venue details.",
    ),
    Rule(
        "maintenance",
        lambda e: e.body_has("maintenance"),
        "Thanks for the heads-up about tonight's maintenance. I'll make sure to save my work "
        "and log out before the outage window.",
    ),
    Rule(
        "meeting",
        lambda e: e.body_has("meeting"),
        "Thanks for reaching out. Those meeting times work for me. Let me know if a different "
        "slot is better for you.",
    ),
    Rule(
        "invoice",
        lambda e: e.body_has("invoice", "payment", "billing"),
        "I received the invoice and will review the details. Expect confirmation once the "
        "payment is scheduled.",
    ),
    Rule(
        "interview",
        lambda e: e.body_has("interview", "application") or e.subject_has("application"),
        variant(
            lambda e: e.body_has("availability", "available"),
            "Thank you for the invitation! I'm excited about this opportunity. I'm available "
            "next week and will share my preferred time slots shortly.",
            "Thank you for the invitation. I'm available and happy to confirm a time that "
            "works best for the team.",
        ),
    ),
    Rule(
        "feedback",
        lambda e: e.body_has("review", "feedback"),
        "I'll review the materials and share feedback by the requested deadline.",
    ),
    Rule(
        "lunch",
        lambda e: e.body_has("lunch", "celebrate"),
        "I'd love to join. Count me in! Thanks for including me.",
    ),
    Rule(
        "budget",
        lambda e: e.body_has("budget"),
        "I'll go through the budget details and share my approval or questions shortly.",
    ),
    Rule(
        "security_alert",
        lambda e: e.body_has("security", "alert"),
        "Thanks for the security notice. I'll review the account activity right away.",
    ),
    Rule(
        "job_offer",
        lambda e: e.subject_has("job offer") or e.body_has("job offer", "pleased to offer"),
        "Thank you for the job offer! I'm excited about this opportunity. I'll review the "
        "details and get back to you by the deadline.",
    ),
    Rule(
        "password_reset",
        lambda e: e.subject_has("password reset")
        or e.body_has("password reset", "reset your password"),
        "I received the password reset request. If I didn't request this, I'll ignore it. "
        "If I did, I'll follow the instructions.",
    ),
    Rule(
        "invitation",
        lambda e: e.subject_has("invited") or e.body_has("you're invited", "rsvp"),
        variant(
            lambda e: e.body_has("rsvp"),
            "Thank you for the invitation! I'd love to attend. I'll RSVP by the deadline.",
            "Thank you for the invitation! I appreciate you including me.",
        ),
    ),
    Rule(
        "donation_thanks",
        lambda e: e.body_has("thank you") and e.body_has("donation", "contribution"),
        "You're very welcome! I'm happy to support your cause. Keep up the great work!",
    ),
    Rule(
        "collaboration",
        lambda e: e.body_has("collaboration", "collaborating", "collaborate"),
        "Thank you for reaching out! I'm interested in learning more about the collaboration "
        "opportunity. Let's schedule a call to discuss.",
    ),
    Rule(
        "deadline",
        lambda e: e.subject_has("deadline") or e.body_has("deadline", "due tomorrow", "due today"),
        "Thanks for the reminder. I'm aware of the deadline and will make sure to submit on time.",
    ),
    Rule(
        "welcome",
        lambda e: e.subject_has("welcome") or e.body_has("welcome to"),
        "Thank you for the warm welcome! I'm excited to get started and explore the platform.",
    ),
    Rule(
        "subscription_renewal",
        lambda e: e.subject_has("subscription") and e.body_has("renew", "renewal"),
        "I received the subscription renewal notice. I'll review the details and update my "
        "payment method if needed.",
    ),
    Rule(
        "support_ticket",
        lambda e: e.subject_has("support ticket") or e.body_has("support ticket", "ticket #"),
        variant(
            lambda e: e.body_has("resolved", "fixed"),
            "Thank you for resolving the issue! I appreciate your help and will let you know "
            "if I need any further assistance.",
            "Thank you for your support. I'll review the ticket details and respond accordingly.",
        ),
    ),
    Rule(
        "new_follower",
        lambda e: e.body_has("started following", "new follower") or e.subject_has("follower"),
        "Thanks for the notification. I'll check out the profile when I have a chance.",
    ),
    Rule(
        "order_shipped",
        is_order_shipped,
        "Thank you for the shipping notification! I'll track the package and look forward "
        "to receiving it.",
    ),
)


def quotable_subject(subject: str | None) -> str:
    """Subject to echo in the fallback sentence.

    A subject carrying forbidden wording is replaced by "your email" so the
    draft never repeats it.
    """
    if not subject:
        return DEFAULT_SUBJECT
    lowered = subject.lower()
    if any(phrase in lowered for phrase in FORBIDDEN_REPLY_PHRASES):
        return DEFAULT_SUBJECT
    return subject


def compose_middle(email: StructuredEmail) -> str:
    """Pick the acknowledgement sentence for the reply body."""
    view = EmailView.of(email)
    rule = find_rule(REPLY_TOPICS, view)
    if rule is not None:
        return rule.resolve(view)
    return f'I appreciate the update about "{quotable_subject(email.subject)}".'


def compose_reply(email: StructuredEmail) -> str:
    """Draft a reply for the user to review and send themselves.

    Args:
        email: Structured email being answered

    Returns:
        Greeting, one acknowledgement paragraph, and the sign-off
    """
    greeting_name = email.sender_name or GREETING_FALLBACK
    return f"Hi {greeting_name},\n\n{compose_middle(email)}\n\n{SIGN_OFF}"
