"""Action item extraction.

Walks its own ordered topic table (the order differs slightly from the
summary table: maintenance is keyed on the instructions "log out" / "save
your work", and meeting scheduling sits after review requests). The first
matching topic contributes its action line.

Two "nothing to do" outcomes exist and are kept distinct:

- A registration confirmation yields an explicit optional-acknowledgement
  line, so the list is non-empty and renders as ``1. ...``.
- An email matching no topic yields the ``NO_ACTIONS`` sentinel.
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

NO_ACTIONS = "No actions required."


def _wants_scheduling(e: EmailView) -> bool:
    return (
        (e.body_has("schedule") and e.body_has("meeting", "available", "availability"))
        or (e.body_has("availability") and e.body_has("meeting", "interview"))
        or (e.body_has("meeting") and e.body_has("schedule", "available", "time"))
    )


ACTION_TOPICS: tuple[Rule[str], ...] = (
    Rule(
        "birthday",
        is_birthday,
        variant(
            lambda e: e.body_has("celebrate", "weekend"),
            "Reply with birthday thanks and confirm weekend celebration plans.",
            "Reply with birthday thanks and appreciation.",
        ),
    ),
    Rule(
        "registration_confirmed",
        is_registration_confirmation,
        "Optionally acknowledge the registration confirmation. No action required.",
    ),
    Rule(
        "maintenance",
        lambda e: e.body_has("log out", "save your work"),
        "Save work and log out before the maintenance window.",
    ),
    Rule(
        "new_login",
        lambda e: e.body_has("secure your account"),
        "Secure the account immediately if the login was not you.",
    ),
    Rule(
        "interview",
        lambda e: e.body_has("interview", "application") or e.subject_has("application"),
        variant(
            lambda e: e.body_has("availability", "available"),
            "Reply with your availability for the interview next week.",
            "Respond to the interview invitation and confirm your interest.",
        ),
    ),
    Rule(
        "feedback",
        lambda e: e.body_has("review", "feedback"),
        "Review the attached materials and provide feedback by the requested deadline.",
    ),
    Rule(
        "meeting",
        _wants_scheduling,
        "Reply with your availability to schedule the meeting/interview.",
    ),
    Rule(
        "invoice",
        lambda e: e.body_has("invoice", "payment"),
        "Process the invoice and arrange payment within the stated terms.",
    ),
    Rule(
        "survey",
        lambda e: e.body_has("survey"),
        "Consider taking the survey to provide feedback.",
    ),
    Rule(
        "lunch",
        lambda e: e.body_has("lunch", "join"),
        "Reply to confirm attendance for the lunch/event.",
    ),
    Rule(
        "job_offer",
        lambda e: e.subject_has("job offer") or e.body_has("job offer", "pleased to offer"),
        "Review the job offer details and respond by the deadline with your decision.",
    ),
    Rule(
        "password_reset",
        lambda e: e.mentions("password reset"),
        "If you requested the reset, follow the instructions. If not, ignore the email "
        "and secure your account.",
    ),
    Rule(
        "invitation",
        lambda e: e.subject_has("invited") or e.body_has("you're invited", "rsvp"),
        variant(
            lambda e: e.body_has("rsvp"),
            "RSVP to the event by the deadline if you plan to attend.",
            "Optionally acknowledge the invitation.",
        ),
    ),
    Rule(
        "collaboration",
        lambda e: e.body_has("collaboration", "collaborating"),
        "Respond to express interest and schedule a call to discuss the collaboration.",
    ),
    Rule(
        "deadline",
        lambda e: e.subject_has("deadline") or e.body_has("deadline", "due tomorrow", "due today"),
        "Complete and submit the work by the deadline, or request an extension if needed.",
    ),
    Rule(
        "subscription_renewal",
        lambda e: e.subject_has("subscription") and e.body_has("renew", "renewal"),
        "Review the renewal details and update payment method if needed before the renewal date.",
    ),
    Rule(
        "support_ticket",
        lambda e: e.mentions("support ticket"),
        variant(
            lambda e: e.body_has("resolved"),
            "Verify the issue is resolved. Reply if you still experience problems.",
            "Review the support ticket and respond with any additional information needed.",
        ),
    ),
    Rule(
        "order_shipped",
        is_order_shipped,
        "Track the shipment and prepare to receive the package.",
    ),
)


def collect_actions(email: StructuredEmail) -> list[str]:
    """Return the action lines for an email (empty when no topic applies)."""
    view = EmailView.of(email)
    rule = find_rule(ACTION_TOPICS, view)
    if rule is None:
        return []
    return [rule.resolve(view)]


def format_actions(actions: list[str]) -> str:
    """Render actions as a 1-indexed numbered list, or the sentinel if empty."""
    if not actions:
        return NO_ACTIONS
    return "\n".join(f"{index}. {action}" for index, action in enumerate(actions, start=1))


def extract_actions(email: StructuredEmail) -> str:
    """Extract action items from an email as a numbered list."""
    return format_actions(collect_actions(email))
