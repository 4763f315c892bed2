"""Category and priority classifiers.

Both classifiers are ordered rule tables over the structured email. The
order is load-bearing: an email whose body says "urgent" and "invoice" is
``urgent`` because that rule comes first, and "urgent, please review by
Friday" is ``high`` priority even though the ``medium`` rule also matches.

The category enumeration also lists ``spam`` and ``social`` because the
categorization prompt offers them to the real model. No rule below emits
either value.
"""

from __future__ import annotations

from enum import StrEnum

from email_agent.engine.fields import StructuredEmail
from email_agent.engine.rules import EmailView, Rule, first_match, is_order_shipped


class Category(StrEnum):
    """Closed set of email categories."""

    URGENT = "urgent"
    WORK = "work"
    PERSONAL = "personal"
    NEWSLETTER = "newsletter"
    SPAM = "spam"
    FINANCE = "finance"
    SOCIAL = "social"


class Priority(StrEnum):
    """Priority levels, ranked high > medium > low for precedence only."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def rank(self) -> int:
        return {"high": 3, "medium": 2, "low": 1}[self.value]


# Categories the rule table can actually produce
REACHABLE_CATEGORIES = frozenset(
    {
        Category.URGENT,
        Category.FINANCE,
        Category.WORK,
        Category.NEWSLETTER,
        Category.PERSONAL,
    }
)

CATEGORY_RULES: tuple[Rule[Category], ...] = (
    Rule(
        "urgent_notice",
        lambda e: e.body_has("urgent", "maintenance", "security alert"),
        Category.URGENT,
    ),
    Rule(
        "billing",
        lambda e: e.body_has("invoice", "payment", "billing"),
        Category.FINANCE,
    ),
    Rule(
        "work_meeting",
        lambda e: e.body_has("meeting", "project", "interview") or e.subject_has("meeting"),
        Category.WORK,
    ),
    Rule(
        "newsletter",
        lambda e: e.mentions("newsletter"),
        Category.NEWSLETTER,
    ),
    Rule(
        "personal_event",
        lambda e: e.body_has("birthday", "lunch", "celebrate", "invited")
        or e.subject_has("invited"),
        Category.PERSONAL,
    ),
    Rule(
        "hiring",
        lambda e: e.subject_has("job offer") or e.body_has("job offer", "application", "interview"),
        Category.WORK,
    ),
    Rule(
        "account_security",
        lambda e: e.subject_has("password reset")
        or e.body_has("password reset", "security alert"),
        Category.URGENT,
    ),
    Rule(
        "shipping",
        is_order_shipped,
        Category.PERSONAL,
    ),
    Rule(
        "subscription",
        lambda e: e.mentions("subscription"),
        Category.FINANCE,
    ),
)

PRIORITY_RULES: tuple[Rule[Priority], ...] = (
    Rule(
        "time_critical",
        lambda e: e.body_has("urgent", "immediately", "critical", "security"),
        Priority.HIGH,
    ),
    Rule(
        "has_deadline",
        lambda e: e.body_has("deadline", "review by", "approval"),
        Priority.MEDIUM,
    ),
)


def classify_category(email: StructuredEmail) -> Category:
    """Assign a category using the first matching rule (default ``work``)."""
    return first_match(CATEGORY_RULES, EmailView.of(email), default=Category.WORK)


def classify_priority(email: StructuredEmail) -> Priority:
    """Assign a priority from the body alone (default ``low``)."""
    return first_match(PRIORITY_RULES, EmailView.of(email), default=Priority.LOW)
