"""Ordered rule tables for the response engine.

Every classifier and composer in this package is a tuple of ``Rule`` entries
evaluated top to bottom; the first rule whose predicate holds decides the
outcome. Earlier rules deliberately shadow later ones (an email mentioning
both "urgent" and "invoice" is urgent), so tables are tuples and never
dicts or sets.

Matching is case-insensitive substring search over the subject and body,
mirroring how auto-rules match subjects. No regex is involved.

Usage:
    from email_agent.engine.rules import EmailView, Rule, first_match

    RULES = (
        Rule("urgent", lambda e: e.body_has("urgent"), "urgent"),
        Rule("billing", lambda e: e.body_has("invoice"), "finance"),
    )
    first_match(RULES, EmailView.of(email), default="work")
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from email_agent.core.logging import get_logger
from email_agent.engine.fields import StructuredEmail

logger = get_logger(__name__)

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class EmailView:
    """Lower-cased view of a StructuredEmail used by rule predicates.

    Attributes:
        subject: Lower-cased subject ("" when absent)
        body: Lower-cased body ("" when absent)
        email: The original structured email, for templating
    """

    subject: str
    body: str
    email: StructuredEmail

    @classmethod
    def of(cls, email: StructuredEmail) -> EmailView:
        return cls(
            subject=email.subject_text.lower(),
            body=email.body_text.lower(),
            email=email,
        )

    def subject_has(self, *words: str) -> bool:
        """True if the subject contains any of the words."""
        return any(word in self.subject for word in words)

    def body_has(self, *words: str) -> bool:
        """True if the body contains any of the words."""
        return any(word in self.body for word in words)

    def body_has_all(self, *words: str) -> bool:
        """True if the body contains every one of the words."""
        return all(word in self.body for word in words)

    def mentions(self, *words: str) -> bool:
        """True if the subject or the body contains any of the words."""
        return self.subject_has(*words) or self.body_has(*words)


@dataclass(frozen=True, slots=True)
class Rule(Generic[T]):
    """A single (predicate, outcome) entry of an ordered rule table.

    Attributes:
        name: Short topic name, used in debug logs and tests
        when: Predicate over the view (EmailView for topic tables, Utterance
            for intent routing)
        outcome: Result value, or a callable computing it from the view
            (used by topics with a secondary-keyword variant)
    """

    name: str
    when: Callable[[Any], bool]
    outcome: T | Callable[[EmailView], T]

    def resolve(self, view: EmailView) -> T:
        if callable(self.outcome):
            return self.outcome(view)
        return self.outcome


def find_rule(rules: Sequence[Rule[T]], view: Any) -> Rule[T] | None:
    """Return the first rule whose predicate holds, or None."""
    for rule in rules:
        if rule.when(view):
            return rule
    return None


def first_match(rules: Sequence[Rule[T]], view: Any, default: T) -> T:
    """Evaluate rules in order and return the first matching outcome.

    Args:
        rules: Ordered rule table
        view: View the predicates are evaluated against
        default: Outcome when no rule matches

    Returns:
        The resolved outcome of the first matching rule, else ``default``
    """
    rule = find_rule(rules, view)
    if rule is None:
        return default
    logger.debug("rule_matched", rule=rule.name)
    return rule.resolve(view)


def variant(
    condition: Callable[[EmailView], bool],
    when_true: T,
    when_false: T,
) -> Callable[[EmailView], T]:
    """Build an outcome that picks between two values on a secondary keyword check."""

    def pick(view: EmailView) -> T:
        return when_true if condition(view) else when_false

    return pick


# ---------------------------------------------------------------------------
# Predicates shared by the summary, action and reply topic tables
# ---------------------------------------------------------------------------


def is_registration_confirmation(e: EmailView) -> bool:
    """Registration mentioned together with a confirmation, in subject or body."""
    in_subject = e.subject_has("registration") and (
        e.subject_has("confirmation") or e.body_has("confirmed")
    )
    return in_subject or e.body_has_all("registration", "confirmed")


def is_birthday(e: EmailView) -> bool:
    return e.subject_has("birthday") or e.body_has("birthday", "happy birthday")


def is_order_shipped(e: EmailView) -> bool:
    return e.body_has("order") and e.body_has("shipped", "delivery")
