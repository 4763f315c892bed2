"""Tests for the category and priority classifiers."""

import pytest

from email_agent.engine.classifiers import (
    CATEGORY_RULES,
    REACHABLE_CATEGORIES,
    Category,
    Priority,
    classify_category,
    classify_priority,
)
from email_agent.engine.fields import StructuredEmail


def _email(body: str = "", subject: str = "", sender: str = "Sam") -> StructuredEmail:
    return StructuredEmail(subject=subject or None, sender_name=sender, body=body or None)


class TestCategory:
    @pytest.mark.parametrize(
        ("subject", "body", "expected"),
        [
            ("Server work", "URGENT NOTICE: systems down", Category.URGENT),
            ("Tonight", "Scheduled maintenance from 11 PM", Category.URGENT),
            ("Invoice", "Please find attached invoice #1", Category.FINANCE),
            ("Q4", "Can we schedule a meeting Thursday?", Category.WORK),
            ("Meeting notes", "Notes attached", Category.WORK),
            ("Weekly digest", "Our newsletter is here", Category.NEWSLETTER),
            ("Newsletter #12", "Highlights inside", Category.NEWSLETTER),
            ("Happy Birthday!", "Happy birthday! Let's celebrate", Category.PERSONAL),
            ("You're Invited: Party", "Join us on Friday", Category.PERSONAL),
            ("Job Offer: Engineer", "Congratulations!", Category.WORK),
            ("Password Reset Request", "Click the link below", Category.URGENT),
            ("Your order", "Your order has been shipped", Category.PERSONAL),
            ("Subscription Renewal Notice", "Renews December 31", Category.FINANCE),
            ("Hello", "Just checking in", Category.WORK),
        ],
    )
    def test_rule_table(self, subject: str, body: str, expected: Category):
        assert classify_category(_email(body, subject)) is expected

    def test_urgent_outranks_invoice(self):
        email = _email("This is urgent: the invoice is overdue")
        assert classify_category(email) is Category.URGENT

    def test_invoice_outranks_meeting(self):
        email = _email("Invoice attached. Let's discuss in the meeting")
        assert classify_category(email) is Category.FINANCE

    def test_empty_email_defaults_to_work(self):
        assert classify_category(StructuredEmail()) is Category.WORK

    def test_rules_never_emit_spam_or_social(self):
        outcomes = {rule.outcome for rule in CATEGORY_RULES}
        assert Category.SPAM not in outcomes
        assert Category.SOCIAL not in outcomes
        assert outcomes <= REACHABLE_CATEGORIES

    def test_suspicious_text_is_not_spam(self):
        email = _email("You won a prize! Click here to claim your free money")
        assert classify_category(email) in REACHABLE_CATEGORIES

    def test_same_input_same_output(self):
        email = _email("Budget approval needed by Friday", "Re: Budget")
        assert classify_category(email) == classify_category(email)


class TestPriority:
    def test_urgent_beats_review_by(self):
        email = _email("This is urgent, please review by Friday")
        assert classify_priority(email) is Priority.HIGH

    @pytest.mark.parametrize(
        ("body", "expected"),
        [
            ("Please act immediately", Priority.HIGH),
            ("Critical server maintenance tonight", Priority.HIGH),
            ("New login. Secure your account via the security page", Priority.HIGH),
            ("The deadline is next week", Priority.MEDIUM),
            ("We need your approval for the budget", Priority.MEDIUM),
            ("Please review by Monday", Priority.MEDIUM),
            ("Lunch on Friday?", Priority.LOW),
        ],
    )
    def test_body_rules(self, body: str, expected: Priority):
        assert classify_priority(_email(body)) is expected

    def test_subject_is_ignored(self):
        email = _email("See you later", subject="URGENT: read now")
        assert classify_priority(email) is Priority.LOW

    def test_empty_email_is_low(self):
        assert classify_priority(StructuredEmail()) is Priority.LOW

    def test_rank_orders_levels(self):
        assert Priority.HIGH.rank > Priority.MEDIUM.rank > Priority.LOW.rank
