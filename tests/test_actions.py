"""Tests for action item extraction."""

import pytest

from email_agent.engine.actions import (
    NO_ACTIONS,
    collect_actions,
    extract_actions,
    format_actions,
)
from email_agent.engine.fields import StructuredEmail


def test_registration_confirmation_is_not_the_empty_sentinel():
    email = StructuredEmail(
        subject="Conference",
        body="Thanks for signing up. Your registration is confirmed.",
    )
    result = extract_actions(email)
    assert result != NO_ACTIONS
    assert result.startswith("1. ")
    assert "No action required" in result


def test_no_topic_returns_sentinel():
    email = StructuredEmail(subject="FYI", body="Just sharing some thoughts.")
    assert extract_actions(email) == NO_ACTIONS
    assert collect_actions(email) == []


def test_maintenance_keys_on_instructions():
    email = StructuredEmail(body="Maintenance tonight. Please save your work and log out.")
    assert extract_actions(email) == "1. Save work and log out before the maintenance window."


def test_maintenance_without_instructions_has_no_action():
    email = StructuredEmail(body="Maintenance happened last night.")
    assert extract_actions(email) == NO_ACTIONS


def test_review_request_precedes_meeting_scheduling():
    email = StructuredEmail(
        body="Please review the mockups. Are you available for a meeting to discuss?",
    )
    assert "Review the attached materials" in extract_actions(email)


def test_meeting_scheduling():
    email = StructuredEmail(
        subject="Q4 planning",
        body="I'd like to schedule a meeting. Are you available Thursday?",
    )
    assert "schedule the meeting" in extract_actions(email)


def test_invitation_with_rsvp():
    email = StructuredEmail(
        subject="You're Invited: Company Holiday Party",
        body="Please RSVP by December 10th.",
    )
    assert extract_actions(email) == "1. RSVP to the event by the deadline if you plan to attend."


def test_invitation_without_rsvp():
    email = StructuredEmail(subject="You're invited", body="Come along if you like.")
    assert extract_actions(email) == "1. Optionally acknowledge the invitation."


def test_format_numbers_from_one():
    assert format_actions(["First", "Second"]) == "1. First\n2. Second"
    assert format_actions([]) == NO_ACTIONS


def test_empty_email():
    assert extract_actions(StructuredEmail()) == NO_ACTIONS


@pytest.mark.parametrize(
    ("subject", "body", "expected"),
    [
        (
            "Happy Birthday!",
            "Let's celebrate this weekend.",
            "Reply with birthday thanks and confirm weekend celebration plans.",
        ),
        ("Happy Birthday!", "Have a great day.", "Reply with birthday thanks and appreciation."),
        (
            "Security notice",
            "Please secure your account if this wasn't you.",
            "Secure the account immediately if the login was not you.",
        ),
        (
            "Interview",
            "Please share your availability for an interview.",
            "Reply with your availability for the interview next week.",
        ),
        (
            "Interview",
            "We'd like to invite you to an interview.",
            "Respond to the interview invitation and confirm your interest.",
        ),
        (
            "Invoice #1",
            "Please find the invoice attached.",
            "Process the invoice and arrange payment within the stated terms.",
        ),
        ("Quick question", "Please take our short survey.", "Consider taking the survey to provide feedback."),
        ("Friday", "Want to grab lunch on Friday?", "Reply to confirm attendance for the lunch/event."),
        (
            "Job Offer",
            "We are pleased to offer you the role.",
            "Review the job offer details and respond by the deadline with your decision.",
        ),
        (
            "Password Reset",
            "Click the link to choose a new password.",
            "If you requested the reset, follow the instructions. If not, ignore the email "
            "and secure your account.",
        ),
        (
            "Partnership",
            "We'd love to explore a collaboration.",
            "Respond to express interest and schedule a call to discuss the collaboration.",
        ),
        (
            "Reminder",
            "The report is due today.",
            "Complete and submit the work by the deadline, or request an extension if needed.",
        ),
        (
            "Your subscription",
            "Your plan will renew soon.",
            "Review the renewal details and update payment method if needed before the renewal date.",
        ),
        (
            "Support Ticket #5",
            "Your issue has been resolved.",
            "Verify the issue is resolved. Reply if you still experience problems.",
        ),
        (
            "Support Ticket #6",
            "We are looking into it.",
            "Review the support ticket and respond with any additional information needed.",
        ),
        ("Your package", "Your order has shipped.", "Track the shipment and prepare to receive the package."),
    ],
)
def test_topic_action_lines(subject: str, body: str, expected: str):
    email = StructuredEmail(subject=subject, body=body)
    assert extract_actions(email) == f"1. {expected}"


def test_invoice_outranks_lunch():
    email = StructuredEmail(body="Please pay the invoice before you join the team lunch.")
    assert extract_actions(email) == (
        "1. Process the invoice and arrange payment within the stated terms."
    )
