"""Tests for the reply composer."""

import pytest

from email_agent.engine.composer import (
    FORBIDDEN_REPLY_PHRASES,
    REPLY_TOPICS,
    SIGN_OFF,
    compose_middle,
    compose_reply,
    quotable_subject,
)
from email_agent.engine.fields import StructuredEmail
from email_agent.engine.rules import EmailView

SAMPLE_EMAILS = [
    StructuredEmail(subject="Happy Birthday!", sender_name="Jessica", body="Let's celebrate!"),
    StructuredEmail(subject="Q4", sender_name="Sarah", body="Can we set up a meeting Thursday?"),
    StructuredEmail(subject="Invoice", sender_name="Billing", body="Invoice attached."),
    StructuredEmail(subject="Lunch?", sender_name="Alex", body="Want to grab lunch?"),
    StructuredEmail(subject="Hello", sender_name=None, body="Nothing specific."),
    StructuredEmail(subject="I will send this to the board", sender_name="Kim", body="fyi"),
    StructuredEmail(),
]


@pytest.mark.parametrize("email", SAMPLE_EMAILS)
def test_envelope(email: StructuredEmail):
    reply = compose_reply(email)
    assert reply.startswith("Hi ")
    assert reply.endswith(SIGN_OFF)
    assert reply.count("\n\n") == 2


@pytest.mark.parametrize("email", SAMPLE_EMAILS)
def test_never_promises_to_send(email: StructuredEmail):
    reply = compose_reply(email).lower()
    for phrase in FORBIDDEN_REPLY_PHRASES:
        assert phrase not in reply


def test_no_topic_sentence_promises_to_send():
    views = [
        EmailView(subject="", body=body, email=StructuredEmail())
        for body in ("availability celebrate rsvp resolved", "")
    ]
    for rule in REPLY_TOPICS:
        for view in views:
            sentence = rule.resolve(view).lower()
            for phrase in FORBIDDEN_REPLY_PHRASES:
                assert phrase not in sentence, rule.name


def test_greets_sender_by_name():
    email = StructuredEmail(subject="Q4", sender_name="Sarah Johnson", body="Meeting Thursday?")
    assert compose_reply(email).startswith("Hi Sarah Johnson,\n\n")


def test_greeting_fallback():
    assert compose_reply(StructuredEmail(body="hello")).startswith("Hi there,")


def test_meeting_reply():
    email = StructuredEmail(sender_name="Sarah", body="I'd like to schedule a meeting.")
    assert "meeting times work for me" in compose_reply(email)


def test_birthday_reply_mentions_weekend():
    email = StructuredEmail(
        subject="Happy Birthday!", sender_name="Jessica", body="Let's celebrate this weekend!"
    )
    assert "celebrate this weekend" in compose_reply(email)


def test_fallback_quotes_subject():
    email = StructuredEmail(subject="Standup notes", sender_name="David", body="See notes.")
    assert compose_reply(email) == (
        'Hi David,\n\nI appreciate the update about "Standup notes".\n\nBest regards,'
    )


def test_fallback_without_subject():
    reply = compose_reply(StructuredEmail(sender_name="Dana", body="See notes."))
    assert 'I appreciate the update about "your email".' in reply


def test_fallback_does_not_echo_forbidden_subject():
    email = StructuredEmail(subject="I will send this to the board", sender_name="Kim", body="fyi")
    reply = compose_reply(email)
    assert 'I appreciate the update about "your email".' in reply
    assert "send this" not in reply.lower()


@pytest.mark.parametrize(
    ("subject", "expected"),
    [
        ("Standup notes", "Standup notes"),
        (None, "your email"),
        ("", "your email"),
        ("Re: Will Be Sent Automatically", "your email"),
    ],
)
def test_quotable_subject(subject, expected):
    assert quotable_subject(subject) == expected


@pytest.mark.parametrize(
    ("subject", "body", "expected"),
    [
        (
            "Happy Birthday!",
            "Let's celebrate this weekend.",
            "Thank you so much for the birthday wishes! 🎉 I'd love to celebrate this weekend. "
            "Let me know what works for you!",
        ),
        (
            "Happy Birthday!",
            "Have a great day.",
            "Thank you so much for the birthday wishes! 🎉 I really appreciate you thinking of me.",
        ),
        (
            "Conference",
            "Your registration is confirmed.",
            "Thank you for the confirmation! I'm looking forward to attending. I'll await the "
            "schedule and venue details.",
        ),
        (
            "Server",
            "Scheduled maintenance tonight.",
            "Thanks for the heads-up about tonight's maintenance. I'll make sure to save my work "
            "and log out before the outage window.",
        ),
        (
            "Sync",
            "Can we set up a meeting on Thursday?",
            "Thanks for reaching out. Those meeting times work for me. Let me know if a different "
            "slot is better for you.",
        ),
        (
            "Statement",
            "Please find the billing statement attached.",
            "I received the invoice and will review the details. Expect confirmation once the "
            "payment is scheduled.",
        ),
        (
            "Interview",
            "Please share your availability for an interview.",
            "Thank you for the invitation! I'm excited about this opportunity. I'm available "
            "next week and will share my preferred time slots shortly.",
        ),
        (
            "Interview",
            "We'd like to invite you to an interview.",
            "Thank you for the invitation. I'm available and happy to confirm a time that "
            "works best for the team.",
        ),
        (
            "Mockups",
            "Please share your feedback on the mockups.",
            "I'll review the materials and share feedback by the requested deadline.",
        ),
        ("Friday", "Want to grab lunch on Friday?", "I'd love to join. Count me in! Thanks for including me."),
        (
            "Q1",
            "The budget for next quarter is attached.",
            "I'll go through the budget details and share my approval or questions shortly.",
        ),
        (
            "Account",
            "Unusual sign-in alert on your account.",
            "Thanks for the security notice. I'll review the account activity right away.",
        ),
        (
            "Job Offer",
            "We are pleased to offer you the role.",
            "Thank you for the job offer! I'm excited about this opportunity. I'll review the "
            "details and get back to you by the deadline.",
        ),
        (
            "Password Reset",
            "Click the link to choose a new password.",
            "I received the password reset request. If I didn't request this, I'll ignore it. "
            "If I did, I'll follow the instructions.",
        ),
        (
            "You're Invited",
            "Please RSVP by Friday.",
            "Thank you for the invitation! I'd love to attend. I'll RSVP by the deadline.",
        ),
        (
            "You're Invited",
            "Join us on Friday.",
            "Thank you for the invitation! I appreciate you including me.",
        ),
        (
            "Thanks",
            "Thank you for your generous donation.",
            "You're very welcome! I'm happy to support your cause. Keep up the great work!",
        ),
        (
            "Partnership",
            "We'd like to collaborate with your team.",
            "Thank you for reaching out! I'm interested in learning more about the collaboration "
            "opportunity. Let's schedule a call to discuss.",
        ),
        (
            "Reminder",
            "The report is due today.",
            "Thanks for the reminder. I'm aware of the deadline and will make sure to submit on time.",
        ),
        (
            "Welcome aboard",
            "Here are some resources to get started.",
            "Thank you for the warm welcome! I'm excited to get started and explore the platform.",
        ),
        (
            "Your subscription",
            "Your plan will renew soon.",
            "I received the subscription renewal notice. I'll review the details and update my "
            "payment method if needed.",
        ),
        (
            "Ticket update",
            "Ticket #42 has been fixed.",
            "Thank you for resolving the issue! I appreciate your help and will let you know "
            "if I need any further assistance.",
        ),
        (
            "Support Ticket #6",
            "We are looking into it.",
            "Thank you for your support. I'll review the ticket details and respond accordingly.",
        ),
        (
            "New follower",
            "Jordan is now following you.",
            "Thanks for the notification. I'll check out the profile when I have a chance.",
        ),
        (
            "Your package",
            "Your order has shipped.",
            "Thank you for the shipping notification! I'll track the package and look forward "
            "to receiving it.",
        ),
    ],
)
def test_topic_sentences(subject: str, body: str, expected: str):
    assert compose_middle(StructuredEmail(subject=subject, body=body)) == expected


def test_meeting_outranks_invoice():
    email = StructuredEmail(body="Can we have a meeting about the invoice?")
    assert compose_middle(email).startswith("Thanks for reaching out. Those meeting times")


def test_maintenance_outranks_security_alert():
    email = StructuredEmail(body="Security maintenance is planned for tonight.")
    assert compose_middle(email).startswith("Thanks for the heads-up about tonight's maintenance.")
