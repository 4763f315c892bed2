"""Mock inbox and default prompt seeding.

A fresh database gets a realistic 24-email inbox (dated relative to the
seeding time) and the default prompt templates, so the app is usable
without a mail account. Seeding is idempotent: the inbox is only added to
an empty ``emails`` table, and templates are matched by name.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from email_agent.core.logging import get_logger
from email_agent.db.store import DatabaseStore, NewEmail
from email_agent.prompts.defaults import DEFAULT_TEMPLATES

logger = get_logger(__name__)

MOCK_RECIPIENT = "you@example.com"


@dataclass(frozen=True, slots=True)
class MockEmail:
    subject: str
    from_email: str
    from_name: str
    body: str
    hours_ago: float
    read: bool = False


MOCK_INBOX: tuple[MockEmail, ...] = (
    MockEmail(
        subject="Meeting Request: Q4 Planning Discussion",
        from_email="sarah.johnson@company.com",
        from_name="Sarah Johnson",
        body="Hi,\n\nI'd like to schedule a meeting to discuss our Q4 planning strategy. "
        "Are you available this Thursday at 2 PM?\n\nLet me know what works for you.\n\n"
        "Best regards,\nSarah",
        hours_ago=2,
    ),
    MockEmail(
        subject="Project Update: Website Redesign Status",
        from_email="mike.chen@designstudio.com",
        from_name="Mike Chen",
        body="Hello,\n\nThe website redesign is progressing well. We've completed the homepage "
        "mockups and are ready for your review. Can you take a look at the attached files "
        "and provide feedback by Friday?\n\nThanks!\nMike",
        hours_ago=5,
    ),
    MockEmail(
        subject="Invoice #INV-2024-001",
        from_email="billing@services.com",
        from_name="Billing Department",
        body="Dear Customer,\n\nPlease find attached invoice #INV-2024-001 for services "
        "rendered in November 2024.\n\nPayment is due within 30 days.\n\n"
        "Thank you for your business.\n\nBilling Department",
        hours_ago=24,
        read=True,
    ),
    MockEmail(
        subject="Re: Budget Approval Needed",
        from_email="finance@company.com",
        from_name="Finance Team",
        body="Hi,\n\nFollowing up on the budget request. We need your approval for the "
        "marketing campaign budget by end of week.\n\nPlease review the attached proposal "
        "and let us know if you have any questions.\n\nRegards,\nFinance Team",
        hours_ago=3 * 24,
    ),
    MockEmail(
        subject="Welcome to Our Newsletter!",
        from_email="newsletter@technews.com",
        from_name="Tech News",
        body="Thank you for subscribing to our newsletter!\n\nThis week's highlights:\n"
        "- New AI developments\n- Tech industry trends\n- Product launches\n\n"
        "Read more on our website.\n\nTech News Team",
        hours_ago=4 * 24,
    ),
    MockEmail(
        subject="Urgent: Server Maintenance Tonight",
        from_email="it@company.com",
        from_name="IT Department",
        body="URGENT NOTICE\n\nWe will be performing critical server maintenance tonight "
        "from 11 PM to 2 AM. The system will be unavailable during this time.\n\n"
        "Please save your work and log out before 11 PM.\n\nIT Department",
        hours_ago=1,
    ),
    MockEmail(
        subject="Re: Follow-up on Your Application",
        from_email="hr@startup.com",
        from_name="HR Team",
        body="Hello,\n\nThank you for your interest in the Software Engineer position. "
        "We'd like to invite you for a second round interview.\n\nPlease let us know your "
        "availability for next week.\n\nBest regards,\nHR Team",
        hours_ago=6 * 24,
        read=True,
    ),
    MockEmail(
        subject="Your Order Has Shipped!",
        from_email="orders@onlinestore.com",
        from_name="Online Store",
        body="Great news! Your order #12345 has been shipped.\n\n"
        "Tracking number: TRACK123456789\n\nExpected delivery: December 15, 2024\n\n"
        "Thank you for your purchase!\n\nOnline Store Team",
        hours_ago=2 * 24,
        read=True,
    ),
    MockEmail(
        subject="Team Lunch This Friday?",
        from_email="colleague@company.com",
        from_name="Alex Martinez",
        body="Hey!\n\nA few of us are planning to grab lunch this Friday at the new Italian "
        "place downtown. Want to join us?\n\nLet me know!\n\nAlex",
        hours_ago=12,
    ),
    MockEmail(
        subject="Security Alert: New Login Detected",
        from_email="security@account.com",
        from_name="Security Team",
        body="We detected a new login to your account from a new device.\n\n"
        "Location: San Francisco, CA\nDevice: Chrome on Windows\nTime: Today at 3:45 PM\n\n"
        "If this was you, no action is needed. If not, please secure your account "
        "immediately.\n\nSecurity Team",
        hours_ago=0.5,
    ),
    MockEmail(
        subject="Conference Registration Confirmation",
        from_email="events@techconf.com",
        from_name="Tech Conference 2024",
        body="Thank you for registering for Tech Conference 2024!\n\nYour registration is "
        "confirmed. We'll send you more details about the schedule and venue closer to the "
        "event date.\n\nSee you there!\n\nConference Team",
        hours_ago=7 * 24,
        read=True,
    ),
    MockEmail(
        subject="Re: Contract Review",
        from_email="legal@company.com",
        from_name="Legal Department",
        body="Hi,\n\nI've reviewed the contract and made some suggested changes. Please see "
        "the attached document with my comments.\n\nWe should discuss these points before "
        "finalizing. Are you available for a call this week?\n\nBest,\nLegal Team",
        hours_ago=4 * 24,
    ),
    MockEmail(
        subject="Happy Birthday!",
        from_email="friend@email.com",
        from_name="Jessica",
        body="Happy Birthday! \U0001f389\n\nHope you have an amazing day! "
        "Let's celebrate this weekend!\n\nJessica",
        hours_ago=8 * 24,
        read=True,
    ),
    MockEmail(
        subject="Reminder: Team Standup Tomorrow",
        from_email="manager@company.com",
        from_name="David Kim",
        body="Just a reminder that we have our weekly team standup tomorrow at 9 AM.\n\n"
        "Please come prepared with updates on your current projects.\n\nThanks,\nDavid",
        hours_ago=18,
    ),
    MockEmail(
        subject="Survey: How was your experience?",
        from_email="feedback@service.com",
        from_name="Customer Feedback",
        body="Hi there,\n\nWe'd love to hear about your recent experience with our service. "
        "Could you take a quick 2-minute survey?\n\nYour feedback helps us improve!\n\n"
        "Thank you,\nCustomer Feedback Team",
        hours_ago=5 * 24,
    ),
    MockEmail(
        subject="Job Offer: Software Engineer Position",
        from_email="hr@techcorp.com",
        from_name="HR Department",
        body="Congratulations!\n\nWe are pleased to offer you the Software Engineer position "
        "at TechCorp. The offer includes a competitive salary, health benefits, and stock "
        "options.\n\nPlease let us know your decision by next Friday.\n\nWe're excited to "
        "have you join our team!\n\nBest regards,\nHR Department",
        hours_ago=24,
    ),
    MockEmail(
        subject="Password Reset Request",
        from_email="noreply@account.com",
        from_name="Account Security",
        body="We received a request to reset your password.\n\nIf you made this request, "
        "click the link below to reset your password:\n\n"
        "https://account.com/reset?token=abc123\n\nThis link will expire in 24 hours.\n\n"
        "If you didn't request this, please ignore this email.\n\nAccount Security Team",
        hours_ago=3,
    ),
    MockEmail(
        subject="You're Invited: Company Holiday Party",
        from_email="events@company.com",
        from_name="Events Committee",
        body="You're invited to our annual holiday party!\n\nDate: December 20, 2024\n"
        "Time: 6:00 PM - 11:00 PM\nLocation: Grand Ballroom, Downtown Hotel\n\n"
        "Please RSVP by December 10th. We can't wait to celebrate with you!\n\n"
        "Events Committee",
        hours_ago=2 * 24,
    ),
    MockEmail(
        subject="Thank You for Your Donation",
        from_email="donations@charity.org",
        from_name="Charity Foundation",
        body="Dear Supporter,\n\nThank you so much for your generous donation of $100. Your "
        "contribution helps us continue our mission to support those in need.\n\nWe truly "
        "appreciate your kindness and support.\n\nWith gratitude,\nCharity Foundation Team",
        hours_ago=6 * 24,
        read=True,
    ),
    MockEmail(
        subject="Collaboration Request: Design Project",
        from_email="partner@designco.com",
        from_name="Sarah Williams",
        body="Hi,\n\nI'm reaching out to see if you'd be interested in collaborating on a new "
        "design project. We're looking for someone with your expertise to help us create "
        "something amazing.\n\nWould you be available for a quick call this week to "
        "discuss?\n\nLooking forward to hearing from you!\n\nSarah",
        hours_ago=24,
    ),
    MockEmail(
        subject="Deadline Reminder: Project Proposal Due Tomorrow",
        from_email="project@company.com",
        from_name="Project Manager",
        body="Friendly reminder: Your project proposal is due tomorrow by 5 PM.\n\nPlease make "
        "sure to submit it through the portal. If you need an extension, let me know as soon "
        "as possible.\n\nThanks,\nProject Manager",
        hours_ago=20,
    ),
    MockEmail(
        subject="Welcome to Our Platform!",
        from_email="welcome@platform.com",
        from_name="Platform Team",
        body="Welcome to our platform!\n\nWe're thrilled to have you join our community. Here "
        "are some resources to get you started:\n\n- Getting Started Guide\n"
        "- Video Tutorials\n- Community Forum\n\nIf you have any questions, don't hesitate "
        "to reach out!\n\nHappy exploring!\n\nPlatform Team",
        hours_ago=9 * 24,
        read=True,
    ),
    MockEmail(
        subject="Subscription Renewal Notice",
        from_email="billing@service.com",
        from_name="Billing Team",
        body="Your subscription is set to renew on December 31, 2024.\n\n"
        "Current plan: Premium Monthly\nRenewal amount: $29.99\n\nYour payment method on "
        "file will be charged automatically. If you'd like to update your payment method or "
        "cancel, please do so before the renewal date.\n\nThank you for being a valued "
        "customer!\n\nBilling Team",
        hours_ago=4 * 24,
    ),
    MockEmail(
        subject="Support Ticket #12345 - Resolved",
        from_email="support@service.com",
        from_name="Support Team",
        body="Hello,\n\nYour support ticket #12345 has been resolved. The issue with your "
        "account access has been fixed.\n\nIf you're still experiencing any problems, please "
        "reply to this email and we'll be happy to help.\n\nThank you for your patience!\n\n"
        "Support Team",
        hours_ago=24,
        read=True,
    ),
    MockEmail(
        subject="New Follower on Social Platform",
        from_email="notifications@social.com",
        from_name="Social Platform",
        body="John Smith started following you!\n\nView their profile: "
        "https://social.com/johnsmith\n\nYou can manage your notification preferences in "
        "your account settings.\n\nSocial Platform Team",
        hours_ago=10,
    ),
)


def build_mock_inbox(now: datetime | None = None) -> list[NewEmail]:
    """Materialize the mock inbox with dates relative to ``now``."""
    now = now or datetime.now(UTC)
    return [
        NewEmail(
            subject=m.subject,
            from_email=m.from_email,
            from_name=m.from_name,
            to_email=MOCK_RECIPIENT,
            body=m.body,
            date=(now - timedelta(hours=m.hours_ago)).isoformat(),
            read=m.read,
        )
        for m in MOCK_INBOX
    ]


async def seed_defaults(store: DatabaseStore, include_inbox: bool = True) -> dict[str, int]:
    """Seed the mock inbox and any missing default templates.

    Args:
        store: Initialized database store
        include_inbox: Seed the mock inbox when ``emails`` is empty

    Returns:
        Counts of inserted emails and templates
    """
    emails_added = 0
    if include_inbox and await store.count_emails() == 0:
        emails_added = await store.save_emails(build_mock_inbox())

    existing = {t.name for t in await store.list_prompt_templates()}
    templates_added = 0
    for default in DEFAULT_TEMPLATES:
        if default.name in existing:
            continue
        await store.create_prompt_template(
            name=default.name,
            template=default.template,
            template_type=default.type.value,
            description=default.description,
        )
        templates_added += 1

    logger.info("database_seeded", emails_added=emails_added, templates_added=templates_added)
    return {"emails": emails_added, "prompt_templates": templates_added}
