"""Tests for field extraction from prompt text."""

from email_agent.engine.fields import (
    ActionTag,
    StructuredEmail,
    extract_action_tag,
    extract_fields,
    extract_labeled_question,
    strip_action_tags,
)

PROMPT = """Analyze the following email.

Email:
Subject: Invoice #INV-2024-001
From: Billing Department <billing@services.com>
Body: Dear Customer,

Please find attached invoice #INV-2024-001.

Respond with only the category name."""


class TestExtractFields:
    def test_extracts_all_three_fields(self):
        email = extract_fields(PROMPT)
        assert email.subject == "Invoice #INV-2024-001"
        assert email.sender_name == "Billing Department"
        assert email.body.startswith("Dear Customer,")

    def test_body_runs_to_end_of_text(self):
        email = extract_fields(PROMPT)
        assert email.body.endswith("Respond with only the category name.")
        assert "attached invoice" in email.body

    def test_sender_stops_at_angle_bracket(self):
        email = extract_fields("From: Jo Smith <jo@example.com>")
        assert email.sender_name == "Jo Smith"

    def test_labels_are_case_insensitive(self):
        email = extract_fields("subject: Hello\nfrom: Ana\nbody: Hi there")
        assert email.subject == "Hello"
        assert email.sender_name == "Ana"
        assert email.body == "Hi there"

    def test_subject_must_start_a_line(self):
        email = extract_fields("Re: the Subject: line inside text")
        assert email.subject is None

    def test_empty_text_yields_empty_email(self):
        email = extract_fields("")
        assert email == StructuredEmail()
        assert email.is_empty

    def test_missing_fields_are_none(self):
        email = extract_fields("Just a question with no labels")
        assert email.subject is None
        assert email.sender_name is None
        assert email.body is None
        assert email.subject_text == ""
        assert email.body_text == ""

    def test_blank_label_counts_as_absent(self):
        email = extract_fields("Subject:   \nBody: text")
        assert email.subject is None
        assert email.body == "text"
        assert not email.is_empty


class TestActionTags:
    def test_finds_known_tag(self):
        assert extract_action_tag("prompt\n\n[ACTION:REPLY]") is ActionTag.REPLY

    def test_tag_name_is_case_insensitive(self):
        assert extract_action_tag("[action:summary]") is ActionTag.SUMMARY

    def test_unknown_tag_is_ignored(self):
        assert extract_action_tag("[ACTION:TRANSLATE]") is None

    def test_no_tag(self):
        assert extract_action_tag("Summarize this") is None
        assert extract_action_tag("") is None

    def test_first_tag_wins(self):
        assert extract_action_tag("[ACTION:PRIORITY] [ACTION:CATEGORY]") is ActionTag.PRIORITY

    def test_marker_property(self):
        assert ActionTag.ACTIONS.marker == "[ACTION:ACTIONS]"

    def test_strip_removes_every_tag(self):
        text = "Body: hello [ACTION:REPLY]\n\n[ACTION:SUMMARY]"
        assert strip_action_tags(text) == "Body: hello"


class TestLabeledQuestion:
    def test_extracts_question_before_closing_instruction(self):
        text = (
            "You are an assistant.\n\nUser's question: What should I do?\n\n"
            "Provide a helpful, concise response."
        )
        assert extract_labeled_question(text) == "What should I do?"

    def test_question_runs_to_end_without_closing(self):
        assert extract_labeled_question("User's question: is this urgent") == "is this urgent"

    def test_missing_label(self):
        assert extract_labeled_question("no label here") == ""
