"""Field extraction from loosely structured prompt text.

The calling layer attaches the email under discussion as a labeled block
(``Subject:``, ``From:``, ``Body:``) inside a prompt or a system message.
This module recovers those fields, the optional ``[ACTION:<NAME>]`` marker,
and the labeled user question from that text.

All regex operations use the ``regex`` library with a timeout. A timeout
degrades the affected field to absent; nothing here raises.

Usage:
    from email_agent.engine.fields import extract_fields

    email = extract_fields("Subject: Hello\\nFrom: Ann <ann@x.com>\\nBody: Hi!")
    email.sender_name  # "Ann"
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

import regex

from email_agent.core.logging import get_logger

logger = get_logger(__name__)

# Regex timeout in seconds (all matching in this module MUST use this)
REGEX_TIMEOUT = 1.0

SUBJECT_PATTERN = regex.compile(r"^[ \t]*Subject:[ \t]*(.+)$", regex.IGNORECASE | regex.MULTILINE)
FROM_PATTERN = regex.compile(r"^[ \t]*From:[ \t]*([^\n<]+)", regex.IGNORECASE | regex.MULTILINE)
BODY_PATTERN = regex.compile(r"Body:\s*(.+)", regex.IGNORECASE | regex.DOTALL)
ACTION_TAG_PATTERN = regex.compile(r"\[ACTION:(.+?)\]", regex.IGNORECASE)
LABELED_QUESTION_PATTERN = regex.compile(
    r"User's question:\s*(.*?)(?:Provide a helpful|\Z)",
    regex.IGNORECASE | regex.DOTALL,
)


class ActionTag(StrEnum):
    """Explicit directive injected by the button-triggered endpoints."""

    CATEGORY = "CATEGORY"
    ACTIONS = "ACTIONS"
    REPLY = "REPLY"
    SUMMARY = "SUMMARY"
    PRIORITY = "PRIORITY"

    @property
    def marker(self) -> str:
        """The literal marker appended to prompts, e.g. ``[ACTION:REPLY]``."""
        return f"[ACTION:{self.value}]"


@dataclass(frozen=True, slots=True)
class StructuredEmail:
    """Subject/sender/body triple recovered from free text.

    Every field is optional. Consumers use the ``*_text`` accessors, which
    degrade a missing field to an empty string.
    """

    subject: str | None = None
    sender_name: str | None = None
    body: str | None = None

    @property
    def subject_text(self) -> str:
        return self.subject or ""

    @property
    def body_text(self) -> str:
        return self.body or ""

    @property
    def is_empty(self) -> bool:
        """True when neither a subject nor a body was found."""
        return not self.subject and not self.body


def _first_group(pattern: regex.Pattern, text: str, field: str) -> str | None:
    """Return the first capture group of the first match, trimmed.

    Empty matches count as absent.
    """
    try:
        match = pattern.search(text, timeout=REGEX_TIMEOUT)
    except TimeoutError:
        logger.warning("field_extraction_timeout", field=field, text_length=len(text))
        return None
    if not match:
        return None
    value = match.group(1).strip()
    return value or None


def extract_fields(text: str) -> StructuredEmail:
    """Parse subject, sender name and body out of a prompt string.

    Args:
        text: Raw prompt or context text (may be empty)

    Returns:
        StructuredEmail with whichever fields were found
    """
    if not text:
        return StructuredEmail()

    return StructuredEmail(
        subject=_first_group(SUBJECT_PATTERN, text, "subject"),
        sender_name=_first_group(FROM_PATTERN, text, "sender_name"),
        body=_first_group(BODY_PATTERN, text, "body"),
    )


def extract_action_tag(text: str) -> ActionTag | None:
    """Find the first ``[ACTION:<NAME>]`` marker in the text.

    Unknown names are ignored so that heuristic routing applies instead.
    """
    name = _first_group(ACTION_TAG_PATTERN, text or "", "action_tag")
    if not name:
        return None
    try:
        return ActionTag(name.upper())
    except ValueError:
        logger.debug("unknown_action_tag_ignored", tag=name)
        return None


def strip_action_tags(text: str) -> str:
    """Remove every action marker so it never leaks into the parsed body."""
    try:
        return ACTION_TAG_PATTERN.sub("", text, timeout=REGEX_TIMEOUT).rstrip()
    except TimeoutError:
        logger.warning("action_tag_strip_timeout", text_length=len(text))
        return text


def extract_labeled_question(text: str) -> str:
    """Return the question following a ``User's question:`` label, or ``""``."""
    return _first_group(LABELED_QUESTION_PATTERN, text or "", "labeled_question") or ""
