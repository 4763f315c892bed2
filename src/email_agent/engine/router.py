"""Intent routing for free-text requests.

Decides which classifier or composer answers a request. Callers either
embed an explicit ``[ACTION:<NAME>]`` marker (the button-triggered
endpoints), which always wins, or send a conversation whose latest user
utterance is matched against an ordered phrase table.

Precedence notes:
- Reply phrasing is checked first so the broad summary rule cannot claim
  "draft a reply" requests.
- The reply rule itself refuses utterances containing "what is this email"
  style phrasing, so "draft a reply explaining what is this email about"
  resolves to a summary.

Usage:
    from email_agent.engine.router import Message, route

    conversation = [Message("user", "Can you summarize this?")]
    route(conversation, has_email=True)  # Intent.SUMMARY
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from enum import StrEnum
from typing import Any, Literal

from email_agent.core.logging import get_logger
from email_agent.engine.fields import ActionTag, extract_labeled_question
from email_agent.engine.rules import Rule, first_match

logger = get_logger(__name__)

Role = Literal["system", "user", "assistant"]
VALID_ROLES: tuple[str, ...] = ("system", "user", "assistant")


class Intent(StrEnum):
    """What a request resolves to.

    ``RISK`` and ``TONE`` are composite answers built from several
    classifiers rather than a single one.
    """

    CATEGORY = "category"
    ACTIONS = "actions"
    REPLY = "reply"
    SUMMARY = "summary"
    PRIORITY = "priority"
    RISK = "risk"
    TONE = "tone"
    GENERIC = "generic"


TAG_INTENTS: Mapping[ActionTag, Intent] = {
    ActionTag.CATEGORY: Intent.CATEGORY,
    ActionTag.ACTIONS: Intent.ACTIONS,
    ActionTag.REPLY: Intent.REPLY,
    ActionTag.SUMMARY: Intent.SUMMARY,
    ActionTag.PRIORITY: Intent.PRIORITY,
}


@dataclass(frozen=True, slots=True)
class Message:
    """One role-tagged entry of a conversation."""

    role: Role
    content: str


Conversation = Sequence[Message]


def as_conversation(source: str | Iterable[Message | Mapping[str, Any]] | None) -> list[Message]:
    """Normalize engine input into a list of messages.

    A bare prompt string becomes a single system message, so a labeled
    ``User's question:`` inside it is still found. Mappings need ``role``
    and ``content`` keys; unknown roles are treated as ``user`` and
    non-string content is stringified.
    """
    if source is None:
        return []
    if isinstance(source, str):
        return [Message("system", source)]

    messages: list[Message] = []
    for item in source:
        if isinstance(item, Message):
            messages.append(item)
            continue
        role = str(item.get("role", "user"))
        content = item.get("content", "")
        messages.append(
            Message(
                role=role if role in VALID_ROLES else "user",  # type: ignore[arg-type]
                content=content if isinstance(content, str) else str(content or ""),
            )
        )
    return messages


def joined_text(conversation: Conversation, roles: Iterable[str] | None = None) -> str:
    """Join message contents (optionally only the given roles) with blank lines."""
    wanted = set(roles) if roles is not None else None
    return "\n\n".join(
        m.content for m in conversation if wanted is None or m.role in wanted
    )


def intent_text(conversation: Conversation) -> str:
    """Select the lower-cased text used for intent detection.

    Order of preference:
    1. The last user message
    2. The labeled question of the last system message that carries one
    3. The full joined conversation
    """
    for message in reversed(conversation):
        if message.role == "user":
            return message.content.lower()

    for message in reversed(conversation):
        if message.role == "system":
            question = extract_labeled_question(message.content)
            if question:
                return question.lower()

    return joined_text(conversation).lower()


# ---------------------------------------------------------------------------
# Phrase rules
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Utterance:
    """Intent-detection text plus whether an email is in context."""

    text: str
    has_email: bool

    def has(self, *phrases: str) -> bool:
        return any(phrase in self.text for phrase in phrases)

    def has_all(self, *phrases: str) -> bool:
        return all(phrase in self.text for phrase in phrases)


REPLY_PHRASES = ("draft a reply", "write a reply", "reply to this")
SUMMARY_EXCLUSION_PHRASES = ("what is this email", "what's this email", "what is the email about")
CATEGORY_PHRASES = ("categorize", "category", "what type")
ACTION_PHRASES = ("action", "task", "next step", "what should i do")
SUMMARY_PHRASES = (
    "summary",
    "summarize",
    "summarise",
    "what is this email",
    "what is the email about",
    "what's this email",
    "tell me about this email",
    "explain this email",
    "what does this email say",
    "what is it about",
    "what is the email",
)
PRIORITY_PHRASES = ("priority", "urgent", "how urgent")
RISK_PHRASES = ("risk", "concern", "problem", "issue")
TONE_PHRASES = ("tone", "style", "how should i respond")


def _wants_reply(u: Utterance) -> bool:
    asks_for_reply = u.has(*REPLY_PHRASES) or u.has_all("reply", "draft")
    return asks_for_reply and not u.has(*SUMMARY_EXCLUSION_PHRASES)


INTENT_RULES: tuple[Rule[Intent], ...] = (
    Rule("reply", _wants_reply, Intent.REPLY),
    Rule("category", lambda u: u.has(*CATEGORY_PHRASES), Intent.CATEGORY),
    Rule("actions", lambda u: u.has(*ACTION_PHRASES), Intent.ACTIONS),
    Rule("summary", lambda u: u.has(*SUMMARY_PHRASES), Intent.SUMMARY),
    Rule("priority", lambda u: u.has(*PRIORITY_PHRASES), Intent.PRIORITY),
    Rule("risk", lambda u: u.has(*RISK_PHRASES), Intent.RISK),
    Rule("tone", lambda u: u.has(*TONE_PHRASES), Intent.TONE),
    Rule("what_question", lambda u: u.has_email and u.has("what"), Intent.SUMMARY),
    Rule("email_in_context", lambda u: u.has_email, Intent.SUMMARY),
)


def route(
    conversation: Conversation,
    explicit_tag: ActionTag | None = None,
    has_email: bool = False,
) -> Intent:
    """Resolve a conversation to an intent.

    Args:
        conversation: Chronological role-tagged messages
        explicit_tag: Action marker found in the input, if any; overrides
            every heuristic
        has_email: Whether an email subject or body is in context

    Returns:
        The selected Intent (GENERIC when nothing applies)
    """
    if explicit_tag is not None:
        logger.debug("intent_forced_by_tag", tag=explicit_tag.value)
        return TAG_INTENTS[explicit_tag]

    utterance = Utterance(text=intent_text(conversation), has_email=has_email)
    intent = first_match(INTENT_RULES, utterance, default=Intent.GENERIC)
    logger.debug("intent_routed", intent=intent.value, has_email=has_email)
    return intent
