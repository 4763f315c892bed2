"""Rule-based response engine.

This package simulates a generative model with deterministic rule tables:
- Field extraction of subject/sender/body from prompt text
- Category and priority classifiers
- Summary, action-item and reply generation over ordered topic tables
- Intent routing for free-text chat requests
"""

from email_agent.engine.actions import NO_ACTIONS, extract_actions
from email_agent.engine.classifiers import (
    Category,
    Priority,
    classify_category,
    classify_priority,
)
from email_agent.engine.composer import compose_reply
from email_agent.engine.fields import (
    ActionTag,
    StructuredEmail,
    extract_action_tag,
    extract_fields,
)
from email_agent.engine.responder import GENERIC_RESPONSE, produce_response
from email_agent.engine.router import Intent, Message, as_conversation, route
from email_agent.engine.summarizer import summarize

__all__ = [
    # Fields
    "ActionTag",
    "StructuredEmail",
    "extract_action_tag",
    "extract_fields",
    # Classifiers
    "Category",
    "Priority",
    "classify_category",
    "classify_priority",
    # Topic tables
    "NO_ACTIONS",
    "compose_reply",
    "extract_actions",
    "summarize",
    # Routing
    "GENERIC_RESPONSE",
    "Intent",
    "Message",
    "as_conversation",
    "produce_response",
    "route",
]
