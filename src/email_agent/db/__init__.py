"""SQLite persistence for emails, prompt templates, drafts and chat history."""

from email_agent.db.models import init_database, verify_schema
from email_agent.db.store import (
    ChatMessage,
    DatabaseStore,
    Draft,
    Email,
    NewEmail,
    PromptTemplate,
)

__all__ = [
    "ChatMessage",
    "DatabaseStore",
    "Draft",
    "Email",
    "NewEmail",
    "PromptTemplate",
    "init_database",
    "verify_schema",
]
