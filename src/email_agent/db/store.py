"""Database store with CRUD operations for all tables.

This module provides the DatabaseStore class that encapsulates all database
operations for the Email Productivity Agent. It uses aiosqlite for async
access and returns dataclass records.

Usage:
    from email_agent.db.store import DatabaseStore

    store = DatabaseStore("data/email_agent.db")
    await store.initialize()

    emails = await store.list_emails()
    template = await store.get_prompt_template_by_type("summary")
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Mapping
from contextlib import asynccontextmanager
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Literal

import aiosqlite

from email_agent.core.errors import DatabaseError, DuplicateRecordError, RecordNotFoundError
from email_agent.core.logging import get_logger
from email_agent.db.models import init_database

logger = get_logger(__name__)

ChatRole = Literal["user", "assistant"]

# Columns a partial update may touch; empty strings keep the stored value
_TEMPLATE_REQUIRED_FIELDS = ("name", "template", "type")
_DRAFT_FIELDS = ("subject", "to_email", "body")


@dataclass
class Email:
    """Email record from the database."""

    id: int
    subject: str
    from_email: str
    from_name: str
    to_email: str
    body: str
    date: str
    read: bool = False
    category: str | None = None
    priority: str | None = None
    created_at: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class NewEmail:
    """Email to insert (the id is assigned by SQLite)."""

    subject: str
    from_email: str
    from_name: str
    to_email: str
    body: str
    date: str
    read: bool = False


@dataclass
class PromptTemplate:
    """Prompt template record from the database."""

    id: int
    name: str
    template: str
    type: str
    description: str | None = None
    created_at: str | None = None
    updated_at: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class Draft:
    """Saved reply draft."""

    id: int
    subject: str
    to_email: str
    body: str
    email_id: int | None = None
    created_at: str | None = None
    updated_at: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class ChatMessage:
    """One stored chat turn. ``email_id`` is None for the general chat."""

    id: int
    role: ChatRole
    content: str
    email_id: int | None = None
    created_at: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def _is_unique_violation(error: aiosqlite.IntegrityError) -> bool:
    return "UNIQUE constraint" in str(error)


class DatabaseStore:
    """Async data access layer for the Email Productivity Agent.

    Every public method opens its own connection, so one store instance can
    be shared by all request handlers.

    Attributes:
        db_path: Path to the SQLite database file
    """

    def __init__(self, db_path: str | Path):
        self.db_path = Path(db_path)
        self._initialized = False

    async def initialize(self) -> None:
        """Create tables if needed. Call before any other operation."""
        await init_database(self.db_path)
        self._initialized = True

    @asynccontextmanager
    async def _db(self) -> AsyncIterator[aiosqlite.Connection]:
        """Get a configured database connection.

        Sets the PRAGMAs every connection needs:
        - busy_timeout: 10s to ride out concurrent writers
        - foreign_keys: ON so deleting an email nulls draft/chat links

        Usage:
            async with self._db() as db:
                await db.execute(...)
        """
        async with aiosqlite.connect(self.db_path) as db:
            await db.execute("PRAGMA busy_timeout = 10000")
            await db.execute("PRAGMA foreign_keys = ON")
            await db.execute("PRAGMA synchronous = NORMAL")
            db.row_factory = aiosqlite.Row
            yield db

    # =========================================================================
    # Email Operations
    # =========================================================================

    async def list_emails(self) -> list[Email]:
        """Return the inbox, newest first."""
        try:
            async with self._db() as db:
                cursor = await db.execute("SELECT * FROM emails ORDER BY date DESC, id DESC")
                rows = await cursor.fetchall()
                return [self._row_to_email(row) for row in rows]
        except aiosqlite.Error as e:
            logger.error("list_emails_failed", error=str(e))
            raise DatabaseError(f"Failed to list emails: {e}") from e

    async def get_email(self, email_id: int) -> Email | None:
        """Get an email by id, or None if it does not exist."""
        try:
            async with self._db() as db:
                cursor = await db.execute("SELECT * FROM emails WHERE id = ?", (email_id,))
                row = await cursor.fetchone()
                return self._row_to_email(row) if row else None
        except aiosqlite.Error as e:
            logger.error("get_email_failed", email_id=email_id, error=str(e))
            raise DatabaseError(f"Failed to get email {email_id}: {e}") from e

    async def save_emails(self, emails: list[NewEmail]) -> int:
        """Insert emails in a single transaction.

        Returns:
            Number of emails inserted
        """
        if not emails:
            return 0
        try:
            async with self._db() as db:
                await db.executemany(
                    """
                    INSERT INTO emails (subject, from_email, from_name, to_email, body, date, read)
                    VALUES (?, ?, ?, ?, ?, ?, ?)
                    """,
                    [
                        (
                            e.subject,
                            e.from_email,
                            e.from_name,
                            e.to_email,
                            e.body,
                            e.date,
                            1 if e.read else 0,
                        )
                        for e in emails
                    ],
                )
                await db.commit()
            logger.debug("emails_saved", count=len(emails))
            return len(emails)
        except aiosqlite.Error as e:
            logger.error("save_emails_failed", count=len(emails), error=str(e))
            raise DatabaseError(f"Failed to save {len(emails)} emails: {e}") from e

    async def mark_email_read(self, email_id: int) -> bool:
        """Mark an email as read.

        Returns:
            True if the email exists
        """
        return await self._update_email_column(email_id, "read", 1)

    async def set_email_category(self, email_id: int, category: str) -> bool:
        """Store the last categorize result on the email."""
        return await self._update_email_column(email_id, "category", category)

    async def set_email_priority(self, email_id: int, priority: str) -> bool:
        """Store the last priority result on the email."""
        return await self._update_email_column(email_id, "priority", priority)

    async def _update_email_column(
        self, email_id: int, column: Literal["read", "category", "priority"], value: Any
    ) -> bool:
        try:
            async with self._db() as db:
                cursor = await db.execute(
                    f"UPDATE emails SET {column} = ? WHERE id = ?", (value, email_id)
                )
                await db.commit()
                return cursor.rowcount > 0
        except aiosqlite.Error as e:
            logger.error("update_email_failed", email_id=email_id, column=column, error=str(e))
            raise DatabaseError(f"Failed to update {column} on email {email_id}: {e}") from e

    async def count_emails(self) -> int:
        return await self._count("emails")

    def _row_to_email(self, row: aiosqlite.Row) -> Email:
        """Convert a database row to an Email dataclass."""
        return Email(
            id=row["id"],
            subject=row["subject"],
            from_email=row["from_email"],
            from_name=row["from_name"],
            to_email=row["to_email"],
            body=row["body"],
            date=row["date"],
            read=bool(row["read"]),
            category=row["category"],
            priority=row["priority"],
            created_at=row["created_at"],
        )

    # =========================================================================
    # Prompt Template Operations
    # =========================================================================

    async def list_prompt_templates(self) -> list[PromptTemplate]:
        """Return all templates sorted by name."""
        try:
            async with self._db() as db:
                cursor = await db.execute("SELECT * FROM prompt_templates ORDER BY name")
                rows = await cursor.fetchall()
                return [self._row_to_template(row) for row in rows]
        except aiosqlite.Error as e:
            logger.error("list_prompt_templates_failed", error=str(e))
            raise DatabaseError(f"Failed to list prompt templates: {e}") from e

    async def get_prompt_template(self, template_id: int) -> PromptTemplate | None:
        try:
            async with self._db() as db:
                cursor = await db.execute(
                    "SELECT * FROM prompt_templates WHERE id = ?", (template_id,)
                )
                row = await cursor.fetchone()
                return self._row_to_template(row) if row else None
        except aiosqlite.Error as e:
            logger.error("get_prompt_template_failed", template_id=template_id, error=str(e))
            raise DatabaseError(f"Failed to get prompt template {template_id}: {e}") from e

    async def get_prompt_template_by_type(self, template_type: str) -> PromptTemplate | None:
        """Get the template used for an email action.

        When several templates share a type, the oldest one wins.
        """
        try:
            async with self._db() as db:
                cursor = await db.execute(
                    "SELECT * FROM prompt_templates WHERE type = ? ORDER BY id LIMIT 1",
                    (template_type,),
                )
                row = await cursor.fetchone()
                return self._row_to_template(row) if row else None
        except aiosqlite.Error as e:
            logger.error("get_prompt_template_failed", template_type=template_type, error=str(e))
            raise DatabaseError(f"Failed to get {template_type} prompt template: {e}") from e

    async def create_prompt_template(
        self,
        name: str,
        template: str,
        template_type: str,
        description: str | None = None,
    ) -> PromptTemplate:
        """Insert a new template.

        Raises:
            DuplicateRecordError: If a template with this name already exists
            DatabaseError: If the operation fails
        """
        try:
            async with self._db() as db:
                cursor = await db.execute(
                    """
                    INSERT INTO prompt_templates (name, description, template, type)
                    VALUES (?, ?, ?, ?)
                    """,
                    (name, description, template, template_type),
                )
                await db.commit()
                template_id = cursor.lastrowid
        except aiosqlite.IntegrityError as e:
            if _is_unique_violation(e):
                raise DuplicateRecordError(
                    f"Prompt template '{name}' already exists", table="prompt_templates", value=name
                ) from e
            raise DatabaseError(f"Failed to create prompt template '{name}': {e}") from e
        except aiosqlite.Error as e:
            logger.error("create_prompt_template_failed", name=name, error=str(e))
            raise DatabaseError(f"Failed to create prompt template '{name}': {e}") from e

        logger.info("prompt_template_created", template_id=template_id, name=name)
        created = await self.get_prompt_template(template_id)
        assert created is not None
        return created

    async def update_prompt_template(
        self, template_id: int, changes: Mapping[str, Any]
    ) -> PromptTemplate:
        """Apply a partial update.

        ``name``, ``template`` and ``type`` keep their stored value when the
        change is missing or empty. ``description`` is replaced whenever the
        key is present, so it can be cleared with None.

        Raises:
            RecordNotFoundError: If the template does not exist
            DuplicateRecordError: If the new name is taken
        """
        existing = await self.get_prompt_template(template_id)
        if existing is None:
            raise RecordNotFoundError(
                f"Prompt template {template_id} not found",
                table="prompt_templates",
                record_id=template_id,
            )

        merged = {
            field: changes.get(field) or getattr(existing, field)
            for field in _TEMPLATE_REQUIRED_FIELDS
        }
        description = changes["description"] if "description" in changes else existing.description

        try:
            async with self._db() as db:
                await db.execute(
                    """
                    UPDATE prompt_templates
                    SET name = ?, description = ?, template = ?, type = ?,
                        updated_at = CURRENT_TIMESTAMP
                    WHERE id = ?
                    """,
                    (merged["name"], description, merged["template"], merged["type"], template_id),
                )
                await db.commit()
        except aiosqlite.IntegrityError as e:
            if _is_unique_violation(e):
                raise DuplicateRecordError(
                    f"Prompt template '{merged['name']}' already exists",
                    table="prompt_templates",
                    value=merged["name"],
                ) from e
            raise DatabaseError(f"Failed to update prompt template {template_id}: {e}") from e
        except aiosqlite.Error as e:
            logger.error("update_prompt_template_failed", template_id=template_id, error=str(e))
            raise DatabaseError(f"Failed to update prompt template {template_id}: {e}") from e

        updated = await self.get_prompt_template(template_id)
        assert updated is not None
        return updated

    async def delete_prompt_template(self, template_id: int) -> bool:
        """Delete a template. Returns False if it did not exist."""
        return await self._delete("prompt_templates", template_id)

    async def count_prompt_templates(self) -> int:
        return await self._count("prompt_templates")

    def _row_to_template(self, row: aiosqlite.Row) -> PromptTemplate:
        return PromptTemplate(
            id=row["id"],
            name=row["name"],
            description=row["description"],
            template=row["template"],
            type=row["type"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )

    # =========================================================================
    # Draft Operations
    # =========================================================================

    async def list_drafts(self) -> list[Draft]:
        """Return drafts, most recently edited first."""
        try:
            async with self._db() as db:
                cursor = await db.execute("SELECT * FROM drafts ORDER BY updated_at DESC, id DESC")
                rows = await cursor.fetchall()
                return [self._row_to_draft(row) for row in rows]
        except aiosqlite.Error as e:
            logger.error("list_drafts_failed", error=str(e))
            raise DatabaseError(f"Failed to list drafts: {e}") from e

    async def get_draft(self, draft_id: int) -> Draft | None:
        try:
            async with self._db() as db:
                cursor = await db.execute("SELECT * FROM drafts WHERE id = ?", (draft_id,))
                row = await cursor.fetchone()
                return self._row_to_draft(row) if row else None
        except aiosqlite.Error as e:
            logger.error("get_draft_failed", draft_id=draft_id, error=str(e))
            raise DatabaseError(f"Failed to get draft {draft_id}: {e}") from e

    async def create_draft(
        self,
        subject: str,
        to_email: str,
        body: str,
        email_id: int | None = None,
    ) -> Draft:
        """Save a new draft, optionally linked to the email it replies to."""
        try:
            async with self._db() as db:
                cursor = await db.execute(
                    "INSERT INTO drafts (email_id, subject, to_email, body) VALUES (?, ?, ?, ?)",
                    (email_id, subject, to_email, body),
                )
                await db.commit()
                draft_id = cursor.lastrowid
        except aiosqlite.Error as e:
            logger.error("create_draft_failed", email_id=email_id, error=str(e))
            raise DatabaseError(f"Failed to create draft: {e}") from e

        logger.info("draft_created", draft_id=draft_id, email_id=email_id)
        created = await self.get_draft(draft_id)
        assert created is not None
        return created

    async def update_draft(self, draft_id: int, changes: Mapping[str, Any]) -> Draft:
        """Apply a partial update; missing or empty fields keep their value.

        Raises:
            RecordNotFoundError: If the draft does not exist
        """
        existing = await self.get_draft(draft_id)
        if existing is None:
            raise RecordNotFoundError(
                f"Draft {draft_id} not found", table="drafts", record_id=draft_id
            )

        merged = {field: changes.get(field) or getattr(existing, field) for field in _DRAFT_FIELDS}
        try:
            async with self._db() as db:
                await db.execute(
                    """
                    UPDATE drafts
                    SET subject = ?, to_email = ?, body = ?, updated_at = CURRENT_TIMESTAMP
                    WHERE id = ?
                    """,
                    (merged["subject"], merged["to_email"], merged["body"], draft_id),
                )
                await db.commit()
        except aiosqlite.Error as e:
            logger.error("update_draft_failed", draft_id=draft_id, error=str(e))
            raise DatabaseError(f"Failed to update draft {draft_id}: {e}") from e

        updated = await self.get_draft(draft_id)
        assert updated is not None
        return updated

    async def delete_draft(self, draft_id: int) -> bool:
        """Delete a draft. Returns False if it did not exist."""
        return await self._delete("drafts", draft_id)

    def _row_to_draft(self, row: aiosqlite.Row) -> Draft:
        return Draft(
            id=row["id"],
            email_id=row["email_id"],
            subject=row["subject"],
            to_email=row["to_email"],
            body=row["body"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )

    # =========================================================================
    # Chat Operations
    # =========================================================================

    async def list_chat_messages(self, email_id: int | None = None) -> list[ChatMessage]:
        """Return a chat thread oldest first.

        Args:
            email_id: Email the thread is about, or None for the general chat
        """
        if email_id is None:
            query = "SELECT * FROM chat_messages WHERE email_id IS NULL ORDER BY created_at, id"
            params: tuple[Any, ...] = ()
        else:
            query = "SELECT * FROM chat_messages WHERE email_id = ? ORDER BY created_at, id"
            params = (email_id,)

        try:
            async with self._db() as db:
                cursor = await db.execute(query, params)
                rows = await cursor.fetchall()
                return [self._row_to_chat_message(row) for row in rows]
        except aiosqlite.Error as e:
            logger.error("list_chat_messages_failed", email_id=email_id, error=str(e))
            raise DatabaseError(f"Failed to list chat messages: {e}") from e

    async def add_chat_message(
        self, role: ChatRole, content: str, email_id: int | None = None
    ) -> ChatMessage:
        """Append a message to a chat thread and return the stored row."""
        try:
            async with self._db() as db:
                cursor = await db.execute(
                    "INSERT INTO chat_messages (role, content, email_id) VALUES (?, ?, ?)",
                    (role, content, email_id),
                )
                await db.commit()
                cursor = await db.execute(
                    "SELECT * FROM chat_messages WHERE id = ?", (cursor.lastrowid,)
                )
                row = await cursor.fetchone()
                return self._row_to_chat_message(row)
        except aiosqlite.Error as e:
            logger.error("add_chat_message_failed", email_id=email_id, role=role, error=str(e))
            raise DatabaseError(f"Failed to store chat message: {e}") from e

    async def clear_chat_messages(self, email_id: int | None = None) -> int:
        """Delete one chat thread.

        Returns:
            Number of messages deleted
        """
        if email_id is None:
            query, params = "DELETE FROM chat_messages WHERE email_id IS NULL", ()
        else:
            query, params = "DELETE FROM chat_messages WHERE email_id = ?", (email_id,)

        try:
            async with self._db() as db:
                cursor = await db.execute(query, params)
                await db.commit()
                return cursor.rowcount
        except aiosqlite.Error as e:
            logger.error("clear_chat_messages_failed", email_id=email_id, error=str(e))
            raise DatabaseError(f"Failed to clear chat messages: {e}") from e

    def _row_to_chat_message(self, row: aiosqlite.Row) -> ChatMessage:
        return ChatMessage(
            id=row["id"],
            role=row["role"],
            content=row["content"],
            email_id=row["email_id"],
            created_at=row["created_at"],
        )

    # =========================================================================
    # Shared helpers
    # =========================================================================

    async def _count(self, table: Literal["emails", "prompt_templates"]) -> int:
        try:
            async with self._db() as db:
                cursor = await db.execute(f"SELECT COUNT(*) FROM {table}")
                row = await cursor.fetchone()
                return row[0]
        except aiosqlite.Error as e:
            raise DatabaseError(f"Failed to count {table}: {e}") from e

    async def _delete(self, table: Literal["prompt_templates", "drafts"], record_id: int) -> bool:
        try:
            async with self._db() as db:
                cursor = await db.execute(f"DELETE FROM {table} WHERE id = ?", (record_id,))
                await db.commit()
                deleted = cursor.rowcount > 0
        except aiosqlite.Error as e:
            logger.error("delete_failed", table=table, record_id=record_id, error=str(e))
            raise DatabaseError(f"Failed to delete {table} row {record_id}: {e}") from e

        if deleted:
            logger.info("record_deleted", table=table, record_id=record_id)
        return deleted
