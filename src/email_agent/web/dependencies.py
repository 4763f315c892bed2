"""FastAPI dependency injection helpers.

Extracts shared dependencies from app.state for use in route handlers.
All dependencies are created during the FastAPI lifespan (or injected
directly by tests) and stored on app.state.

Usage:
    from email_agent.web.dependencies import get_store

    @api_router.get("/emails")
    async def list_emails(store: DatabaseStore = Depends(get_store)):
        return await store.list_emails()
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import Request

if TYPE_CHECKING:
    from email_agent.db.store import DatabaseStore
    from email_agent.llm.service import LLMService


def get_store(request: Request) -> DatabaseStore:
    """Get the shared DatabaseStore from app state."""
    return request.app.state.store


def get_llm(request: Request) -> LLMService:
    """Get the LLMService from app state."""
    return request.app.state.llm
