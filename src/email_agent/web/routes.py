"""JSON API routes for the Email Productivity Agent.

Groups:
- /api/health, /api/llm/*: liveness and model backend status
- /api/emails: inbox listing and per-email AI actions
- /api/prompts: prompt template CRUD
- /api/drafts: reply draft CRUD
- /api/chat: per-email (``/api/chat/{email_id}``) and general chat threads

All routes use FastAPI dependency injection to access shared state.
Request bodies are validated by Pydantic; required-field checks that the
UI relies on return 400 rather than 422.
"""

from __future__ import annotations

from datetime import UTC, datetime

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from email_agent import __version__
from email_agent.core.errors import DuplicateRecordError, RecordNotFoundError
from email_agent.core.logging import get_logger
from email_agent.db.store import DatabaseStore, Email
from email_agent.engine import ActionTag
from email_agent.llm.service import LLMService
from email_agent.prompts import TemplateType, build_action_prompt, build_chat_conversation
from email_agent.web.dependencies import get_llm, get_store

logger = get_logger(__name__)

api_router = APIRouter(prefix="/api")

LLM_TEST_PROMPT = (
    'Say "Hello, Claude integration is working!" if you are an AI, '
    'or "Hello, Mock LLM is working!" if you are a mock service.'
)


# ---------------------------------------------------------------------------
# Pydantic models for API input validation
# ---------------------------------------------------------------------------


class LLMTestRequest(BaseModel):
    """Request body for the model backend smoke test."""

    prompt: str | None = None


class PromptTemplateCreate(BaseModel):
    """Request body for creating a prompt template."""

    name: str | None = None
    description: str | None = None
    template: str | None = None
    type: str | None = None


class PromptTemplateUpdate(BaseModel):
    """Request body for a partial prompt template update."""

    name: str | None = None
    description: str | None = None
    template: str | None = None
    type: str | None = None


class DraftCreate(BaseModel):
    """Request body for saving a reply draft."""

    email_id: int | None = None
    subject: str | None = None
    to_email: str | None = None
    body: str | None = None


class DraftUpdate(BaseModel):
    """Request body for a partial draft update."""

    subject: str | None = None
    to_email: str | None = None
    body: str | None = None


class ChatRequest(BaseModel):
    """Request body for one chat turn."""

    message: str | None = None


# ---------------------------------------------------------------------------
# Health and model backend
# ---------------------------------------------------------------------------


@api_router.get("/health")
async def health_check():
    """Liveness check. Does not touch the database."""
    return {"status": "ok", "message": "Email Agent API is running", "version": __version__}


@api_router.get("/llm/status")
async def llm_status(llm: LLMService = Depends(get_llm)):
    """Report which model backend answers requests."""
    status = llm.status()
    if llm.is_mock:
        message = "Using the rule-based mock engine (set ANTHROPIC_API_KEY to use Claude)"
    else:
        message = "Claude API is configured and ready"
    return {"status": "ok", **status, "message": message}


@api_router.post("/llm/test")
async def llm_test(body: LLMTestRequest, llm: LLMService = Depends(get_llm)):
    """Send a prompt through the active backend and echo the answer."""
    prompt = body.prompt or LLM_TEST_PROMPT
    response = llm.complete(prompt)
    return {
        "success": True,
        "provider": llm.provider,
        "prompt": prompt,
        "response": response,
        "timestamp": datetime.now(UTC).isoformat(),
    }


# ---------------------------------------------------------------------------
# Emails
# ---------------------------------------------------------------------------


async def _require_email(store: DatabaseStore, email_id: int) -> Email:
    email = await store.get_email(email_id)
    if email is None:
        raise HTTPException(status_code=404, detail="Email not found")
    return email


async def _run_email_action(
    store: DatabaseStore,
    llm: LLMService,
    email_id: int,
    template_type: TemplateType,
    tag: ActionTag,
) -> str:
    """Render the action's template for an email and run it through the model."""
    email = await _require_email(store, email_id)
    template = await store.get_prompt_template_by_type(template_type.value)
    if template is None:
        raise HTTPException(
            status_code=404,
            detail=f"{template_type.value} prompt template not found",
        )

    prompt = build_action_prompt(template.template, email, tag)
    result = llm.complete(prompt).strip()
    logger.info(
        "email_action_completed",
        email_id=email_id,
        action=tag.value,
        provider=llm.provider,
    )
    return result


@api_router.get("/emails")
async def list_emails(store: DatabaseStore = Depends(get_store)):
    """Return the inbox, newest first."""
    return [email.to_dict() for email in await store.list_emails()]


@api_router.get("/emails/{email_id}")
async def get_email(email_id: int, store: DatabaseStore = Depends(get_store)):
    email = await _require_email(store, email_id)
    return email.to_dict()


@api_router.patch("/emails/{email_id}/read")
async def mark_email_read(email_id: int, store: DatabaseStore = Depends(get_store)):
    if not await store.mark_email_read(email_id):
        raise HTTPException(status_code=404, detail="Email not found")
    return {"success": True}


@api_router.post("/emails/{email_id}/categorize")
async def categorize_email(
    email_id: int,
    store: DatabaseStore = Depends(get_store),
    llm: LLMService = Depends(get_llm),
):
    """Categorize an email and store the result on it."""
    category = await _run_email_action(
        store, llm, email_id, TemplateType.CATEGORIZATION, ActionTag.CATEGORY
    )
    await store.set_email_category(email_id, category)
    return {"category": category}


@api_router.post("/emails/{email_id}/actions")
async def extract_email_actions(
    email_id: int,
    store: DatabaseStore = Depends(get_store),
    llm: LLMService = Depends(get_llm),
):
    actions = await _run_email_action(
        store, llm, email_id, TemplateType.ACTION_EXTRACTION, ActionTag.ACTIONS
    )
    return {"actions": actions}


@api_router.post("/emails/{email_id}/reply")
async def draft_email_reply(
    email_id: int,
    store: DatabaseStore = Depends(get_store),
    llm: LLMService = Depends(get_llm),
):
    """Draft a reply body. Nothing is sent; the draft is returned for review."""
    reply_body = await _run_email_action(
        store, llm, email_id, TemplateType.REPLY_DRAFT, ActionTag.REPLY
    )
    return {"reply_body": reply_body}


@api_router.post("/emails/{email_id}/summarize")
async def summarize_email(
    email_id: int,
    store: DatabaseStore = Depends(get_store),
    llm: LLMService = Depends(get_llm),
):
    summary = await _run_email_action(
        store, llm, email_id, TemplateType.SUMMARY, ActionTag.SUMMARY
    )
    return {"summary": summary}


@api_router.post("/emails/{email_id}/priority")
async def assess_email_priority(
    email_id: int,
    store: DatabaseStore = Depends(get_store),
    llm: LLMService = Depends(get_llm),
):
    """Assess priority and store the result on the email."""
    priority = await _run_email_action(
        store, llm, email_id, TemplateType.PRIORITY, ActionTag.PRIORITY
    )
    await store.set_email_priority(email_id, priority)
    return {"priority": priority}


# ---------------------------------------------------------------------------
# Prompt templates
# ---------------------------------------------------------------------------


@api_router.get("/prompts")
async def list_prompt_templates(store: DatabaseStore = Depends(get_store)):
    return [t.to_dict() for t in await store.list_prompt_templates()]


@api_router.get("/prompts/{template_id}")
async def get_prompt_template(template_id: int, store: DatabaseStore = Depends(get_store)):
    template = await store.get_prompt_template(template_id)
    if template is None:
        raise HTTPException(status_code=404, detail="Prompt template not found")
    return template.to_dict()


@api_router.post("/prompts", status_code=201)
async def create_prompt_template(
    body: PromptTemplateCreate,
    store: DatabaseStore = Depends(get_store),
):
    if not body.name or not body.template or not body.type:
        raise HTTPException(status_code=400, detail="Name, template, and type are required")

    try:
        template = await store.create_prompt_template(
            name=body.name,
            template=body.template,
            template_type=body.type,
            description=body.description or None,
        )
    except DuplicateRecordError:
        raise HTTPException(
            status_code=409, detail="Prompt template with this name already exists"
        ) from None
    return template.to_dict()


@api_router.put("/prompts/{template_id}")
async def update_prompt_template(
    template_id: int,
    body: PromptTemplateUpdate,
    store: DatabaseStore = Depends(get_store),
):
    try:
        template = await store.update_prompt_template(
            template_id, body.model_dump(exclude_unset=True)
        )
    except RecordNotFoundError:
        raise HTTPException(status_code=404, detail="Prompt template not found") from None
    except DuplicateRecordError:
        raise HTTPException(
            status_code=409, detail="Prompt template with this name already exists"
        ) from None
    return template.to_dict()


@api_router.delete("/prompts/{template_id}")
async def delete_prompt_template(template_id: int, store: DatabaseStore = Depends(get_store)):
    if not await store.delete_prompt_template(template_id):
        raise HTTPException(status_code=404, detail="Prompt template not found")
    return {"success": True}


# ---------------------------------------------------------------------------
# Drafts
# ---------------------------------------------------------------------------


@api_router.get("/drafts")
async def list_drafts(store: DatabaseStore = Depends(get_store)):
    return [d.to_dict() for d in await store.list_drafts()]


@api_router.get("/drafts/{draft_id}")
async def get_draft(draft_id: int, store: DatabaseStore = Depends(get_store)):
    draft = await store.get_draft(draft_id)
    if draft is None:
        raise HTTPException(status_code=404, detail="Draft not found")
    return draft.to_dict()


@api_router.post("/drafts", status_code=201)
async def create_draft(body: DraftCreate, store: DatabaseStore = Depends(get_store)):
    if not body.subject or not body.to_email or not body.body:
        raise HTTPException(status_code=400, detail="Subject, to_email, and body are required")

    draft = await store.create_draft(
        subject=body.subject,
        to_email=body.to_email,
        body=body.body,
        email_id=body.email_id or None,
    )
    return draft.to_dict()


@api_router.put("/drafts/{draft_id}")
async def update_draft(
    draft_id: int,
    body: DraftUpdate,
    store: DatabaseStore = Depends(get_store),
):
    try:
        draft = await store.update_draft(draft_id, body.model_dump(exclude_unset=True))
    except RecordNotFoundError:
        raise HTTPException(status_code=404, detail="Draft not found") from None
    return draft.to_dict()


@api_router.delete("/drafts/{draft_id}")
async def delete_draft(draft_id: int, store: DatabaseStore = Depends(get_store)):
    if not await store.delete_draft(draft_id):
        raise HTTPException(status_code=404, detail="Draft not found")
    return {"success": True}


# ---------------------------------------------------------------------------
# Chat
# ---------------------------------------------------------------------------


@api_router.get("/chat")
@api_router.get("/chat/{email_id}")
async def list_chat_messages(
    email_id: int | None = None,
    store: DatabaseStore = Depends(get_store),
):
    """Return a chat thread, oldest first. Without an email id, the general chat."""
    return [m.to_dict() for m in await store.list_chat_messages(email_id)]


@api_router.post("/chat", status_code=201)
@api_router.post("/chat/{email_id}", status_code=201)
async def send_chat_message(
    body: ChatRequest,
    email_id: int | None = None,
    store: DatabaseStore = Depends(get_store),
    llm: LLMService = Depends(get_llm),
):
    """Store the user's message, answer it, and return both stored messages.

    With an email id, the email is attached to the conversation as context.
    """
    if not body.message:
        raise HTTPException(status_code=400, detail="Message is required")

    email = await _require_email(store, email_id) if email_id is not None else None
    user_message = await store.add_chat_message("user", body.message, email_id)

    conversation = build_chat_conversation(body.message, email)
    answer = llm.complete(conversation)

    assistant_message = await store.add_chat_message("assistant", answer, email_id)
    logger.info(
        "chat_answered",
        email_id=email_id,
        has_context=email is not None,
        provider=llm.provider,
    )
    return {
        "user_message": user_message.to_dict(),
        "assistant_message": assistant_message.to_dict(),
    }


@api_router.delete("/chat")
@api_router.delete("/chat/{email_id}")
async def clear_chat_messages(
    email_id: int | None = None,
    store: DatabaseStore = Depends(get_store),
):
    deleted = await store.clear_chat_messages(email_id)
    return {"success": True, "deleted": deleted}
