"""FastAPI application for the Email Productivity Agent.

Creates the FastAPI app with:
- Lifespan context manager that opens the database, seeds it and selects
  the model backend
- CORS for the configured UI origin plus local and preview deployments
- A request ID bound to the logging context for each call
- The JSON API router

Usage:
    from email_agent.web.app import create_app

    app = create_app()
    # Run with: uvicorn.run(app, host="127.0.0.1", port=3001)
"""

from __future__ import annotations

import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from email_agent import __version__
from email_agent.config_schema import AppConfig
from email_agent.core.errors import ConfigLoadError, DatabaseError
from email_agent.core.logging import get_logger, set_request_id

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


def load_app_config() -> AppConfig:
    """Load config for the server, using defaults when the file is missing.

    Validation errors still propagate: a present but broken config file
    should stop the server.
    """
    from email_agent.config import get_config

    try:
        return get_config()
    except ConfigLoadError as e:
        logger.warning("config_load_failed_using_defaults", error=str(e))
        return AppConfig()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize dependencies on startup.

    On startup:
    1. Initialize the database
    2. Seed the mock inbox and default prompt templates
    3. Select the model backend
    """
    from email_agent.db.seed import seed_defaults
    from email_agent.db.store import DatabaseStore
    from email_agent.llm import build_llm_service

    config: AppConfig = app.state.config

    store = DatabaseStore(config.database.path)
    await store.initialize()
    await seed_defaults(store, include_inbox=config.database.seed_mock_data)
    app.state.store = store

    app.state.llm = build_llm_service(config.llm)

    logger.info(
        "server_started",
        database=config.database.path,
        llm_provider=app.state.llm.provider,
    )
    yield
    logger.info("server_stopped")


def _add_cors(app: FastAPI, config: AppConfig) -> None:
    """Allow the configured UI origin, localhost and preview deployments.

    With no ``frontend_url`` every origin is allowed.
    """
    server = config.server
    if server.frontend_url:
        origins = [server.frontend_url]
        origin_regex = server.allowed_origin_regex
    else:
        origins = []
        origin_regex = ".*"

    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_origin_regex=origin_regex,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )


def create_app(config: AppConfig | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        config: Application config; loaded from disk when omitted

    Returns:
        Configured FastAPI instance
    """
    from email_agent.web.routes import api_router

    if config is None:
        config = load_app_config()

    app = FastAPI(
        title="Email Productivity Agent",
        description="Mock inbox with AI categorization, summaries, actions and reply drafts",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.config = config

    _add_cors(app, config)

    @app.middleware("http")
    async def bind_request_id(request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        set_request_id(request_id)
        try:
            response = await call_next(request)
        finally:
            set_request_id(None)
        response.headers[REQUEST_ID_HEADER] = request_id
        return response

    @app.exception_handler(DatabaseError)
    async def database_error_handler(request: Request, exc: DatabaseError):
        logger.error("database_error", path=request.url.path, error=str(exc))
        return JSONResponse(status_code=500, content={"detail": "Database operation failed"})

    app.include_router(api_router)

    return app
