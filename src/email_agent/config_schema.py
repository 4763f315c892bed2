"""Pydantic configuration schema for the Email Productivity Agent.

This module defines the configuration schema that mirrors config.yaml structure.
All configuration is validated against these models on startup.

Usage:
    from email_agent.config_schema import AppConfig

    # Validate a config dict
    config = AppConfig(**yaml_data)
"""

from pydantic import BaseModel, Field, field_validator

# Current schema version - increment when adding new required fields
CURRENT_SCHEMA_VERSION = 1


class LLMConfig(BaseModel):
    """Model backend selection and request parameters.

    The Anthropic API key is read from the ANTHROPIC_API_KEY environment
    variable, never from this file.
    """

    use_mock: bool = Field(
        default=False,
        description="Always answer with the rule-based engine, even if an API key is set",
    )
    model: str = Field(
        default="claude-haiku-4-5-20251001",
        description="Claude model used for all email actions and chat",
    )
    max_tokens: int = Field(
        default=1000,
        ge=16,
        le=8192,
        description="Maximum tokens in a model response",
    )
    temperature: float = Field(
        default=0.7,
        ge=0.0,
        le=1.0,
        description="Sampling temperature",
    )
    timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        le=600,
        description="Per-request timeout before falling back to the rule-based engine",
    )
    max_retries: int = Field(
        default=2,
        ge=0,
        le=10,
        description="SDK-level retries for transient API errors",
    )


class DatabaseConfig(BaseModel):
    """SQLite storage configuration."""

    path: str = Field(
        default="data/email_agent.db",
        description="Path to the SQLite database file",
    )
    seed_mock_data: bool = Field(
        default=True,
        description="Seed the mock inbox and default prompt templates on first start",
    )

    @field_validator("path")
    @classmethod
    def validate_path(cls, v: str) -> str:
        """Ensure the database path doesn't contain path traversal."""
        if not v or not v.strip():
            raise ValueError("Database path cannot be empty")
        if ".." in v:
            raise ValueError("Database path cannot contain '..' (path traversal)")
        return v


class ServerConfig(BaseModel):
    """HTTP server and CORS configuration."""

    host: str = Field(
        default="127.0.0.1",
        description="Host to bind to",
    )
    port: int = Field(
        default=3001,
        ge=1,
        le=65535,
        description="Port to bind to",
    )
    frontend_url: str | None = Field(
        default=None,
        description="Exact UI origin allowed by CORS (all origins allowed when unset)",
    )
    allowed_origin_regex: str = Field(
        default=r"^(https://.*\.vercel\.app|http://localhost:\d+)$",
        description="Origins always allowed by CORS (preview deployments, local dev)",
    )


class AppConfig(BaseModel):
    """Root configuration schema for the Email Productivity Agent.

    Every section has defaults, so an empty file (or none at all when the
    server starts) yields a working mock-mode setup.
    """

    schema_version: int = Field(
        default=CURRENT_SCHEMA_VERSION,
        ge=1,
        description="Config schema version for migration tracking",
    )
    llm: LLMConfig = Field(default_factory=LLMConfig)
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize and check the log level name."""
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR"}:
            raise ValueError("log_level must be one of DEBUG, INFO, WARNING, ERROR")
        return level
