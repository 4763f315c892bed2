"""Pytest fixtures and configuration for Email Productivity Agent tests.

Provides common fixtures for configuration, database, and model backends.
"""

from collections.abc import Generator
from pathlib import Path
from typing import Any

import pytest

from email_agent.config import reset_config
from email_agent.config_schema import AppConfig, LLMConfig
from email_agent.db.store import DatabaseStore
from email_agent.llm.service import LLMService


@pytest.fixture(autouse=True)
def reset_config_singleton() -> Generator[None, None, None]:
    """Reset the config singleton before each test."""
    reset_config()
    yield
    reset_config()


@pytest.fixture(autouse=True)
def no_model_credentials(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep tests off the network regardless of the developer's environment."""
    monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)
    monkeypatch.delenv("EMAIL_AGENT_USE_MOCK_LLM", raising=False)
    monkeypatch.delenv("EMAIL_AGENT_CONFIG_PATH", raising=False)


@pytest.fixture
def temp_config_dir(tmp_path: Path) -> Path:
    """Create a temporary config directory."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    return config_dir


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    """Create a temporary data directory for databases."""
    d = tmp_path / "data"
    d.mkdir()
    return d


@pytest.fixture
def sample_config_yaml() -> str:
    """Return a minimal valid config.yaml content."""
    return """
schema_version: 1

llm:
  use_mock: true
  model: "claude-haiku-4-5-20251001"
  max_tokens: 500

database:
  path: "data/test.db"
  seed_mock_data: true

server:
  host: "127.0.0.1"
  port: 3001
"""


@pytest.fixture
def sample_config_dict(data_dir: Path) -> dict[str, Any]:
    """Return a minimal valid config as a dictionary."""
    return {
        "schema_version": 1,
        "llm": {"use_mock": True},
        "database": {"path": str(data_dir / "app.db"), "seed_mock_data": True},
        "server": {"host": "127.0.0.1", "port": 3001},
    }


@pytest.fixture
def sample_config(sample_config_dict: dict[str, Any]) -> AppConfig:
    """Return a minimal valid AppConfig instance."""
    return AppConfig(**sample_config_dict)


@pytest.fixture
def config_file(temp_config_dir: Path, sample_config_yaml: str) -> Path:
    """Write the sample config to a file and return its path."""
    path = temp_config_dir / "config.yaml"
    path.write_text(sample_config_yaml)
    return path


@pytest.fixture
async def store(data_dir: Path) -> DatabaseStore:
    """Return an initialized, empty DatabaseStore."""
    s = DatabaseStore(data_dir / "test.db")
    await s.initialize()
    return s


@pytest.fixture
def mock_llm() -> LLMService:
    """Return an LLMService that always answers with the rule-based engine."""
    return LLMService(LLMConfig(use_mock=True), client=None)
