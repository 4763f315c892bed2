"""HTTP API for the Email Productivity Agent.

Provides JSON endpoints for:
- The mock inbox and the per-email AI actions
- Prompt template management
- Reply drafts
- Per-email and general chat
- Health and model backend status
"""

from email_agent.web.app import create_app

__all__ = ["create_app"]
