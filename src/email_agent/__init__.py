"""Email Productivity Agent: mock inbox with AI triage, summaries and reply drafts."""

__version__ = "0.1.0"
