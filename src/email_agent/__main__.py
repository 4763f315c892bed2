"""Entry point for running the agent as a module.

Usage:
    python -m email_agent serve
    python -m email_agent --help
"""

from dotenv import load_dotenv

load_dotenv()  # Load .env before any other imports that need env vars

from email_agent.cli import main  # noqa: E402

if __name__ == "__main__":
    main()
