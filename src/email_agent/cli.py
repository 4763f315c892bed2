"""Command-line interface for the Email Productivity Agent.

Usage:
    python -m email_agent validate-config
    python -m email_agent init-db
    python -m email_agent serve --port 3001
    echo "Subject: Lunch?" | python -m email_agent respond --action reply
"""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

import click
from rich.console import Console

from email_agent.config import validate_config_file
from email_agent.core.logging import configure_logging
from email_agent.engine import ActionTag

console = Console()


@click.group()
@click.option("--debug/--no-debug", default=False, help="Enable debug logging")
def cli(debug: bool) -> None:
    """Email Productivity Agent - AI-assisted inbox triage and reply drafting."""
    log_level = "DEBUG" if debug else "INFO"
    # Use human-readable output for CLI, JSON for server
    configure_logging(log_level=log_level, json_output=False)


@cli.command("validate-config")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False, path_type=Path),
    default=None,
    help="Path to config file (default: config/config.yaml)",
)
def validate_config(config_path: Path | None) -> None:
    """Validate the configuration file.

    Checks that config.yaml exists and passes Pydantic schema validation.
    Reports specific errors for invalid fields.
    """
    console.print(f"Validating config: [cyan]{config_path or 'config/config.yaml'}[/cyan]")

    is_valid, message = validate_config_file(config_path)

    if is_valid:
        console.print(f"\n[green]✓[/green] {message}")
        sys.exit(0)
    else:
        console.print(f"\n[red]✗[/red] {message}")
        sys.exit(1)


@cli.command("init-db")
@click.option(
    "--seed/--no-seed",
    default=True,
    help="Add the mock inbox when the database has no emails",
)
def init_db(seed: bool) -> None:
    """Create the database tables and seed default data.

    Default prompt templates are always ensured; existing rows are never
    modified.
    """
    from email_agent.core.errors import DatabaseError
    from email_agent.web.app import load_app_config

    config = load_app_config()
    try:
        counts = asyncio.run(_init_db(config.database.path, seed))
    except DatabaseError as e:
        console.print(f"\n[red]Error:[/red] {e}")
        sys.exit(1)

    console.print(
        f"[green]✓[/green] Database ready at [cyan]{config.database.path}[/cyan] "
        f"({counts['emails']} emails, {counts['prompt_templates']} prompt templates added)"
    )


async def _init_db(db_path: str, seed: bool) -> dict[str, int]:
    from email_agent.db.seed import seed_defaults
    from email_agent.db.store import DatabaseStore

    store = DatabaseStore(db_path)
    await store.initialize()
    return await seed_defaults(store, include_inbox=seed)


@cli.command("serve")
@click.option("--host", default=None, help="Host to bind to (default: server.host from config)")
@click.option("--port", default=None, type=int, help="Port to bind to (default: server.port)")
def serve(host: str | None, port: int | None) -> None:
    """Start the API server."""
    import uvicorn

    from email_agent.web.app import create_app, load_app_config

    config = load_app_config()
    host = host or config.server.host
    port = port or config.server.port

    if host == "0.0.0.0":  # noqa: S104
        console.print(
            "[yellow]Warning:[/yellow] Binding to 0.0.0.0 exposes the server to the network.\n"
            "This app has no authentication. Use 127.0.0.1 for local-only access."
        )

    configure_logging(log_level=config.log_level, json_output=True)

    app = create_app(config)
    console.print(f"Starting server on [cyan]http://{host}:{port}[/cyan]")
    uvicorn.run(app, host=host, port=port, log_level=config.log_level.lower())


@cli.command("respond")
@click.argument("prompt", required=False)
@click.option(
    "--action",
    "-a",
    type=click.Choice([tag.value.lower() for tag in ActionTag]),
    default=None,
    help="Append an action marker so the request is answered as that action",
)
@click.option(
    "--mock/--no-mock",
    default=False,
    help="Always use the rule-based engine, even with an API key",
)
def respond(prompt: str | None, action: str | None, mock: bool) -> None:
    """Answer a prompt the way the API would.

    Reads PROMPT from the argument, or from stdin when omitted.
    """
    from email_agent.llm import build_llm_service
    from email_agent.web.app import load_app_config

    if prompt is None:
        prompt = sys.stdin.read()
    if action:
        prompt = f"{prompt}\n\n{ActionTag(action.upper()).marker}"

    config = load_app_config()
    llm_config = config.llm.model_copy(update={"use_mock": True}) if mock else config.llm
    llm = build_llm_service(llm_config)

    console.print(f"[dim]provider: {llm.provider}[/dim]")
    console.print(llm.complete(prompt), markup=False, highlight=False)


def main() -> None:
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
