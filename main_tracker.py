"""Mini README: Entry point CLI for the daily cost tracker.

Commands:
    * run - serve the FastAPI application through uvicorn.
    * init-db - create the products table on the configured backend.
    * stats - print current totals as JSON.

Settings come from ``DAILYCOST_*`` environment variables (plus ``PORT`` and
``DATABASE_URL``); command options override host and port.
"""

from __future__ import annotations

import json

import typer
import uvicorn

from dailycost.configuration import get_settings
from dailycost.logging_utils import configure_root_logger
from dailycost.storage import create_gateway

cli = typer.Typer(help="Track purchases and their cost per day of ownership.")


@cli.command()
def run(
    host: str = typer.Option(None, help="Host interface to bind."),
    port: int = typer.Option(None, help="Port to listen on."),
    production: bool = typer.Option(
        False, help="Use production server settings (disable auto-reload)."
    ),
) -> None:
    """Start the FastAPI application using uvicorn."""

    settings = get_settings()
    effective_host = host or settings.interface_host
    effective_port = port or settings.interface_port
    configure_root_logger(settings.log_level)

    # 0.0.0.0 and :: are bind-all sentinels, not addresses a browser can open.
    browser_host = "127.0.0.1" if effective_host in {"0.0.0.0", "::"} else effective_host
    typer.echo(
        f"Starting daily cost tracker on {effective_host}:{effective_port}.\n"
        f"Open your browser at http://{browser_host}:{effective_port}"
    )
    uvicorn.run(
        "dailycost.interface.web_app:create_application",
        host=effective_host,
        port=effective_port,
        factory=True,
        reload=not production,
    )


@cli.command("init-db")
def init_db() -> None:
    """Create the products table if it does not exist."""

    settings = get_settings()
    configure_root_logger(settings.log_level)
    gateway = create_gateway(settings)
    try:
        gateway.init_schema()
    finally:
        gateway.dispose()
    typer.echo(f"Products table ready on {gateway.describe_backend()} backend.")


@cli.command()
def stats() -> None:
    """Print product totals and the average daily cost."""

    settings = get_settings()
    configure_root_logger(settings.log_level)
    gateway = create_gateway(settings)
    try:
        gateway.init_schema()
        statistics = gateway.get_statistics()
    finally:
        gateway.dispose()
    typer.echo(json.dumps(statistics.as_dict(), indent=2))


if __name__ == "__main__":
    cli()
