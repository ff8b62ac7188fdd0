"""Mini README: Entry point CLI for launching the Sheet Ledger API.

This script exposes a Typer CLI that starts the FastAPI application with
configurable host, port, and production flags. Settings (including the
MongoDB connection string) are read from ``SHEETLEDGER_*`` environment
variables when options are omitted.
"""

from __future__ import annotations

import typer
import uvicorn

from sheetledger.configuration import get_settings
from sheetledger.logging_utils import configure_root_logger

cli = typer.Typer(help="Launch and manage the Sheet Ledger bookkeeping API.")


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

    # Browsers cannot open the 0.0.0.0 bind address, so point them at localhost.
    browser_host = "127.0.0.1" if effective_host in {"0.0.0.0", "::"} else effective_host
    backend = "MongoDB" if settings.mongodb_uri else "in-memory"
    typer.echo(
        f"Starting Sheet Ledger ({backend} store) on {effective_host}:{effective_port}.\n"
        f"Open your browser at http://{browser_host}:{effective_port}"
    )
    uvicorn.run(
        "sheetledger.interface.web_app:create_application",
        host=effective_host,
        port=effective_port,
        factory=True,
        reload=not production,
    )


if __name__ == "__main__":
    cli()
