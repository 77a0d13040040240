#!/usr/bin/env python3
"""
Main CLI entry point for the Stockroom server.
"""

import os
import sys

import click
import uvicorn

from stockroom import __version__
from stockroom.logging import configure_logging, get_logger

logger = get_logger(__name__)


@click.group()
@click.version_option(version=__version__, prog_name="stockroom")
def cli() -> None:
    """Stockroom CLI - run the product GraphQL gateway."""
    pass


@cli.command()
@click.option("--host", default=None, help="Host to bind to (default: STOCKROOM_API_HOST)")
@click.option(
    "--port", default=None, type=int, help="Port to bind to (default: STOCKROOM_API_PORT)"
)
@click.option(
    "--reload",
    is_flag=True,
    default=False,
    help="Enable auto-reload for development (default: STOCKROOM_API_RELOAD)",
)
@click.option(
    "--log-level",
    default="info",
    type=click.Choice(["debug", "info", "warning", "error"]),
    help="Log level (default: info)",
)
def serve(host: str | None, port: int | None, reload: bool, log_level: str) -> None:
    """Start the Stockroom API server."""
    from stockroom.config import settings

    debug = log_level == "debug"
    configure_logging(debug=debug, log_level=log_level)

    host = host or settings.api_host
    port = port or settings.api_port
    reload = reload or settings.api_reload

    # The app module configures logging from settings on import
    settings.debug = debug
    settings.log_level = log_level.upper()

    # Reload spawns a fresh interpreter, which only sees the environment
    if debug:
        os.environ["STOCKROOM_DEBUG"] = "true"
    os.environ["STOCKROOM_LOG_LEVEL"] = log_level

    logger.info(
        "Server running",
        url=f"http://{host}:{port}/graphql",
        store_backend=settings.store_backend,
        reload=reload,
    )

    try:
        if reload:
            uvicorn.run(
                "stockroom.api.app:app",
                host=host,
                port=port,
                reload=True,
                log_level=log_level,
            )
        else:
            from stockroom.api.app import app

            uvicorn.run(app, host=host, port=port, log_level=log_level)
    except KeyboardInterrupt:
        logger.info("Server shutdown requested by user")
    except Exception as e:
        logger.error("Server startup failed", error=str(e))
        sys.exit(1)


@cli.command()
def check() -> None:
    """Validate the GraphQL schema and connect to the product store."""
    import asyncio

    from stockroom.config import settings
    from stockroom.graphql.schema import validate_schema
    from stockroom.store import create_product_store

    configure_logging()

    try:
        validate_schema()
    except Exception as e:
        click.echo(f"✗ GraphQL schema invalid: {e}", err=True)
        sys.exit(1)
    click.echo("✓ GraphQL schema valid")

    async def do_check():
        store = await create_product_store(settings)
        await store.close()

    try:
        asyncio.run(do_check())
    except Exception as e:
        logger.error("Product store check failed", error=str(e))
        click.echo(f"✗ Product store unavailable: {e}", err=True)
        sys.exit(1)
    click.echo(f"✓ Product store reachable ({settings.store_backend})")


def main():
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    cli()
