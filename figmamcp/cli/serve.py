"""Serve command implementation."""

from __future__ import annotations

import asyncio
import logging
import sys

import click

from figmamcp.models.config import ConfigError, ServerSettings

logger = logging.getLogger(__name__)


def run_serve(
    *,
    transport: str,
    host: str | None,
    port: int | None,
    base_url: str | None,
    query_timeout: float | None,
) -> None:
    """Run the MCP server on the requested transport.

    Args:
        transport: ``stdio`` or ``http``
        host: Bind address for the HTTP transport
        port: Listen port for the HTTP transport
        base_url: Figma API base URL override
        query_timeout: Per-query execution budget in seconds
    """
    try:
        settings = ServerSettings.from_env(
            host=host,
            port=port,
            base_url=base_url,
            query_timeout=query_timeout,
        )
    except ConfigError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)

    from figmamcp.mcp.server import FigmaMCPServer

    server = FigmaMCPServer(settings)

    if transport == "http":
        from figmamcp.mcp.http import run_http

        run_http(server, settings.host, settings.port, auth_token=settings.auth_token)
        return

    async def main() -> None:
        try:
            await server.run_stdio()
        finally:
            await server.close()

    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Shutting down server")
