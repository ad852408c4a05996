"""Main CLI entry point for figmamcp."""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click
from dotenv import find_dotenv, load_dotenv

from figmamcp import __version__
from figmamcp.ui.console import configure_logging


@click.group()
@click.version_option(version=__version__, prog_name="figmamcp")
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output")
@click.option(
    "--env-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Load environment variables from this file (default: ./.env when present)",
)
def cli(verbose: bool, env_file: Path | None) -> None:
    """Figma REST API tools for AI agents, served over MCP."""
    load_dotenv(dotenv_path=env_file or find_dotenv(usecwd=True))
    configure_logging(verbose)


@cli.command()
@click.option(
    "--transport",
    type=click.Choice(["stdio", "http"]),
    default="stdio",
    show_default=True,
    help="MCP transport to serve on",
)
@click.option("--host", help="Bind address for --transport http (env: HOST)")
@click.option("--port", type=int, help="Listen port for --transport http (env: PORT)")
@click.option("--base-url", help="Figma API base URL (env: FIGMA_BASE_URL)")
@click.option(
    "--query-timeout",
    type=float,
    help="Seconds a query_file program may run (env: FIGMA_QUERY_TIMEOUT)",
)
def serve(
    transport: str,
    host: str | None,
    port: int | None,
    base_url: str | None,
    query_timeout: float | None,
) -> None:
    """Start the Figma MCP server.

    Requires FIGMA_ACCESS_TOKEN. Over HTTP, set MCP_AUTH_TOKEN to require
    an Authorization header on every request.

    \b
    Examples:
      figmamcp serve
      figmamcp serve --transport http --port 4202
    """
    from figmamcp.cli.serve import run_serve

    run_serve(
        transport=transport,
        host=host,
        port=port,
        base_url=base_url,
        query_timeout=query_timeout,
    )


@cli.command("tools")
def tools_cmd() -> None:
    """List the tools exposed by the server."""
    from figmamcp.tools import get_all_tools
    from figmamcp.ui.console import err_console
    from figmamcp.ui.tables import tool_table

    err_console.print(tool_table(get_all_tools()))


@cli.command("query")
@click.argument("document_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("query")
@click.option(
    "--timeout",
    type=float,
    default=5.0,
    show_default=True,
    help="Seconds the query may run",
)
def query_cmd(document_file: Path, query: str, timeout: float) -> None:
    """Run a query program against a saved Figma file JSON.

    DOCUMENT_FILE may be a full GET /v1/files response or a bare node tree.
    """
    from figmamcp.core.query import QueryError, QueryEvaluator, QueryTimeoutError

    try:
        payload = json.loads(document_file.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        click.echo(f"Error: {document_file} is not valid JSON: {exc}", err=True)
        sys.exit(1)

    document = payload.get("document", payload) if isinstance(payload, dict) else payload
    evaluator = QueryEvaluator(timeout=timeout)
    try:
        outcome = evaluator.evaluate(document, query)
    except QueryTimeoutError as exc:
        click.echo(f"Error: query timed out after {exc.timeout:g} seconds", err=True)
        sys.exit(1)
    except QueryError as exc:
        click.echo(f"Error executing query: {exc}", err=True)
        sys.exit(1)

    click.echo(json.dumps(outcome.result, indent=2))


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
