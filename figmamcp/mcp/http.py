"""Streamable-HTTP transport for the Figma MCP server.

``POST /mcp`` is served by a stateless ``StreamableHTTPSessionManager``;
other methods on ``/mcp`` get a JSON-RPC "method not allowed" error. When an
auth token is configured every request (except CORS preflight) must carry it
in the ``Authorization`` header, either raw or as ``Bearer <token>``.
"""

from __future__ import annotations

import logging
import secrets
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from mcp.server.streamable_http_manager import StreamableHTTPSessionManager
from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.middleware.cors import CORSMiddleware
from starlette.responses import JSONResponse
from starlette.routing import Route
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from figmamcp.mcp.server import FigmaMCPServer

logger = logging.getLogger(__name__)

MCP_PATH = "/mcp"


def jsonrpc_error(code: int, message: str, status_code: int) -> JSONResponse:
    return JSONResponse(
        {"jsonrpc": "2.0", "error": {"code": code, "message": message}, "id": None},
        status_code=status_code,
    )


def _extract_token(header_value: str) -> str:
    if header_value.startswith("Bearer "):
        return header_value[len("Bearer "):]
    return header_value


class BearerAuthMiddleware:
    """Reject HTTP requests whose Authorization header does not match."""

    def __init__(self, app: ASGIApp, token: str | None) -> None:
        self.app = app
        self.token = token

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if not self.token or scope["type"] != "http" or scope.get("method") == "OPTIONS":
            await self.app(scope, receive, send)
            return

        header_value: str | None = None
        for name, value in scope.get("headers", []):
            if name == b"authorization":
                header_value = value.decode("latin-1")
                break

        if not header_value:
            response = jsonrpc_error(
                -32001,
                "Authentication required. Please provide Authorization header.",
                401,
            )
        elif not secrets.compare_digest(
            _extract_token(header_value).encode(), self.token.encode()
        ):
            response = jsonrpc_error(-32002, "Invalid authentication token.", 403)
        else:
            await self.app(scope, receive, send)
            return

        await response(scope, receive, send)


class MCPEndpoint:
    """ASGI endpoint routing POST to the session manager."""

    def __init__(self, session_manager: StreamableHTTPSessionManager) -> None:
        self.session_manager = session_manager

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        method = scope.get("method")
        if method != "POST":
            logger.info("Received %s MCP request", method)
            response = jsonrpc_error(-32000, "Method not allowed.", 405)
            await response(scope, receive, send)
            return

        started = False

        async def tracking_send(message: Message) -> None:
            nonlocal started
            if message["type"] == "http.response.start":
                started = True
            await send(message)

        try:
            await self.session_manager.handle_request(scope, receive, tracking_send)
        except Exception:
            logger.exception("Error handling MCP request")
            if not started:
                response = jsonrpc_error(-32603, "Internal server error", 500)
                await response(scope, receive, send)


def create_http_app(mcp_server: FigmaMCPServer, auth_token: str | None = None) -> Starlette:
    """Build the ASGI app serving ``mcp_server`` over streamable HTTP."""
    session_manager = StreamableHTTPSessionManager(
        app=mcp_server.server,
        json_response=False,
        stateless=True,
    )

    @asynccontextmanager
    async def lifespan(_app: Starlette) -> AsyncIterator[None]:
        async with session_manager.run():
            yield
        await mcp_server.close()

    middleware = [
        Middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
            allow_headers=["*"],
            expose_headers=["Mcp-Session-Id"],
        ),
        Middleware(BearerAuthMiddleware, token=auth_token),
    ]
    return Starlette(
        routes=[Route(MCP_PATH, endpoint=MCPEndpoint(session_manager))],
        middleware=middleware,
        lifespan=lifespan,
    )


def run_http(mcp_server: FigmaMCPServer, host: str, port: int, auth_token: str | None = None) -> None:
    """Serve over HTTP until interrupted."""
    import uvicorn

    app = create_http_app(mcp_server, auth_token=auth_token)
    logger.info("Figma REST API MCP server listening on %s:%s", host, port)
    if auth_token:
        logger.info("Authentication enabled")
    else:
        logger.warning("No MCP_AUTH_TOKEN set - running without authentication")
    uvicorn.run(app, host=host, port=port, log_config=None)

