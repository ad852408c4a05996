"""MCP server exposing the Figma tool registry."""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from typing import Any

from mcp import types
from mcp.server import NotificationOptions, Server
from mcp.server.models import InitializationOptions
from mcp.server.stdio import stdio_server

from figmamcp import __version__
from figmamcp.core.figma import FigmaClient
from figmamcp.core.query import QueryEvaluator
from figmamcp.models.config import ServerSettings
from figmamcp.tools import AVAILABLE_TOOLS, ToolContext, ToolDefinition
from figmamcp.utils.responses import error_response

logger = logging.getLogger(__name__)

SERVER_NAME = "figma-rest-mcp-server"


class FigmaMCPServer:
    """MCP server that dispatches tool calls to the Figma tool handlers."""

    def __init__(
        self,
        settings: ServerSettings,
        tools: Sequence[ToolDefinition] = AVAILABLE_TOOLS,
        client: FigmaClient | None = None,
        evaluator: QueryEvaluator | None = None,
    ) -> None:
        self.settings = settings
        self.tools: dict[str, ToolDefinition] = {tool.name: tool for tool in tools}
        self.client = client or FigmaClient(settings.figma, timeout=settings.http_timeout)
        self.evaluator = evaluator or QueryEvaluator(
            timeout=settings.query_timeout,
            start_method=settings.query_start_method,
        )
        self.context = ToolContext(
            client=self.client,
            evaluator=self.evaluator,
        )

        self.server = Server(SERVER_NAME)
        self._register_handlers()

        logger.info("Registered %s tools: %s", len(self.tools), ", ".join(self.tools))

    def _register_handlers(self) -> None:
        @self.server.list_tools()  # type: ignore
        async def handle_list_tools() -> list[types.Tool]:
            return [tool.to_mcp_tool() for tool in self.tools.values()]

        @self.server.call_tool()  # type: ignore
        async def handle_call_tool(
            name: str,
            arguments: dict[str, Any] | None,
        ) -> types.CallToolResult:
            return await self.call_tool(name, arguments)

    async def call_tool(
        self,
        name: str,
        arguments: dict[str, Any] | None,
    ) -> types.CallToolResult:
        """Dispatch one tool call; failures come back as error results."""
        tool = self.tools.get(name)
        if tool is None:
            return error_response(json.dumps({"error": f"Unknown tool: {name}"}))

        logger.debug("Calling tool %s", name)
        try:
            return await tool.invoke(arguments, self.context)
        except Exception as exc:
            logger.exception("Tool %s failed", name)
            return error_response(f"Error running {name}: {exc}")

    def initialization_options(self) -> InitializationOptions:
        return InitializationOptions(
            server_name=SERVER_NAME,
            server_version=__version__,
            capabilities=self.server.get_capabilities(
                notification_options=NotificationOptions(),
                experimental_capabilities={},
            ),
        )

    async def run_stdio(self) -> None:
        async with stdio_server() as (read_stream, write_stream):
            logger.info("Figma REST API MCP server running on stdio")
            await self.server.run(
                read_stream,
                write_stream,
                self.initialization_options(),
            )

    async def close(self) -> None:
        await self.client.close()
