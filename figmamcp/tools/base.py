"""Tool definition and invocation context shared by all tools."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

from mcp import types
from pydantic import BaseModel, ValidationError

from figmamcp.core.figma import FigmaClient
from figmamcp.core.query import QueryEvaluator
from figmamcp.utils.responses import error_response


@dataclass(frozen=True)
class ToolContext:
    """Collaborators handed to every tool handler."""

    client: FigmaClient
    evaluator: QueryEvaluator


ToolHandler = Callable[[Any, ToolContext], Awaitable[types.CallToolResult]]


def _format_validation_error(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(loc) for loc in error.get("loc", ())) or "arguments"
        parts.append(f"{location}: {error.get('msg', 'invalid value')}")
    return "; ".join(parts)


@dataclass(frozen=True)
class ToolDefinition:
    """A named operation with a declared input shape and an async handler."""

    name: str
    description: str
    input_model: type[BaseModel]
    handler: ToolHandler

    def input_schema(self) -> dict[str, Any]:
        return self.input_model.model_json_schema()

    def to_mcp_tool(self) -> types.Tool:
        return types.Tool(
            name=self.name,
            description=self.description,
            inputSchema=self.input_schema(),
        )

    async def invoke(
        self,
        arguments: dict[str, Any] | None,
        context: ToolContext,
    ) -> types.CallToolResult:
        """Validate raw arguments and run the handler."""
        try:
            params = self.input_model.model_validate(arguments or {})
        except ValidationError as exc:
            return error_response(
                f"Invalid arguments for {self.name}: {_format_validation_error(exc)}"
            )
        return await self.handler(params, context)
