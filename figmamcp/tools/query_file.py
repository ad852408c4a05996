"""query_file: run a sandboxed Python query over a file's document tree."""

from __future__ import annotations

import asyncio
import json

import httpx
from mcp import types
from pydantic import BaseModel, Field

from figmamcp.core.figma import FigmaAPIError, normalize_file_key
from figmamcp.core.query import QueryError, QueryTimeoutError
from figmamcp.tools.base import ToolContext, ToolDefinition
from figmamcp.utils.responses import error_response, text_response

QUERY_DESCRIPTION = """Execute Python code to query Figma design data. Returns only the data you specify. Hidden nodes (visible: False) are automatically excluded.

Nodes are dicts: use n['name'], n['type'], n.get('characters').

Available helpers:
- document: Root node of the design
- findById(id): Find node by ID
- findByType(type): Find all nodes of type (e.g., 'FRAME', 'TEXT', 'COMPONENT')
- findByName(name): Find nodes by exact name
- findByNameContains(substring): Find nodes whose name contains substring
- getAllText(): Get all text content
- getAllComponents(): Get all components
- getAllInstances(): Get all component instances
- getAllFrames(): Get all frames
- getChildren(nodeId): Get direct children of a node
- search(predicate): Search with custom function
- getAllNodes(): Get all nodes for advanced queries
- log(*values): Write a debug line to the server log

Example queries (single expression):
- [{'name': n['name'], 'text': n.get('characters')} for n in findByType('TEXT')]
- [{'name': page['name'], 'frameCount': len(page.get('children', []))} for page in document['children']]

Example queries (multi-line with return):
- buttons = findByNameContains('Button'); return [b['name'] for b in buttons]
- frame = findById('123:456'); return [n for n in frame['children'] if n['type'] == 'TEXT']"""


class QueryFileInput(BaseModel):
    file_key: str = Field(description="Figma file key or URL")
    query: str = Field(
        description=(
            "Python code to query the design data. Use `document` to access the root node, "
            "or use helper functions like findByType(), findByName(), findById(), getAllText()"
        )
    )


async def query_file(params: QueryFileInput, context: ToolContext) -> types.CallToolResult:
    file_key = normalize_file_key(params.file_key)
    query = params.query.strip()
    if not query:
        return error_response("Error executing query: query must not be empty")

    try:
        data = await context.client.get_file(file_key)
        outcome = await asyncio.to_thread(
            context.evaluator.evaluate,
            data.get("document"),
            query,
        )
    except QueryTimeoutError as exc:
        return error_response(
            f"Query timeout: execution took longer than {exc.timeout:g} seconds. "
            "Try a simpler query."
        )
    except (QueryError, FigmaAPIError, httpx.HTTPError) as exc:
        return error_response(f"Error executing query: {exc}")

    return text_response(
        json.dumps(
            {
                "file_name": data.get("name"),
                "file_key": file_key,
                "result": outcome.result,
            }
        )
    )


QUERY_FILE = ToolDefinition(
    name="query_file",
    description=QUERY_DESCRIPTION,
    input_model=QueryFileInput,
    handler=query_file,
)
