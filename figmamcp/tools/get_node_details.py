"""get_node_details: properties of specific nodes with children summarized."""

from __future__ import annotations

from typing import Any

import httpx
from mcp import types
from pydantic import BaseModel, Field

from figmamcp.core.figma import FigmaAPIError, normalize_file_key
from figmamcp.core.query.strip import GEOMETRY_KEYS
from figmamcp.tools.base import ToolContext, ToolDefinition
from figmamcp.tools.export_images import clean_node_ids
from figmamcp.utils.responses import error_response, success_response


class GetNodeDetailsInput(BaseModel):
    file_key: str = Field(description="Figma file key or URL")
    node_ids: list[str] = Field(description="Array of node IDs to retrieve (required)")


def find_node_by_id(root: Any, node_id: str) -> dict[str, Any] | None:
    """Pre-order search of the raw tree, hidden nodes included."""
    stack = [root]
    while stack:
        node = stack.pop()
        if not isinstance(node, dict):
            continue
        if node.get("id") == node_id:
            return node
        children = node.get("children")
        if isinstance(children, list):
            stack.extend(reversed(children))
    return None


def summarize_node(node: dict[str, Any]) -> dict[str, Any]:
    """Shallow copy without geometry; children become a count and id list."""
    summary: dict[str, Any] = {}
    for key, value in node.items():
        if key in GEOMETRY_KEYS:
            continue
        if key == "children":
            if value:
                summary["children_count"] = len(value)
                summary["children_ids"] = [
                    {"id": child.get("id"), "name": child.get("name"), "type": child.get("type")}
                    for child in value
                ]
            continue
        summary[key] = value
    return summary


async def get_node_details(params: GetNodeDetailsInput, context: ToolContext) -> types.CallToolResult:
    file_key = normalize_file_key(params.file_key)
    node_ids = clean_node_ids(params.node_ids)
    if not node_ids:
        return error_response("Error fetching node details: At least one node_id is required")

    try:
        data = await context.client.get_file(file_key, ids=node_ids)
    except (FigmaAPIError, httpx.HTTPError) as exc:
        return error_response(f"Error fetching node details: {exc}")

    document = data.get("document")
    nodes: dict[str, Any] = {}
    for node_id in node_ids:
        node = find_node_by_id(document, node_id)
        if node is not None:
            nodes[node_id] = summarize_node(node)

    return success_response({"name": data.get("name"), "nodes": nodes})


GET_NODE_DETAILS = ToolDefinition(
    name="get_node_details",
    description=(
        "Get JSON details for specific nodes WITHOUT nested children. Returns node "
        "properties, styles, and child IDs only. Children are replaced with count and "
        "ID list to prevent context explosion."
    ),
    input_model=GetNodeDetailsInput,
    handler=get_node_details,
)
