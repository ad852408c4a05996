"""export_images: render nodes to SVG/PNG/JPG and return download URLs."""

from __future__ import annotations

from typing import Literal

import httpx
from mcp import types
from pydantic import BaseModel, Field

from figmamcp.core.figma import FigmaAPIError, normalize_file_key
from figmamcp.tools.base import ToolContext, ToolDefinition
from figmamcp.utils.responses import error_response, text_response


class ExportImagesInput(BaseModel):
    file_key: str = Field(description="Figma file key or URL")
    node_ids: list[str] = Field(description="Node IDs to export as images (required)")
    format: Literal["svg", "png", "jpg"] = Field(
        default="png",
        description="Image export format",
    )


def clean_node_ids(node_ids: list[str]) -> list[str]:
    """Trim ids and drop the empty ones."""
    return [node_id.strip() for node_id in node_ids if node_id.strip()]


async def export_images(params: ExportImagesInput, context: ToolContext) -> types.CallToolResult:
    file_key = normalize_file_key(params.file_key)
    node_ids = clean_node_ids(params.node_ids)
    if not node_ids:
        return error_response("Error fetching nodes: node_ids are required for image exports")

    try:
        data = await context.client.get_images(file_key, node_ids, params.format)
    except (FigmaAPIError, httpx.HTTPError) as exc:
        return error_response(f"Error fetching nodes: {exc}")

    lines: list[str] = []
    if data.get("err"):
        lines.append(f"Error: {data['err']}")
    for node_id, url in (data.get("images") or {}).items():
        lines.append(f"{node_id}: {url}")
    return text_response("".join(f"{line}\n" for line in lines))


EXPORT_IMAGES = ToolDefinition(
    name="export_images",
    description=(
        "Export Figma nodes as images (SVG, PNG, JPG). Requires node_ids. "
        "Returns image URLs for download."
    ),
    input_model=ExportImagesInput,
    handler=export_images,
)
