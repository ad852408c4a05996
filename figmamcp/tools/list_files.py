"""list_files: files in a project, or account info when no project is given."""

from __future__ import annotations

import httpx
from mcp import types
from pydantic import BaseModel, Field

from figmamcp.core.figma import FigmaAPIError
from figmamcp.tools.base import ToolContext, ToolDefinition
from figmamcp.utils.responses import error_response, sanitize_text, text_response

DISCOVERY_STEPS = (
    "To list files:\n"
    "1. Use list_teams to get team IDs\n"
    "2. Use list_projects with team_id to get project IDs\n"
    "3. Use list_files with project_id to get files\n"
)


class ListFilesInput(BaseModel):
    project_id: str | None = Field(default=None, description="Project ID to list files from")


def _format_file(entry: dict) -> str:
    return "\n".join(
        [
            f"Name: {sanitize_text(entry.get('name'))}",
            f"Key: {entry.get('key')}",
            f"Last Modified: {entry.get('last_modified')}",
            f"Thumbnail: {entry.get('thumbnail_url') or 'N/A'}",
        ]
    )


async def list_files(params: ListFilesInput, context: ToolContext) -> types.CallToolResult:
    project_id = (params.project_id or "").strip()

    try:
        if project_id:
            data = await context.client.get_project_files(project_id)
        else:
            data = await context.client.get_me()
    except (FigmaAPIError, httpx.HTTPError) as exc:
        return error_response(f"Error accessing Figma API: {exc}")

    if project_id:
        files = data.get("files") or []
        if not files:
            return text_response("No files found in this project.")
        return text_response("\n\n".join(_format_file(entry) for entry in files))

    output = (
        f"Email: {data.get('email') or 'N/A'}\n"
        f"ID: {data.get('id') or 'N/A'}\n"
        f"Handle: {data.get('handle') or 'N/A'}\n\n"
    )
    if data.get("id"):
        output += DISCOVERY_STEPS
    return text_response(output)


LIST_FILES = ToolDefinition(
    name="list_files",
    description=(
        "List Figma files in a project. If no project_id is provided, returns user "
        "information and instructions. Use list_teams and list_projects to discover IDs."
    ),
    input_model=ListFilesInput,
    handler=list_files,
)
