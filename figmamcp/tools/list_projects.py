"""list_projects: projects within a team."""

from __future__ import annotations

import httpx
from mcp import types
from pydantic import BaseModel, Field

from figmamcp.core.figma import FigmaAPIError
from figmamcp.tools.base import ToolContext, ToolDefinition
from figmamcp.utils.responses import error_response, sanitize_text, text_response


class ListProjectsInput(BaseModel):
    team_id: str = Field(description="Team ID to list projects from")


async def list_projects(params: ListProjectsInput, context: ToolContext) -> types.CallToolResult:
    team_id = params.team_id.strip()
    if not team_id:
        return error_response("Error accessing Figma API: team_id is required")

    try:
        data = await context.client.get_team_projects(team_id)
    except (FigmaAPIError, httpx.HTTPError) as exc:
        return error_response(f"Error accessing Figma API: {exc}")

    projects = data.get("projects") or []
    if not projects:
        return text_response("No projects found in this team.")

    blocks = [
        f"Name: {sanitize_text(project.get('name'))}\nID: {project.get('id')}"
        for project in projects
    ]
    return text_response("\n\n".join(blocks))


LIST_PROJECTS = ToolDefinition(
    name="list_projects",
    description="List all projects in a Figma team. Requires team_id from list_teams.",
    input_model=ListProjectsInput,
    handler=list_projects,
)
