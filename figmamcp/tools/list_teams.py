"""list_teams: the authenticated user's account and team memberships."""

from __future__ import annotations

import httpx
from mcp import types
from pydantic import BaseModel

from figmamcp.core.figma import FigmaAPIError
from figmamcp.tools.base import ToolContext, ToolDefinition
from figmamcp.utils.responses import error_response, sanitize_text, text_response


class ListTeamsInput(BaseModel):
    """No arguments."""


async def list_teams(params: ListTeamsInput, context: ToolContext) -> types.CallToolResult:
    try:
        user = await context.client.get_me()
    except (FigmaAPIError, httpx.HTTPError) as exc:
        return error_response(f"Error accessing Figma API: {exc}")

    lines = [
        f"User: {user.get('email') or 'N/A'}",
        f"ID: {user.get('id') or 'N/A'}",
        "",
    ]
    teams = user.get("teams") or []
    if teams:
        lines.append("Teams:")
        for team in teams:
            lines.append(f"Name: {sanitize_text(team.get('name'))}")
            lines.append(f"ID: {team.get('id')}")
            lines.append("")
    else:
        lines.append(
            "No teams found. Personal Figma accounts may not have team access. "
            "You can still access files directly if you have the file key."
        )
    return text_response("\n".join(lines).strip())


LIST_TEAMS = ToolDefinition(
    name="list_teams",
    description=(
        "List teams that the authenticated user has access to. "
        "Returns user information and team IDs."
    ),
    input_model=ListTeamsInput,
    handler=list_teams,
)
