"""Figma REST API tool registry.

Ordered by workflow:
1. Discovery: list_teams -> list_projects -> list_files
2. Query: query_file (run Python to query/filter design data)
3. Details: get_node_details (specific node properties)
4. Export: export_images (asset download)
"""

from __future__ import annotations

from figmamcp.tools.base import ToolDefinition
from figmamcp.tools.export_images import EXPORT_IMAGES
from figmamcp.tools.get_node_details import GET_NODE_DETAILS
from figmamcp.tools.list_files import LIST_FILES
from figmamcp.tools.list_projects import LIST_PROJECTS
from figmamcp.tools.list_teams import LIST_TEAMS
from figmamcp.tools.query_file import QUERY_FILE

AVAILABLE_TOOLS: tuple[ToolDefinition, ...] = (
    LIST_TEAMS,
    LIST_PROJECTS,
    LIST_FILES,
    QUERY_FILE,
    GET_NODE_DETAILS,
    EXPORT_IMAGES,
)


def get_all_tools() -> tuple[ToolDefinition, ...]:
    return AVAILABLE_TOOLS


def get_tool_by_name(name: str) -> ToolDefinition | None:
    for tool in AVAILABLE_TOOLS:
        if tool.name == name:
            return tool
    return None
