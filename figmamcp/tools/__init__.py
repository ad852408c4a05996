"""MCP tools over the Figma REST API."""

from figmamcp.tools.base import ToolContext, ToolDefinition
from figmamcp.tools.export_images import EXPORT_IMAGES
from figmamcp.tools.get_node_details import GET_NODE_DETAILS
from figmamcp.tools.list_files import LIST_FILES
from figmamcp.tools.list_projects import LIST_PROJECTS
from figmamcp.tools.list_teams import LIST_TEAMS
from figmamcp.tools.query_file import QUERY_FILE
from figmamcp.tools.registry import AVAILABLE_TOOLS, get_all_tools, get_tool_by_name

__all__ = [
    "AVAILABLE_TOOLS",
    "EXPORT_IMAGES",
    "GET_NODE_DETAILS",
    "LIST_FILES",
    "LIST_PROJECTS",
    "LIST_TEAMS",
    "QUERY_FILE",
    "ToolContext",
    "ToolDefinition",
    "get_all_tools",
    "get_tool_by_name",
]
