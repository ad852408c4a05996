"""MCP server module for figmamcp."""

from figmamcp.mcp.server import FigmaMCPServer

__all__ = ["FigmaMCPServer"]
