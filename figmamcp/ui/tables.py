"""Rich table formatters for CLI listings."""

from __future__ import annotations

from collections.abc import Iterable

from rich.table import Table

from figmamcp.tools.base import ToolDefinition


def _required_marker(name: str, required: set[str]) -> str:
    return name if name in required else f"{name}?"


def tool_table(tools: Iterable[ToolDefinition]) -> Table:
    """Build a table of tool names, parameters, and one-line summaries."""
    table = Table(title="Figma MCP Tools", show_lines=False, pad_edge=False)
    table.add_column("Tool", style="bold", no_wrap=True)
    table.add_column("Parameters", style="info")
    table.add_column("Description", style="muted")

    for tool in tools:
        schema = tool.input_schema()
        required = set(schema.get("required", []))
        params = ", ".join(
            _required_marker(name, required) for name in schema.get("properties", {})
        )
        summary = tool.description.strip().splitlines()[0]
        table.add_row(tool.name, params or "-", summary)
    return table
