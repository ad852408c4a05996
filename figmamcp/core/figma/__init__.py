"""Figma REST API access."""

from figmamcp.core.figma.client import FigmaAPIError, FigmaClient, normalize_file_key

__all__ = ["FigmaAPIError", "FigmaClient", "normalize_file_key"]
