"""Pydantic data models for figmamcp."""

from figmamcp.models.config import (
    DEFAULT_BASE_URL,
    DEFAULT_PORT,
    ConfigError,
    FigmaConfig,
    ServerSettings,
)

__all__ = [
    "DEFAULT_BASE_URL",
    "DEFAULT_PORT",
    "ConfigError",
    "FigmaConfig",
    "ServerSettings",
]
