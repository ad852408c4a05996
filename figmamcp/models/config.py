"""Runtime configuration models."""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

DEFAULT_BASE_URL = "https://api.figma.com"
DEFAULT_PORT = 4202


class ConfigError(ValueError):
    """Raised when required configuration is missing or invalid."""


class FigmaConfig(BaseModel):
    """Credentials and endpoint for the Figma REST API."""

    model_config = ConfigDict(frozen=True)

    access_token: str = Field(min_length=1)
    base_url: str = DEFAULT_BASE_URL


class ServerSettings(BaseModel):
    """Settings for one server process."""

    model_config = ConfigDict(frozen=True)

    figma: FigmaConfig
    auth_token: str | None = None
    host: str = "0.0.0.0"
    port: int = Field(default=DEFAULT_PORT, ge=1, le=65535)
    query_timeout: float = Field(default=5.0, gt=0)
    http_timeout: float = Field(default=30.0, gt=0)
    query_start_method: str = "spawn"

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        **overrides: Any,
    ) -> ServerSettings:
        """Build settings from environment variables.

        Keyword overrides (typically CLI flags) win over the environment;
        ``None`` overrides are ignored.
        """
        env = os.environ if environ is None else environ
        overrides = {k: v for k, v in overrides.items() if v is not None}

        access_token = overrides.pop("access_token", None) or env.get("FIGMA_ACCESS_TOKEN", "")
        if not access_token.strip():
            raise ConfigError("FIGMA_ACCESS_TOKEN environment variable is required")
        base_url = overrides.pop("base_url", None) or env.get("FIGMA_BASE_URL") or DEFAULT_BASE_URL

        values: dict[str, Any] = {
            "figma": {"access_token": access_token.strip(), "base_url": base_url.rstrip("/")},
            "auth_token": env.get("MCP_AUTH_TOKEN") or None,
        }
        for field_name, env_name in (
            ("host", "HOST"),
            ("port", "PORT"),
            ("query_timeout", "FIGMA_QUERY_TIMEOUT"),
            ("http_timeout", "FIGMA_HTTP_TIMEOUT"),
            ("query_start_method", "FIGMA_QUERY_START_METHOD"),
        ):
            raw = env.get(env_name)
            if raw:
                values[field_name] = raw
        values.update(overrides)

        try:
            return cls.model_validate(values)
        except ValidationError as exc:
            raise ConfigError(f"Invalid configuration: {exc}") from exc
