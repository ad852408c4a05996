"""Tests for environment-driven server settings."""

from __future__ import annotations

import pytest

from figmamcp.models.config import (
    DEFAULT_BASE_URL,
    DEFAULT_PORT,
    ConfigError,
    FigmaConfig,
    ServerSettings,
)


def test_defaults_from_minimal_environment() -> None:
    settings = ServerSettings.from_env({"FIGMA_ACCESS_TOKEN": "tok"})

    assert settings.figma == FigmaConfig(access_token="tok", base_url=DEFAULT_BASE_URL)
    assert settings.auth_token is None
    assert settings.host == "0.0.0.0"
    assert settings.port == DEFAULT_PORT == 4202
    assert settings.query_timeout == 5.0
    assert settings.http_timeout == 30.0
    assert settings.query_start_method == "spawn"


def test_missing_access_token() -> None:
    with pytest.raises(ConfigError, match="FIGMA_ACCESS_TOKEN environment variable is required"):
        ServerSettings.from_env({})


def test_blank_access_token() -> None:
    with pytest.raises(ConfigError):
        ServerSettings.from_env({"FIGMA_ACCESS_TOKEN": "   "})


def test_environment_values_are_parsed() -> None:
    settings = ServerSettings.from_env(
        {
            "FIGMA_ACCESS_TOKEN": "tok",
            "FIGMA_BASE_URL": "https://figma.internal/",
            "MCP_AUTH_TOKEN": "secret",
            "HOST": "127.0.0.1",
            "PORT": "8080",
            "FIGMA_QUERY_TIMEOUT": "2.5",
            "FIGMA_HTTP_TIMEOUT": "10",
            "FIGMA_QUERY_START_METHOD": "forkserver",
        }
    )

    assert settings.figma.base_url == "https://figma.internal"
    assert settings.auth_token == "secret"
    assert settings.host == "127.0.0.1"
    assert settings.port == 8080
    assert settings.query_timeout == 2.5
    assert settings.http_timeout == 10.0
    assert settings.query_start_method == "forkserver"


def test_overrides_win_and_none_is_ignored() -> None:
    settings = ServerSettings.from_env(
        {"FIGMA_ACCESS_TOKEN": "tok", "PORT": "8080", "FIGMA_BASE_URL": "https://env.test"},
        port=9090,
        host=None,
        base_url="https://flag.test",
        query_timeout=None,
    )

    assert settings.port == 9090
    assert settings.host == "0.0.0.0"
    assert settings.figma.base_url == "https://flag.test"
    assert settings.query_timeout == 5.0


def test_empty_auth_token_disables_auth() -> None:
    settings = ServerSettings.from_env({"FIGMA_ACCESS_TOKEN": "tok", "MCP_AUTH_TOKEN": ""})
    assert settings.auth_token is None


@pytest.mark.parametrize(
    "env",
    [
        {"PORT": "not-a-port"},
        {"PORT": "70000"},
        {"FIGMA_QUERY_TIMEOUT": "0"},
        {"FIGMA_HTTP_TIMEOUT": "-1"},
    ],
)
def test_invalid_values_raise_config_error(env: dict[str, str]) -> None:
    with pytest.raises(ConfigError, match="Invalid configuration"):
        ServerSettings.from_env({"FIGMA_ACCESS_TOKEN": "tok", **env})


def test_settings_are_immutable() -> None:
    settings = ServerSettings.from_env({"FIGMA_ACCESS_TOKEN": "tok"})
    with pytest.raises(ValueError):
        settings.port = 1  # type: ignore[misc]
