"""Test helpers for building Figma documents, clients, and tool contexts."""

from __future__ import annotations

import copy
import json
from collections.abc import Callable
from typing import Any

import httpx
from mcp import types

from figmamcp.core.figma import FigmaClient
from figmamcp.core.query import QueryEvaluator
from figmamcp.models.config import FigmaConfig, ServerSettings
from figmamcp.tools.base import ToolContext

TEST_BASE_URL = "https://figma.test"
TEST_TOKEN = "figd_test_token"

_SAMPLE_DOCUMENT: dict[str, Any] = {
    "id": "0:0",
    "name": "Document",
    "type": "DOCUMENT",
    "children": [
        {
            "id": "0:1",
            "name": "Page 1",
            "type": "CANVAS",
            "children": [
                {
                    "id": "1:1",
                    "name": "Login Frame",
                    "type": "FRAME",
                    "children": [
                        {"id": "1:2", "name": "Title", "type": "TEXT", "characters": "Welcome back"},
                        {
                            "id": "1:3",
                            "name": "Primary Button",
                            "type": "INSTANCE",
                            "children": [
                                {"id": "1:4", "name": "Label", "type": "TEXT", "characters": "Sign in"},
                            ],
                        },
                        {
                            "id": "1:5",
                            "name": "Hidden Hint",
                            "type": "TEXT",
                            "characters": "secret",
                            "visible": False,
                        },
                        {
                            "id": "1:6",
                            "name": "Icon",
                            "type": "VECTOR",
                            "fills": [{"type": "SOLID"}],
                            "fillGeometry": [{"path": "M0 0L10 10L0 10Z", "windingRule": "NONZERO"}],
                            "strokeGeometry": [{"path": "M0 0L10 10"}],
                        },
                    ],
                },
                {
                    "id": "2:1",
                    "name": "Button",
                    "type": "COMPONENT",
                    "children": [
                        {"id": "2:2", "name": "Label", "type": "TEXT", "characters": ""},
                    ],
                },
            ],
        },
        {
            "id": "0:2",
            "name": "Archive",
            "type": "CANVAS",
            "visible": False,
            "children": [
                {"id": "3:1", "name": "Old Frame", "type": "FRAME", "children": []},
            ],
        },
    ],
}

VISIBLE_IDS = ["0:0", "0:1", "1:1", "1:2", "1:3", "1:4", "1:6", "2:1", "2:2"]


def sample_document() -> dict[str, Any]:
    """Return a fresh copy of the sample document tree."""
    return copy.deepcopy(_SAMPLE_DOCUMENT)


def make_settings(**overrides: Any) -> ServerSettings:
    values: dict[str, Any] = {
        "figma": FigmaConfig(access_token=TEST_TOKEN, base_url=TEST_BASE_URL),
    }
    values.update(overrides)
    return ServerSettings(**values)


Handler = Callable[[httpx.Request], httpx.Response]


def make_client(handler: Handler) -> FigmaClient:
    """Build a FigmaClient whose HTTP traffic is served by ``handler``."""
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return FigmaClient(
        FigmaConfig(access_token=TEST_TOKEN, base_url=TEST_BASE_URL),
        http_client=http_client,
    )


def route_json(routes: dict[str, Any], requests: list[httpx.Request] | None = None) -> Handler:
    """Serve JSON bodies keyed by request path; unknown paths get a 404."""

    def handler(request: httpx.Request) -> httpx.Response:
        if requests is not None:
            requests.append(request)
        body = routes.get(request.url.path)
        if body is None:
            return httpx.Response(404, text='{"status":404,"err":"Not found"}')
        if isinstance(body, httpx.Response):
            return body
        return httpx.Response(200, json=body)

    return handler


def make_context(
    handler: Handler,
    evaluator: QueryEvaluator | None = None,
) -> ToolContext:
    client = make_client(handler)
    return ToolContext(
        client=client,
        evaluator=evaluator or QueryEvaluator(timeout=10.0),
    )


def result_text(result: types.CallToolResult) -> str:
    assert len(result.content) == 1
    content = result.content[0]
    assert isinstance(content, types.TextContent)
    return content.text


def result_json(result: types.CallToolResult) -> Any:
    return json.loads(result_text(result))
