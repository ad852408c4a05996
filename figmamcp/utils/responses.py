"""Helpers for building MCP tool results."""

from __future__ import annotations

import copy
import json
import re
from typing import Any

from mcp import types

_ZERO_WIDTH_RE = re.compile("[\u200b-\u200d\ufeff]")
_CONTROL_RE = re.compile("[\x00-\x09\x0b-\x1f\x7f]")
_WHITESPACE_RE = re.compile(r"\s+")


def _strip_base64(value: Any) -> None:
    if isinstance(value, dict):
        for key in list(value):
            if str(key).lower() == "base64":
                del value[key]
                continue
            _strip_base64(value[key])
    elif isinstance(value, list):
        for item in value:
            _strip_base64(item)


def text_response(text: str) -> types.CallToolResult:
    return types.CallToolResult(
        content=[types.TextContent(type="text", text=text)],
        isError=False,
    )


def success_response(data: Any) -> types.CallToolResult:
    """Serialize ``data`` as JSON text, never including raw base64 payloads."""
    sanitized = copy.deepcopy(data)
    _strip_base64(sanitized)
    return text_response(json.dumps(sanitized, default=str))


def error_response(message: str) -> types.CallToolResult:
    return types.CallToolResult(
        content=[types.TextContent(type="text", text=message)],
        isError=True,
    )


def sanitize_text(value: str | None) -> str:
    """Collapse whitespace and drop invisible characters from API-provided text."""
    if not value:
        return ""
    text = str(value).replace("\u00a0", " ")
    text = _ZERO_WIDTH_RE.sub("", text)
    text = _CONTROL_RE.sub("", text)
    return _WHITESPACE_RE.sub(" ", text).strip()
