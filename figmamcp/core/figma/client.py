"""Async client for the Figma REST API."""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from typing import Any

import httpx

from figmamcp import __version__
from figmamcp.models.config import FigmaConfig

logger = logging.getLogger(__name__)

_FILE_KEY_RE = re.compile(r"(?:file|design)/([a-zA-Z0-9]+)")
_MAX_DETAIL_CHARS = 500


class FigmaAPIError(Exception):
    """The Figma API answered with a non-success status."""

    def __init__(self, status_code: int, reason: str, details: str | None = None) -> None:
        message = f"Figma API error: {status_code} {reason}"
        if details:
            message = f"{message}. Details: {details}"
        super().__init__(message)
        self.status_code = status_code
        self.reason = reason
        self.details = details


def normalize_file_key(value: str) -> str:
    """Return the bare file key from a key or a figma.com file URL."""
    key = value.strip()
    if "figma.com" in key:
        match = _FILE_KEY_RE.search(key)
        if match:
            return match.group(1)
    return key


class FigmaClient:
    """Thin wrapper over the Figma REST endpoints used by the tools.

    No caching or retries; every non-2xx response raises ``FigmaAPIError``.
    """

    def __init__(
        self,
        config: FigmaConfig,
        *,
        timeout: float = 30.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self.config = config
        self.timeout = timeout
        self._http_client = http_client

    async def _get_http_client(self) -> httpx.AsyncClient:
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(timeout=self.timeout)
        return self._http_client

    async def _get_json(self, path: str, params: dict[str, str] | None = None) -> dict[str, Any]:
        url = f"{self.config.base_url.rstrip('/')}{path}"
        headers = {
            "X-Figma-Token": self.config.access_token,
            "User-Agent": f"figmamcp/{__version__}",
        }
        client = await self._get_http_client()
        logger.debug("GET %s params=%s", url, params)
        response = await client.get(url, params=params, headers=headers)
        if not response.is_success:
            details = response.text.strip()[:_MAX_DETAIL_CHARS] or None
            raise FigmaAPIError(response.status_code, response.reason_phrase, details)
        try:
            payload = response.json()
        except ValueError as exc:
            raise FigmaAPIError(
                response.status_code,
                response.reason_phrase,
                "invalid JSON in response body",
            ) from exc
        if not isinstance(payload, dict):
            raise FigmaAPIError(
                response.status_code,
                response.reason_phrase,
                "expected a JSON object in response body",
            )
        return payload

    async def get_me(self) -> dict[str, Any]:
        return await self._get_json("/v1/me")

    async def get_team_projects(self, team_id: str) -> dict[str, Any]:
        return await self._get_json(f"/v1/teams/{team_id}/projects")

    async def get_project_files(self, project_id: str) -> dict[str, Any]:
        return await self._get_json(f"/v1/projects/{project_id}/files")

    async def get_file(self, file_key: str, ids: Sequence[str] | None = None) -> dict[str, Any]:
        """Fetch a file's document tree, optionally scoped to node ids."""
        params = {"ids": ",".join(ids)} if ids else None
        return await self._get_json(f"/v1/files/{file_key}", params=params)

    async def get_images(
        self,
        file_key: str,
        ids: Sequence[str],
        image_format: str = "png",
    ) -> dict[str, Any]:
        params = {"ids": ",".join(ids), "format": image_format}
        return await self._get_json(f"/v1/images/{file_key}", params=params)

    async def close(self) -> None:
        if self._http_client:
            await self._http_client.aclose()
            self._http_client = None
