# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""HTTP client for the WOPI host.

This module provides WopiHostClient for programmatic access to a running
WOPI host, with support for both sync and async contexts.

Features:
    - Auto-detects sync/async context (via @smartasync)
    - Persistent connection registration for REPL use
    - Typed FileInfo dataclass for CheckFileInfo responses

Example:
    Async usage::

        client = WopiHostClient("http://localhost:8000")
        info = await client.check_file_info("abc123")
        data = await client.get_file("abc123")
        await client.put_file("abc123", b"new content")

    Sync usage (in REPL)::

        client = connect("http://localhost:8000")
        info = client.check_file_info("abc123")

    Registered connection::

        register_connection("prod", "https://wopi.example.com")
        client = connect("prod")  # Uses registered URL
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any
from urllib.parse import quote

import httpx
from genro_toolbox import smartasync

# Connection registry for REPL convenience
_connections: dict[str, dict[str, Any]] = {}


def register_connection(name: str, url: str, timeout: float = 30.0) -> None:
    """Register a named connection for easy reuse.

    Args:
        name: Connection name for later reference.
        url: WOPI host base URL.
        timeout: Request timeout in seconds.
    """
    _connections[name] = {"url": url, "timeout": timeout}


def connect(url_or_name: str, timeout: float = 30.0) -> WopiHostClient:
    """Create a WopiHostClient, optionally using a registered connection.

    Args:
        url_or_name: Either a URL or a registered connection name.
        timeout: Request timeout (ignored if using registered connection).
    """
    if url_or_name in _connections:
        conn = _connections[url_or_name]
        return WopiHostClient(conn["url"], timeout=conn["timeout"])
    return WopiHostClient(url_or_name, timeout=timeout)


@dataclass
class FileInfo:
    """CheckFileInfo response."""

    base_file_name: str
    size: int
    user_id: str | None = None
    user_can_write: bool = False
    version: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> FileInfo:
        """Create FileInfo from the WOPI JSON dict."""
        known = {"BaseFileName", "Size", "UserId", "UserCanWrite", "Version"}
        extra = {k: v for k, v in data.items() if k not in known}
        user_id = data.get("UserId")
        return cls(
            base_file_name=data["BaseFileName"],
            size=data["Size"],
            user_id=str(user_id) if user_id is not None else None,
            user_can_write=data.get("UserCanWrite", False),
            version=data.get("Version"),
            extra=extra,
        )


class WopiHostClient:
    """HTTP client for the WOPI file endpoints.

    Non-2xx responses raise ``httpx.HTTPStatusError``.

    Example:
        >>> client = WopiHostClient("http://localhost:8000")
        >>> info = await client.check_file_info("abc123")
        >>> info.base_file_name
        'abc123.docx'
    """

    def __init__(self, base_url: str, timeout: float = 30.0):
        """Initialize client.

        Args:
            base_url: WOPI host base URL (without the /wopi prefix).
            timeout: Request timeout in seconds.
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def _files_url(self, file_id: str, contents: bool = False) -> str:
        url = f"{self.base_url}/wopi/files/{quote(file_id, safe='')}"
        return f"{url}/contents" if contents else url

    async def _get(self, url: str) -> httpx.Response:
        """Perform GET request."""
        async with httpx.AsyncClient(timeout=self.timeout) as http:
            resp = await http.get(url)
            resp.raise_for_status()
            return resp

    async def _post(self, url: str, content: bytes) -> httpx.Response:
        """Perform POST request with a raw body."""
        async with httpx.AsyncClient(timeout=self.timeout) as http:
            resp = await http.post(
                url,
                content=content,
                headers={"Content-Type": "application/octet-stream"},
            )
            resp.raise_for_status()
            return resp

    @smartasync
    async def check_file_info(self, file_id: str) -> FileInfo:
        """CheckFileInfo for a document."""
        resp = await self._get(self._files_url(file_id))
        return FileInfo.from_dict(resp.json())

    @smartasync
    async def get_file(self, file_id: str) -> bytes:
        """GetFile: whole document content."""
        resp = await self._get(self._files_url(file_id, contents=True))
        return resp.content

    @smartasync
    async def put_file(self, file_id: str, content: bytes) -> str | None:
        """PutFile: overwrite a document.

        Returns:
            The new X-WOPI-ItemVersion, if the host sent one.
        """
        resp = await self._post(self._files_url(file_id, contents=True), content)
        return resp.headers.get("X-WOPI-ItemVersion")

    @smartasync
    async def health(self) -> dict[str, Any]:
        """Health check.

        Returns:
            Dict with 'status': 'ok'.
        """
        resp = await self._get(f"{self.base_url}/health")
        return resp.json()


__all__ = [
    "FileInfo",
    "WopiHostClient",
    "connect",
    "register_connection",
]
