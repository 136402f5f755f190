# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""HTTP client for connecting to a WOPI host.

Example:
    >>> from wopi_host.http_client import WopiHostClient, connect
    >>> host = WopiHostClient("http://localhost:8000")
    >>> host.health()
    {'status': 'ok'}
"""

from .client import FileInfo, WopiHostClient, connect, register_connection

__all__ = [
    "FileInfo",
    "WopiHostClient",
    "connect",
    "register_connection",
]
