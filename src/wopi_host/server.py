# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""ASGI application entry point for uvicorn.

This module provides the FastAPI application instance for deployment
with ASGI servers like uvicorn, hypercorn, or gunicorn+uvicorn.

Configuration via environment variables (see wopi_host.wopi_config):
    WOPI_STORAGE_ROOT: Directory holding the documents
    WOPI_PORT: Server port (default: 8000)
    WOPI_MAX_DOCUMENT_SIZE: Maximum PutFile body in bytes

Example:
    Run with uvicorn::

        WOPI_STORAGE_ROOT=/data/documents \\
            uvicorn wopi_host.server:app --host 0.0.0.0 --port 8000

    Or via CLI::

        wopi-host serve --port 8000

Note:
    The application includes a lifespan context manager that calls
    proxy.start() on startup and proxy.stop() on shutdown.
"""

from .wopi_config import wopi_config_from_env
from .wopi_proxy import WopiProxy

# Create proxy and expose its FastAPI app (includes lifespan management)
_proxy = WopiProxy(config=wopi_config_from_env())
app = _proxy.api
