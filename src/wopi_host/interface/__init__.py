# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Interface layer for the HTTP API.

Components:
    create_app: FastAPI application factory.
    register_wopi_endpoints: Register the WOPI file routes on an app or router.

Example:
    Create a FastAPI application::

        from wopi_host.interface import create_app
        from wopi_host.wopi_proxy import WopiProxy

        app = create_app(WopiProxy())
"""

from .api_base import WOPI_PREFIX, create_app, register_wopi_endpoints

__all__ = [
    "WOPI_PREFIX",
    "create_app",
    "register_wopi_endpoints",
]
