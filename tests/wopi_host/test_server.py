# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Tests for server module (ASGI entry point)."""

from __future__ import annotations

from fastapi import FastAPI


class TestServerModule:
    def test_app_is_fastapi(self):
        from wopi_host.server import app

        assert isinstance(app, FastAPI)

    def test_proxy_created(self):
        """_proxy is created from environment config."""
        from wopi_host.server import _proxy
        from wopi_host.wopi_proxy import WopiProxy

        assert isinstance(_proxy, WopiProxy)

    def test_app_is_proxy_api(self):
        from wopi_host.server import _proxy, app

        assert app is _proxy.api

    def test_wopi_routes_registered(self):
        from wopi_host.server import app

        assert app.url_path_for("wopi_check_file_info", file_id="x") == "/wopi/files/x"
        assert app.url_path_for("wopi_get_file", file_id="x") == "/wopi/files/x/contents"
        assert app.url_path_for("wopi_put_file", file_id="x") == "/wopi/files/x/contents"
        assert app.url_path_for("health") == "/health"
