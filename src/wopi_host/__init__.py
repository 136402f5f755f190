# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""wopi-host: minimal WOPI file host.

This package exposes the three WOPI operations an online document editor
(Collabora Online, OnlyOffice, Microsoft 365) needs to open and save a file:
CheckFileInfo, GetFile and PutFile. Documents live in a flat storage
directory as ``<document_id>.<extension>`` and are looked up regardless of
their extension.

Main components:
    WopiConfig: Configuration dataclass
    WopiProxy: Main service with WOPI protocol handlers
    wopi_config_from_env: Factory to build config from environment

Usage:
    from wopi_host import WopiProxy, WopiConfig

    config = WopiConfig(storage_root="/data/documents")
    proxy = WopiProxy(config=config)
    app = proxy.api  # FastAPI application
"""

__version__ = "0.1.0"

from .wopi_config import WopiConfig, wopi_config_from_env
from .wopi_proxy import CheckFileInfoResponse, WopiProxy

__all__ = [
    "CheckFileInfoResponse",
    "WopiConfig",
    "WopiProxy",
    "wopi_config_from_env",
    "main",
]


def main() -> None:
    """CLI entry point. Creates a WopiProxy from the environment and runs the CLI."""
    proxy = WopiProxy(config=wopi_config_from_env())
    proxy.cli()
