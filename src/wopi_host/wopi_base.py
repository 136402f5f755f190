# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Base class for the WOPI host: components and interface factories.

WopiServerBase is the foundation layer, providing:

1. Configuration: WopiConfig instance at self.config
2. Resolver: DocumentResolver at self.resolver (DirectoryResolver by default)
3. Identity: IdentityProvider at self.identity (static placeholder by default)
4. Locks: DocumentLocks at self.locks for PutFile serialization
5. Interfaces: Lazy `api` (FastAPI) and `cli` (Click) properties

Class Hierarchy:
    WopiServerBase (this class)
        └── WopiProxy (wopi_proxy.py): adds lifecycle and WOPI handlers

Usage (testing without a server):
    proxy = WopiProxy(config=WopiConfig(storage_root=str(tmp_path)))
    info = await proxy.check_file_info("abc123")

Usage (production via proxy.api):
    proxy = WopiProxy(config=wopi_config_from_env())
    app = proxy.api  # FastAPI app with start/stop lifespan
"""

from __future__ import annotations

import asyncio
import json
from typing import TYPE_CHECKING

from .errors import WopiError
from .identity import IdentityProvider, StaticIdentityProvider
from .locks import DocumentLocks
from .storage import DirectoryResolver, DocumentResolver
from .wopi_config import WopiConfig

if TYPE_CHECKING:
    import click
    from fastapi import FastAPI


class WopiServerBase:
    """Foundation layer: config, resolver, identity, locks, interface factories.

    Attributes:
        config: WopiConfig instance with all configuration
        resolver: DocumentResolver used by every WOPI operation
        identity: IdentityProvider used by CheckFileInfo
        locks: DocumentLocks acquired by PutFile

    Properties:
        api: FastAPI app (lazy, created on first access)
        cli: Click CLI group (lazy, created on first access)

    Subclassed by WopiProxy which adds the WOPI protocol handlers.
    """

    def __init__(
        self,
        config: WopiConfig | None = None,
        resolver: DocumentResolver | None = None,
        identity: IdentityProvider | None = None,
    ):
        """Initialize base WOPI host.

        Args:
            config: WopiConfig instance. If None, creates default.
            resolver: Custom resolver. Defaults to a DirectoryResolver on
                config.storage_root.
            identity: Custom identity provider. Defaults to the static
                placeholder built from config.
        """
        self.config = config or WopiConfig()
        self.resolver: DocumentResolver = resolver or DirectoryResolver(
            self.config.storage_root, strict=self.config.strict_resolution
        )
        self.identity: IdentityProvider = identity or StaticIdentityProvider(
            user_id=self.config.default_user_id,
            can_write=self.config.default_user_can_write,
        )
        self.locks = DocumentLocks(enabled=self.config.serialize_writes)

    # -------------------------------------------------------------------------
    # Interface factories (lazy properties)
    # -------------------------------------------------------------------------

    @property
    def api(self) -> FastAPI:
        """FastAPI app with WOPI routes, health check and lifespan.

        Created on first access. Includes default lifespan that calls
        proxy.start() on startup and proxy.stop() on shutdown.

        Usage:
            uvicorn wopi_host.server:app
        """
        if not hasattr(self, "_api") or self._api is None:
            from .interface import create_app

            self._api = create_app(self)
        return self._api

    @property
    def cli(self) -> click.Group:
        """Click CLI group with document commands and `serve`.

        Usage:
            wopi-host --help
        """
        if not hasattr(self, "_cli") or self._cli is None:
            self._cli = self._create_cli()
        return self._cli

    def _create_cli(self) -> click.Group:
        """Build Click CLI: serve, info, get, put."""
        import click

        @click.group()
        @click.version_option(package_name="wopi-host")
        def cli() -> None:
            """WOPI host: CheckFileInfo, GetFile and PutFile over a storage directory."""
            pass

        def run(coro):
            try:
                return asyncio.run(coro)
            except WopiError as e:
                raise click.ClickException(f"{e} ({e.status_code})") from e

        @cli.command("serve")
        @click.option("--host", default="0.0.0.0", help="Bind host")
        @click.option("--port", "-p", default=self.config.port, help="Bind port")
        @click.option("--reload", is_flag=True, help="Enable auto-reload")
        def serve_cmd(host: str, port: int, reload: bool) -> None:
            """Start the API server."""
            import uvicorn

            uvicorn.run(
                "wopi_host.server:app",
                host=host,
                port=port,
                reload=reload,
                log_level=self.config.log_level,
            )

        @cli.command("info")
        @click.argument("document_id")
        def info_cmd(document_id: str) -> None:
            """Print CheckFileInfo for a document."""
            info = run(self.check_file_info(document_id))
            click.echo(json.dumps(info.to_wopi(), indent=2))

        @cli.command("get")
        @click.argument("document_id")
        @click.option("--output", "-o", type=click.Path(dir_okay=False), help="Output file")
        def get_cmd(document_id: str, output: str | None) -> None:
            """Write a document's contents to stdout or a file."""
            content = run(self.get_file(document_id))
            if output:
                with open(output, "wb") as fh:
                    fh.write(content)
            else:
                stdout = click.get_binary_stream("stdout")
                stdout.write(content)
                stdout.flush()

        @cli.command("put")
        @click.argument("document_id")
        @click.argument("source", type=click.File("rb"))
        def put_cmd(document_id: str, source) -> None:
            """Overwrite an existing document with the bytes of SOURCE."""
            content = source.read()
            run(self.put_file(document_id, content))
            click.echo(f"Saved {len(content)} bytes to {document_id}")

        return cli


__all__ = ["WopiServerBase"]
