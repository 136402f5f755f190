# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Main WopiProxy class: WOPI protocol implementation.

WopiProxy extends WopiServerBase with the three WOPI file operations a
document editor needs. Each one resolves the document id first, performs
one storage access and returns a value or raises a WopiError:

    CheckFileInfo  ->  CheckFileInfoResponse
    GetFile        ->  bytes
    PutFile        ->  NodeStat of the saved file

Usage:
    from wopi_host import WopiConfig, WopiProxy

    proxy = WopiProxy(config=WopiConfig(storage_root="/data/documents"))

    # As FastAPI app
    app = proxy.api

    # Or call the handlers directly
    info = await proxy.check_file_info("abc123")
    data = await proxy.get_file("abc123")
    await proxy.put_file("abc123", b"new content")
"""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from .errors import InvalidInput, PayloadTooLarge
from .identity import IdentityProvider
from .storage import DocumentResolver, NodeStat
from .wopi_base import WopiServerBase
from .wopi_config import WopiConfig

logger = logging.getLogger(__name__)


class CheckFileInfoResponse(BaseModel):
    """CheckFileInfo payload. Serialized with WOPI property names."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    base_file_name: str = Field(alias="BaseFileName")
    size: int = Field(alias="Size")
    user_id: str = Field(alias="UserId")
    user_can_write: bool = Field(alias="UserCanWrite")
    version: str = Field(alias="Version")

    def to_wopi(self) -> dict:
        """Return the JSON-ready dict keyed by WOPI property names."""
        return self.model_dump(by_alias=True)


class WopiProxy(WopiServerBase):
    """WOPI file host service.

    Attributes:
        config: WopiConfig instance
        resolver: DocumentResolver for id -> storage object
        identity: IdentityProvider for CheckFileInfo placeholders
        locks: DocumentLocks serializing PutFile per document
    """

    def __init__(
        self,
        config: WopiConfig | None = None,
        resolver: DocumentResolver | None = None,
        identity: IdentityProvider | None = None,
    ):
        """Initialize WopiProxy.

        Args:
            config: WopiConfig instance. If None, creates default.
            resolver: Optional custom DocumentResolver.
            identity: Optional custom IdentityProvider.
        """
        super().__init__(config, resolver=resolver, identity=identity)
        self._active = False

    async def start(self) -> None:
        """Start the WOPI host."""
        root = Path(self.config.storage_root)
        if not root.is_dir():
            logger.warning(f"Storage root {root} is not a directory")
        self._active = True
        logger.info(f"WopiProxy '{self.config.instance_name}' started (storage_root={root})")

    async def stop(self) -> None:
        """Stop the WOPI host."""
        self._active = False
        logger.info(f"WopiProxy '{self.config.instance_name}' stopped")

    # -------------------------------------------------------------------------
    # WOPI Protocol handlers
    # -------------------------------------------------------------------------

    async def check_file_info(self, file_id: str) -> CheckFileInfoResponse:
        """WOPI CheckFileInfo: Return file metadata.

        Args:
            file_id: WOPI document id.

        Returns:
            CheckFileInfoResponse with the resolved file name (including its
            extension), its size and the placeholder user fields.

        Raises:
            DocumentNotFound: no file matches the id.
            StorageListError: the storage root could not be listed.
            StorageReadError: the file's metadata could not be read.
        """
        node = await self.resolver.resolve(file_id)
        st = await node.stat()
        user = await self.identity.identify(file_id)
        return CheckFileInfoResponse(
            base_file_name=node.file_name,
            size=st.size,
            user_id=user.user_id,
            user_can_write=user.can_write,
            version=st.version,
        )

    async def get_file(self, file_id: str) -> bytes:
        """WOPI GetFile: Return the whole file content.

        Raises:
            DocumentNotFound: no file matches the id.
            StorageListError: the storage root could not be listed.
            StorageReadError: the file could not be read.
        """
        node = await self.resolver.resolve(file_id)
        content = await node.read_bytes()
        logger.info(f"WOPI GetFile: read {len(content)} bytes from {node.file_name}")
        return content

    async def put_file(self, file_id: str, content: bytes | None) -> NodeStat:
        """WOPI PutFile: Overwrite an existing file with ``content``.

        Never creates a file. The payload is checked only after the id has
        resolved, so unknown ids are reported as not found whatever the body.

        Args:
            file_id: WOPI document id.
            content: New file content, replacing the old one in full.

        Returns:
            NodeStat of the saved file.

        Raises:
            DocumentNotFound: no file matches the id.
            InvalidInput: content is empty or missing; nothing is written.
            PayloadTooLarge: content exceeds config.max_document_size.
            StorageListError: the storage root could not be listed.
            StorageWriteError: the write failed.
        """
        node = await self.resolver.resolve(file_id)

        if not content:
            logger.info(f"WOPI PutFile: no content received for {file_id}")
            raise InvalidInput()
        if len(content) > self.config.max_document_size:
            raise PayloadTooLarge(
                f"Document too large: {len(content)} > {self.config.max_document_size} bytes"
            )

        async with self.locks.hold(file_id):
            await node.write_bytes(content, atomic=self.config.atomic_writes)
            st = await node.stat()

        logger.info(f"WOPI PutFile: saved {len(content)} bytes to {node.file_name}")
        return st


__all__ = ["CheckFileInfoResponse", "WopiProxy"]
