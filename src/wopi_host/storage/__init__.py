# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Storage layer: document resolution and file access.

CE: a flat local directory whose entries are named ``<document_id>.<ext>``.
Other backends plug in by implementing the DocumentResolver protocol and
returning objects with the StorageNode API.

Usage:
    from wopi_host.storage import DirectoryResolver

    resolver = DirectoryResolver("/data/documents")

    node = await resolver.resolve("abc123")     # abc123.docx
    info = await node.stat()
    data = await node.read_bytes()
    await node.write_bytes(b"new content")
"""

from .node import NodeStat, StorageNode
from .resolver import DirectoryResolver, DocumentResolver, is_valid_document_id

__all__ = [
    "DirectoryResolver",
    "DocumentResolver",
    "NodeStat",
    "StorageNode",
    "is_valid_document_id",
]
