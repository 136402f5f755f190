# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Document resolution: map a WOPI document id to a storage object.

The handlers only depend on the DocumentResolver protocol, so the flat
directory scan below can be replaced by a database index or an object
store listing without touching them.

DirectoryResolver matches ``<root>/<document_id>.*`` against the entries
of the root directory (never its subdirectories). Candidates are sorted,
so when several files share a stem the lexically first one wins; with
``strict=True`` that situation is reported as AmbiguousDocument instead.

Document id handling:
    - Empty ids, ids starting with ``.`` and ids containing a path
      separator or NUL never resolve (DocumentNotFound).
    - Glob metacharacters are escaped: ``a[1]`` matches ``a[1].docx`` only.
"""

from __future__ import annotations

import asyncio
import fnmatch
import glob
import logging
import os
from pathlib import Path
from typing import Protocol

from ..errors import AmbiguousDocument, DocumentNotFound, StorageListError
from .node import StorageNode

logger = logging.getLogger(__name__)

_FORBIDDEN_CHARS = {"/", "\\", "\x00"}


class DocumentResolver(Protocol):
    """Resolve a document id to the single canonical storage object."""

    async def resolve(self, document_id: str) -> StorageNode:
        """Return the storage object for ``document_id``.

        Raises:
            DocumentNotFound: nothing matches.
            StorageListError: the backing store could not be enumerated.
        """
        ...


def is_valid_document_id(document_id: str) -> bool:
    """Check that ``document_id`` is usable as a single path segment."""
    if not document_id or document_id.startswith("."):
        return False
    if os.sep in document_id or (os.altsep and os.altsep in document_id):
        return False
    return not any(ch in document_id for ch in _FORBIDDEN_CHARS)


class DirectoryResolver:
    """Extension-agnostic lookup in a flat directory.

    Attributes:
        root: Storage root directory.
        strict: Fail on more than one match instead of taking the first.
    """

    def __init__(self, root: str | Path, strict: bool = False):
        self.root = Path(root).resolve()
        self.strict = strict

    def pattern(self, document_id: str) -> str:
        """Filename pattern matched against the root's entries."""
        return f"{glob.escape(document_id)}.*"

    async def resolve(self, document_id: str) -> StorageNode:
        if not is_valid_document_id(document_id):
            logger.warning(f"Rejected document id {document_id!r}")
            raise DocumentNotFound()

        matches = await asyncio.to_thread(self._scan, document_id)
        logger.debug(f"Resolve {document_id!r}: {matches}")

        if not matches:
            raise DocumentNotFound()
        if len(matches) > 1:
            if self.strict:
                raise AmbiguousDocument(
                    f"Document id {document_id!r} matches {len(matches)} files: {matches}"
                )
            logger.warning(
                f"Document id {document_id!r} matches {len(matches)} files, using {matches[0]}"
            )
        return StorageNode(document_id, self.root / matches[0])

    def _scan(self, document_id: str) -> list[str]:
        pattern = self.pattern(document_id)
        try:
            with os.scandir(self.root) as entries:
                return sorted(
                    entry.name
                    for entry in entries
                    if fnmatch.fnmatchcase(entry.name, pattern) and entry.is_file()
                )
        except OSError as exc:
            raise StorageListError(f"Cannot list {self.root}: {exc}") from exc


__all__ = ["DirectoryResolver", "DocumentResolver", "is_valid_document_id"]
