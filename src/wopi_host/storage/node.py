# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""StorageNode: a single document file in the storage root.

Blocking filesystem calls run in a worker thread so a slow disk blocks the
request, not the event loop. ``OSError`` is wrapped into the storage errors
of :mod:`wopi_host.errors` with the original exception chained.
"""

from __future__ import annotations

import asyncio
import os
import stat
import tempfile
from dataclasses import dataclass
from pathlib import Path

from ..errors import StorageReadError, StorageWriteError


@dataclass(frozen=True)
class NodeStat:
    """Metadata snapshot of a storage object."""

    size: int
    mtime_ns: int

    @property
    def version(self) -> str:
        """Version string for X-WOPI-ItemVersion / CheckFileInfo."""
        return str(self.mtime_ns)


class StorageNode:
    """Handle on one storage object, as returned by a DocumentResolver.

    Attributes:
        document_id: Id the node was resolved from.
        path: Absolute path of the file.
    """

    def __init__(self, document_id: str, path: str | Path):
        self.document_id = document_id
        self.path = Path(path)

    def __repr__(self) -> str:
        return f"StorageNode({self.document_id!r}, {str(self.path)!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, StorageNode):
            return NotImplemented
        return self.document_id == other.document_id and self.path == other.path

    def __hash__(self) -> int:
        return hash((self.document_id, self.path))

    @property
    def file_name(self) -> str:
        """Full file name including extension (WOPI BaseFileName)."""
        return self.path.name

    @property
    def stem(self) -> str:
        """File name up to the extension matched by the resolver."""
        return self.path.name[: len(self.document_id)]

    @property
    def extension(self) -> str:
        """Everything after ``<document_id>.``, e.g. ``docx`` or ``tar.gz``."""
        return self.path.name[len(self.document_id) + 1 :]

    async def stat(self) -> NodeStat:
        """Read size and modification time.

        Raises:
            StorageReadError: metadata read failed.
        """
        try:
            st = await asyncio.to_thread(os.stat, self.path)
        except OSError as exc:
            raise StorageReadError(f"Cannot stat {self.path}: {exc}") from exc
        return NodeStat(size=st.st_size, mtime_ns=st.st_mtime_ns)

    async def read_bytes(self) -> bytes:
        """Read the whole object.

        Raises:
            StorageReadError: read failed.
        """
        try:
            return await asyncio.to_thread(self.path.read_bytes)
        except OSError as exc:
            raise StorageReadError(f"Cannot read {self.path}: {exc}") from exc

    async def write_bytes(self, content: bytes, atomic: bool = True) -> None:
        """Replace the object's bytes with ``content``.

        Symlinked documents are written through to their target. The
        modification time always moves forward, so the version reported
        after a save differs from the one before it.

        Args:
            content: New contents, written in full.
            atomic: Write a hidden temporary file next to the target and
                rename it into place. Otherwise overwrite in place, which can
                leave a truncated file behind on failure.

        Raises:
            StorageWriteError: write failed.
        """
        try:
            await asyncio.to_thread(self._write, content, atomic)
        except OSError as exc:
            raise StorageWriteError(f"Cannot write {self.path}: {exc}") from exc

    def _write(self, content: bytes, atomic: bool) -> None:
        target = self.path.resolve(strict=True)
        previous = os.stat(target)
        if atomic:
            self._write_atomic(target, content, stat.S_IMODE(previous.st_mode))
        else:
            target.write_bytes(content)

        # Coarse filesystem clocks can repeat the old mtime.
        current = os.stat(target).st_mtime_ns
        if current <= previous.st_mtime_ns:
            bumped = previous.st_mtime_ns + 1
            os.utime(target, ns=(bumped, bumped))

    def _write_atomic(self, target: Path, content: bytes, mode: int) -> None:
        fd, tmp_name = tempfile.mkstemp(
            dir=target.parent, prefix=f".{target.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "wb") as fh:
                fh.write(content)
                fh.flush()
                os.fsync(fh.fileno())
            os.chmod(tmp_name, mode)
            os.replace(tmp_name, target)
        except BaseException:
            try:
                os.unlink(tmp_name)
            except FileNotFoundError:
                pass
            raise


__all__ = ["NodeStat", "StorageNode"]
