# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Per-document writer serialization.

DocumentLocks hands out one asyncio.Lock per document id. PutFile holds it
for the duration of the overwrite so two saves of the same document never
interleave. Entries are reference counted and removed once nobody holds
or waits on them.

Locks live in the event loop of one process. With several uvicorn workers
only the atomic rename in StorageNode protects readers.

Usage:
    locks = DocumentLocks()
    async with locks.hold("abc123"):
        await node.write_bytes(payload)
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager


class DocumentLocks:
    """Registry of per-document locks.

    Attributes:
        enabled: When False, ``hold`` does not lock anything.
    """

    def __init__(self, enabled: bool = True):
        self.enabled = enabled
        self._locks: dict[str, asyncio.Lock] = {}
        self._users: dict[str, int] = {}

    def __len__(self) -> int:
        return len(self._locks)

    def is_locked(self, document_id: str) -> bool:
        lock = self._locks.get(document_id)
        return lock is not None and lock.locked()

    @asynccontextmanager
    async def hold(self, document_id: str) -> AsyncIterator[None]:
        """Hold the lock for ``document_id``; released on every exit path."""
        if not self.enabled:
            yield
            return

        lock = self._locks.setdefault(document_id, asyncio.Lock())
        self._users[document_id] = self._users.get(document_id, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._users[document_id] -= 1
            if not self._users[document_id]:
                del self._users[document_id]
                del self._locks[document_id]


__all__ = ["DocumentLocks"]
