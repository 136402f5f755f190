# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Tests for StorageNode file access."""

from __future__ import annotations

import os
import stat
import time
from pathlib import Path
from unittest.mock import patch

import pytest

from wopi_host import WopiConfig, WopiProxy
from wopi_host.errors import StorageReadError, StorageWriteError
from wopi_host.storage import NodeStat, StorageNode


@pytest.fixture
def node(storage_root) -> StorageNode:
    return StorageNode("abc123", storage_root / "abc123.docx")


class TestNodeNames:
    def test_names(self, node):
        assert node.file_name == "abc123.docx"
        assert node.stem == "abc123"
        assert node.extension == "docx"

    def test_equality(self, storage_root):
        a = StorageNode("abc123", storage_root / "abc123.docx")
        b = StorageNode("abc123", str(storage_root / "abc123.docx"))

        assert a == b
        assert hash(a) == hash(b)
        assert a != StorageNode("abc123", storage_root / "abc123.odt")


class TestNodeStat:
    async def test_stat(self, node):
        st = await node.stat()

        assert isinstance(st, NodeStat)
        assert st.size == 12
        assert st.mtime_ns == os.stat(node.path).st_mtime_ns
        assert st.version == str(st.mtime_ns)

    async def test_stat_missing_file(self, tmp_path):
        node = StorageNode("gone", tmp_path / "gone.docx")

        with pytest.raises(StorageReadError) as exc_info:
            await node.stat()

        assert isinstance(exc_info.value.__cause__, FileNotFoundError)


class TestNodeRead:
    async def test_read_bytes(self, node):
        assert await node.read_bytes() == b"hello world!"

    async def test_read_failure(self, node):
        with patch.object(type(node.path), "read_bytes", side_effect=PermissionError("denied")):
            with pytest.raises(StorageReadError):
                await node.read_bytes()


class TestNodeWrite:
    @pytest.mark.parametrize("atomic", [True, False])
    async def test_write_replaces_content(self, node, atomic):
        await node.write_bytes(b"bye!!", atomic=atomic)

        assert node.path.read_bytes() == b"bye!!"

    async def test_atomic_write_leaves_no_temp_files(self, node, storage_root):
        await node.write_bytes(b"new content")

        assert sorted(p.name for p in storage_root.iterdir()) == ["abc123.docx"]

    async def test_atomic_write_preserves_mode(self, node):
        os.chmod(node.path, 0o640)

        await node.write_bytes(b"new content")

        assert stat.S_IMODE(os.stat(node.path).st_mode) == 0o640

    async def test_atomic_write_failure_keeps_original(self, node, storage_root):
        """A failed rename leaves the original bytes and no temp file."""
        with patch("wopi_host.storage.node.os.replace", side_effect=OSError("disk full")):
            with pytest.raises(StorageWriteError) as exc_info:
                await node.write_bytes(b"never stored")

        assert isinstance(exc_info.value.__cause__, OSError)
        assert node.path.read_bytes() == b"hello world!"
        assert sorted(p.name for p in storage_root.iterdir()) == ["abc123.docx"]

    async def test_in_place_write_failure(self, node):
        with patch.object(type(node.path), "write_bytes", side_effect=OSError("read-only")):
            with pytest.raises(StorageWriteError):
                await node.write_bytes(b"x", atomic=False)

    async def test_write_missing_file_atomic(self, tmp_path):
        """Atomic writes need the original to copy its mode from."""
        node = StorageNode("gone", tmp_path / "gone.docx")

        with pytest.raises(StorageWriteError):
            await node.write_bytes(b"x")


class TestNodeWriteThroughLinks:
    """Symlinked documents are updated at their target."""

    @pytest.fixture
    def linked(self, tmp_path):
        root = tmp_path / "documents"
        root.mkdir()
        real = tmp_path / "real.docx"
        real.write_bytes(b"hello world!")
        (root / "abc123.docx").symlink_to(Path("..") / "real.docx")
        return root, real

    @pytest.mark.parametrize("atomic", [True, False])
    async def test_symlink_kept_and_target_updated(self, linked, atomic):
        root, real = linked
        node = StorageNode("abc123", root / "abc123.docx")

        await node.write_bytes(b"bye!!", atomic=atomic)

        assert (root / "abc123.docx").is_symlink()
        assert real.read_bytes() == b"bye!!"
        assert (await node.read_bytes()) == b"bye!!"
        assert sorted(p.name for p in real.parent.iterdir()) == ["documents", "real.docx"]

    async def test_put_file_through_symlink(self, linked):
        root, real = linked
        proxy = WopiProxy(config=WopiConfig(storage_root=str(root)))

        await proxy.put_file("abc123", b"bye!!")

        assert (root / "abc123.docx").is_symlink()
        assert real.read_bytes() == b"bye!!"
        info = await proxy.check_file_info("abc123")
        assert info.base_file_name == "abc123.docx"
        assert info.size == 5


class TestNodeVersion:
    """The version changes on every write, even within one clock tick."""

    @pytest.mark.parametrize("atomic", [True, False])
    async def test_version_changes_after_write(self, node, atomic):
        before = await node.stat()

        await node.write_bytes(b"bye!!", atomic=atomic)
        after = await node.stat()

        assert after.version != before.version
        assert after.mtime_ns > before.mtime_ns

    async def test_version_moves_forward_from_future_mtime(self, node):
        """A clock behind the stored mtime still yields a newer version."""
        future = time.time_ns() + 3600 * 10**9
        os.utime(node.path, ns=(future, future))

        await node.write_bytes(b"bye!!")

        assert (await node.stat()).mtime_ns == future + 1

    async def test_repeated_writes_distinct_versions(self, node):
        versions = set()
        for i in range(5):
            await node.write_bytes(f"v{i}".encode())
            versions.add((await node.stat()).version)

        assert len(versions) == 5
