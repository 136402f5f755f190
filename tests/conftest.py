# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Shared pytest fixtures for wopi_host tests."""

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from wopi_host import WopiConfig, WopiProxy


@pytest.fixture
def storage_root(tmp_path: Path) -> Path:
    """Storage directory holding abc123.docx ("hello world!", 12 bytes)."""
    root = tmp_path / "documents"
    root.mkdir()
    (root / "abc123.docx").write_bytes(b"hello world!")
    return root


@pytest.fixture
def config(storage_root: Path) -> WopiConfig:
    return WopiConfig(storage_root=str(storage_root))


@pytest.fixture
def proxy(config: WopiConfig) -> WopiProxy:
    return WopiProxy(config=config)


@pytest.fixture
def client(proxy: WopiProxy):
    """TestClient running the app lifespan."""
    with TestClient(proxy.api) as test_client:
        yield test_client


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "integration: marks tests as integration tests")
