# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Configuration dataclass for the WOPI host.

WopiConfig is the single entry point for all configuration. It is resolved
once at startup and handed to WopiProxy, which passes the relevant pieces
(storage root, limits, identity defaults) to each component explicitly.

Configuration via environment variables:
    WOPI_STORAGE_ROOT: Directory holding the documents
    WOPI_INSTANCE: Instance name for display
    WOPI_PORT: Server port (default: 8000)
    WOPI_MAX_DOCUMENT_SIZE: Maximum PutFile body in bytes (default: 50 MiB)
    WOPI_STRICT_RESOLUTION: Fail when an id matches more than one file
    WOPI_SERIALIZE_WRITES: Serialize concurrent PutFile per document
    WOPI_ATOMIC_WRITES: Write to a temporary file and rename into place
    WOPI_USER_ID: Placeholder UserId reported by CheckFileInfo
    WOPI_USER_CAN_WRITE: Placeholder UserCanWrite reported by CheckFileInfo
    WOPI_CORS_ORIGINS: Comma-separated allowed CORS origins (default: *)
    WOPI_LOG_LEVEL: uvicorn log level (default: info)

Usage:
    config = WopiConfig(storage_root="/data/documents")
    proxy = WopiProxy(config=config)

    # From environment (Docker/production):
    proxy = WopiProxy(config=wopi_config_from_env())
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field

DEFAULT_MAX_DOCUMENT_SIZE = 50 * 1024 * 1024


def _env_flag(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.lower() in ("1", "true", "yes")


@dataclass
class WopiConfig:
    """Main configuration container for the WOPI host.

    Top-Level Settings:
        storage_root: Flat directory whose entries are named <id>.<ext>
        instance_name: Service identifier for display
        port: Default API server port
        max_document_size: Largest accepted PutFile payload in bytes
        strict_resolution: Reject ids matching several files
        serialize_writes: Per-document mutual exclusion for PutFile
        atomic_writes: Temp-file-and-rename overwrites
        default_user_id: Placeholder identity until real auth exists
        default_user_can_write: Placeholder write permission
        cors_origins: Origins allowed by the CORS middleware
        log_level: Log level handed to uvicorn

    Example:
        config = WopiConfig(
            storage_root="/srv/wopi/data",
            max_document_size=10 * 1024 * 1024,
        )
    """

    storage_root: str = "/data/documents"
    """Directory holding the documents, named <document_id>.<extension>."""

    instance_name: str = "wopi-host"
    """Instance name for display and identification."""

    port: int = 8000
    """Default port for API server."""

    max_document_size: int = DEFAULT_MAX_DOCUMENT_SIZE
    """Maximum accepted PutFile body size in bytes."""

    strict_resolution: bool = False
    """If True, an id matching more than one file is an error instead of
    resolving to the first match in lexical order."""

    serialize_writes: bool = True
    """Serialize concurrent PutFile calls for the same document id."""

    atomic_writes: bool = True
    """Write to a temporary file and rename it over the original."""

    default_user_id: str = "1"
    """UserId reported by CheckFileInfo. Placeholder, not a real identity."""

    default_user_can_write: bool = True
    """UserCanWrite reported by CheckFileInfo. Placeholder."""

    cors_origins: list[str] = field(default_factory=lambda: ["*"])
    """Origins allowed by the CORS middleware."""

    log_level: str = "info"
    """Log level passed to uvicorn."""


def wopi_config_from_env() -> WopiConfig:
    """Build WopiConfig from WOPI_* environment variables.

    Returns:
        WopiConfig instance populated from environment, with the dataclass
        defaults for anything unset.
    """
    origins = os.environ.get("WOPI_CORS_ORIGINS", "*")
    return WopiConfig(
        storage_root=os.environ.get("WOPI_STORAGE_ROOT", "/data/documents"),
        instance_name=os.environ.get("WOPI_INSTANCE", "wopi-host"),
        port=int(os.environ.get("WOPI_PORT", "8000")),
        max_document_size=int(
            os.environ.get("WOPI_MAX_DOCUMENT_SIZE", str(DEFAULT_MAX_DOCUMENT_SIZE))
        ),
        strict_resolution=_env_flag("WOPI_STRICT_RESOLUTION", False),
        serialize_writes=_env_flag("WOPI_SERIALIZE_WRITES", True),
        atomic_writes=_env_flag("WOPI_ATOMIC_WRITES", True),
        default_user_id=os.environ.get("WOPI_USER_ID", "1"),
        default_user_can_write=_env_flag("WOPI_USER_CAN_WRITE", True),
        cors_origins=[o.strip() for o in origins.split(",") if o.strip()],
        log_level=os.environ.get("WOPI_LOG_LEVEL", "info").lower(),
    )


__all__ = ["DEFAULT_MAX_DOCUMENT_SIZE", "WopiConfig", "wopi_config_from_env"]
