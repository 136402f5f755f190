# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Error taxonomy for WOPI operations.

Every error carries the HTTP status it maps to and a short public message.
The API layer turns them into responses; storage faults keep the original
``OSError`` as ``__cause__`` so it can be logged server-side.

Hierarchy:
    WopiError
        DocumentNotFound      404
        InvalidInput          400
        PayloadTooLarge       413
        StorageError          500
            StorageListError
                AmbiguousDocument
            StorageReadError
            StorageWriteError
"""

from __future__ import annotations


class WopiError(Exception):
    """Base class for errors raised by WOPI operations."""

    status_code: int = 500
    detail: str = "Internal server error"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.detail)


class DocumentNotFound(WopiError):
    """No storage object matches the document id."""

    status_code = 404
    detail = "File not found"


class InvalidInput(WopiError):
    """PutFile called with an empty or missing payload."""

    status_code = 400
    detail = "No file content provided"


class PayloadTooLarge(WopiError):
    """PutFile payload exceeds the configured maximum document size."""

    status_code = 413
    detail = "Document too large"


class StorageError(WopiError):
    """Unexpected storage fault."""


class StorageListError(StorageError):
    """Enumerating the storage root failed."""


class AmbiguousDocument(StorageListError):
    """More than one storage object matches and strict resolution is on."""


class StorageReadError(StorageError):
    """Reading an object's metadata or contents failed."""


class StorageWriteError(StorageError):
    """Overwriting an object's contents failed."""

    detail = "Error saving file"


__all__ = [
    "AmbiguousDocument",
    "DocumentNotFound",
    "InvalidInput",
    "PayloadTooLarge",
    "StorageError",
    "StorageListError",
    "StorageReadError",
    "StorageWriteError",
    "WopiError",
]
