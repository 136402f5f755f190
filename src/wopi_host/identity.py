# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Caller identity for CheckFileInfo.

There is no authentication yet: StaticIdentityProvider reports the same
placeholder user for every request. WOPI clients expect UserId and
UserCanWrite to be present, so the fields are kept and filled from config.
A real auth integration replaces the provider, not the handler.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class UserIdentity:
    """Who is editing and whether they may save."""

    user_id: str
    can_write: bool


class IdentityProvider(Protocol):
    async def identify(self, document_id: str) -> UserIdentity: ...


class StaticIdentityProvider:
    """Placeholder provider returning one fixed identity."""

    def __init__(self, user_id: str = "1", can_write: bool = True):
        self.identity = UserIdentity(user_id=user_id, can_write=can_write)

    async def identify(self, document_id: str) -> UserIdentity:
        return self.identity


__all__ = ["IdentityProvider", "StaticIdentityProvider", "UserIdentity"]
