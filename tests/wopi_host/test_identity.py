# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Tests for the placeholder identity provider."""

from __future__ import annotations

import dataclasses

import pytest

from wopi_host.identity import StaticIdentityProvider, UserIdentity


class TestStaticIdentityProvider:
    async def test_defaults(self):
        identity = await StaticIdentityProvider().identify("abc123")

        assert identity == UserIdentity(user_id="1", can_write=True)

    async def test_same_identity_for_every_document(self):
        provider = StaticIdentityProvider(user_id="alice", can_write=False)

        first = await provider.identify("abc123")
        second = await provider.identify("other")

        assert first == second == UserIdentity("alice", False)

    def test_identity_is_immutable(self):
        identity = UserIdentity("1", True)

        with pytest.raises(dataclasses.FrozenInstanceError):
            identity.user_id = "2"
