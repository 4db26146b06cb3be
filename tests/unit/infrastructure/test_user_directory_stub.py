"""Unit tests for UserDirectoryStub."""

import asyncio

import pytest

from wombat.domain.errors import LinkingConflictError
from wombat.infrastructure.stubs.user_directory_stub import UserDirectoryStub


class TestProfiles:
    @pytest.mark.asyncio
    async def test_unknown_profile_is_none(self, directory: UserDirectoryStub) -> None:
        assert await directory.get_profile("nobody") is None

    @pytest.mark.asyncio
    async def test_ensure_is_idempotent(self, directory: UserDirectoryStub) -> None:
        first = await directory.ensure_profile("u1")
        second = await directory.ensure_profile("u1")

        assert first == second

    @pytest.mark.asyncio
    async def test_rename_unknown(self, directory: UserDirectoryStub) -> None:
        with pytest.raises(KeyError):
            await directory.rename("u1", "Name")


class TestLinkPartners:
    @pytest.mark.asyncio
    async def test_link_creates_missing_profiles(self, directory: UserDirectoryStub) -> None:
        inviter, invitee = await directory.link_partners("u1", "u2")

        assert inviter.partner_id == "u2"
        assert invitee.partner_id == "u1"
        assert (await directory.get_profile("u2")).partner_id == "u1"

    @pytest.mark.asyncio
    async def test_conflict_reports_holder(self, directory: UserDirectoryStub) -> None:
        await directory.link_partners("u1", "u2")

        with pytest.raises(LinkingConflictError) as exc_info:
            await directory.link_partners("u2", "u3")

        assert exc_info.value.conflicting_id == "u2"
        assert exc_info.value.existing_partner_id == "u1"
        assert await directory.get_profile("u3") is None

    @pytest.mark.asyncio
    async def test_concurrent_invites_link_one_pair(
        self, directory: UserDirectoryStub
    ) -> None:
        results = await asyncio.gather(
            directory.link_partners("u1", "u2"),
            directory.link_partners("u3", "u2"),
            return_exceptions=True,
        )

        errors = [r for r in results if isinstance(r, LinkingConflictError)]
        assert len(errors) == 1
        u2 = await directory.get_profile("u2")
        assert u2.partner_id in {"u1", "u3"}

    @pytest.mark.asyncio
    async def test_clear(self, directory: UserDirectoryStub) -> None:
        await directory.ensure_profile("u1")
        directory.clear()
        assert await directory.get_profile("u1") is None
