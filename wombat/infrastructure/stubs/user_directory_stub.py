"""In-memory user directory stub.

NOT suitable for production use.
"""

from __future__ import annotations

import asyncio

from wombat.application.ports.user_directory import UserDirectoryProtocol
from wombat.domain.errors import LinkingConflictError
from wombat.domain.models.user_profile import UserProfile


class UserDirectoryStub(UserDirectoryProtocol):
    """Profiles in a dict; link_partners is atomic under an asyncio.Lock."""

    def __init__(self) -> None:
        self._profiles: dict[str, UserProfile] = {}
        self._lock = asyncio.Lock()

    async def get_profile(self, uid: str) -> UserProfile | None:
        return self._profiles.get(uid)

    async def ensure_profile(self, uid: str) -> UserProfile:
        async with self._lock:
            return self._ensure(uid)

    async def rename(self, uid: str, name: str) -> UserProfile:
        async with self._lock:
            profile = self._profiles.get(uid)
            if profile is None:
                raise KeyError(f"Unknown user: {uid}")
            renamed = profile.with_name(name)
            self._profiles[uid] = renamed
            return renamed

    async def link_partners(
        self, inviter_id: str, invitee_id: str
    ) -> tuple[UserProfile, UserProfile]:
        async with self._lock:
            inviter = self._profiles.get(inviter_id) or UserProfile.create(inviter_id)
            invitee = self._profiles.get(invitee_id) or UserProfile.create(invitee_id)

            for profile, wanted in ((inviter, invitee_id), (invitee, inviter_id)):
                if profile.partner_id is not None and profile.partner_id != wanted:
                    raise LinkingConflictError(
                        inviter_id=inviter_id,
                        invitee_id=invitee_id,
                        conflicting_id=profile.uid,
                        existing_partner_id=profile.partner_id,
                    )

            inviter = inviter.with_partner(invitee_id)
            invitee = invitee.with_partner(inviter_id)
            self._profiles[inviter_id] = inviter
            self._profiles[invitee_id] = invitee
            return inviter, invitee

    def _ensure(self, uid: str) -> UserProfile:
        profile = self._profiles.get(uid)
        if profile is None:
            profile = UserProfile.create(uid)
            self._profiles[uid] = profile
        return profile

    def clear(self) -> None:
        self._profiles.clear()
