"""User directory port.

Holds participant profiles and the partner link between two identities.
Linking is the precondition for opening a problem together.

Contract:
- link_partners() is atomic: both profiles are linked or neither is.
- Linking two identities already partnered with each other is a no-op.
- Linking when either is partnered with a third identity raises
  LinkingConflictError.
"""

from __future__ import annotations

from typing import Protocol

from wombat.domain.models.user_profile import UserProfile


class UserDirectoryProtocol(Protocol):
    """Protocol for profile storage and partner linking."""

    async def get_profile(self, uid: str) -> UserProfile | None:
        """Return the profile, or None if the identity is unknown."""
        ...

    async def ensure_profile(self, uid: str) -> UserProfile:
        """Return the profile, creating one with a default name if missing."""
        ...

    async def rename(self, uid: str, name: str) -> UserProfile:
        """Change a profile's display name.

        Raises:
            KeyError: If the identity is unknown.
        """
        ...

    async def link_partners(
        self, inviter_id: str, invitee_id: str
    ) -> tuple[UserProfile, UserProfile]:
        """Atomically link two identities as partners.

        Missing profiles are created.

        Returns:
            (inviter profile, invitee profile) after linking.

        Raises:
            LinkingConflictError: If either is partnered with someone else.
        """
        ...
