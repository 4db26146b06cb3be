"""User profile and partner link model."""

from __future__ import annotations

from dataclasses import dataclass, replace


def default_display_name(uid: str) -> str:
    """Placeholder name shown until the user picks one."""
    return f"User {uid[:4]}"


@dataclass(frozen=True, eq=True)
class UserProfile:
    """A participant identity and its (at most one) linked partner.

    Attributes:
        uid: Identity from the session provider.
        name: Display name.
        partner_id: Linked partner's uid, None until linked.
    """

    uid: str
    name: str
    partner_id: str | None = None

    @classmethod
    def create(cls, uid: str) -> UserProfile:
        if not uid:
            raise ValueError("uid must not be empty")
        return cls(uid=uid, name=default_display_name(uid))

    @property
    def is_linked(self) -> bool:
        return self.partner_id is not None

    def with_partner(self, partner_id: str) -> UserProfile:
        return replace(self, partner_id=partner_id)

    def with_name(self, name: str) -> UserProfile:
        return replace(self, name=name)
