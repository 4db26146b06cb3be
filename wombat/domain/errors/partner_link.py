"""Partner linking errors."""

from __future__ import annotations

from wombat.domain.exceptions import WombatError


class LinkingConflictError(WombatError):
    """Raised when either identity is already partnered with someone else.

    No partial state is created when this is raised.

    Attributes:
        inviter_id: Identity that issued the invite.
        invitee_id: Identity that accepted the invite.
        conflicting_id: The identity already holding a different partner.
        existing_partner_id: That identity's current partner.
    """

    def __init__(
        self,
        inviter_id: str,
        invitee_id: str,
        conflicting_id: str,
        existing_partner_id: str,
    ) -> None:
        self.inviter_id = inviter_id
        self.invitee_id = invitee_id
        self.conflicting_id = conflicting_id
        self.existing_partner_id = existing_partner_id
        super().__init__(
            f"Cannot link {inviter_id} and {invitee_id}: "
            f"{conflicting_id} is already partnered with {existing_partner_id}"
        )


class PartnerNotLinkedError(WombatError):
    """Raised when opening a problem before the initiator has a partner.

    Attributes:
        uid: Identity that tried to open the problem.
    """

    def __init__(self, uid: str) -> None:
        self.uid = uid
        super().__init__(f"{uid} has no linked partner")
