"""Partner linking and problem creation.

Two identities become partners when the invitee accepts the inviter's
link. Only linked partners can open a problem together; the initiator
takes ROLE_A and the partner ROLE_B.
"""

from __future__ import annotations

from dataclasses import dataclass
from uuid import uuid4

from wombat.application.ports.problem_store import ProblemStoreProtocol
from wombat.application.ports.time_authority import TimeAuthorityProtocol
from wombat.application.ports.user_directory import UserDirectoryProtocol
from wombat.application.services.base import LoggingMixin
from wombat.domain.errors import LinkingConflictError, PartnerNotLinkedError
from wombat.domain.models.problem import Problem
from wombat.domain.models.user_profile import UserProfile


@dataclass(frozen=True)
class LinkResult:
    """Outcome of a link attempt.

    Attributes:
        linked: True when both profiles now point at each other.
        inviter: Inviter's profile after the attempt (None if rejected early).
        invitee: Invitee's profile after the attempt (None if rejected early).
        reason: Why the link was refused ("self_link", "already_partnered").
        detail: Human-readable context for a refusal.
    """

    linked: bool
    inviter: UserProfile | None = None
    invitee: UserProfile | None = None
    reason: str | None = None
    detail: str = ""


class PartnerLinkingService(LoggingMixin):
    """Links partners, renames profiles and opens new problems."""

    def __init__(
        self,
        directory: UserDirectoryProtocol,
        store: ProblemStoreProtocol,
        time_authority: TimeAuthorityProtocol,
    ) -> None:
        self._directory = directory
        self._store = store
        self._time = time_authority
        self._init_logger(component="partners")

    async def ensure_profile(self, uid: str) -> UserProfile:
        """Return the profile for ``uid``, creating the default one on first sign-in."""
        return await self._directory.ensure_profile(uid)

    async def rename(self, uid: str, name: str) -> UserProfile:
        """Change a display name.

        Raises:
            ValueError: If the name is blank.
            KeyError: If the identity is unknown.
        """
        if not name or not name.strip():
            raise ValueError("name must not be blank")
        profile = await self._directory.rename(uid, name.strip())
        self._log_operation("rename", uid=uid).info("profile_renamed")
        return profile

    async def link_partners(self, inviter_id: str, invitee_id: str) -> LinkResult:
        """Accept an invite from ``inviter_id`` on behalf of ``invitee_id``."""
        log = self._log_operation(
            "link_partners", inviter_id=inviter_id, invitee_id=invitee_id
        )
        if inviter_id == invitee_id:
            log.warning("link_rejected", reason="self_link")
            return LinkResult(
                linked=False, reason="self_link", detail="cannot partner with yourself"
            )

        try:
            inviter, invitee = await self._directory.link_partners(inviter_id, invitee_id)
        except LinkingConflictError as exc:
            log.warning(
                "link_rejected",
                reason="already_partnered",
                conflicting_id=exc.conflicting_id,
            )
            return LinkResult(
                linked=False,
                inviter=await self._directory.get_profile(inviter_id),
                invitee=await self._directory.get_profile(invitee_id),
                reason="already_partnered",
                detail=str(exc),
            )

        log.info("partners_linked")
        return LinkResult(linked=True, inviter=inviter, invitee=invitee)

    async def start_problem(self, initiator_id: str) -> Problem:
        """Open a new problem between ``initiator_id`` and their partner.

        Returns:
            The stored problem in agree_statement.

        Raises:
            PartnerNotLinkedError: If the initiator has no partner.
        """
        log = self._log_operation("start_problem", initiator_id=initiator_id)
        profile = await self._directory.get_profile(initiator_id)
        if profile is None or profile.partner_id is None:
            log.warning("start_rejected", reason="no_partner")
            raise PartnerNotLinkedError(initiator_id)

        problem = Problem.start(
            problem_id=str(uuid4()),
            initiator_id=initiator_id,
            partner_id=profile.partner_id,
            created_at=self._time.now(),
        )
        problem_id = await self._store.create(problem)
        stored = await self._store.read(problem_id)
        log.info("problem_started", problem_id=problem_id, partner_id=profile.partner_id)
        return stored
