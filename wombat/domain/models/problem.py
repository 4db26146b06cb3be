"""Problem domain model for the mediated negotiation.

A Problem is the single shared record two partners work through. It is
mutated only by applying a ProblemUpdate produced by the transition engine,
so every field change is attributable to exactly one role or to the system.

Record Shape:
- Role-owned content lives in one RoleProgress per Role, so a write scoped
  to ROLE_A can never name a ROLE_B field.
- Shared fields are written by the engine on behalf of either participant
  or by the AI checkpoint trigger.
- revision is owned by the problem store and used as the compare-and-swap
  token for read-modify-write cycles.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, fields, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from wombat.domain.errors.phase_transition import InvalidPhaseTransitionError
from wombat.domain.errors.problem import NotAParticipantError


class Role(Enum):
    """A participant's fixed tag within a Problem.

    Values match the document-store field prefixes ("user1_steelman").
    """

    ROLE_A = "user1"
    ROLE_B = "user2"

    @property
    def partner(self) -> Role:
        """Return the other role of the pair."""
        return Role.ROLE_B if self is Role.ROLE_A else Role.ROLE_A


class ProblemStatus(Enum):
    """Phase of the negotiation.

    State Machine (forward-only, one step at a time):
        AGREE_STATEMENT -> PRIVATE_VERSIONS -> TRANSLATION -> STEELMAN
        -> STEELMAN_APPROVAL -> AI_REVIEW -> PROPOSE_SOLUTIONS
        -> SOLUTION_STEELMAN -> WAGER -> SOLUTION -> RESOLVED

    RESOLVED is terminal for status but still accepts post-mortem writes.
    AI_REVIEW and WAGER are AI checkpoint phases: they are entered on the
    second party's completing write, then filled in by the Wombat.
    """

    AGREE_STATEMENT = "agree_statement"
    PRIVATE_VERSIONS = "private_versions"
    TRANSLATION = "translation"
    STEELMAN = "steelman"
    STEELMAN_APPROVAL = "steelman_approval"
    AI_REVIEW = "ai_review"
    PROPOSE_SOLUTIONS = "propose_solutions"
    SOLUTION_STEELMAN = "solution_steelman"
    WAGER = "wager"
    SOLUTION = "solution"
    RESOLVED = "resolved"

    @property
    def position(self) -> int:
        """Zero-based index of this phase in the fixed sequence."""
        return PHASE_SEQUENCE.index(self)

    def is_terminal(self) -> bool:
        """Check if no further status change is possible."""
        return self is ProblemStatus.RESOLVED

    def next_phase(self) -> ProblemStatus | None:
        """Return the only phase this one may advance to, or None if terminal."""
        if self.is_terminal():
            return None
        return PHASE_SEQUENCE[self.position + 1]

    def precedes(self, other: ProblemStatus) -> bool:
        """Check if this phase comes strictly before ``other``."""
        return self.position < other.position


PHASE_SEQUENCE: tuple[ProblemStatus, ...] = tuple(ProblemStatus)

# Phases whose entry fires a one-time Wombat generation
AI_CHECKPOINT_PHASES: frozenset[ProblemStatus] = frozenset(
    {ProblemStatus.AI_REVIEW, ProblemStatus.WAGER}
)


@dataclass(frozen=True, eq=True)
class RoleProgress:
    """Everything one role has contributed to a Problem.

    Attributes:
        agreed_problem: Role accepted the shared problem statement.
        private_version: Role's private account of the issue.
        submitted_private: Role has locked in the private version.
        translation: The Wombat's blunt reading of the private version.
        steelman: Role's charitable restatement of the partner's view.
        submitted_steelman: Role has locked in the steelman.
        approved_steelman: Role accepts the partner's steelman of their view.
        proposed_solution: Role's proposed way forward.
        solution_steelman: Role's restatement of the partner's solution.
        agreed_solution: Role accepts the final solution statement.
        post_mortem: Role's review once the solution check date has passed.
    """

    agreed_problem: bool = False
    private_version: str = ""
    submitted_private: bool = False
    translation: str = ""
    steelman: str = ""
    submitted_steelman: bool = False
    approved_steelman: bool = False
    proposed_solution: str = ""
    solution_steelman: str = ""
    agreed_solution: bool = False
    post_mortem: str = ""


ROLE_FIELDS: frozenset[str] = frozenset(f.name for f in fields(RoleProgress))

SHARED_FIELDS: frozenset[str] = frozenset(
    {
        "problem_statement",
        "ai_analysis",
        "wombats_wager",
        "solution_statement",
        "brainstormed_solutions",
        "human_verdict",
        "escalated_for_human_review",
        "solution_check_date",
    }
)


@dataclass(frozen=True)
class ProblemUpdate:
    """Partial update to a Problem, as computed by the transition engine.

    Attributes:
        status: New phase, or None to leave the phase unchanged.
        role_fields: RoleProgress field values to set, per role.
        shared_fields: Shared field values to set.
    """

    status: ProblemStatus | None = None
    role_fields: Mapping[Role, Mapping[str, Any]] = field(default_factory=dict)
    shared_fields: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Reject field names that are not part of the record shape."""
        for role, values in self.role_fields.items():
            unknown = set(values) - ROLE_FIELDS
            if unknown:
                raise ValueError(
                    f"Unknown role fields for {role.value}: {sorted(unknown)}"
                )
        unknown_shared = set(self.shared_fields) - SHARED_FIELDS
        if unknown_shared:
            raise ValueError(f"Unknown shared fields: {sorted(unknown_shared)}")

    @classmethod
    def noop(cls) -> ProblemUpdate:
        """Return the empty update."""
        return cls()

    @property
    def is_empty(self) -> bool:
        """True when applying this update would change nothing."""
        return (
            self.status is None
            and not any(self.role_fields.values())
            and not self.shared_fields
        )

    @property
    def touched_roles(self) -> frozenset[Role]:
        """Roles whose RoleProgress this update writes."""
        return frozenset(role for role, values in self.role_fields.items() if values)

    def changed_fields(self) -> list[str]:
        """Flat document field names this update writes, sorted.

        Role fields use the store's prefixed naming ("user1_steelman").
        """
        names = [
            f"{role.value}_{name}"
            for role, values in self.role_fields.items()
            for name in values
        ]
        names.extend(self.shared_fields)
        if self.status is not None:
            names.append("status")
        return sorted(names)


def _utc_now() -> datetime:
    """Return current UTC time with timezone info."""
    return datetime.now(timezone.utc)


def _fresh_progress() -> dict[Role, RoleProgress]:
    return {Role.ROLE_A: RoleProgress(), Role.ROLE_B: RoleProgress()}


@dataclass(frozen=True, eq=True)
class Problem:
    """One negotiation shared by exactly two participants.

    Attributes:
        id: Opaque identifier, immutable.
        participants: The two participant identities, fixed at creation.
        roles: Participant identity -> Role, total and bijective.
        status: Current phase.
        progress: Role -> RoleProgress.
        problem_statement: Neutral one-sentence statement both agree to.
        ai_analysis: The Wombat's verdict (written once).
        wombats_wager: The Wombat's bet on the proposals (written once).
        solution_statement: Final solution both agree to.
        brainstormed_solutions: Wombat brainstorm for the solution phase.
        human_verdict: Escalation verdict text.
        escalated_for_human_review: Verdict was escalated.
        solution_check_date: Earliest time post-mortems are accepted.
        created_at: Creation timestamp (UTC), used for ordering.
        revision: Store-maintained write counter for compare-and-swap.
    """

    id: str
    participants: tuple[str, str]
    roles: Mapping[str, Role]
    status: ProblemStatus = field(default=ProblemStatus.AGREE_STATEMENT)
    progress: Mapping[Role, RoleProgress] = field(default_factory=_fresh_progress)
    problem_statement: str = ""
    ai_analysis: str = ""
    wombats_wager: str = ""
    solution_statement: str = ""
    brainstormed_solutions: str = ""
    human_verdict: str = ""
    escalated_for_human_review: bool = False
    solution_check_date: datetime | None = None
    created_at: datetime = field(default_factory=_utc_now)
    revision: int = 0

    def __post_init__(self) -> None:
        """Validate the participant/role pairing."""
        if len(self.participants) != 2:
            raise ValueError(
                f"A problem needs exactly two participants, got {len(self.participants)}"
            )
        first, second = self.participants
        if first == second:
            raise ValueError("A problem's participants must be distinct")
        if set(self.roles) != set(self.participants):
            raise ValueError("roles must map exactly the problem's participants")
        if set(self.roles.values()) != set(Role):
            raise ValueError("roles must assign each participant a distinct role")
        if set(self.progress) != set(Role):
            raise ValueError("progress must hold one entry per role")

    def __hash__(self) -> int:
        # roles and progress are mappings; id and revision identify a snapshot
        return hash((self.id, self.revision))

    @classmethod
    def start(
        cls,
        problem_id: str,
        initiator_id: str,
        partner_id: str,
        created_at: datetime | None = None,
    ) -> Problem:
        """Open a new negotiation; the initiator takes ROLE_A.

        Args:
            problem_id: Identifier for the new problem.
            initiator_id: Participant starting the negotiation.
            partner_id: The initiator's linked partner.
            created_at: Creation time (defaults to now, UTC).

        Returns:
            A Problem in AGREE_STATEMENT with empty progress.
        """
        return cls(
            id=problem_id,
            participants=(initiator_id, partner_id),
            roles={initiator_id: Role.ROLE_A, partner_id: Role.ROLE_B},
            created_at=created_at or _utc_now(),
        )

    def role_of(self, participant_id: str) -> Role:
        """Resolve a participant's role.

        Raises:
            NotAParticipantError: If the identity is not one of the two participants.
        """
        role = self.roles.get(participant_id)
        if role is None:
            raise NotAParticipantError(problem_id=self.id, participant_id=participant_id)
        return role

    def participant_for(self, role: Role) -> str:
        """Return the participant identity holding ``role``."""
        for participant_id, assigned in self.roles.items():
            if assigned is role:
                return participant_id
        raise KeyError(role)  # unreachable once __post_init__ has passed

    def progress_for(self, role: Role) -> RoleProgress:
        """Return the RoleProgress owned by ``role``."""
        return self.progress[role]

    def apply(self, update: ProblemUpdate) -> Problem:
        """Return a new Problem with ``update`` applied.

        The revision is left untouched; the store owns it.

        Raises:
            InvalidPhaseTransitionError: If the update moves status anywhere
                other than the immediate next phase.
        """
        if update.is_empty:
            return self

        changes: dict[str, Any] = dict(update.shared_fields)

        if update.status is not None and update.status is not self.status:
            if update.status is not self.status.next_phase():
                raise InvalidPhaseTransitionError(
                    from_status=self.status,
                    to_status=update.status,
                    problem_id=self.id,
                )
            changes["status"] = update.status

        if update.touched_roles:
            progress = dict(self.progress)
            for role, values in update.role_fields.items():
                if values:
                    progress[role] = replace(progress[role], **values)
            changes["progress"] = progress

        return replace(self, **changes)

    def with_revision(self, revision: int) -> Problem:
        """Return a copy stamped with a store revision."""
        return replace(self, revision=revision)
