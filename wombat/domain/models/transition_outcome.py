"""Transition outcome returned by the phase transition engine.

The engine never raises for a failed precondition. It returns an outcome
whose update is empty and whose rejection says why, so callers can tell a
benign race (the partner already moved the phase on) from a genuinely
out-of-sequence request.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from wombat.domain.errors.phase_transition import PreconditionFailedError
from wombat.domain.models.problem import ProblemStatus, ProblemUpdate


class RejectionReason(Enum):
    """Why the engine refused an action.

    Reasons:
        ALREADY_DONE: Stale request - the role already did this, the
            write-once field is filled, or the phase has moved past it.
        OUT_OF_SEQUENCE: The record has not reached the action's phase.
        NOT_READY: In phase, but a data precondition is missing.
        NOT_A_PARTICIPANT: Role-scoped action without an acting role.
        INVALID_PAYLOAD: Required text was empty.
    """

    ALREADY_DONE = "already_done"
    OUT_OF_SEQUENCE = "out_of_sequence"
    NOT_READY = "not_ready"
    NOT_A_PARTICIPANT = "not_a_participant"
    INVALID_PAYLOAD = "invalid_payload"

    @property
    def is_benign(self) -> bool:
        """True when the rejection is the expected result of a race."""
        return self is RejectionReason.ALREADY_DONE


@dataclass(frozen=True)
class TransitionRejection:
    """A failed precondition."""

    reason: RejectionReason
    detail: str = ""


@dataclass(frozen=True)
class TransitionOutcome:
    """Result of one engine call.

    Attributes:
        action: Name of the action evaluated.
        status: Phase the record was in when evaluated.
        update: Partial update to apply (empty when rejected).
        rejection: Set when a precondition failed.
    """

    action: str
    status: ProblemStatus
    update: ProblemUpdate
    rejection: TransitionRejection | None = None

    @classmethod
    def accepted(
        cls, action: str, status: ProblemStatus, update: ProblemUpdate
    ) -> TransitionOutcome:
        return cls(action=action, status=status, update=update)

    @classmethod
    def rejected(
        cls,
        action: str,
        status: ProblemStatus,
        reason: RejectionReason,
        detail: str = "",
    ) -> TransitionOutcome:
        return cls(
            action=action,
            status=status,
            update=ProblemUpdate.noop(),
            rejection=TransitionRejection(reason=reason, detail=detail),
        )

    @property
    def applied(self) -> bool:
        """True when the outcome carries a real mutation."""
        return self.rejection is None

    @property
    def advances_phase(self) -> bool:
        """True when applying the update changes the record's phase."""
        return self.applied and self.update.status is not None

    def raise_for_rejection(self) -> None:
        """Raise PreconditionFailedError if this outcome was rejected."""
        if self.rejection is not None:
            raise PreconditionFailedError(
                action=self.action,
                reason=self.rejection.reason,
                status=self.status,
                detail=self.rejection.detail,
            )
