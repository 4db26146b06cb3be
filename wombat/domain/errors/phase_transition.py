"""Phase transition errors for the negotiation state machine.

This module defines errors raised when a problem record would leave the
fixed forward-only phase sequence, and when a caller chooses to treat a
rejected transition outcome as an exception.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from wombat.domain.exceptions import WombatError

if TYPE_CHECKING:
    from wombat.domain.models.problem import ProblemStatus
    from wombat.domain.models.transition_outcome import RejectionReason


class InvalidPhaseTransitionError(WombatError):
    """Raised when an update would skip or reverse a phase.

    The engine never produces such an update; this guards the store
    against updates computed from a stale record.

    Attributes:
        from_status: Current phase of the record.
        to_status: Phase the update tried to set.
        problem_id: Problem the update targeted.
    """

    def __init__(
        self,
        from_status: ProblemStatus,
        to_status: ProblemStatus,
        problem_id: str = "",
    ) -> None:
        self.from_status = from_status
        self.to_status = to_status
        self.problem_id = problem_id
        expected = from_status.next_phase()
        expected_str = expected.value if expected is not None else "none (terminal)"
        super().__init__(
            f"Invalid phase transition for problem {problem_id or '?'}: "
            f"{from_status.value} -> {to_status.value}. "
            f"Only {expected_str} may follow {from_status.value}."
        )


class PreconditionFailedError(WombatError):
    """Raised when a rejected transition is escalated to an exception.

    Normally a failed precondition is returned as a rejected outcome and
    surfaced to the UI as a benign no-op. Callers that prefer exceptions
    use TransitionOutcome.raise_for_rejection().

    Attributes:
        action: Name of the rejected action.
        reason: Why the engine rejected it.
        status: Phase the record was in.
        detail: Human-readable explanation.
    """

    def __init__(
        self,
        action: str,
        reason: RejectionReason,
        status: ProblemStatus,
        detail: str = "",
    ) -> None:
        self.action = action
        self.reason = reason
        self.status = status
        self.detail = detail
        suffix = f": {detail}" if detail else ""
        super().__init__(
            f"{action} rejected ({reason.value}) in phase {status.value}{suffix}"
        )
