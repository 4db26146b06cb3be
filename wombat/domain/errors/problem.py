"""Problem lookup and membership errors."""

from __future__ import annotations

from wombat.domain.exceptions import WombatError


class ProblemNotFoundError(WombatError):
    """Raised when a problem id is unknown to the store.

    Attributes:
        problem_id: The id that was looked up.
    """

    def __init__(self, problem_id: str) -> None:
        self.problem_id = problem_id
        super().__init__(f"Problem not found: {problem_id}")


class NotAParticipantError(WombatError):
    """Raised when an identity acts on a problem it does not belong to.

    Attributes:
        problem_id: The problem acted on.
        participant_id: The identity that is not a participant.
    """

    def __init__(self, problem_id: str, participant_id: str) -> None:
        self.problem_id = problem_id
        self.participant_id = participant_id
        super().__init__(
            f"{participant_id} is not a participant of problem {problem_id}"
        )
