"""Action vocabulary for the negotiation state machine.

Every legal mutation of a Problem is expressed as one of these frozen
action objects and handed to the transition engine together with the
acting role. Actions carry only their payload; the acting role always
comes from the authenticated session, never from the action itself.

Each action declares the phase it belongs to. The engine uses it to tell
a stale request (the record has already moved past that phase) from an
out-of-sequence one (the record has not reached it yet).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar

from wombat.domain.models.problem import ProblemStatus


class ActionOrigin(Enum):
    """Who may issue an action.

    PARTICIPANT actions need an acting role. SYSTEM actions are issued by
    the AI checkpoint trigger and ignore the acting role.
    """

    PARTICIPANT = "participant"
    SYSTEM = "system"


@dataclass(frozen=True)
class ProblemAction:
    """Base class for all actions."""

    phase: ClassVar[ProblemStatus]
    origin: ClassVar[ActionOrigin] = ActionOrigin.PARTICIPANT

    @property
    def name(self) -> str:
        return type(self).__name__


@dataclass(frozen=True)
class EditProblemStatement(ProblemAction):
    text: str
    phase: ClassVar[ProblemStatus] = ProblemStatus.AGREE_STATEMENT


@dataclass(frozen=True)
class AgreeProblem(ProblemAction):
    phase: ClassVar[ProblemStatus] = ProblemStatus.AGREE_STATEMENT


@dataclass(frozen=True)
class SubmitPrivateVersion(ProblemAction):
    """Lock in a private version with its already-generated translation."""

    text: str
    translation: str
    phase: ClassVar[ProblemStatus] = ProblemStatus.PRIVATE_VERSIONS


@dataclass(frozen=True)
class AdvanceToSteelman(ProblemAction):
    phase: ClassVar[ProblemStatus] = ProblemStatus.TRANSLATION


@dataclass(frozen=True)
class SubmitSteelman(ProblemAction):
    text: str
    phase: ClassVar[ProblemStatus] = ProblemStatus.STEELMAN


@dataclass(frozen=True)
class ApproveSteelman(ProblemAction):
    phase: ClassVar[ProblemStatus] = ProblemStatus.STEELMAN_APPROVAL


@dataclass(frozen=True)
class SetAIAnalysis(ProblemAction):
    """Record the Wombat's verdict. Write-once."""

    text: str
    phase: ClassVar[ProblemStatus] = ProblemStatus.AI_REVIEW
    origin: ClassVar[ActionOrigin] = ActionOrigin.SYSTEM


@dataclass(frozen=True)
class EscalateForHumanReview(ProblemAction):
    """Escalate the verdict, recording the escalation verdict text. Write-once."""

    verdict: str
    phase: ClassVar[ProblemStatus] = ProblemStatus.AI_REVIEW


@dataclass(frozen=True)
class AdvanceToProposeSolutions(ProblemAction):
    phase: ClassVar[ProblemStatus] = ProblemStatus.AI_REVIEW


@dataclass(frozen=True)
class ProposeSolution(ProblemAction):
    text: str
    phase: ClassVar[ProblemStatus] = ProblemStatus.PROPOSE_SOLUTIONS


@dataclass(frozen=True)
class SubmitSolutionSteelman(ProblemAction):
    text: str
    phase: ClassVar[ProblemStatus] = ProblemStatus.SOLUTION_STEELMAN


@dataclass(frozen=True)
class SetWager(ProblemAction):
    """Record the Wombat's wager. Write-once."""

    text: str
    phase: ClassVar[ProblemStatus] = ProblemStatus.WAGER
    origin: ClassVar[ActionOrigin] = ActionOrigin.SYSTEM


@dataclass(frozen=True)
class AdvanceToSolution(ProblemAction):
    phase: ClassVar[ProblemStatus] = ProblemStatus.WAGER


@dataclass(frozen=True)
class SetBrainstorm(ProblemAction):
    """Record a Wombat brainstorm for the solution phase. Write-once."""

    text: str
    phase: ClassVar[ProblemStatus] = ProblemStatus.SOLUTION


@dataclass(frozen=True)
class EditSolutionStatement(ProblemAction):
    text: str
    phase: ClassVar[ProblemStatus] = ProblemStatus.SOLUTION


@dataclass(frozen=True)
class AgreeSolution(ProblemAction):
    phase: ClassVar[ProblemStatus] = ProblemStatus.SOLUTION


@dataclass(frozen=True)
class SubmitPostMortem(ProblemAction):
    text: str
    phase: ClassVar[ProblemStatus] = ProblemStatus.RESOLVED
