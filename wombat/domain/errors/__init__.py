"""Domain errors for the Skeptical Wombat.

Provides specific exception classes for different failure scenarios.
All exceptions inherit from WombatError.
"""

from wombat.domain.errors.concurrent_modification import WriteConflictError
from wombat.domain.errors.generation import GenerationFailureError
from wombat.domain.errors.partner_link import (
    LinkingConflictError,
    PartnerNotLinkedError,
)
from wombat.domain.errors.phase_transition import (
    InvalidPhaseTransitionError,
    PreconditionFailedError,
)
from wombat.domain.errors.problem import NotAParticipantError, ProblemNotFoundError

__all__: list[str] = [
    "GenerationFailureError",
    "InvalidPhaseTransitionError",
    "LinkingConflictError",
    "NotAParticipantError",
    "PartnerNotLinkedError",
    "PreconditionFailedError",
    "ProblemNotFoundError",
    "WriteConflictError",
]
