"""Domain models for the Skeptical Wombat.

Available models:
- Problem, ProblemUpdate, RoleProgress: the shared negotiation record
- Role, ProblemStatus: role tags and the fixed phase sequence
- ProblemAction and subclasses: the action vocabulary
- TransitionOutcome, RejectionReason: engine results
- UserProfile: identity and partner link
"""

from wombat.domain.models.problem import (
    AI_CHECKPOINT_PHASES,
    PHASE_SEQUENCE,
    ROLE_FIELDS,
    SHARED_FIELDS,
    Problem,
    ProblemStatus,
    ProblemUpdate,
    Role,
    RoleProgress,
)
from wombat.domain.models.problem_action import (
    ActionOrigin,
    AdvanceToProposeSolutions,
    AdvanceToSolution,
    AdvanceToSteelman,
    AgreeProblem,
    AgreeSolution,
    ApproveSteelman,
    EditProblemStatement,
    EditSolutionStatement,
    EscalateForHumanReview,
    ProblemAction,
    ProposeSolution,
    SetAIAnalysis,
    SetBrainstorm,
    SetWager,
    SubmitPostMortem,
    SubmitPrivateVersion,
    SubmitSolutionSteelman,
    SubmitSteelman,
)
from wombat.domain.models.transition_outcome import (
    RejectionReason,
    TransitionOutcome,
    TransitionRejection,
)
from wombat.domain.models.user_profile import UserProfile, default_display_name

__all__ = [
    "AI_CHECKPOINT_PHASES",
    "PHASE_SEQUENCE",
    "ROLE_FIELDS",
    "SHARED_FIELDS",
    "ActionOrigin",
    "AdvanceToProposeSolutions",
    "AdvanceToSolution",
    "AdvanceToSteelman",
    "AgreeProblem",
    "AgreeSolution",
    "ApproveSteelman",
    "EditProblemStatement",
    "EditSolutionStatement",
    "EscalateForHumanReview",
    "Problem",
    "ProblemAction",
    "ProblemStatus",
    "ProblemUpdate",
    "ProposeSolution",
    "RejectionReason",
    "Role",
    "RoleProgress",
    "SetAIAnalysis",
    "SetBrainstorm",
    "SetWager",
    "SubmitPostMortem",
    "SubmitPrivateVersion",
    "SubmitSolutionSteelman",
    "SubmitSteelman",
    "TransitionOutcome",
    "TransitionRejection",
    "UserProfile",
    "default_display_name",
]
