"""Domain services for the Skeptical Wombat.

Domain services contain logic that doesn't naturally fit in the Problem
aggregate itself. Both are pure: no I/O, no clock reads.

Available services:
- PhaseTransitionEngine / transition: computes legal problem updates
- compute_completion: per-viewer completion projection
"""

from wombat.domain.services.completion_tracker import (
    CompletionView,
    StepProgress,
    completion_for_participant,
    compute_completion,
)
from wombat.domain.services.transition_engine import (
    DEFAULT_SOLUTION_CHECK_DELAY,
    PhaseTransitionEngine,
    transition,
)

__all__ = [
    "DEFAULT_SOLUTION_CHECK_DELAY",
    "CompletionView",
    "PhaseTransitionEngine",
    "StepProgress",
    "completion_for_participant",
    "compute_completion",
    "transition",
]
