"""Write conflict error for compare-and-swap problem writes.

Raised by problem store implementations when a read-modify-write cycle
loses the race against a concurrent writer. The partial update was computed
from a record that is no longer current, so it must not be applied.
"""

from __future__ import annotations

from wombat.domain.exceptions import WombatError


class WriteConflictError(WombatError):
    """Raised when a CAS write finds a newer revision than expected.

    This is a recoverable error - the caller should re-read the problem,
    recompute the transition against the fresh record and write again.
    Reapplying the stale update could clobber the partner's interleaved change.

    Attributes:
        problem_id: Problem that was being written.
        expected_revision: Revision the update was computed from.
        actual_revision: Revision found in the store.
    """

    def __init__(
        self,
        problem_id: str,
        expected_revision: int,
        actual_revision: int,
    ) -> None:
        self.problem_id = problem_id
        self.expected_revision = expected_revision
        self.actual_revision = actual_revision
        super().__init__(
            f"Concurrent modification detected for problem {problem_id}: "
            f"expected revision {expected_revision}, found {actual_revision}. "
            "Re-read and recompute before writing."
        )
