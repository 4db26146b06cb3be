"""Problem store port.

This module defines the abstract interface for the external shared-record
store that holds one document per negotiation and fans changes out to
subscribed participants.

Contract:
1. ATOMIC PARTIAL WRITES - write() applies a ProblemUpdate against the
   latest stored record, never a destructive full-record overwrite.
2. CAS ON REVISION - write() succeeds only if the stored revision equals
   expected_revision; otherwise it raises WriteConflictError and applies
   nothing. This is what keeps two near-simultaneous submissions from both
   concluding "partner hasn't submitted yet".
3. FAN-OUT AFTER COMMIT - subscribers are notified only with committed
   records, newest problem first.
4. FAIL LOUD - implementations raise on errors; callers decide retry.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Protocol

from wombat.domain.models.problem import Problem, ProblemUpdate

ProblemsListener = Callable[[list[Problem]], Awaitable[None]]
Unsubscribe = Callable[[], None]


class ProblemStoreProtocol(Protocol):
    """Protocol for problem record storage and change delivery.

    Implementations may use a document database with snapshot listeners,
    in-memory storage, or other backends.

    Methods:
        create: Store a new problem
        read: Retrieve the latest problem record
        write: Apply a partial update with compare-and-swap
        list_for_participant: Problems an identity participates in
        subscribe_problems: Receive snapshots when those problems change
    """

    async def create(self, problem: Problem) -> str:
        """Store a new problem.

        Args:
            problem: The initial record (revision is ignored and reset).

        Returns:
            The problem id.

        Raises:
            ValueError: If a problem with that id already exists.
        """
        ...

    async def read(self, problem_id: str) -> Problem:
        """Retrieve the latest record.

        Raises:
            ProblemNotFoundError: If the id is unknown.
        """
        ...

    async def write(
        self,
        problem_id: str,
        update: ProblemUpdate,
        expected_revision: int,
    ) -> Problem:
        """Atomically apply a partial update (compare-and-swap on revision).

        Args:
            problem_id: Problem to update.
            update: Partial update computed from the record at expected_revision.
            expected_revision: Revision the update was computed from.

        Returns:
            The committed record with its new revision.

        Raises:
            ProblemNotFoundError: If the id is unknown.
            WriteConflictError: If the stored revision has moved on.
            InvalidPhaseTransitionError: If the update would skip a phase.
        """
        ...

    async def list_for_participant(self, participant_id: str) -> list[Problem]:
        """Return the identity's problems ordered by created_at, newest first."""
        ...

    def subscribe_problems(
        self,
        participant_id: str,
        on_change: ProblemsListener,
    ) -> Unsubscribe:
        """Deliver the identity's problems after every committed change.

        Args:
            participant_id: Identity whose problems to watch.
            on_change: Coroutine receiving the full list, newest first.

        Returns:
            Callable that cancels the subscription.
        """
        ...
