"""In-memory problem store stub.

Simulates the shared-document store both clients talk to: atomic partial
writes guarded by a compare-and-swap on revision, and snapshot fan-out to
every subscribed participant after each committed change.

NOT suitable for production use.
"""

from __future__ import annotations

import asyncio

import structlog

from wombat.application.ports.problem_store import (
    ProblemsListener,
    ProblemStoreProtocol,
    Unsubscribe,
)
from wombat.domain.errors import ProblemNotFoundError, WriteConflictError
from wombat.domain.models.problem import Problem, ProblemUpdate

logger = structlog.get_logger()


class ProblemStoreStub(ProblemStoreProtocol):
    """In-memory ProblemStoreProtocol implementation.

    Test hooks:
        inject_conflicts(n): the next n writes raise WriteConflictError
            without applying anything.
        yield_on_read: await one event-loop turn after every read so
            concurrent read-modify-write cycles interleave.
        write_count / conflict_count: committed writes and raised conflicts.

    A listener that raises is logged and skipped; delivery to the other
    listeners continues.
    """

    def __init__(self, yield_on_read: bool = False) -> None:
        self._problems: dict[str, Problem] = {}
        self._listeners: dict[str, list[ProblemsListener]] = {}
        self._lock = asyncio.Lock()
        self._injected_conflicts = 0
        self.yield_on_read = yield_on_read
        self.write_count = 0
        self.conflict_count = 0

    async def create(self, problem: Problem) -> str:
        async with self._lock:
            if problem.id in self._problems:
                raise ValueError(f"Problem already exists: {problem.id}")
            self._problems[problem.id] = problem.with_revision(0)
        await self._notify(problem.participants)
        return problem.id

    async def read(self, problem_id: str) -> Problem:
        async with self._lock:
            problem = self._problems.get(problem_id)
        if problem is None:
            raise ProblemNotFoundError(problem_id)
        if self.yield_on_read:
            await asyncio.sleep(0)
        return problem

    async def write(
        self,
        problem_id: str,
        update: ProblemUpdate,
        expected_revision: int,
    ) -> Problem:
        """Apply ``update`` if the stored revision is still ``expected_revision``.

        Simulates a transactional update with a lock; the listeners are
        notified after the lock is released.
        """
        async with self._lock:
            current = self._problems.get(problem_id)
            if current is None:
                raise ProblemNotFoundError(problem_id)

            if self._injected_conflicts > 0:
                self._injected_conflicts -= 1
                self.conflict_count += 1
                raise WriteConflictError(
                    problem_id=problem_id,
                    expected_revision=expected_revision,
                    actual_revision=current.revision,
                )

            if current.revision != expected_revision:
                self.conflict_count += 1
                raise WriteConflictError(
                    problem_id=problem_id,
                    expected_revision=expected_revision,
                    actual_revision=current.revision,
                )

            committed = current.apply(update).with_revision(current.revision + 1)
            self._problems[problem_id] = committed
            self.write_count += 1

        await self._notify(committed.participants)
        return committed

    async def list_for_participant(self, participant_id: str) -> list[Problem]:
        async with self._lock:
            return self._sorted_for(participant_id)

    def subscribe_problems(
        self,
        participant_id: str,
        on_change: ProblemsListener,
    ) -> Unsubscribe:
        listeners = self._listeners.setdefault(participant_id, [])
        listeners.append(on_change)

        def unsubscribe() -> None:
            if on_change in listeners:
                listeners.remove(on_change)

        return unsubscribe

    # =========================================================================
    # Test helpers
    # =========================================================================

    def inject_conflicts(self, count: int) -> None:
        """Make the next ``count`` writes fail with WriteConflictError."""
        self._injected_conflicts = count

    def put(self, problem: Problem) -> None:
        """Seed a record directly, keeping its revision."""
        self._problems[problem.id] = problem

    def get(self, problem_id: str) -> Problem | None:
        return self._problems.get(problem_id)

    def listener_count(self, participant_id: str) -> int:
        return len(self._listeners.get(participant_id, []))

    def clear(self) -> None:
        self._problems.clear()
        self._listeners.clear()
        self._injected_conflicts = 0
        self.write_count = 0
        self.conflict_count = 0

    # =========================================================================
    # Internals
    # =========================================================================

    def _sorted_for(self, participant_id: str) -> list[Problem]:
        owned = [p for p in self._problems.values() if participant_id in p.participants]
        return sorted(owned, key=lambda p: (p.created_at, p.id), reverse=True)

    async def _notify(self, participants: tuple[str, str]) -> None:
        for participant_id in participants:
            snapshot = self._sorted_for(participant_id)
            for listener in list(self._listeners.get(participant_id, [])):
                try:
                    await listener(snapshot)
                except Exception as exc:
                    logger.error(
                        "problem_listener_failed",
                        participant_id=participant_id,
                        error=str(exc),
                    )
