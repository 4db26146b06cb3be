"""In-flight checkpoint generation registry.

Process-local set of (problem_id, phase) markers. try_acquire() is a
compare-and-swap: exactly one caller wins the marker for a key, and the
loser skips generation. A marker outlives its write until a snapshot
shows the checkpoint settled; settle() then drops it. A failed write
releases the marker at once so the next snapshot retries.
"""

from __future__ import annotations

import threading

from wombat.domain.models.problem import ProblemStatus

CheckpointKey = tuple[str, ProblemStatus]


class InFlightRegistry:
    """Thread-safe CAS set of checkpoint markers."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._keys: set[CheckpointKey] = set()

    def try_acquire(self, problem_id: str, phase: ProblemStatus) -> bool:
        """Set the marker if absent.

        Returns:
            True if this caller now owns the marker, False if it was held.
        """
        key = (problem_id, phase)
        with self._lock:
            if key in self._keys:
                return False
            self._keys.add(key)
            return True

    def release(self, problem_id: str, phase: ProblemStatus) -> None:
        with self._lock:
            self._keys.discard((problem_id, phase))

    def settle(
        self,
        problem_id: str,
        status: ProblemStatus,
        pending: ProblemStatus | None,
    ) -> None:
        """Drop the markers of ``problem_id`` whose checkpoint is settled.

        A checkpoint is settled once ``status`` has moved past its phase, or
        sits on it with nothing pending. Markers for later phases are kept:
        an older snapshot says nothing about them.
        """
        with self._lock:
            self._keys = {
                key
                for key in self._keys
                if key[0] != problem_id
                or status.precedes(key[1])
                or key[1] is pending
            }

    def is_in_flight(self, problem_id: str, phase: ProblemStatus) -> bool:
        with self._lock:
            return (problem_id, phase) in self._keys

    def snapshot(self) -> list[CheckpointKey]:
        """Return a copy of all markers currently held."""
        with self._lock:
            return list(self._keys)

    def clear(self) -> None:
        with self._lock:
            self._keys.clear()
