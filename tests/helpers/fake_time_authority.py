"""FakeTimeAuthority - a clock the tests move by hand.

Negotiations span days (the solution check date sits a week after
agreement), so the fake steps in whole timedeltas rather than ticking.

Usage:
    clock = FakeTimeAuthority()
    clock.advance(delta=timedelta(days=7))
    clock.set_time(problem.solution_check_date)
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from wombat.application.ports.time_authority import TimeAuthorityProtocol

DEFAULT_FROZEN_AT = datetime(2026, 1, 1, 0, 0, 0, tzinfo=timezone.utc)


def _as_utc(dt: datetime) -> datetime:
    return dt if dt.tzinfo is not None else dt.replace(tzinfo=timezone.utc)


class FakeTimeAuthority(TimeAuthorityProtocol):
    """Frozen clock; every reading of now() is logged in ``readings``."""

    def __init__(self, frozen_at: datetime | None = None) -> None:
        self._now = _as_utc(frozen_at or DEFAULT_FROZEN_AT)
        self.readings: list[datetime] = []

    def now(self) -> datetime:
        self.readings.append(self._now)
        return self._now

    def advance(self, delta: timedelta) -> None:
        """Move the clock forward by ``delta``.

        Raises:
            ValueError: If ``delta`` is negative; use set_time() to go back.
        """
        if delta < timedelta(0):
            raise ValueError(f"Cannot advance by a negative delta: {delta}")
        self._now += delta

    def set_time(self, dt: datetime) -> None:
        """Jump to ``dt`` (naive values are taken as UTC)."""
        self._now = _as_utc(dt)

    def __repr__(self) -> str:
        return f"FakeTimeAuthority(now={self._now.isoformat()})"
