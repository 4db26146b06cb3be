"""Time Authority Protocol - the single source of ``now``.

The transition engine never reads the clock itself: the action service asks
the time authority and passes ``now`` in, so the solution check date and the
post-mortem window are deterministic under test.

Production: SystemTimeAuthority (wombat.infrastructure.adapters).
Tests: FakeTimeAuthority (tests/helpers/fake_time_authority.py).
"""

from abc import ABC, abstractmethod
from datetime import datetime


class TimeAuthorityProtocol(ABC):
    """Abstract interface for time authority."""

    @abstractmethod
    def now(self) -> datetime:
        """Return the current time, timezone-aware (UTC)."""
        ...
