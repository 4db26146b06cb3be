"""Negotiation configuration.

Environment Variables:
- WOMBAT_SOLUTION_CHECK_DAYS: Days between agreeing a solution and the
  post-mortem opening (default: 7)
- WOMBAT_MAX_WRITE_ATTEMPTS: Read-compute-write attempts before an action
  gives up on a write conflict (default: 3)
- WOMBAT_ANALYSIS_FALLBACK: Verdict text stored when generation fails
- WOMBAT_WAGER_FALLBACK: Wager text stored when generation fails
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import timedelta

DEFAULT_ANALYSIS_FALLBACK = "The Wombat is having a moment. Analysis unavailable."
DEFAULT_WAGER_FALLBACK = "The Wombat declined to wager."
DEFAULT_TRANSLATION_FALLBACK = "Translation failed."
DEFAULT_ESCALATION_FALLBACK = "The Wombat could not reach a human. Try again later."
DEFAULT_BRAINSTORM_FALLBACK = "The Wombat's brainstorm fizzled. You're on your own."
DEFAULT_BS_METER_FALLBACK = "The Wombat is speechless."
DEFAULT_EMERGENCY_FALLBACK = "The Wombat is on a coffee break."


def _get_int_env(key: str, default: int) -> int:
    """Get integer environment variable, falling back on missing or invalid."""
    value = os.environ.get(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _get_str_env(key: str, default: str) -> str:
    """Get a non-blank string environment variable with default."""
    value = os.environ.get(key)
    if value is None or not value.strip():
        return default
    return value


@dataclass(frozen=True)
class NegotiationConfig:
    """Tunables for the negotiation services.

    Attributes:
        solution_check_days: Delay before post-mortems are accepted.
        max_write_attempts: Bound on compare-and-swap retries per action.
        analysis_fallback: Sentinel verdict written when generation fails,
            so the ai_review checkpoint does not fire again.
        wager_fallback: Sentinel wager written when generation fails.
        translation_fallback: Translation stored with a private version
            when generation fails.
        escalation_fallback: Human verdict text when escalation generation fails.
        brainstorm_fallback: Brainstorm text when generation fails.
        bs_meter_fallback: BS meter reply when generation fails.
        emergency_fallback: Emergency Wombat reply when generation fails.
    """

    solution_check_days: int = 7
    max_write_attempts: int = 3
    analysis_fallback: str = DEFAULT_ANALYSIS_FALLBACK
    wager_fallback: str = DEFAULT_WAGER_FALLBACK
    translation_fallback: str = DEFAULT_TRANSLATION_FALLBACK
    escalation_fallback: str = DEFAULT_ESCALATION_FALLBACK
    brainstorm_fallback: str = DEFAULT_BRAINSTORM_FALLBACK
    bs_meter_fallback: str = DEFAULT_BS_METER_FALLBACK
    emergency_fallback: str = DEFAULT_EMERGENCY_FALLBACK

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if self.solution_check_days < 0:
            raise ValueError(
                f"solution_check_days must be non-negative, got {self.solution_check_days}"
            )
        if self.max_write_attempts < 1:
            raise ValueError(
                f"max_write_attempts must be at least 1, got {self.max_write_attempts}"
            )
        for name in (
            "analysis_fallback",
            "wager_fallback",
            "translation_fallback",
            "escalation_fallback",
            "brainstorm_fallback",
            "bs_meter_fallback",
            "emergency_fallback",
        ):
            if not getattr(self, name).strip():
                raise ValueError(f"{name} must not be blank")

    @property
    def solution_check_delay(self) -> timedelta:
        return timedelta(days=self.solution_check_days)

    @classmethod
    def from_environment(cls) -> NegotiationConfig:
        """Create config from environment variables with defaults."""
        return cls(
            solution_check_days=_get_int_env("WOMBAT_SOLUTION_CHECK_DAYS", 7),
            max_write_attempts=_get_int_env("WOMBAT_MAX_WRITE_ATTEMPTS", 3),
            analysis_fallback=_get_str_env(
                "WOMBAT_ANALYSIS_FALLBACK", DEFAULT_ANALYSIS_FALLBACK
            ),
            wager_fallback=_get_str_env("WOMBAT_WAGER_FALLBACK", DEFAULT_WAGER_FALLBACK),
        )


DEFAULT_NEGOTIATION_CONFIG = NegotiationConfig()

# No post-mortem wait, single write attempt; for unit tests
TEST_NEGOTIATION_CONFIG = NegotiationConfig(
    solution_check_days=0,
    max_write_attempts=1,
)
