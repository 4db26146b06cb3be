"""Text generation errors.

Raised by text generator implementations when the generation capability
is unreachable or returns nothing usable.
"""

from __future__ import annotations

from wombat.domain.exceptions import WombatError


class GenerationFailureError(WombatError):
    """Raised when the generator returned no usable text.

    Callers recover by writing a sentinel string, never by leaving the
    target field empty (an empty checkpoint field re-triggers generation
    on every snapshot).

    Attributes:
        reason: Short machine-readable cause (e.g. "http_503", "empty_response").
    """

    def __init__(self, reason: str, message: str | None = None) -> None:
        self.reason = reason
        super().__init__(message or f"Text generation failed: {reason}")
