"""Base exception classes for the Wombat domain layer."""


class WombatError(Exception):
    """Base exception for all domain errors.

    All domain-specific exceptions MUST inherit from this class.
    This enables consistent error handling at the boundary between the
    transition engine, the checkpoint trigger and the problem store.
    """

    def __init__(self, message: str = "") -> None:
        """Initialize the exception with an optional message.

        Args:
            message: Human-readable error description.
        """
        super().__init__(message)
