"""Application ports (abstract interfaces for infrastructure)."""

from wombat.application.ports.problem_store import (
    ProblemsListener,
    ProblemStoreProtocol,
    Unsubscribe,
)
from wombat.application.ports.text_generator import TextGeneratorProtocol
from wombat.application.ports.time_authority import TimeAuthorityProtocol
from wombat.application.ports.user_directory import UserDirectoryProtocol

__all__ = [
    "ProblemStoreProtocol",
    "ProblemsListener",
    "TextGeneratorProtocol",
    "TimeAuthorityProtocol",
    "Unsubscribe",
    "UserDirectoryProtocol",
]
