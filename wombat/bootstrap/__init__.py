"""Bootstrap wiring for the negotiation services."""

from wombat.bootstrap.container import (
    WombatContainer,
    build_container,
    build_generator,
    get_container,
    set_container,
)
from wombat.bootstrap.logging import configure_structlog

__all__ = [
    "WombatContainer",
    "build_container",
    "build_generator",
    "configure_structlog",
    "get_container",
    "set_container",
]
