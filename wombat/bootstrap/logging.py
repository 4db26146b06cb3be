"""Bootstrap wiring for logging configuration."""

from __future__ import annotations

import os

from wombat.infrastructure.observability import configure_structlog as _configure_structlog

ENVIRONMENT_ENV = "WOMBAT_ENV"


def configure_structlog(environment: str | None = None) -> None:
    """Configure structlog for ``environment`` (defaults to $WOMBAT_ENV or production)."""
    _configure_structlog(environment=environment or os.getenv(ENVIRONMENT_ENV, "production"))


__all__ = ["configure_structlog"]
