"""Gemini text generation configuration.

Environment Variables:
- GEMINI_API_KEY: API key (required for the live adapter; the variable
  name itself can be changed with GEMINI_API_KEY_ENV)
- GEMINI_MODEL: Model name (default: gemini-2.5-flash)
- GEMINI_BASE_URL: API root (default: https://generativelanguage.googleapis.com/v1beta)
- GEMINI_TIMEOUT_SECONDS: Request timeout (default: 30.0)
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field

DEFAULT_GEMINI_MODEL = "gemini-2.5-flash"
DEFAULT_GEMINI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_API_KEY_ENV = "GEMINI_API_KEY"


def _get_float_env(key: str, default: float) -> float:
    """Get float environment variable, falling back on missing or invalid."""
    value = os.environ.get(key)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return default


@dataclass(frozen=True)
class GeminiConfig:
    """Connection settings for the Gemini generateContent endpoint.

    Attributes:
        api_key: Key passed as the ``key`` query parameter.
        model: Model name interpolated into the endpoint path.
        base_url: API root without trailing slash.
        timeout_seconds: Per-request timeout.
    """

    api_key: str = field(repr=False)
    model: str = DEFAULT_GEMINI_MODEL
    base_url: str = DEFAULT_GEMINI_BASE_URL
    timeout_seconds: float = 30.0

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if not self.api_key:
            raise ValueError("api_key must not be empty")
        if not self.model:
            raise ValueError("model must not be empty")
        if self.timeout_seconds <= 0:
            raise ValueError(
                f"timeout_seconds must be positive, got {self.timeout_seconds}"
            )
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))

    @property
    def endpoint(self) -> str:
        """Full generateContent URL (without the key parameter)."""
        return f"{self.base_url}/models/{self.model}:generateContent"

    @classmethod
    def from_environment(cls) -> GeminiConfig:
        """Create config from environment variables.

        Raises:
            ValueError: If the API key variable is unset or empty.
        """
        key_env = os.environ.get("GEMINI_API_KEY_ENV", DEFAULT_API_KEY_ENV)
        api_key = os.environ.get(key_env, "")
        if not api_key:
            raise ValueError(f"{key_env} environment variable is not set")
        return cls(
            api_key=api_key,
            model=os.environ.get("GEMINI_MODEL", DEFAULT_GEMINI_MODEL),
            base_url=os.environ.get("GEMINI_BASE_URL", DEFAULT_GEMINI_BASE_URL),
            timeout_seconds=_get_float_env("GEMINI_TIMEOUT_SECONDS", 30.0),
        )
