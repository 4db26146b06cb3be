"""Configuration for the negotiation services and the Gemini adapter."""

from wombat.config.gemini_config import GeminiConfig
from wombat.config.negotiation_config import (
    DEFAULT_NEGOTIATION_CONFIG,
    TEST_NEGOTIATION_CONFIG,
    NegotiationConfig,
)

__all__ = [
    "DEFAULT_NEGOTIATION_CONFIG",
    "GeminiConfig",
    "NegotiationConfig",
    "TEST_NEGOTIATION_CONFIG",
]
