"""Production adapters for application ports."""

from wombat.infrastructure.adapters.gemini_text_generator import GeminiTextGenerator
from wombat.infrastructure.adapters.system_time_authority import SystemTimeAuthority

__all__ = ["GeminiTextGenerator", "SystemTimeAuthority"]
