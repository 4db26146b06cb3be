"""Text generator port.

The Wombat's voice comes from an opaque generation capability: one prompt
in, one block of text out. The core never depends on a specific provider.

Usage:
    class MyService:
        def __init__(self, generator: TextGeneratorProtocol) -> None:
            self._generator = generator

        async def translate(self, text: str) -> str:
            return await self._generator.generate(build_translation_prompt(text))
"""

from __future__ import annotations

from typing import Protocol


class TextGeneratorProtocol(Protocol):
    """Protocol for single request/response text generation.

    Implementations:
    - GeminiTextGenerator: Google Gemini over HTTP
    - TextGeneratorStub: Test stub with configurable responses
    """

    async def generate(self, prompt: str) -> str:
        """Generate text for ``prompt``.

        Returns:
            Non-empty generated text.

        Raises:
            GenerationFailureError: On transport failure or empty output.
        """
        ...
