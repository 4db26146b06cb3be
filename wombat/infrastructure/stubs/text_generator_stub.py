"""Text generator stub with configurable responses.

Usage:
    generator = TextGeneratorStub(default_response="Blunt verdict.")
    generator.queue("first reply", "second reply")
    generator.raise_error = True  # every call raises GenerationFailureError
"""

from __future__ import annotations

import asyncio
from collections import deque

from wombat.application.ports.text_generator import TextGeneratorProtocol
from wombat.domain.errors import GenerationFailureError


class TextGeneratorStub(TextGeneratorProtocol):
    """Returns queued responses, then the default response.

    Attributes:
        default_response: Reply once the queue is empty.
        raise_error: When True, every call raises GenerationFailureError.
        gate: When set, calls wait on this event before replying, so tests
            can hold several generations in flight at once.
        calls: Prompts received, in order.
    """

    def __init__(
        self,
        default_response: str = "The Wombat has spoken.",
        raise_error: bool = False,
    ) -> None:
        self.default_response = default_response
        self.raise_error = raise_error
        self.gate: asyncio.Event | None = None
        self.calls: list[str] = []
        self._queued: deque[str] = deque()

    def queue(self, *responses: str) -> None:
        self._queued.extend(responses)

    async def generate(self, prompt: str) -> str:
        self.calls.append(prompt)
        if self.gate is not None:
            await self.gate.wait()
        if self.raise_error:
            raise GenerationFailureError("stub_failure")
        if self._queued:
            return self._queued.popleft()
        return self.default_response

    @property
    def call_count(self) -> int:
        return len(self.calls)

    def clear(self) -> None:
        self.calls.clear()
        self._queued.clear()
        self.raise_error = False
        self.gate = None
