"""Generate-or-fallback helper shared by the Wombat-facing services.

A failed or empty generation never propagates: the caller always gets
text to store, either the model's output or the configured sentinel.
"""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from wombat.application.ports.text_generator import TextGeneratorProtocol
from wombat.domain.errors.generation import GenerationFailureError


@dataclass(frozen=True)
class GeneratedText:
    """Text to store plus whether it is the fallback sentinel."""

    text: str
    is_fallback: bool = False


async def generate_with_fallback(
    generator: TextGeneratorProtocol,
    prompt: str,
    fallback: str,
    log: structlog.BoundLogger,
) -> GeneratedText:
    """Call the generator, substituting ``fallback`` on failure or empty output.

    Args:
        generator: Text generator to call.
        prompt: Prompt to send.
        fallback: Sentinel text used when no usable output comes back.
        log: Operation-scoped logger of the calling service.

    Returns:
        GeneratedText with stripped model output or the fallback.
    """
    try:
        text = await generator.generate(prompt)
    except GenerationFailureError as exc:
        log.error("generation_failed", reason=exc.reason, error=str(exc))
        return GeneratedText(text=fallback, is_fallback=True)

    if not text or not text.strip():
        log.error("generation_failed", reason="empty_response")
        return GeneratedText(text=fallback, is_fallback=True)

    log.debug("generation_completed", length=len(text))
    return GeneratedText(text=text.strip())
