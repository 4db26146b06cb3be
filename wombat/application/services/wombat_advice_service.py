"""Ad-hoc Wombat advice outside the phase flow.

Neither call touches the problem record: the BS meter reviews a draft
steelman before it is submitted, and the emergency button just asks the
Wombat for something to say. Both always return text.
"""

from __future__ import annotations

from wombat.application.ports.text_generator import TextGeneratorProtocol
from wombat.application.prompts import build_bs_meter_prompt, build_emergency_prompt
from wombat.application.services.base import LoggingMixin
from wombat.application.services.generation import generate_with_fallback
from wombat.config.negotiation_config import NegotiationConfig


class WombatAdviceService(LoggingMixin):
    """BS meter and emergency Wombat."""

    def __init__(
        self,
        generator: TextGeneratorProtocol,
        config: NegotiationConfig | None = None,
    ) -> None:
        self._generator = generator
        self._config = config or NegotiationConfig()
        self._init_logger(component="advice")

    async def bs_meter(self, text: str) -> str:
        """Judge whether a draft steelman is genuine or a disguised complaint.

        Raises:
            ValueError: If ``text`` is blank.
        """
        if not text or not text.strip():
            raise ValueError("text must not be blank")
        log = self._log_operation("bs_meter", length=len(text))
        generated = await generate_with_fallback(
            self._generator,
            build_bs_meter_prompt(text),
            self._config.bs_meter_fallback,
            log,
        )
        return generated.text

    async def emergency_wombat(self) -> str:
        log = self._log_operation("emergency_wombat")
        generated = await generate_with_fallback(
            self._generator,
            build_emergency_prompt(),
            self._config.emergency_fallback,
            log,
        )
        return generated.text
