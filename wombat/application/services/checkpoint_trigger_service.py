"""AI Checkpoint Trigger.

Watches problem snapshots and fills in the Wombat's contribution when a
problem sits in an AI checkpoint phase with nothing recorded yet:

    ai_review, ai_analysis empty    -> generate verdict -> SetAIAnalysis
    wager,     wombats_wager empty  -> generate wager   -> SetWager

Both participants' clients run a trigger and both see the same snapshot,
so two layers keep the result single:

1. In-flight marker - InFlightRegistry.try_acquire((problem_id, phase)) is
   a compare-and-swap; only the winner generates.
2. Idempotent write - SetAIAnalysis/SetWager are write-once in the engine.
   A trigger that generated anyway (separate registry, late snapshot) gets
   ALREADY_DONE and its text is discarded. Wasted generation is tolerated;
   overwriting a recorded result is not.

Generation failure writes a sentinel so the phase does not re-trigger. If
the write itself fails, the marker is released so the next snapshot retries.
Once a snapshot shows the result recorded, the marker is dropped.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass

from wombat.application.ports.text_generator import TextGeneratorProtocol
from wombat.application.prompts import build_analysis_prompt, build_wager_prompt
from wombat.application.services.base import LoggingMixin
from wombat.application.services.generation import generate_with_fallback
from wombat.application.services.in_flight_registry import InFlightRegistry
from wombat.application.services.problem_action_service import (
    ActionResult,
    ProblemActionService,
)
from wombat.config.negotiation_config import NegotiationConfig
from wombat.domain.models.problem import Problem, ProblemStatus
from wombat.domain.models.problem_action import ProblemAction, SetAIAnalysis, SetWager


@dataclass(frozen=True)
class _Checkpoint:
    build_prompt: Callable[[Problem], str]
    make_action: Callable[[str], ProblemAction]
    fallback: str


def pending_checkpoint_phase(problem: Problem) -> ProblemStatus | None:
    """Return the checkpoint phase still waiting for the Wombat, if any."""
    if problem.status is ProblemStatus.AI_REVIEW and not problem.ai_analysis:
        return ProblemStatus.AI_REVIEW
    if problem.status is ProblemStatus.WAGER and not problem.wombats_wager:
        return ProblemStatus.WAGER
    return None


class CheckpointTriggerService(LoggingMixin):
    """Fires the Wombat's one-time generation at AI checkpoint phases."""

    def __init__(
        self,
        generator: TextGeneratorProtocol,
        actions: ProblemActionService,
        registry: InFlightRegistry | None = None,
        config: NegotiationConfig | None = None,
    ) -> None:
        """Initialize the trigger.

        Args:
            generator: Text generator for verdicts and wagers.
            actions: Action service used to write the result.
            registry: In-flight markers; share one instance between clients
                in the same process to avoid duplicate generations.
            config: Sentinel strings (defaults to NegotiationConfig()).
        """
        self._generator = generator
        self._actions = actions
        self._registry = registry or InFlightRegistry()
        config = config or NegotiationConfig()
        self._checkpoints: dict[ProblemStatus, _Checkpoint] = {
            ProblemStatus.AI_REVIEW: _Checkpoint(
                build_prompt=build_analysis_prompt,
                make_action=lambda text: SetAIAnalysis(text=text),
                fallback=config.analysis_fallback,
            ),
            ProblemStatus.WAGER: _Checkpoint(
                build_prompt=build_wager_prompt,
                make_action=lambda text: SetWager(text=text),
                fallback=config.wager_fallback,
            ),
        }
        self._init_logger(component="checkpoint")

    @property
    def registry(self) -> InFlightRegistry:
        return self._registry

    async def on_snapshot(self, problems: Iterable[Problem]) -> list[ActionResult]:
        """Process every problem in a subscription snapshot.

        Returns:
            Results of the writes attempted (problems with nothing to do
            are skipped).
        """
        results: list[ActionResult] = []
        for problem in problems:
            result = await self.on_problem(problem)
            if result is not None:
                results.append(result)
        return results

    async def on_problem(self, problem: Problem) -> ActionResult | None:
        """Fire the checkpoint for ``problem`` if one is pending.

        Returns:
            The write result, or None when nothing was attempted.
        """
        phase = pending_checkpoint_phase(problem)
        self._registry.settle(problem.id, problem.status, phase)
        if phase is None:
            return None

        log = self._log_operation(
            "checkpoint", problem_id=problem.id, phase=phase.value
        )
        if not self._registry.try_acquire(problem.id, phase):
            log.debug("checkpoint_already_in_flight")
            return None

        checkpoint = self._checkpoints[phase]
        try:
            log.info("checkpoint_generation_started")
            generated = await generate_with_fallback(
                self._generator,
                checkpoint.build_prompt(problem),
                checkpoint.fallback,
                log,
            )
            result = await self._actions.apply_system_action(
                problem.id, checkpoint.make_action(generated.text)
            )
        except Exception:
            self._registry.release(problem.id, phase)
            log.exception("checkpoint_failed")
            raise

        if result.applied:
            log.info("checkpoint_recorded", fallback=generated.is_fallback)
        elif result.is_benign:
            log.info("checkpoint_result_discarded", detail=result.detail)
        else:
            self._registry.release(problem.id, phase)
            log.warning(
                "checkpoint_write_failed",
                reason=result.reason.value if result.reason else None,
                detail=result.detail,
            )
        return result
