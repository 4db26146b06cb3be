"""Problem Action Service.

The action surface both participants' clients call. Every action runs the
same cycle against the problem store:

    read latest record -> resolve caller's role -> engine.transition()
    -> write(update, expected_revision) -> retry on WriteConflictError

Developer Golden Rules:
1. ROLE FROM IDENTITY - The acting role is looked up in problem.roles,
   never accepted from the caller.
2. RECOMPUTE ON CONFLICT - A lost compare-and-swap re-reads and re-runs
   the engine; a stale update is never re-sent.
3. REJECTIONS ARE RESULTS - Failed preconditions come back as an
   ActionResult, not as exceptions.
4. GENERATE BEFORE WRITE - AI-assisted actions pre-check the engine, then
   generate, then write; a failed generation stores the sentinel text.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

import structlog

from wombat.application.ports.problem_store import ProblemStoreProtocol
from wombat.application.ports.text_generator import TextGeneratorProtocol
from wombat.application.ports.time_authority import TimeAuthorityProtocol
from wombat.application.prompts import (
    build_brainstorm_prompt,
    build_escalation_prompt,
    build_translation_prompt,
)
from wombat.application.services.base import LoggingMixin
from wombat.application.services.generation import generate_with_fallback
from wombat.config.negotiation_config import NegotiationConfig
from wombat.domain.errors import ProblemNotFoundError, WriteConflictError
from wombat.domain.models.problem import Problem, Role
from wombat.domain.models.problem_action import (
    ActionOrigin,
    AdvanceToProposeSolutions,
    AdvanceToSolution,
    AdvanceToSteelman,
    AgreeProblem,
    AgreeSolution,
    ApproveSteelman,
    EditProblemStatement,
    EditSolutionStatement,
    EscalateForHumanReview,
    ProblemAction,
    ProposeSolution,
    SetBrainstorm,
    SubmitPostMortem,
    SubmitPrivateVersion,
    SubmitSolutionSteelman,
    SubmitSteelman,
)
from wombat.domain.models.transition_outcome import RejectionReason
from wombat.domain.services.transition_engine import PhaseTransitionEngine

# Placeholder generated text used when pre-checking an AI-assisted action
_PENDING = "pending"


class ActionFailure(Enum):
    """Service-level reasons an action was not applied.

    These complement the engine's RejectionReason values.
    """

    NOT_FOUND = "not_found"
    WRITE_CONFLICT = "write_conflict"


@dataclass(frozen=True)
class ActionResult:
    """Outcome of one action as seen by the caller.

    Attributes:
        applied: True when the update was committed.
        reason: Why nothing was committed (None when applied).
        problem: The committed record when applied; otherwise the record the
            decision was made on, or None if it could not be read.
        detail: Human-readable context for a rejection.
    """

    applied: bool
    reason: RejectionReason | ActionFailure | None = None
    problem: Problem | None = None
    detail: str = ""

    @classmethod
    def committed(cls, problem: Problem) -> ActionResult:
        return cls(applied=True, problem=problem)

    @classmethod
    def rejected(
        cls,
        reason: RejectionReason | ActionFailure,
        problem: Problem | None = None,
        detail: str = "",
    ) -> ActionResult:
        return cls(applied=False, reason=reason, problem=problem, detail=detail)

    @property
    def is_benign(self) -> bool:
        """True when nothing was applied because the work was already done."""
        return self.reason is RejectionReason.ALREADY_DONE


class ProblemActionService(LoggingMixin):
    """Applies negotiation actions to the shared problem record.

    Attributes:
        _store: Problem store (compare-and-swap writes).
        _generator: Text generator for AI-assisted actions.
        _time: Time authority supplying ``now`` to the engine.
        _engine: Phase transition engine.
        _config: Retry bound and sentinel strings.
    """

    def __init__(
        self,
        store: ProblemStoreProtocol,
        generator: TextGeneratorProtocol,
        time_authority: TimeAuthorityProtocol,
        config: NegotiationConfig | None = None,
        engine: PhaseTransitionEngine | None = None,
    ) -> None:
        """Initialize the action service.

        Args:
            store: Problem store.
            generator: Text generator used by translation, escalation and brainstorm.
            time_authority: Source of the current time.
            config: Negotiation config (defaults to NegotiationConfig()).
            engine: Transition engine (defaults to one built from config).
        """
        self._store = store
        self._generator = generator
        self._time = time_authority
        self._config = config or NegotiationConfig()
        self._engine = engine or PhaseTransitionEngine(
            solution_check_delay=self._config.solution_check_delay
        )
        self._init_logger(component="negotiation")

    # =========================================================================
    # Participant actions
    # =========================================================================

    async def edit_problem_statement(
        self, problem_id: str, participant_id: str, text: str
    ) -> ActionResult:
        return await self._dispatch(problem_id, participant_id, EditProblemStatement(text=text))

    async def agree_problem(self, problem_id: str, participant_id: str) -> ActionResult:
        return await self._dispatch(problem_id, participant_id, AgreeProblem())

    async def submit_private_version(
        self, problem_id: str, participant_id: str, text: str
    ) -> ActionResult:
        """Translate the private version, then lock both in.

        The translation is generated before the write. If generation fails
        the private version is still submitted, with the translation
        fallback in place of the Wombat's reading.
        """
        return await self._generate_then_dispatch(
            problem_id,
            participant_id,
            operation="submit_private_version",
            make_action=lambda generated: SubmitPrivateVersion(
                text=text, translation=generated
            ),
            build_prompt=lambda _problem: build_translation_prompt(text),
            fallback=self._config.translation_fallback,
        )

    async def advance_to_steelman(self, problem_id: str, participant_id: str) -> ActionResult:
        return await self._dispatch(problem_id, participant_id, AdvanceToSteelman())

    async def submit_steelman(
        self, problem_id: str, participant_id: str, text: str
    ) -> ActionResult:
        return await self._dispatch(problem_id, participant_id, SubmitSteelman(text=text))

    async def approve_steelman(self, problem_id: str, participant_id: str) -> ActionResult:
        return await self._dispatch(problem_id, participant_id, ApproveSteelman())

    async def escalate_for_human_review(
        self, problem_id: str, participant_id: str
    ) -> ActionResult:
        """Ask for a human second opinion on the Wombat's verdict."""
        return await self._generate_then_dispatch(
            problem_id,
            participant_id,
            operation="escalate_for_human_review",
            make_action=lambda generated: EscalateForHumanReview(verdict=generated),
            build_prompt=build_escalation_prompt,
            fallback=self._config.escalation_fallback,
        )

    async def advance_to_propose_solutions(
        self, problem_id: str, participant_id: str
    ) -> ActionResult:
        return await self._dispatch(problem_id, participant_id, AdvanceToProposeSolutions())

    async def propose_solution(
        self, problem_id: str, participant_id: str, text: str
    ) -> ActionResult:
        return await self._dispatch(problem_id, participant_id, ProposeSolution(text=text))

    async def submit_solution_steelman(
        self, problem_id: str, participant_id: str, text: str
    ) -> ActionResult:
        return await self._dispatch(
            problem_id, participant_id, SubmitSolutionSteelman(text=text)
        )

    async def advance_to_solution(self, problem_id: str, participant_id: str) -> ActionResult:
        return await self._dispatch(problem_id, participant_id, AdvanceToSolution())

    async def brainstorm(self, problem_id: str, participant_id: str) -> ActionResult:
        """Have the Wombat brainstorm combined solutions for the final statement."""
        return await self._generate_then_dispatch(
            problem_id,
            participant_id,
            operation="brainstorm",
            make_action=lambda generated: SetBrainstorm(text=generated),
            build_prompt=build_brainstorm_prompt,
            fallback=self._config.brainstorm_fallback,
        )

    async def edit_solution_statement(
        self, problem_id: str, participant_id: str, text: str
    ) -> ActionResult:
        return await self._dispatch(
            problem_id, participant_id, EditSolutionStatement(text=text)
        )

    async def agree_solution(self, problem_id: str, participant_id: str) -> ActionResult:
        return await self._dispatch(problem_id, participant_id, AgreeSolution())

    async def submit_post_mortem(
        self, problem_id: str, participant_id: str, text: str
    ) -> ActionResult:
        return await self._dispatch(problem_id, participant_id, SubmitPostMortem(text=text))

    # =========================================================================
    # System actions
    # =========================================================================

    async def apply_system_action(
        self, problem_id: str, action: ProblemAction
    ) -> ActionResult:
        """Apply a system-originated action (SetAIAnalysis, SetWager).

        Raises:
            ValueError: If ``action`` is a participant action.
        """
        if action.origin is not ActionOrigin.SYSTEM:
            raise ValueError(f"{action.name} is not a system action")
        return await self._dispatch(problem_id, None, action)

    # =========================================================================
    # Read-compute-write cycle
    # =========================================================================

    async def _dispatch(
        self,
        problem_id: str,
        participant_id: str | None,
        action: ProblemAction,
    ) -> ActionResult:
        """Run the read-compute-write cycle with bounded CAS retries."""
        log = self._log_operation(
            action.name,
            problem_id=problem_id,
            participant_id=participant_id,
        )
        attempts = self._config.max_write_attempts

        for attempt in range(1, attempts + 1):
            loaded = await self._load(problem_id, participant_id, log)
            if isinstance(loaded, ActionResult):
                return loaded
            problem, role = loaded

            outcome = self._engine.transition(problem, action, role, self._time.now())
            if outcome.rejection is not None:
                self._log_rejection(log, outcome.rejection.reason, outcome.rejection.detail, problem)
                return ActionResult.rejected(
                    outcome.rejection.reason, problem, outcome.rejection.detail
                )

            try:
                committed = await self._store.write(
                    problem_id, outcome.update, expected_revision=problem.revision
                )
            except WriteConflictError as exc:
                log.warning(
                    "write_conflict",
                    attempt=attempt,
                    max_attempts=attempts,
                    expected_revision=exc.expected_revision,
                    actual_revision=exc.actual_revision,
                )
                continue

            log.info(
                "action_applied",
                status=committed.status.value,
                advanced=outcome.advances_phase,
                fields=outcome.update.changed_fields(),
                revision=committed.revision,
            )
            return ActionResult.committed(committed)

        log.warning("write_attempts_exhausted", max_attempts=attempts)
        return ActionResult.rejected(
            ActionFailure.WRITE_CONFLICT,
            detail=f"gave up after {attempts} conflicting writes",
        )

    async def _generate_then_dispatch(
        self,
        problem_id: str,
        participant_id: str,
        *,
        operation: str,
        make_action: Callable[[str], ProblemAction],
        build_prompt: Callable[[Problem], str],
        fallback: str,
    ) -> ActionResult:
        """Pre-check, generate, then dispatch an AI-assisted action.

        The pre-check runs the engine with placeholder text so a stale or
        out-of-sequence request does not spend a generation.
        """
        log = self._log_operation(
            operation, problem_id=problem_id, participant_id=participant_id
        )
        loaded = await self._load(problem_id, participant_id, log)
        if isinstance(loaded, ActionResult):
            return loaded
        problem, role = loaded

        precheck = self._engine.transition(
            problem, make_action(_PENDING), role, self._time.now()
        )
        if precheck.rejection is not None:
            self._log_rejection(
                log, precheck.rejection.reason, precheck.rejection.detail, problem
            )
            return ActionResult.rejected(
                precheck.rejection.reason, problem, precheck.rejection.detail
            )

        log.info("generation_started")
        generated = await generate_with_fallback(
            self._generator, build_prompt(problem), fallback, log
        )
        return await self._dispatch(problem_id, participant_id, make_action(generated.text))

    async def _load(
        self,
        problem_id: str,
        participant_id: str | None,
        log: structlog.BoundLogger,
    ) -> tuple[Problem, Role | None] | ActionResult:
        """Read the record and resolve the caller's role.

        Returns:
            (problem, role) on success, or the ActionResult to return early.
        """
        try:
            problem = await self._store.read(problem_id)
        except ProblemNotFoundError:
            log.warning("problem_not_found")
            return ActionResult.rejected(ActionFailure.NOT_FOUND, detail=problem_id)

        if participant_id is None:
            return problem, None

        role = problem.roles.get(participant_id)
        if role is None:
            log.warning("not_a_participant")
            return ActionResult.rejected(
                RejectionReason.NOT_A_PARTICIPANT,
                problem,
                f"{participant_id} is not a participant",
            )
        return problem, role

    @staticmethod
    def _log_rejection(
        log: structlog.BoundLogger,
        reason: RejectionReason,
        detail: str,
        problem: Problem,
    ) -> None:
        if reason.is_benign:
            log.info(
                "action_already_done", detail=detail, status=problem.status.value
            )
        else:
            log.warning(
                "action_rejected",
                reason=reason.value,
                detail=detail,
                status=problem.status.value,
            )
