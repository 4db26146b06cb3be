"""Phase transition engine for the negotiation state machine.

Pure mapping from (current record, action, acting role, now) to the exact
partial update to apply. No I/O: the caller reads the record, calls the
engine, and writes the returned update with compare-and-swap against the
revision it read.

Synchronization Rules:
- Every action belongs to one phase. A record still before that phase
  rejects with OUT_OF_SEQUENCE; a record already past it rejects with
  ALREADY_DONE, the benign outcome of losing a race with the partner.
- Role-scoped actions write only the acting role's RoleProgress.
- A phase that needs both parties advances only in the update that makes
  the second party's condition true: "my condition AND partner condition".
- Write-once shared fields (ai_analysis, wombats_wager, brainstormed_solutions,
  human_verdict) reject with ALREADY_DONE once filled.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timedelta
from typing import Any

from wombat.domain.models.problem import (
    Problem,
    ProblemStatus,
    ProblemUpdate,
    Role,
)
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
    SetAIAnalysis,
    SetBrainstorm,
    SetWager,
    SubmitPostMortem,
    SubmitPrivateVersion,
    SubmitSolutionSteelman,
    SubmitSteelman,
)
from wombat.domain.models.transition_outcome import (
    RejectionReason,
    TransitionOutcome,
)

DEFAULT_SOLUTION_CHECK_DELAY: timedelta = timedelta(days=7)

# Handlers narrow the action type and, for participant actions, the role
# (transition() rejects a missing role before dispatch).
_Handler = Callable[..., TransitionOutcome]


def _role_update(
    role: Role,
    status: ProblemStatus | None = None,
    **values: Any,
) -> ProblemUpdate:
    return ProblemUpdate(status=status, role_fields={role: values})


def _shared_update(
    status: ProblemStatus | None = None,
    **values: Any,
) -> ProblemUpdate:
    return ProblemUpdate(status=status, shared_fields=values)


def _has_text(value: str) -> bool:
    return bool(value and value.strip())


class PhaseTransitionEngine:
    """Computes legal problem updates.

    The only configuration is the delay between both partners agreeing to
    the solution and the post-mortem opening.

    Example:
        >>> engine = PhaseTransitionEngine()
        >>> outcome = engine.transition(problem, AgreeProblem(), Role.ROLE_A, now)
        >>> if outcome.applied:
        ...     await store.write(problem.id, outcome.update, problem.revision)
    """

    def __init__(
        self, solution_check_delay: timedelta = DEFAULT_SOLUTION_CHECK_DELAY
    ) -> None:
        if solution_check_delay < timedelta(0):
            raise ValueError("solution_check_delay must not be negative")
        self._solution_check_delay = solution_check_delay
        self._handlers: dict[type[ProblemAction], _Handler] = {
            EditProblemStatement: self._edit_problem_statement,
            AgreeProblem: self._agree_problem,
            SubmitPrivateVersion: self._submit_private_version,
            AdvanceToSteelman: self._advance_to_steelman,
            SubmitSteelman: self._submit_steelman,
            ApproveSteelman: self._approve_steelman,
            SetAIAnalysis: self._set_ai_analysis,
            EscalateForHumanReview: self._escalate_for_human_review,
            AdvanceToProposeSolutions: self._advance_to_propose_solutions,
            ProposeSolution: self._propose_solution,
            SubmitSolutionSteelman: self._submit_solution_steelman,
            SetWager: self._set_wager,
            AdvanceToSolution: self._advance_to_solution,
            SetBrainstorm: self._set_brainstorm,
            EditSolutionStatement: self._edit_solution_statement,
            AgreeSolution: self._agree_solution,
            SubmitPostMortem: self._submit_post_mortem,
        }

    @property
    def solution_check_delay(self) -> timedelta:
        return self._solution_check_delay

    def transition(
        self,
        problem: Problem,
        action: ProblemAction,
        acting_role: Role | None,
        now: datetime,
    ) -> TransitionOutcome:
        """Evaluate one action against the current record.

        Args:
            problem: The latest record, as read from the store.
            action: The action to evaluate.
            acting_role: Role of the authenticated caller; None for the system.
            now: Current time from the time authority.

        Returns:
            TransitionOutcome with the update to apply, or a rejection with
            an empty update.

        Raises:
            TypeError: If the action type is not part of the vocabulary.
        """
        handler = self._handlers.get(type(action))
        if handler is None:
            raise TypeError(f"Unsupported action: {type(action).__name__}")

        if action.origin is ActionOrigin.PARTICIPANT and acting_role is None:
            return TransitionOutcome.rejected(
                action.name,
                problem.status,
                RejectionReason.NOT_A_PARTICIPANT,
                "participant action issued without an acting role",
            )

        if problem.status is not action.phase:
            if problem.status.precedes(action.phase):
                return TransitionOutcome.rejected(
                    action.name,
                    problem.status,
                    RejectionReason.OUT_OF_SEQUENCE,
                    f"requires phase {action.phase.value}",
                )
            return TransitionOutcome.rejected(
                action.name,
                problem.status,
                RejectionReason.ALREADY_DONE,
                f"phase {action.phase.value} already completed",
            )

        text = getattr(action, "text", None)
        if text is not None and not _has_text(text):
            return TransitionOutcome.rejected(
                action.name,
                problem.status,
                RejectionReason.INVALID_PAYLOAD,
                "text must not be empty",
            )

        return handler(problem, action, acting_role, now)

    # =========================================================================
    # Agree statement
    # =========================================================================

    def _edit_problem_statement(
        self, problem: Problem, action: EditProblemStatement, me: Role, now: datetime
    ) -> TransitionOutcome:
        if any(problem.progress_for(role).agreed_problem for role in Role):
            return self._already_done(problem, action, "statement locked by agreement")
        return self._accept(
            problem, action, _shared_update(problem_statement=action.text)
        )

    def _agree_problem(
        self, problem: Problem, action: AgreeProblem, me: Role, now: datetime
    ) -> TransitionOutcome:
        if problem.progress_for(me).agreed_problem:
            return self._already_done(problem, action, "already agreed")
        partner_done = problem.progress_for(me.partner).agreed_problem
        return self._accept(
            problem,
            action,
            _role_update(
                me,
                status=ProblemStatus.PRIVATE_VERSIONS if partner_done else None,
                agreed_problem=True,
            ),
        )

    # =========================================================================
    # Private versions and translation
    # =========================================================================

    def _submit_private_version(
        self, problem: Problem, action: SubmitPrivateVersion, me: Role, now: datetime
    ) -> TransitionOutcome:
        if problem.progress_for(me).submitted_private:
            return self._already_done(problem, action, "private version already submitted")
        partner_done = problem.progress_for(me.partner).submitted_private
        return self._accept(
            problem,
            action,
            _role_update(
                me,
                status=ProblemStatus.TRANSLATION if partner_done else None,
                private_version=action.text,
                submitted_private=True,
                translation=action.translation,
            ),
        )

    def _advance_to_steelman(
        self, problem: Problem, action: AdvanceToSteelman, me: Role, now: datetime
    ) -> TransitionOutcome:
        return self._accept(problem, action, ProblemUpdate(status=ProblemStatus.STEELMAN))

    # =========================================================================
    # Steelman and approval
    # =========================================================================

    def _submit_steelman(
        self, problem: Problem, action: SubmitSteelman, me: Role, now: datetime
    ) -> TransitionOutcome:
        if problem.progress_for(me).submitted_steelman:
            return self._already_done(problem, action, "steelman already submitted")
        partner_done = problem.progress_for(me.partner).submitted_steelman
        return self._accept(
            problem,
            action,
            _role_update(
                me,
                status=ProblemStatus.STEELMAN_APPROVAL if partner_done else None,
                steelman=action.text,
                submitted_steelman=True,
            ),
        )

    def _approve_steelman(
        self, problem: Problem, action: ApproveSteelman, me: Role, now: datetime
    ) -> TransitionOutcome:
        partner = problem.progress_for(me.partner)
        if not _has_text(partner.steelman):
            return self._not_ready(problem, action, "partner has not written a steelman")
        if problem.progress_for(me).approved_steelman:
            return self._already_done(problem, action, "steelman already approved")
        return self._accept(
            problem,
            action,
            _role_update(
                me,
                status=ProblemStatus.AI_REVIEW if partner.approved_steelman else None,
                approved_steelman=True,
            ),
        )

    # =========================================================================
    # AI review
    # =========================================================================

    def _set_ai_analysis(
        self, problem: Problem, action: SetAIAnalysis, me: Role | None, now: datetime
    ) -> TransitionOutcome:
        if problem.ai_analysis:
            return self._already_done(problem, action, "analysis already recorded")
        return self._accept(problem, action, _shared_update(ai_analysis=action.text))

    def _escalate_for_human_review(
        self, problem: Problem, action: EscalateForHumanReview, me: Role, now: datetime
    ) -> TransitionOutcome:
        if problem.escalated_for_human_review:
            return self._already_done(problem, action, "already escalated")
        if not _has_text(action.verdict):
            return TransitionOutcome.rejected(
                action.name,
                problem.status,
                RejectionReason.INVALID_PAYLOAD,
                "verdict must not be empty",
            )
        return self._accept(
            problem,
            action,
            _shared_update(escalated_for_human_review=True, human_verdict=action.verdict),
        )

    def _advance_to_propose_solutions(
        self,
        problem: Problem,
        action: AdvanceToProposeSolutions,
        me: Role,
        now: datetime,
    ) -> TransitionOutcome:
        if not problem.ai_analysis:
            return self._not_ready(problem, action, "waiting for the Wombat's verdict")
        return self._accept(
            problem, action, ProblemUpdate(status=ProblemStatus.PROPOSE_SOLUTIONS)
        )

    # =========================================================================
    # Solutions and wager
    # =========================================================================

    def _propose_solution(
        self, problem: Problem, action: ProposeSolution, me: Role, now: datetime
    ) -> TransitionOutcome:
        if problem.progress_for(me).proposed_solution:
            return self._already_done(problem, action, "solution already proposed")
        partner_done = bool(problem.progress_for(me.partner).proposed_solution)
        return self._accept(
            problem,
            action,
            _role_update(
                me,
                status=ProblemStatus.SOLUTION_STEELMAN if partner_done else None,
                proposed_solution=action.text,
            ),
        )

    def _submit_solution_steelman(
        self, problem: Problem, action: SubmitSolutionSteelman, me: Role, now: datetime
    ) -> TransitionOutcome:
        partner = problem.progress_for(me.partner)
        if not partner.proposed_solution:
            return self._not_ready(problem, action, "partner has not proposed a solution")
        if problem.progress_for(me).solution_steelman:
            return self._already_done(problem, action, "solution steelman already submitted")
        return self._accept(
            problem,
            action,
            _role_update(
                me,
                status=ProblemStatus.WAGER if partner.solution_steelman else None,
                solution_steelman=action.text,
            ),
        )

    def _set_wager(
        self, problem: Problem, action: SetWager, me: Role | None, now: datetime
    ) -> TransitionOutcome:
        if problem.wombats_wager:
            return self._already_done(problem, action, "wager already recorded")
        return self._accept(problem, action, _shared_update(wombats_wager=action.text))

    def _advance_to_solution(
        self, problem: Problem, action: AdvanceToSolution, me: Role, now: datetime
    ) -> TransitionOutcome:
        if not problem.wombats_wager:
            return self._not_ready(problem, action, "waiting for the Wombat's wager")
        return self._accept(problem, action, ProblemUpdate(status=ProblemStatus.SOLUTION))

    # =========================================================================
    # Final solution
    # =========================================================================

    def _set_brainstorm(
        self, problem: Problem, action: SetBrainstorm, me: Role, now: datetime
    ) -> TransitionOutcome:
        if problem.brainstormed_solutions:
            return self._already_done(problem, action, "brainstorm already recorded")
        return self._accept(
            problem, action, _shared_update(brainstormed_solutions=action.text)
        )

    def _edit_solution_statement(
        self, problem: Problem, action: EditSolutionStatement, me: Role, now: datetime
    ) -> TransitionOutcome:
        if any(problem.progress_for(role).agreed_solution for role in Role):
            return self._already_done(problem, action, "solution locked by agreement")
        return self._accept(
            problem, action, _shared_update(solution_statement=action.text)
        )

    def _agree_solution(
        self, problem: Problem, action: AgreeSolution, me: Role, now: datetime
    ) -> TransitionOutcome:
        if problem.progress_for(me).agreed_solution:
            return self._already_done(problem, action, "already agreed")
        if not problem.progress_for(me.partner).agreed_solution:
            return self._accept(problem, action, _role_update(me, agreed_solution=True))
        return self._accept(
            problem,
            action,
            ProblemUpdate(
                status=ProblemStatus.RESOLVED,
                role_fields={me: {"agreed_solution": True}},
                shared_fields={
                    "solution_check_date": now + self._solution_check_delay
                },
            ),
        )

    def _submit_post_mortem(
        self, problem: Problem, action: SubmitPostMortem, me: Role, now: datetime
    ) -> TransitionOutcome:
        if problem.progress_for(me).post_mortem:
            return self._already_done(problem, action, "post-mortem already submitted")
        check_date = problem.solution_check_date
        if check_date is None or now < check_date:
            return self._not_ready(problem, action, "solution check date not reached")
        return self._accept(problem, action, _role_update(me, post_mortem=action.text))

    # =========================================================================
    # Outcome helpers
    # =========================================================================

    @staticmethod
    def _accept(
        problem: Problem, action: ProblemAction, update: ProblemUpdate
    ) -> TransitionOutcome:
        return TransitionOutcome.accepted(action.name, problem.status, update)

    @staticmethod
    def _already_done(
        problem: Problem, action: ProblemAction, detail: str
    ) -> TransitionOutcome:
        return TransitionOutcome.rejected(
            action.name, problem.status, RejectionReason.ALREADY_DONE, detail
        )

    @staticmethod
    def _not_ready(
        problem: Problem, action: ProblemAction, detail: str
    ) -> TransitionOutcome:
        return TransitionOutcome.rejected(
            action.name, problem.status, RejectionReason.NOT_READY, detail
        )


_DEFAULT_ENGINE = PhaseTransitionEngine()


def transition(
    problem: Problem,
    action: ProblemAction,
    acting_role: Role | None,
    now: datetime,
) -> TransitionOutcome:
    """Evaluate ``action`` with the default seven-day solution check delay."""
    return _DEFAULT_ENGINE.transition(problem, action, acting_role, now)
