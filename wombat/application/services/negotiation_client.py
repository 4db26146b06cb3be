"""Per-participant negotiation client.

One NegotiationClient runs for each signed-in participant. It subscribes to
that participant's problems, keeps the selected problem current, recomputes
the completion view on every snapshot, hands the snapshot to the checkpoint
trigger, and exposes the action surface without a role argument: the
identity is fixed at construction and the role comes from the record.

Clients never talk to each other. All coordination happens through the
problem store.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable

from wombat.application.ports.problem_store import ProblemStoreProtocol, Unsubscribe
from wombat.application.services.base import LoggingMixin
from wombat.application.services.checkpoint_trigger_service import (
    CheckpointTriggerService,
)
from wombat.application.services.problem_action_service import (
    ActionResult,
    ProblemActionService,
)
from wombat.domain.models.problem import Problem
from wombat.domain.services.completion_tracker import (
    CompletionView,
    completion_for_participant,
)
from wombat.infrastructure.observability.correlation import correlation_scope

ViewListener = Callable[[CompletionView], Awaitable[None]]


class NoProblemSelectedError(RuntimeError):
    """Raised when an action is issued before a problem is selected."""


class NegotiationClient(LoggingMixin):
    """Client-side session for one participant.

    Attributes:
        participant_id: The authenticated identity.
        problems: Latest snapshot, newest first.
        view: Completion view of the selected problem.
    """

    def __init__(
        self,
        participant_id: str,
        store: ProblemStoreProtocol,
        actions: ProblemActionService,
        trigger: CheckpointTriggerService | None = None,
        on_view: ViewListener | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            participant_id: Identity of the signed-in participant.
            store: Problem store to subscribe to.
            actions: Action service.
            trigger: Checkpoint trigger fed with every snapshot (optional).
            on_view: Coroutine called with the new view after each snapshot.
        """
        self.participant_id = participant_id
        self._store = store
        self._actions = actions
        self._trigger = trigger
        self._on_view = on_view
        self._unsubscribe: Unsubscribe | None = None
        self._selected_id: str | None = None
        self.problems: list[Problem] = []
        self.view: CompletionView = CompletionView.empty()
        self._init_logger(component="client")

    # =========================================================================
    # Subscription
    # =========================================================================

    @property
    def is_open(self) -> bool:
        return self._unsubscribe is not None

    async def open(self) -> None:
        """Load the current problems and subscribe to changes."""
        if self._unsubscribe is not None:
            return
        log = self._log_operation("open", participant_id=self.participant_id)
        self._unsubscribe = self._store.subscribe_problems(
            self.participant_id, self._on_change
        )
        await self._on_change(await self._store.list_for_participant(self.participant_id))
        log.info("client_opened", problem_count=len(self.problems))

    def close(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    async def _on_change(self, problems: list[Problem]) -> None:
        with correlation_scope():
            self.problems = list(problems)
            current = self.current_problem
            if self._selected_id is None and self.problems:
                self._selected_id = self.problems[0].id
                current = self.problems[0]

            self.view = completion_for_participant(current, self.participant_id)
            log = self._log_operation("snapshot", participant_id=self.participant_id)
            log.debug(
                "snapshot_received",
                problem_count=len(self.problems),
                selected=self._selected_id,
                status=current.status.value if current else None,
            )

            if self._on_view is not None:
                await self._on_view(self.view)
            if self._trigger is not None:
                try:
                    await self._trigger.on_snapshot(self.problems)
                except Exception:
                    # marker already released; the next snapshot retries
                    log.exception("checkpoint_trigger_failed")

    # =========================================================================
    # Selection
    # =========================================================================

    @property
    def current_problem(self) -> Problem | None:
        if self._selected_id is None:
            return None
        for problem in self.problems:
            if problem.id == self._selected_id:
                return problem
        return None

    def select_problem(self, problem_id: str) -> CompletionView:
        """Make ``problem_id`` the selected problem.

        Raises:
            KeyError: If the problem is not in the latest snapshot.
        """
        if not any(problem.id == problem_id for problem in self.problems):
            raise KeyError(problem_id)
        self._selected_id = problem_id
        self.view = completion_for_participant(self.current_problem, self.participant_id)
        return self.view

    def _require_selected(self) -> str:
        if self._selected_id is None:
            raise NoProblemSelectedError(
                f"{self.participant_id} has no problem selected"
            )
        return self._selected_id

    # =========================================================================
    # Actions
    # =========================================================================

    async def edit_problem_statement(self, text: str) -> ActionResult:
        with correlation_scope():
            return await self._actions.edit_problem_statement(
                self._require_selected(), self.participant_id, text
            )

    async def agree_problem(self) -> ActionResult:
        with correlation_scope():
            return await self._actions.agree_problem(
                self._require_selected(), self.participant_id
            )

    async def submit_private_version(self, text: str) -> ActionResult:
        with correlation_scope():
            return await self._actions.submit_private_version(
                self._require_selected(), self.participant_id, text
            )

    async def advance_to_steelman(self) -> ActionResult:
        with correlation_scope():
            return await self._actions.advance_to_steelman(
                self._require_selected(), self.participant_id
            )

    async def submit_steelman(self, text: str) -> ActionResult:
        with correlation_scope():
            return await self._actions.submit_steelman(
                self._require_selected(), self.participant_id, text
            )

    async def approve_steelman(self) -> ActionResult:
        with correlation_scope():
            return await self._actions.approve_steelman(
                self._require_selected(), self.participant_id
            )

    async def escalate_for_human_review(self) -> ActionResult:
        with correlation_scope():
            return await self._actions.escalate_for_human_review(
                self._require_selected(), self.participant_id
            )

    async def advance_to_propose_solutions(self) -> ActionResult:
        with correlation_scope():
            return await self._actions.advance_to_propose_solutions(
                self._require_selected(), self.participant_id
            )

    async def propose_solution(self, text: str) -> ActionResult:
        with correlation_scope():
            return await self._actions.propose_solution(
                self._require_selected(), self.participant_id, text
            )

    async def submit_solution_steelman(self, text: str) -> ActionResult:
        with correlation_scope():
            return await self._actions.submit_solution_steelman(
                self._require_selected(), self.participant_id, text
            )

    async def advance_to_solution(self) -> ActionResult:
        with correlation_scope():
            return await self._actions.advance_to_solution(
                self._require_selected(), self.participant_id
            )

    async def brainstorm(self) -> ActionResult:
        with correlation_scope():
            return await self._actions.brainstorm(
                self._require_selected(), self.participant_id
            )

    async def edit_solution_statement(self, text: str) -> ActionResult:
        with correlation_scope():
            return await self._actions.edit_solution_statement(
                self._require_selected(), self.participant_id, text
            )

    async def agree_solution(self) -> ActionResult:
        with correlation_scope():
            return await self._actions.agree_solution(
                self._require_selected(), self.participant_id
            )

    async def submit_post_mortem(self, text: str) -> ActionResult:
        with correlation_scope():
            return await self._actions.submit_post_mortem(
                self._require_selected(), self.participant_id, text
            )
