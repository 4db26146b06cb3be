"""Unit tests for CheckpointTriggerService."""

from __future__ import annotations

import asyncio

import pytest

from tests.helpers.fake_time_authority import FakeTimeAuthority
from tests.helpers.participants import ALICE, BOB, PROBLEM_ID
from tests.helpers.problem_builders import problem_at
from wombat.application.services.checkpoint_trigger_service import (
    CheckpointTriggerService,
    pending_checkpoint_phase,
)
from wombat.application.services.in_flight_registry import InFlightRegistry
from wombat.application.services.problem_action_service import (
    ActionFailure,
    ProblemActionService,
)
from wombat.config.negotiation_config import NegotiationConfig
from wombat.domain.models.problem import Problem, ProblemStatus
from wombat.domain.models.transition_outcome import RejectionReason
from wombat.infrastructure.stubs.problem_store_stub import ProblemStoreStub
from wombat.infrastructure.stubs.text_generator_stub import TextGeneratorStub


@pytest.fixture
def ai_review_problem(
    store: ProblemStoreStub, fake_time_authority: FakeTimeAuthority
) -> Problem:
    problem = problem_at(ProblemStatus.AI_REVIEW, fake_time_authority.now())
    store.put(problem)
    return problem


@pytest.fixture
def wager_problem(
    store: ProblemStoreStub, fake_time_authority: FakeTimeAuthority
) -> Problem:
    problem = problem_at(ProblemStatus.WAGER, fake_time_authority.now())
    store.put(problem)
    return problem


class TestPendingCheckpointPhase:
    def test_ai_review_without_analysis(self, fake_time_authority: FakeTimeAuthority) -> None:
        problem = problem_at(ProblemStatus.AI_REVIEW, fake_time_authority.now())
        assert pending_checkpoint_phase(problem) is ProblemStatus.AI_REVIEW

    def test_wager_without_wager(self, fake_time_authority: FakeTimeAuthority) -> None:
        problem = problem_at(ProblemStatus.WAGER, fake_time_authority.now())
        assert pending_checkpoint_phase(problem) is ProblemStatus.WAGER

    @pytest.mark.parametrize(
        "status",
        [
            ProblemStatus.AGREE_STATEMENT,
            ProblemStatus.STEELMAN_APPROVAL,
            ProblemStatus.PROPOSE_SOLUTIONS,
            ProblemStatus.SOLUTION,
        ],
    )
    def test_other_phases_have_nothing_pending(
        self, status: ProblemStatus, fake_time_authority: FakeTimeAuthority
    ) -> None:
        problem = problem_at(status, fake_time_authority.now())
        assert pending_checkpoint_phase(problem) is None


class TestSingleTrigger:
    @pytest.mark.asyncio
    async def test_analysis_recorded(
        self,
        trigger: CheckpointTriggerService,
        store: ProblemStoreStub,
        generator: TextGeneratorStub,
        ai_review_problem: Problem,
    ) -> None:
        generator.queue("You are both right, which is annoying.")

        result = await trigger.on_problem(ai_review_problem)

        assert result is not None and result.applied
        assert store.get(PROBLEM_ID).ai_analysis == "You are both right, which is annoying."
        assert generator.call_count == 1

    @pytest.mark.asyncio
    async def test_wager_recorded(
        self,
        trigger: CheckpointTriggerService,
        store: ProblemStoreStub,
        generator: TextGeneratorStub,
        wager_problem: Problem,
    ) -> None:
        generator.queue("Dishwasher, 3 to 1.")

        await trigger.on_problem(wager_problem)

        assert store.get(PROBLEM_ID).wombats_wager == "Dishwasher, 3 to 1."
        assert store.get(PROBLEM_ID).status is ProblemStatus.WAGER

    @pytest.mark.asyncio
    async def test_nothing_pending_returns_none(
        self,
        trigger: CheckpointTriggerService,
        generator: TextGeneratorStub,
        stored_problem: Problem,
    ) -> None:
        assert await trigger.on_problem(stored_problem) is None
        assert generator.call_count == 0

    @pytest.mark.asyncio
    async def test_repeated_snapshots_generate_once(
        self,
        trigger: CheckpointTriggerService,
        generator: TextGeneratorStub,
        registry: InFlightRegistry,
        ai_review_problem: Problem,
    ) -> None:
        await trigger.on_snapshot([ai_review_problem])
        second = await trigger.on_snapshot([ai_review_problem])

        assert second == []
        assert generator.call_count == 1
        assert registry.is_in_flight(PROBLEM_ID, ProblemStatus.AI_REVIEW)

    @pytest.mark.asyncio
    async def test_marker_dropped_once_result_is_seen(
        self,
        trigger: CheckpointTriggerService,
        store: ProblemStoreStub,
        registry: InFlightRegistry,
        ai_review_problem: Problem,
    ) -> None:
        await trigger.on_problem(ai_review_problem)
        assert registry.is_in_flight(PROBLEM_ID, ProblemStatus.AI_REVIEW)

        assert await trigger.on_problem(store.get(PROBLEM_ID)) is None

        assert registry.snapshot() == []

    @pytest.mark.asyncio
    async def test_markers_do_not_accumulate_over_a_negotiation(
        self,
        trigger: CheckpointTriggerService,
        store: ProblemStoreStub,
        action_service: ProblemActionService,
        registry: InFlightRegistry,
        fake_time_authority: FakeTimeAuthority,
    ) -> None:
        store.put(problem_at(ProblemStatus.SOLUTION_STEELMAN, fake_time_authority.now()))
        await action_service.submit_solution_steelman(PROBLEM_ID, ALICE, "x")
        await action_service.submit_solution_steelman(PROBLEM_ID, BOB, "y")

        await trigger.on_problem(store.get(PROBLEM_ID))
        await action_service.advance_to_solution(PROBLEM_ID, ALICE)
        await trigger.on_problem(store.get(PROBLEM_ID))

        assert store.get(PROBLEM_ID).status is ProblemStatus.SOLUTION
        assert registry.snapshot() == []

    @pytest.mark.asyncio
    async def test_generation_failure_writes_sentinel(
        self,
        trigger: CheckpointTriggerService,
        store: ProblemStoreStub,
        generator: TextGeneratorStub,
        negotiation_config: NegotiationConfig,
        ai_review_problem: Problem,
    ) -> None:
        generator.raise_error = True

        result = await trigger.on_problem(ai_review_problem)

        assert result.applied
        assert store.get(PROBLEM_ID).ai_analysis == negotiation_config.analysis_fallback
        assert pending_checkpoint_phase(store.get(PROBLEM_ID)) is None


class TestConcurrentTriggers:
    @pytest.mark.asyncio
    async def test_shared_registry_generates_once(
        self,
        action_service: ProblemActionService,
        generator: TextGeneratorStub,
        registry: InFlightRegistry,
        store: ProblemStoreStub,
        ai_review_problem: Problem,
    ) -> None:
        alice_trigger = CheckpointTriggerService(generator, action_service, registry)
        bob_trigger = CheckpointTriggerService(generator, action_service, registry)
        generator.gate = asyncio.Event()

        first = asyncio.create_task(alice_trigger.on_problem(ai_review_problem))
        second = asyncio.create_task(bob_trigger.on_problem(ai_review_problem))
        await asyncio.sleep(0)
        generator.gate.set()
        results = await asyncio.gather(first, second)

        assert generator.call_count == 1
        assert sum(1 for r in results if r is not None and r.applied) == 1
        assert store.write_count == 1

    @pytest.mark.asyncio
    async def test_separate_registries_first_write_wins(
        self,
        action_service: ProblemActionService,
        generator: TextGeneratorStub,
        store: ProblemStoreStub,
        ai_review_problem: Problem,
    ) -> None:
        alice_trigger = CheckpointTriggerService(generator, action_service)
        bob_trigger = CheckpointTriggerService(generator, action_service)
        generator.queue("first verdict", "second verdict")

        first = await alice_trigger.on_problem(ai_review_problem)
        late = await bob_trigger.on_problem(ai_review_problem)

        assert first.applied
        assert not late.applied
        assert late.reason is RejectionReason.ALREADY_DONE
        assert store.get(PROBLEM_ID).ai_analysis == "first verdict"
        assert bob_trigger.registry.is_in_flight(PROBLEM_ID, ProblemStatus.AI_REVIEW)


class TestWriteFailure:
    @pytest.mark.asyncio
    async def test_conflict_exhaustion_releases_marker(
        self,
        store: ProblemStoreStub,
        generator: TextGeneratorStub,
        fake_time_authority: FakeTimeAuthority,
        registry: InFlightRegistry,
        ai_review_problem: Problem,
    ) -> None:
        actions = ProblemActionService(
            store=store,
            generator=generator,
            time_authority=fake_time_authority,
            config=NegotiationConfig(max_write_attempts=1),
        )
        trigger = CheckpointTriggerService(generator, actions, registry)
        store.inject_conflicts(1)

        result = await trigger.on_problem(ai_review_problem)

        assert result.reason is ActionFailure.WRITE_CONFLICT
        assert not registry.is_in_flight(PROBLEM_ID, ProblemStatus.AI_REVIEW)

        retried = await trigger.on_problem(ai_review_problem)
        assert retried.applied
        assert generator.call_count == 2

    @pytest.mark.asyncio
    async def test_missing_problem_releases_marker(
        self,
        trigger: CheckpointTriggerService,
        store: ProblemStoreStub,
        registry: InFlightRegistry,
        ai_review_problem: Problem,
    ) -> None:
        store.clear()

        result = await trigger.on_problem(ai_review_problem)

        assert result.reason is ActionFailure.NOT_FOUND
        assert registry.snapshot() == []

    @pytest.mark.asyncio
    async def test_unexpected_error_releases_marker_and_propagates(
        self,
        trigger: CheckpointTriggerService,
        registry: InFlightRegistry,
        ai_review_problem: Problem,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        async def boom(*args: object, **kwargs: object) -> None:
            raise RuntimeError("store offline")

        monkeypatch.setattr(trigger._actions, "apply_system_action", boom)

        with pytest.raises(RuntimeError, match="store offline"):
            await trigger.on_problem(ai_review_problem)

        assert not registry.is_in_flight(PROBLEM_ID, ProblemStatus.AI_REVIEW)
