"""
Pytest configuration and shared fixtures for the Skeptical Wombat tests.

Testing Standards:
- Async tests use pytest.mark.asyncio
- Unit tests go in tests/unit/, integration tests in tests/integration/
- Time-dependent tests use FakeTimeAuthority, never the wall clock
"""

from __future__ import annotations

import pytest

from tests.helpers.fake_time_authority import FakeTimeAuthority
from tests.helpers.participants import ALICE, BOB, PROBLEM_ID
from wombat.application.services.checkpoint_trigger_service import (
    CheckpointTriggerService,
)
from wombat.application.services.in_flight_registry import InFlightRegistry
from wombat.application.services.problem_action_service import ProblemActionService
from wombat.config.negotiation_config import NegotiationConfig
from wombat.domain.models.problem import Problem
from wombat.infrastructure.stubs.problem_store_stub import ProblemStoreStub
from wombat.infrastructure.stubs.text_generator_stub import TextGeneratorStub
from wombat.infrastructure.stubs.user_directory_stub import UserDirectoryStub


@pytest.fixture
def anyio_backend() -> str:
    """Use asyncio as the async backend."""
    return "asyncio"


@pytest.fixture
def project_version() -> str:
    """Provide the current project version for tests."""
    from wombat import __version__

    return __version__


@pytest.fixture
def fake_time_authority() -> FakeTimeAuthority:
    return FakeTimeAuthority()


@pytest.fixture
def negotiation_config() -> NegotiationConfig:
    return NegotiationConfig()


@pytest.fixture
def store() -> ProblemStoreStub:
    return ProblemStoreStub()


@pytest.fixture
def generator() -> TextGeneratorStub:
    return TextGeneratorStub()


@pytest.fixture
def directory() -> UserDirectoryStub:
    return UserDirectoryStub()


@pytest.fixture
def action_service(
    store: ProblemStoreStub,
    generator: TextGeneratorStub,
    fake_time_authority: FakeTimeAuthority,
    negotiation_config: NegotiationConfig,
) -> ProblemActionService:
    return ProblemActionService(
        store=store,
        generator=generator,
        time_authority=fake_time_authority,
        config=negotiation_config,
    )


@pytest.fixture
def registry() -> InFlightRegistry:
    return InFlightRegistry()


@pytest.fixture
def trigger(
    generator: TextGeneratorStub,
    action_service: ProblemActionService,
    registry: InFlightRegistry,
    negotiation_config: NegotiationConfig,
) -> CheckpointTriggerService:
    return CheckpointTriggerService(
        generator=generator,
        actions=action_service,
        registry=registry,
        config=negotiation_config,
    )


@pytest.fixture
def new_problem(fake_time_authority: FakeTimeAuthority) -> Problem:
    """A fresh problem opened by ALICE (ROLE_A) with BOB (ROLE_B)."""
    return Problem.start(
        problem_id=PROBLEM_ID,
        initiator_id=ALICE,
        partner_id=BOB,
        created_at=fake_time_authority.now(),
    )


@pytest.fixture
async def stored_problem(store: ProblemStoreStub, new_problem: Problem) -> Problem:
    await store.create(new_problem)
    return await store.read(new_problem.id)
