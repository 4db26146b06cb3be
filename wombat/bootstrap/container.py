"""Bootstrap wiring for the negotiation services.

Builds one process-wide set of collaborators: the problem store, the user
directory, the text generator, the clock, and the services on top of them.
Participant clients share the store, action service and checkpoint trigger
so in-process clients also share the in-flight markers.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field

import structlog
from dotenv import load_dotenv

from wombat.application.ports.problem_store import ProblemStoreProtocol
from wombat.application.ports.text_generator import TextGeneratorProtocol
from wombat.application.ports.time_authority import TimeAuthorityProtocol
from wombat.application.ports.user_directory import UserDirectoryProtocol
from wombat.application.services.checkpoint_trigger_service import (
    CheckpointTriggerService,
)
from wombat.application.services.in_flight_registry import InFlightRegistry
from wombat.application.services.negotiation_client import (
    NegotiationClient,
    ViewListener,
)
from wombat.application.services.partner_linking_service import PartnerLinkingService
from wombat.application.services.problem_action_service import ProblemActionService
from wombat.application.services.wombat_advice_service import WombatAdviceService
from wombat.config.gemini_config import DEFAULT_API_KEY_ENV, GeminiConfig
from wombat.config.negotiation_config import NegotiationConfig
from wombat.infrastructure.adapters.gemini_text_generator import GeminiTextGenerator
from wombat.infrastructure.adapters.system_time_authority import SystemTimeAuthority
from wombat.infrastructure.stubs.problem_store_stub import ProblemStoreStub
from wombat.infrastructure.stubs.text_generator_stub import TextGeneratorStub
from wombat.infrastructure.stubs.user_directory_stub import UserDirectoryStub

log = structlog.get_logger()


@dataclass
class WombatContainer:
    """Wired collaborators and services."""

    config: NegotiationConfig
    store: ProblemStoreProtocol
    directory: UserDirectoryProtocol
    generator: TextGeneratorProtocol
    time_authority: TimeAuthorityProtocol
    registry: InFlightRegistry
    actions: ProblemActionService
    trigger: CheckpointTriggerService
    partners: PartnerLinkingService
    advice: WombatAdviceService
    clients: dict[str, NegotiationClient] = field(default_factory=dict)

    def client_for(
        self, participant_id: str, on_view: ViewListener | None = None
    ) -> NegotiationClient:
        """Return the participant's client, creating it on first use."""
        client = self.clients.get(participant_id)
        if client is None:
            client = NegotiationClient(
                participant_id=participant_id,
                store=self.store,
                actions=self.actions,
                trigger=self.trigger,
                on_view=on_view,
            )
            self.clients[participant_id] = client
        return client

    def close(self) -> None:
        for client in self.clients.values():
            client.close()
        self.clients.clear()


def build_generator() -> TextGeneratorProtocol:
    """Gemini when an API key is configured, otherwise the stub generator."""
    key_env = os.environ.get("GEMINI_API_KEY_ENV", DEFAULT_API_KEY_ENV)
    if not os.environ.get(key_env):
        log.warning("gemini_not_configured", key_env=key_env, generator="stub")
        return TextGeneratorStub()
    return GeminiTextGenerator(GeminiConfig.from_environment())


def build_container(
    config: NegotiationConfig | None = None,
    store: ProblemStoreProtocol | None = None,
    directory: UserDirectoryProtocol | None = None,
    generator: TextGeneratorProtocol | None = None,
    time_authority: TimeAuthorityProtocol | None = None,
    load_env: bool = True,
) -> WombatContainer:
    """Wire the services, filling unspecified collaborators with defaults.

    Args:
        config: Negotiation config; read from the environment when omitted.
        store: Problem store; in-memory stub when omitted.
        directory: User directory; in-memory stub when omitted.
        generator: Text generator; see build_generator().
        time_authority: Clock; system clock when omitted.
        load_env: Load a .env file before reading the environment.
    """
    if load_env:
        load_dotenv()

    config = config or NegotiationConfig.from_environment()
    store = store or ProblemStoreStub()
    directory = directory or UserDirectoryStub()
    generator = generator or build_generator()
    time_authority = time_authority or SystemTimeAuthority()
    registry = InFlightRegistry()

    actions = ProblemActionService(
        store=store,
        generator=generator,
        time_authority=time_authority,
        config=config,
    )
    trigger = CheckpointTriggerService(
        generator=generator,
        actions=actions,
        registry=registry,
        config=config,
    )
    return WombatContainer(
        config=config,
        store=store,
        directory=directory,
        generator=generator,
        time_authority=time_authority,
        registry=registry,
        actions=actions,
        trigger=trigger,
        partners=PartnerLinkingService(
            directory=directory, store=store, time_authority=time_authority
        ),
        advice=WombatAdviceService(generator=generator, config=config),
    )


_container: WombatContainer | None = None


def get_container() -> WombatContainer:
    """Get the process-wide container, building it on first use."""
    global _container
    if _container is None:
        _container = build_container()
    return _container


def set_container(container: WombatContainer | None) -> None:
    """Replace (or with None, drop) the process-wide container."""
    global _container
    if _container is not None and _container is not container:
        _container.close()
    _container = container
