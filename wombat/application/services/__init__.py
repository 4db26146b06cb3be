"""Application services for the negotiation."""

from wombat.application.services.base import LoggingMixin
from wombat.application.services.checkpoint_trigger_service import (
    CheckpointTriggerService,
    pending_checkpoint_phase,
)
from wombat.application.services.generation import GeneratedText, generate_with_fallback
from wombat.application.services.in_flight_registry import InFlightRegistry
from wombat.application.services.negotiation_client import (
    NegotiationClient,
    NoProblemSelectedError,
)
from wombat.application.services.partner_linking_service import (
    LinkResult,
    PartnerLinkingService,
)
from wombat.application.services.problem_action_service import (
    ActionFailure,
    ActionResult,
    ProblemActionService,
)
from wombat.application.services.wombat_advice_service import WombatAdviceService

__all__ = [
    "ActionFailure",
    "ActionResult",
    "CheckpointTriggerService",
    "GeneratedText",
    "InFlightRegistry",
    "LinkResult",
    "LoggingMixin",
    "NegotiationClient",
    "NoProblemSelectedError",
    "PartnerLinkingService",
    "ProblemActionService",
    "WombatAdviceService",
    "generate_with_fallback",
    "pending_checkpoint_phase",
]
