"""
Domain layer - Pure negotiation logic for the Skeptical Wombat.

This layer contains:
- The Problem aggregate, roles and the phase enumeration
- The action vocabulary and transition outcomes
- The phase transition engine and completion tracker
- Domain exceptions

CRITICAL: This layer must NOT import from application or infrastructure.
Only stdlib and typing imports are allowed.
"""

from wombat.domain.exceptions import WombatError

__all__: list[str] = ["WombatError"]
