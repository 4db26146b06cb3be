"""
Application layer - Use cases and orchestration for the Skeptical Wombat.

This layer contains:
- Port definitions (problem store, text generator, user directory, clock)
- Application services (action surface, checkpoint trigger, partner linking)

IMPORT RULES:
- CAN import from: domain
- CANNOT import from: infrastructure (observability correlation excepted)
"""
