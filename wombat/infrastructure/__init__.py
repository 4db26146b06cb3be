"""
Infrastructure layer - External adapters for the Skeptical Wombat.

This layer contains:
- Gemini text generation adapter (httpx)
- System clock adapter
- In-memory stubs for the problem store, user directory and generator
- Structured logging configuration

IMPORT RULES:
- CAN import from: domain, application
- Implements ports defined in application layer
"""
