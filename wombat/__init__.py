"""
Skeptical Wombat - mediated negotiation core

Two paired participants work through a fixed eleven-phase negotiation protocol
while the Wombat, an AI persona, injects analysis at scripted checkpoints.

Core guarantees:
- One shared problem record per negotiation, advanced forward only
- Each participant writes only their own half of role-paired fields
- A phase that needs both parties advances only on the second party's write
- AI checkpoint results are written at most once per problem
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
