"""Caller-facing error taxonomy.

Lifecycle calls raise these synchronously. Failures inside a scheduled
decision cycle never surface here; they are recorded as failure activities.
Settlement errors live next to the executor (`execution.executor`).
"""

from __future__ import annotations


class AgentWalletError(RuntimeError):
    pass


class NotFoundError(AgentWalletError):
    """Unknown agent id or wallet public key."""


class InvalidInputError(AgentWalletError):
    """Malformed strategy configuration or request parameters."""


__all__ = ["AgentWalletError", "NotFoundError", "InvalidInputError"]
