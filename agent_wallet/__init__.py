"""Simulated Solana agent wallet.

Agents own a wallet and a rule-based strategy; a controller schedules one
decision cycle per active agent and records every decision.
"""

__version__ = "0.1.0"
