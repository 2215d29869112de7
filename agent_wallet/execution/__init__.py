"""Execution layer (only place that settles swaps against the chain).

Keep this package `__init__` lightweight to avoid import cycles.
Import concrete modules directly, e.g.:
  - `from agent_wallet.execution.executor import TradeExecutor`
"""

__all__: list[str] = []
