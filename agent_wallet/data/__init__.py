"""Data layer package.

Keep this package `__init__` lightweight to avoid import cycles.
Import concrete modules directly, e.g.:
  - `from agent_wallet.data.market_data import MarketDataGenerator`
  - `from agent_wallet.data.audit import AuditManager`
"""

__all__: list[str] = []
