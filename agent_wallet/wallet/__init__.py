"""Wallet ledger, key store and the simulated chain behind them."""

__all__: list[str] = []
