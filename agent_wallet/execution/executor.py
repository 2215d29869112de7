"""Mocked DeFi swap executor.

Scope:
- Validate accounts before anything is submitted.
- Settle through the chain's settlement provider, which returns a signature.
- Adjust the ledger optimistically on success; never on failure.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from agent_wallet.execution.schemas import SOL, SwapParams, SwapResult, SwapSide
from agent_wallet.wallet.chain import SimulatedChain
from agent_wallet.wallet.manager import WalletManager


@dataclass(frozen=True)
class ExecutorConfig:
    slippage_pct: float = 1.0


class ExecutionError(RuntimeError):
    pass


class InsufficientBalanceError(ExecutionError):
    pass


class TradeExecutor:
    def __init__(
        self,
        *,
        wallets: WalletManager,
        chain: Optional[SimulatedChain] = None,
        config: Optional[ExecutorConfig] = None,
    ):
        self.wallets = wallets
        self.chain = chain or wallets.chain
        self.config = config or ExecutorConfig()

    def _validate_accounts(self, wallet_public_key: str, params: SwapParams) -> float:
        wallet = self.wallets.get_wallet(wallet_public_key)
        if wallet is None:
            raise ExecutionError(f"Invalid accounts for swap: wallet not found: {wallet_public_key}")
        if params.from_token == SOL and wallet.balance < params.amount:
            raise InsufficientBalanceError(
                "Invalid accounts for swap: insufficient SOL balance "
                f"({wallet.balance:.4f} < {params.amount:.4f})"
            )
        return wallet.balance

    async def execute(self, wallet_public_key: str, side: SwapSide | str, amount: float) -> SwapResult:
        if amount is None or amount <= 0:
            raise ExecutionError(f"Invalid accounts for swap: amount must be positive, got {amount}")
        params = SwapParams.for_side(side, amount, slippage_pct=self.config.slippage_pct)
        balance_before = self._validate_accounts(wallet_public_key, params)

        try:
            signature = await self.chain.submit_swap(wallet_public_key, params)
        except Exception as e:  # pylint: disable=broad-exception-caught
            raise ExecutionError(f"Swap execution failed: {e}") from e

        wallet = self.wallets.require_wallet(wallet_public_key)
        balance_after = wallet.balance
        if params.from_token == SOL:
            # Token side of a buy is not modelled; only SOL leaves the ledger.
            balance_after = max(0.0, wallet.balance - params.amount)
            self.wallets.update_balance(wallet_public_key, balance_after)

        return SwapResult(
            signature=signature,
            wallet_public_key=wallet_public_key,
            side=SwapSide(side),
            amount=params.amount,
            balance_before=balance_before,
            balance_after=balance_after,
        )


__all__ = ["ExecutionError", "ExecutorConfig", "InsufficientBalanceError", "TradeExecutor"]
