"""In-process stand-in for the Solana devnet RPC layer.

Plays two external roles for the rest of the package:
- authoritative balance source (`get_balance`, `get_token_balances`);
- settlement provider (`submit_swap`) that finalises a swap and returns a
  signature.

Balances are held in lamports so repeated SOL arithmetic does not drift.
Token holdings are never credited by swaps (see DESIGN.md, fidelity gaps).
"""

from __future__ import annotations

from itertools import count
from typing import Dict, List
from uuid import uuid4

from agent_wallet.execution.schemas import SOL, SwapParams
from agent_wallet.wallet.schemas import LAMPORTS_PER_SOL, TokenBalance


class ChainError(RuntimeError):
    pass


def to_lamports(sol: float) -> int:
    return int(round(float(sol) * LAMPORTS_PER_SOL))


def to_sol(lamports: int) -> float:
    return lamports / LAMPORTS_PER_SOL


class SimulatedChain:
    def __init__(self, *, max_airdrop_sol: float = 5.0):
        self.max_airdrop_sol = float(max_airdrop_sol)
        self._lamports: Dict[str, int] = {}
        self._tokens: Dict[str, List[TokenBalance]] = {}
        self._seq = count(1)

    def _signature(self, prefix: str) -> str:
        return f"{prefix}_{next(self._seq):06d}_{uuid4().hex[:12]}"

    def account_exists(self, public_key: str) -> bool:
        return public_key in self._lamports

    async def get_balance(self, public_key: str) -> float:
        """SOL balance; unknown accounts read as empty, like a fresh devnet address."""
        return to_sol(self._lamports.get(public_key, 0))

    async def get_token_balances(self, public_key: str) -> List[TokenBalance]:
        return list(self._tokens.get(public_key, []))

    async def request_airdrop(self, public_key: str, amount: float = 1.0) -> str:
        if amount <= 0:
            raise ChainError(f"Airdrop amount must be positive, got {amount}")
        if amount > self.max_airdrop_sol:
            raise ChainError(
                f"Airdrop rate limit exceeded: {amount} SOL requested, max {self.max_airdrop_sol} SOL"
            )
        self._lamports[public_key] = self._lamports.get(public_key, 0) + to_lamports(amount)
        return self._signature("mock_airdrop")

    async def submit_swap(self, public_key: str, params: SwapParams) -> str:
        """Settle a swap and return its signature.

        Spending SOL debits the account; spending TOKEN is accepted without
        any balance movement.
        """
        if params.from_token == SOL:
            lamports = to_lamports(params.amount)
            held = self._lamports.get(public_key, 0)
            if held < lamports:
                raise ChainError(
                    f"Insufficient SOL balance: {to_sol(held):.4f} < {params.amount:.4f}"
                )
            self._lamports[public_key] = held - lamports
        return self._signature("mock_swap")


__all__ = ["ChainError", "SimulatedChain", "to_lamports", "to_sol"]
