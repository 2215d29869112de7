"""Wallet ledger records."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field

from agent_wallet.data.audit import utc_now


LAMPORTS_PER_SOL = 1_000_000_000


class TokenBalance(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    mint: str = Field(..., min_length=1)
    amount: float = Field(..., ge=0)
    decimals: int = Field(..., ge=0)


@dataclass
class WalletInfo:
    public_key: str
    created_at: datetime = field(default_factory=utc_now)
    balance: float = 0.0
    token_balances: List[TokenBalance] = field(default_factory=list)

    def to_doc(self) -> Dict[str, Any]:
        return {
            "public_key": self.public_key,
            "created_at": self.created_at.isoformat(),
            "balance": self.balance,
            "token_balances": [t.model_dump() for t in self.token_balances],
        }


__all__ = ["LAMPORTS_PER_SOL", "TokenBalance", "WalletInfo"]
