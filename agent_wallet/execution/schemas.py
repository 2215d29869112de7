"""Execution-layer schemas.

These models represent the *intent* to swap and the settlement outcome. The
executor translates a side + amount into a SOL <-> TOKEN swap against the
settlement provider.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator

from agent_wallet.data.audit import utc_now


SOL = "SOL"
TOKEN = "TOKEN"


class SwapSide(str, Enum):
    buy = "buy"
    sell = "sell"


class SwapParams(BaseModel):
    model_config = ConfigDict(extra="forbid", use_enum_values=True)

    from_token: str = Field(..., min_length=1)
    to_token: str = Field(..., min_length=1)
    amount: float = Field(..., gt=0, description="Amount of from_token, in SOL units.")
    slippage_pct: float = Field(1.0, ge=0, le=100)

    @model_validator(mode="after")
    def _validate_pair(self) -> "SwapParams":
        if self.from_token == self.to_token:
            raise ValueError("from_token and to_token must differ")
        return self

    @classmethod
    def for_side(cls, side: SwapSide | str, amount: float, *, slippage_pct: float = 1.0) -> "SwapParams":
        s = SwapSide(side)
        if s == SwapSide.buy:
            return cls(from_token=SOL, to_token=TOKEN, amount=amount, slippage_pct=slippage_pct)
        return cls(from_token=TOKEN, to_token=SOL, amount=amount, slippage_pct=slippage_pct)


class SwapResult(BaseModel):
    model_config = ConfigDict(extra="forbid", use_enum_values=True, frozen=True)

    signature: str
    wallet_public_key: str
    side: SwapSide
    amount: float
    balance_before: float
    balance_after: float
    executed_at: datetime = Field(default_factory=utc_now)


__all__ = ["SOL", "TOKEN", "SwapParams", "SwapResult", "SwapSide"]
