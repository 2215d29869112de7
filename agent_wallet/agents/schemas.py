"""Pydantic contracts for agents, strategies and their activity.

Everything an agent reports (strategy config, decisions, activity entries)
is validated here so the controller and the HTTP layer share one shape.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from agent_wallet.data.audit import utc_now
from agent_wallet.execution.schemas import SwapSide


class AgentStatus(str, Enum):
    stopped = "stopped"
    active = "active"
    paused = "paused"  # reserved, no transition leads here yet


class StrategyKind(str, Enum):
    simple_trader = "simple-trader"


class StrategyConfig(BaseModel):
    model_config = ConfigDict(extra="forbid", use_enum_values=True)

    kind: StrategyKind = Field(StrategyKind.simple_trader, description="Strategy implementation.")
    parameters: Dict[str, Any] = Field(default_factory=dict)


class SimpleTraderParams(BaseModel):
    model_config = ConfigDict(extra="forbid")

    buy_threshold: float = Field(90.0, gt=0, description="Buy when price drops below this.")
    sell_threshold: float = Field(110.0, gt=0, description="Sell when price rises above this.")
    min_balance: float = Field(0.1, gt=0, description="No trading below this SOL balance.")

    @model_validator(mode="after")
    def _validate_thresholds(self) -> "SimpleTraderParams":
        if self.buy_threshold >= self.sell_threshold:
            raise ValueError("buy_threshold must be below sell_threshold")
        return self


class ActionType(str, Enum):
    trade = "trade"
    wait = "wait"


class StrategyAction(BaseModel):
    model_config = ConfigDict(extra="forbid", use_enum_values=True, frozen=True)

    type: ActionType
    side: Optional[SwapSide] = None
    amount: Optional[float] = Field(None, gt=0)
    reason: str = Field(..., min_length=1)

    @model_validator(mode="after")
    def _validate_trade_fields(self) -> "StrategyAction":
        if self.type == ActionType.trade:
            if self.side is None or self.amount is None:
                raise ValueError("trade actions require side and amount")
        else:
            if self.side is not None or self.amount is not None:
                raise ValueError("side/amount must be omitted unless type=trade")
        return self

    @property
    def is_trade(self) -> bool:
        return self.type == ActionType.trade


class ActivityResult(str, Enum):
    success = "success"
    failure = "failure"


class Activity(BaseModel):
    model_config = ConfigDict(extra="forbid", use_enum_values=True, frozen=True)

    timestamp: datetime = Field(default_factory=utc_now)
    action: str = Field(..., min_length=1, description="created/started/stopped/buy/sell/wait/error")
    decision: str = Field(..., description="Reasoning or outcome text.")
    transaction_signature: Optional[str] = None
    result: ActivityResult


__all__ = [
    "Activity",
    "ActivityResult",
    "ActionType",
    "AgentStatus",
    "SimpleTraderParams",
    "StrategyAction",
    "StrategyConfig",
    "StrategyKind",
]
