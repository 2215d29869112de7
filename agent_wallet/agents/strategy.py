"""Rule-based strategies.

A strategy maps (market tick, wallet balance) to an action plus reasoning.
Strategy kinds form a closed set: `build_strategy` rejects anything not
registered in `STRATEGY_TYPES` instead of falling back to a default.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Type

from pydantic import ValidationError

from agent_wallet.agents.schemas import (
    ActionType,
    SimpleTraderParams,
    StrategyAction,
    StrategyConfig,
    StrategyKind,
)
from agent_wallet.data.market_data import MarketTick
from agent_wallet.errors import InvalidInputError
from agent_wallet.execution.schemas import SwapSide


BUY_BALANCE_FRACTION = 0.1
MAX_BUY_AMOUNT = 0.5
SELL_AMOUNT = 0.1


class Strategy(ABC):
    kind: StrategyKind

    @classmethod
    @abstractmethod
    def from_parameters(cls, parameters: Dict[str, Any]) -> "Strategy":
        """Build from raw parameters; raises pydantic ValidationError."""

    @abstractmethod
    def evaluate(self, tick: MarketTick, wallet_balance: float) -> StrategyAction:
        """Decide what to do on this tick."""

    @abstractmethod
    def get_config(self) -> StrategyConfig:
        """Configuration actually in use (defaults filled in)."""


class SimpleTraderStrategy(Strategy):
    """Buy below one threshold, sell above another, otherwise wait.

    `last_action` debounces repeats: the same side never fires on two
    consecutive trades, whatever the price does in between.
    """

    kind = StrategyKind.simple_trader

    def __init__(self, params: Optional[SimpleTraderParams] = None):
        self.params = params or SimpleTraderParams()
        self.last_action: ActionType | SwapSide = ActionType.wait

    @classmethod
    def from_parameters(cls, parameters: Dict[str, Any]) -> "SimpleTraderStrategy":
        return cls(SimpleTraderParams.model_validate(parameters or {}))

    def evaluate(self, tick: MarketTick, wallet_balance: float) -> StrategyAction:
        p = self.params
        if wallet_balance < p.min_balance:
            return StrategyAction(
                type=ActionType.wait,
                reason=(
                    f"Insufficient balance ({wallet_balance:.4f} SOL). "
                    f"Minimum required: {p.min_balance:g} SOL"
                ),
            )

        if tick.price < p.buy_threshold and self.last_action != SwapSide.buy:
            amount = min(wallet_balance * BUY_BALANCE_FRACTION, MAX_BUY_AMOUNT)
            if amount <= 0:
                return StrategyAction(
                    type=ActionType.wait,
                    reason=f"Price ({tick.price:g}) below buy threshold but no SOL to spend",
                )
            action = StrategyAction(
                type=ActionType.trade,
                side=SwapSide.buy,
                amount=amount,
                reason=(
                    f"Price ({tick.price:g}) below buy threshold ({p.buy_threshold:g}). "
                    f"Buying {amount:.4f} SOL worth of tokens."
                ),
            )
            self.last_action = SwapSide.buy
            return action

        if tick.price > p.sell_threshold and self.last_action != SwapSide.sell:
            action = StrategyAction(
                type=ActionType.trade,
                side=SwapSide.sell,
                amount=SELL_AMOUNT,
                reason=(
                    f"Price ({tick.price:g}) above sell threshold ({p.sell_threshold:g}). "
                    f"Selling {SELL_AMOUNT:.4f} SOL worth of tokens."
                ),
            )
            self.last_action = SwapSide.sell
            return action

        return StrategyAction(
            type=ActionType.wait,
            reason=(
                f"Price ({tick.price:g}) within normal range "
                f"({p.buy_threshold:g}-{p.sell_threshold:g}). Waiting for better opportunity."
            ),
        )

    def get_config(self) -> StrategyConfig:
        return StrategyConfig(kind=self.kind, parameters=self.params.model_dump())


STRATEGY_TYPES: Dict[str, Type[Strategy]] = {
    StrategyKind.simple_trader.value: SimpleTraderStrategy,
}


def parse_strategy_config(raw: StrategyConfig | Dict[str, Any]) -> StrategyConfig:
    if isinstance(raw, StrategyConfig):
        return raw
    try:
        return StrategyConfig.model_validate(raw)
    except ValidationError as e:
        raise InvalidInputError(f"Invalid strategy config: {e}") from e


def build_strategy(config: StrategyConfig | Dict[str, Any]) -> Strategy:
    """Instantiate the strategy for `config`; raise InvalidInputError if unusable."""
    cfg = parse_strategy_config(config)
    kind = StrategyKind(cfg.kind).value
    cls = STRATEGY_TYPES.get(kind)
    if cls is None:
        raise InvalidInputError(f"Unknown strategy kind: {kind}")
    try:
        return cls.from_parameters(cfg.parameters)
    except ValidationError as e:
        raise InvalidInputError(f"Invalid {kind} parameters: {e}") from e


__all__ = [
    "BUY_BALANCE_FRACTION",
    "MAX_BUY_AMOUNT",
    "SELL_AMOUNT",
    "STRATEGY_TYPES",
    "SimpleTraderStrategy",
    "Strategy",
    "build_strategy",
    "parse_strategy_config",
]
