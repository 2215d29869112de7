"""Synthetic market data.

A stateful random walk that stands in for a live feed: price drifts with the
current trend, trends flip after a random number of ticks, and the price is
kept inside a fixed band so the demo thresholds stay reachable.
"""

from __future__ import annotations

import random
from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from agent_wallet.data.audit import utc_now


PRICE_FLOOR = 50.0
PRICE_CEILING = 150.0
INITIAL_TREND_TICKS = 10
TREND_TICKS_MIN = 5
TREND_TICKS_MAX = 14
VOLUME_MIN = 1000
VOLUME_MAX = 10000  # exclusive


class Trend(str, Enum):
    up = "up"
    down = "down"
    sideways = "sideways"


class MarketTick(BaseModel):
    model_config = ConfigDict(extra="forbid", use_enum_values=True, frozen=True)

    timestamp: datetime = Field(default_factory=utc_now)
    price: float = Field(..., gt=0)
    volume: int = Field(..., gt=0)
    trend: Trend


class MarketDataGenerator:
    """Random-walk price generator. Pure in-process computation, no I/O."""

    def __init__(
        self,
        *,
        base_price: float = 100.0,
        volatility: float = 0.05,
        trend_strength: float = 0.02,
        seed: Optional[int] = None,
    ):
        if base_price <= 0:
            raise ValueError("base_price must be > 0")
        self.base_price = float(base_price)
        self.trend_strength = float(trend_strength)
        self._rng = random.Random(seed)
        self._volatility = 0.0
        self.set_volatility(volatility)
        self._price = self.base_price
        self._trend = Trend.sideways
        self._ticks_left = INITIAL_TREND_TICKS

    @property
    def current_price(self) -> float:
        return self._price

    @property
    def trend(self) -> Trend:
        return self._trend

    @property
    def volatility(self) -> float:
        return self._volatility

    def set_volatility(self, volatility: float) -> None:
        self._volatility = max(0.0, min(1.0, float(volatility)))

    def reset(self) -> None:
        self._price = self.base_price
        self._trend = Trend.sideways
        self._ticks_left = INITIAL_TREND_TICKS

    def _resample_trend(self) -> None:
        self._trend = self._rng.choice([Trend.up, Trend.down, Trend.sideways])
        self._ticks_left = self._rng.randint(TREND_TICKS_MIN, TREND_TICKS_MAX)

    def _price_delta(self) -> float:
        if self._trend == Trend.up:
            return self.trend_strength + self._rng.random() * self._volatility
        if self._trend == Trend.down:
            return -self.trend_strength - self._rng.random() * self._volatility
        return (self._rng.random() - 0.5) * self._volatility * 2

    def next_tick(self) -> MarketTick:
        self._ticks_left -= 1
        if self._ticks_left <= 0:
            self._resample_trend()

        self._price *= 1.0 + self._price_delta()
        self._price = max(PRICE_FLOOR, min(PRICE_CEILING, self._price))

        return MarketTick(
            timestamp=utc_now(),
            price=round(self._price, 2),
            volume=self._rng.randrange(VOLUME_MIN, VOLUME_MAX),
            trend=self._trend,
        )


__all__ = ["MarketDataGenerator", "MarketTick", "Trend", "PRICE_FLOOR", "PRICE_CEILING"]
