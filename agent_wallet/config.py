"""Central configuration loader.

Read env vars, expose typed config objects and defaults.
Keep this strategy-neutral: only scheduling, limits, and simulation knobs.
Entrypoints call `load_dotenv()` before `load_config()`.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Optional


def _env_int(name: str, default: int) -> int:
    val = os.getenv(name)
    if val is None or val.strip() == "":
        return default
    return int(val)


def _env_float(name: str, default: float) -> float:
    val = os.getenv(name)
    if val is None or val.strip() == "":
        return default
    return float(val)


def _env_optional_int(name: str) -> Optional[int]:
    val = os.getenv(name)
    if val is None or val.strip() == "":
        return None
    return int(val)


@dataclass(frozen=True)
class ControllerConfig:
    decision_interval_s: float = 10.0
    activity_log_cap: int = 100


@dataclass(frozen=True)
class MarketConfig:
    base_price: float = 100.0
    volatility: float = 0.05
    trend_strength: float = 0.02
    seed: Optional[int] = None


@dataclass(frozen=True)
class ApiConfig:
    host: str = "127.0.0.1"
    port: int = 8000


@dataclass(frozen=True)
class AppConfig:
    controller: ControllerConfig = field(default_factory=ControllerConfig)
    market: MarketConfig = field(default_factory=MarketConfig)
    api: ApiConfig = field(default_factory=ApiConfig)
    audit_max_events: int = 1000


def load_config() -> AppConfig:
    """Load configuration from environment."""
    controller = ControllerConfig(
        decision_interval_s=_env_float("AGENT_DECISION_INTERVAL_S", 10.0),
        activity_log_cap=_env_int("AGENT_ACTIVITY_LOG_CAP", 100),
    )
    if controller.decision_interval_s <= 0:
        raise ValueError("AGENT_DECISION_INTERVAL_S must be > 0")
    if controller.activity_log_cap < 1:
        raise ValueError("AGENT_ACTIVITY_LOG_CAP must be >= 1")

    market = MarketConfig(
        base_price=_env_float("MARKET_BASE_PRICE", 100.0),
        volatility=_env_float("MARKET_VOLATILITY", 0.05),
        trend_strength=_env_float("MARKET_TREND_STRENGTH", 0.02),
        seed=_env_optional_int("MARKET_SEED"),
    )

    api = ApiConfig(
        host=os.getenv("HOST", "127.0.0.1"),
        port=_env_int("PORT", 8000),
    )

    return AppConfig(
        controller=controller,
        market=market,
        api=api,
        audit_max_events=_env_int("AUDIT_MAX_EVENTS", 1000),
    )


__all__ = ["AppConfig", "ApiConfig", "ControllerConfig", "MarketConfig", "load_config"]
