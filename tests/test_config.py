import pytest

from agent_wallet.config import AppConfig, load_config


_KEYS = (
    "AGENT_DECISION_INTERVAL_S",
    "AGENT_ACTIVITY_LOG_CAP",
    "AUDIT_MAX_EVENTS",
    "MARKET_BASE_PRICE",
    "MARKET_VOLATILITY",
    "MARKET_TREND_STRENGTH",
    "MARKET_SEED",
    "HOST",
    "PORT",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for key in _KEYS:
        monkeypatch.delenv(key, raising=False)


def test_defaults():
    cfg = load_config()
    assert cfg == AppConfig()
    assert cfg.controller.decision_interval_s == 10.0
    assert cfg.controller.activity_log_cap == 100
    assert cfg.market.seed is None


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("AGENT_DECISION_INTERVAL_S", "2.5")
    monkeypatch.setenv("AGENT_ACTIVITY_LOG_CAP", "20")
    monkeypatch.setenv("MARKET_SEED", "42")
    monkeypatch.setenv("MARKET_VOLATILITY", "0.1")
    monkeypatch.setenv("PORT", "9001")
    monkeypatch.setenv("HOST", "")
    cfg = load_config()
    assert cfg.controller.decision_interval_s == 2.5
    assert cfg.controller.activity_log_cap == 20
    assert cfg.market.seed == 42
    assert cfg.market.volatility == 0.1
    assert cfg.api.port == 9001


@pytest.mark.parametrize(
    "key,value",
    [("AGENT_DECISION_INTERVAL_S", "0"), ("AGENT_ACTIVITY_LOG_CAP", "0")],
)
def test_invalid_values_rejected(monkeypatch, key, value):
    monkeypatch.setenv(key, value)
    with pytest.raises(ValueError):
        load_config()
