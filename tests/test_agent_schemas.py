"""Sanity tests for agent and swap schemas. No network required."""

import pytest
from pydantic import ValidationError

from agent_wallet.agents.activity_log import Agent
from agent_wallet.agents.schemas import (
    ActionType,
    Activity,
    AgentStatus,
    SimpleTraderParams,
    StrategyAction,
    StrategyConfig,
)
from agent_wallet.execution.schemas import SwapParams


def test_strategy_action_shape():
    trade = StrategyAction(type=ActionType.trade, side="buy", amount=0.1, reason="cheap")
    assert trade.is_trade and trade.side == "buy"

    wait = StrategyAction(type="wait", reason="hold")
    assert not wait.is_trade

    with pytest.raises(ValidationError):
        StrategyAction(type="trade", side="buy", reason="missing amount")
    with pytest.raises(ValidationError):
        StrategyAction(type="wait", side="sell", amount=0.1, reason="stray side")
    with pytest.raises(ValidationError):
        StrategyAction(type="trade", side="buy", amount=-1.0, reason="negative")


def test_simple_trader_params_validation():
    p = SimpleTraderParams()
    assert (p.buy_threshold, p.sell_threshold, p.min_balance) == (90.0, 110.0, 0.1)
    with pytest.raises(ValidationError):
        SimpleTraderParams(buy_threshold=0)
    with pytest.raises(ValidationError):
        SimpleTraderParams(min_balance=-0.1)
    with pytest.raises(ValidationError):
        SimpleTraderParams(min_balance=0)
    with pytest.raises(ValidationError):
        SimpleTraderParams(buy_threshold=100, sell_threshold=100)


def test_strategy_config_rejects_unknown_kind():
    assert StrategyConfig().kind == "simple-trader"
    with pytest.raises(ValidationError):
        StrategyConfig(kind="liquidity-provider")
    with pytest.raises(ValidationError):
        StrategyConfig(kind="simple-trader", extra_field=1)


def test_swap_params_pair():
    SwapParams(from_token="SOL", to_token="TOKEN", amount=1.0)
    with pytest.raises(ValidationError):
        SwapParams(from_token="SOL", to_token="SOL", amount=1.0)
    with pytest.raises(ValidationError):
        SwapParams(from_token="SOL", to_token="TOKEN", amount=0)


def test_agent_doc_serializes_enums_and_activity():
    agent = Agent(id="agent_x", wallet_public_key="pk", strategy=StrategyConfig())
    agent.activity_log.append(Activity(action="created", decision="hi", result="success"))
    doc = agent.to_doc()
    assert doc["status"] == AgentStatus.stopped.value
    assert doc["strategy"] == {"kind": "simple-trader", "parameters": {}}
    assert doc["activity_log"][0]["result"] == "success"
    assert isinstance(doc["activity_log"][0]["timestamp"], str)
    assert agent.to_doc(activity_limit=0)["activity_log"] == []
