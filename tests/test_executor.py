"""Trade executor against the simulated chain (no network)."""

from __future__ import annotations

import asyncio

import pytest

from agent_wallet.execution.executor import ExecutionError, InsufficientBalanceError, TradeExecutor
from agent_wallet.execution.schemas import SwapParams, SwapSide
from agent_wallet.wallet.chain import ChainError, SimulatedChain
from agent_wallet.wallet.manager import WalletManager


class _FailingChain(SimulatedChain):
    async def submit_swap(self, public_key: str, params: SwapParams) -> str:
        raise ChainError("rpc unavailable")


async def _funded(chain: SimulatedChain, amount: float = 1.0):
    wm = WalletManager(chain=chain)
    w = await wm.create_wallet()
    await wm.fund(w.public_key, amount)
    return wm, w


def test_buy_debits_ledger_and_chain() -> None:
    async def _run() -> None:
        chain = SimulatedChain()
        wm, w = await _funded(chain)
        ex = TradeExecutor(wallets=wm)
        res = await ex.execute(w.public_key, SwapSide.buy, 0.1)
        assert res.signature.startswith("mock_swap_")
        assert res.balance_before == 1.0
        assert res.balance_after == pytest.approx(0.9)
        assert w.balance == pytest.approx(0.9)
        assert await chain.get_balance(w.public_key) == pytest.approx(0.9)

    asyncio.run(_run())


def test_sell_is_accepted_without_touching_holdings() -> None:
    async def _run() -> None:
        wm, w = await _funded(SimulatedChain())
        res = await TradeExecutor(wallets=wm).execute(w.public_key, "sell", 0.1)
        assert res.side == "sell"
        assert w.balance == 1.0
        assert w.token_balances == []

    asyncio.run(_run())


def test_insufficient_buy_rejected_before_mutation() -> None:
    async def _run() -> None:
        chain = SimulatedChain()
        wm, w = await _funded(chain, 0.05)
        with pytest.raises(InsufficientBalanceError) as ei:
            await TradeExecutor(wallets=wm).execute(w.public_key, "buy", 0.1)
        assert "Invalid accounts" in str(ei.value)
        assert w.balance == 0.05
        assert await chain.get_balance(w.public_key) == 0.05

    asyncio.run(_run())


def test_buy_can_spend_entire_balance_but_never_below_zero() -> None:
    async def _run() -> None:
        wm, w = await _funded(SimulatedChain(), 0.3)
        ex = TradeExecutor(wallets=wm)
        await ex.execute(w.public_key, "buy", 0.3)
        assert w.balance == 0.0
        with pytest.raises(InsufficientBalanceError):
            await ex.execute(w.public_key, "buy", 0.01)
        assert w.balance == 0.0

    asyncio.run(_run())


def test_unknown_wallet_and_bad_amount() -> None:
    async def _run() -> None:
        wm, w = await _funded(SimulatedChain())
        ex = TradeExecutor(wallets=wm)
        with pytest.raises(ExecutionError):
            await ex.execute("missing", "buy", 0.1)
        with pytest.raises(ExecutionError):
            await ex.execute(w.public_key, "buy", 0.0)
        assert w.balance == 1.0

    asyncio.run(_run())


def test_settlement_failure_leaves_ledger_unchanged() -> None:
    async def _run() -> None:
        chain = _FailingChain()
        wm, w = await _funded(chain)
        with pytest.raises(ExecutionError) as ei:
            await TradeExecutor(wallets=wm).execute(w.public_key, "buy", 0.1)
        assert "rpc unavailable" in str(ei.value)
        assert w.balance == 1.0

    asyncio.run(_run())


def test_signatures_are_unique() -> None:
    async def _run() -> None:
        wm, w = await _funded(SimulatedChain(), 5.0)
        ex = TradeExecutor(wallets=wm)
        sigs = [(await ex.execute(w.public_key, "sell", 0.1)).signature for _ in range(20)]
        assert len(set(sigs)) == 20

    asyncio.run(_run())


def test_swap_params_for_side() -> None:
    buy = SwapParams.for_side("buy", 0.2)
    sell = SwapParams.for_side(SwapSide.sell, 0.2)
    assert (buy.from_token, buy.to_token) == ("SOL", "TOKEN")
    assert (sell.from_token, sell.to_token) == ("TOKEN", "SOL")
    assert buy.slippage_pct == 1.0
