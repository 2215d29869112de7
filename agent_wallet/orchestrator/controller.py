"""Agent lifecycle controller.

Owns the agent registry, one strategy instance per agent, and one APScheduler
interval job per active agent. Each decision cycle runs:
  market tick -> strategy evaluation -> (maybe) swap -> activity log append

Notes:
- `status == active` and "a job is registered" are always changed together,
  with no await in between.
- Anything that goes wrong inside a cycle is written to the agent's activity
  log; it never reaches the scheduler.
- Stopping cancels the pending job only. A cycle already in flight finishes
  and logs its result.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from uuid import uuid4

from apscheduler.job import Job
from apscheduler.jobstores.base import JobLookupError
from apscheduler.schedulers.asyncio import AsyncIOScheduler

from agent_wallet.agents.activity_log import ActivityLog, Agent
from agent_wallet.agents.schemas import Activity, ActivityResult, AgentStatus, StrategyConfig
from agent_wallet.agents.strategy import Strategy, build_strategy, parse_strategy_config
from agent_wallet.config import AppConfig, ControllerConfig
from agent_wallet.data.audit import AuditContext, AuditManager, AuditStore
from agent_wallet.data.market_data import MarketDataGenerator
from agent_wallet.errors import NotFoundError
from agent_wallet.execution.executor import ExecutionError, TradeExecutor
from agent_wallet.execution.schemas import SwapSide
from agent_wallet.wallet.chain import SimulatedChain
from agent_wallet.wallet.keystore import KeyStore
from agent_wallet.wallet.manager import WalletManager


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def generate_agent_id(*, prefix: str = "agent") -> str:
    ts = _utc_now().strftime("%Y%m%d_%H%M%S")
    return f"{prefix}_{ts}_{uuid4().hex[:9]}"


def _job_id(agent_id: str) -> str:
    return f"decision_cycle:{agent_id}"


class AgentController:
    def __init__(
        self,
        *,
        wallets: WalletManager,
        executor: TradeExecutor,
        market: MarketDataGenerator,
        config: Optional[ControllerConfig] = None,
        scheduler: Optional[AsyncIOScheduler] = None,
        audit: Optional[AuditManager] = None,
    ):
        self.wallets = wallets
        self.executor = executor
        self.market = market
        self.config = config or ControllerConfig()
        self.scheduler = scheduler or AsyncIOScheduler(timezone="UTC")
        self.audit = audit or AuditManager()

        self._agents: Dict[str, Agent] = {}
        self._strategies: Dict[str, Strategy] = {}
        self._jobs: Dict[str, Job] = {}

    # ---- registry -------------------------------------------------------

    def get_agent(self, agent_id: str) -> Optional[Agent]:
        return self._agents.get(agent_id)

    def require_agent(self, agent_id: str) -> Agent:
        agent = self._agents.get(agent_id)
        if agent is None:
            raise NotFoundError(f"Agent not found: {agent_id}")
        return agent

    def list_agents(self) -> List[Agent]:
        """All agents in creation order."""
        return list(self._agents.values())

    def get_strategy(self, agent_id: str) -> Strategy:
        self.require_agent(agent_id)
        return self._strategies[agent_id]

    def is_scheduled(self, agent_id: str) -> bool:
        if agent_id not in self._jobs:
            return False
        return self.scheduler.get_job(_job_id(agent_id)) is not None

    # ---- scheduling -----------------------------------------------------

    def _schedule(self, agent_id: str) -> None:
        if not self.scheduler.running:
            self.scheduler.start()
        job = self.scheduler.add_job(
            self.decision_cycle,
            trigger="interval",
            seconds=float(self.config.decision_interval_s),
            args=[agent_id],
            id=_job_id(agent_id),
            max_instances=1,
            coalesce=True,
            replace_existing=True,
        )
        self._jobs[agent_id] = job

    def _unschedule(self, agent_id: str) -> bool:
        job = self._jobs.pop(agent_id, None)
        if job is None:
            return False
        try:
            job.remove()
        except JobLookupError:
            # Already gone from the scheduler (e.g. after shutdown).
            pass
        return True

    # ---- activity -------------------------------------------------------

    def _log_activity(
        self,
        agent: Agent,
        *,
        action: str,
        decision: str,
        result: ActivityResult = ActivityResult.success,
        transaction_signature: Optional[str] = None,
    ) -> Activity:
        activity = Activity(
            action=action,
            decision=decision,
            result=result,
            transaction_signature=transaction_signature,
        )
        agent.activity_log.append(activity)
        return activity

    # ---- lifecycle ------------------------------------------------------

    async def create_agent(self, strategy: StrategyConfig | Dict[str, Any]) -> Agent:
        cfg = parse_strategy_config(strategy)
        # Validate before allocating anything so bad input leaves no orphan wallet.
        instance = build_strategy(cfg)
        wallet = await self.wallets.create_wallet()

        agent = Agent(
            id=generate_agent_id(),
            wallet_public_key=wallet.public_key,
            strategy=instance.get_config(),
            status=AgentStatus.stopped,
            activity_log=ActivityLog(self.config.activity_log_cap),
        )
        self._agents[agent.id] = agent
        self._strategies[agent.id] = instance

        self._log_activity(
            agent,
            action="created",
            decision=f"Agent created with {agent.strategy.kind} strategy",
        )
        await self.audit.log(
            "agent_created",
            {"wallet_public_key": wallet.public_key, "strategy": agent.strategy.model_dump(mode="json")},
            ctx=AuditContext(agent_id=agent.id),
        )
        return agent

    async def start_agent(self, agent_id: str) -> None:
        agent = self.require_agent(agent_id)
        if agent.status == AgentStatus.active:
            return

        agent.status = AgentStatus.active
        self._schedule(agent_id)
        self._log_activity(
            agent,
            action="started",
            decision="Agent activated and beginning autonomous operations",
        )
        await self.audit.log(
            "agent_started",
            {"decision_interval_s": self.config.decision_interval_s},
            ctx=AuditContext(agent_id=agent_id),
        )

        # First cycle runs now rather than one full interval later.
        await self.decision_cycle(agent_id)

    async def stop_agent(self, agent_id: str) -> None:
        agent = self.require_agent(agent_id)
        cancelled = self._unschedule(agent_id)
        agent.status = AgentStatus.stopped
        self._log_activity(agent, action="stopped", decision="Agent deactivated")
        await self.audit.log(
            "agent_stopped",
            {"job_cancelled": cancelled},
            ctx=AuditContext(agent_id=agent_id),
        )

    async def stop_all_agents(self) -> List[str]:
        """Stop every active agent. Returns the ids whose stop failed."""
        active_ids = [a.id for a in self._agents.values() if a.status == AgentStatus.active]
        failed: List[str] = []
        for agent_id in active_ids:
            try:
                await self.stop_agent(agent_id)
            except Exception as e:  # pylint: disable=broad-exception-caught
                failed.append(agent_id)
                await self.audit.log(
                    "stop_agent_error",
                    {"error": f"{type(e).__name__}: {e}"},
                    ctx=AuditContext(agent_id=agent_id),
                )
        return failed

    async def delete_agent(self, agent_id: str) -> None:
        agent = self.require_agent(agent_id)
        if agent.status == AgentStatus.active or agent_id in self._jobs:
            await self.stop_agent(agent_id)
        self._agents.pop(agent_id, None)
        self._strategies.pop(agent_id, None)
        await self.audit.log(
            "agent_deleted",
            {"wallet_public_key": agent.wallet_public_key},
            ctx=AuditContext(agent_id=agent_id),
        )

    async def fund_agent(self, agent_id: str, amount: float) -> str:
        """Airdrop SOL into the agent's wallet. Returns the airdrop signature."""
        agent = self.require_agent(agent_id)
        signature = await self.wallets.fund(agent.wallet_public_key, amount)
        await self.audit.log(
            "wallet_funded",
            {"wallet_public_key": agent.wallet_public_key, "amount": amount, "signature": signature},
            ctx=AuditContext(agent_id=agent_id),
        )
        return signature

    async def shutdown(self) -> None:
        await self.stop_all_agents()
        if self.scheduler.running:
            self.scheduler.shutdown(wait=False)

    # ---- decision cycle -------------------------------------------------

    async def _refresh_wallet(self, agent: Agent) -> None:
        try:
            await self.wallets.refresh(agent.wallet_public_key)
        except Exception as e:  # pylint: disable=broad-exception-caught
            await self.audit.log(
                "balance_refresh_error",
                {"wallet_public_key": agent.wallet_public_key, "error": f"{type(e).__name__}: {e}"},
                ctx=AuditContext(agent_id=agent.id),
            )

    async def decision_cycle(self, agent_id: str) -> None:
        agent = self._agents.get(agent_id)
        if agent is None or agent.status != AgentStatus.active:
            # Fired after a stop/delete that raced with cancellation.
            return

        ctx = AuditContext(agent_id=agent_id, trace_id=uuid4().hex[:12])
        try:
            tick = self.market.next_tick()
            wallet = self.wallets.require_wallet(agent.wallet_public_key)
            action = self._strategies[agent_id].evaluate(tick, wallet.balance)

            if not action.is_trade:
                self._log_activity(agent, action="wait", decision=action.reason)
                await self.audit.log(
                    "decision_cycle",
                    {"price": tick.price, "trend": tick.trend, "action": "wait", "balance": wallet.balance},
                    ctx=ctx,
                )
                return

            side = SwapSide(action.side).value
            try:
                swap = await self.executor.execute(agent.wallet_public_key, side, float(action.amount or 0.0))
            except ExecutionError as e:
                self._log_activity(
                    agent,
                    action=side,
                    decision=f"Trade failed: {e}",
                    result=ActivityResult.failure,
                )
                await self.audit.log(
                    "trade_failed",
                    {"price": tick.price, "side": side, "amount": action.amount, "error": str(e)},
                    ctx=ctx,
                )
                return

            self._log_activity(
                agent,
                action=side,
                decision=action.reason,
                transaction_signature=swap.signature,
            )
            await self.audit.log(
                "trade_executed",
                {
                    "price": tick.price,
                    "side": side,
                    "amount": swap.amount,
                    "signature": swap.signature,
                    "balance_before": swap.balance_before,
                    "balance_after": swap.balance_after,
                },
                ctx=ctx,
            )
            await self._refresh_wallet(agent)
        except Exception as e:  # pylint: disable=broad-exception-caught
            self._log_activity(
                agent,
                action="error",
                decision=f"Decision cycle failed: {e}",
                result=ActivityResult.failure,
            )
            await self.audit.log(
                "decision_cycle_error",
                {"error": f"{type(e).__name__}: {e}"},
                ctx=ctx,
            )


def build_controller(cfg: Optional[AppConfig] = None, *, audit_store: Optional[AuditStore] = None) -> AgentController:
    """Wire the default in-process collaborators. The caller owns the result."""
    cfg = cfg or AppConfig()
    chain = SimulatedChain()
    wallets = WalletManager(chain=chain, key_store=KeyStore())
    market = MarketDataGenerator(
        base_price=cfg.market.base_price,
        volatility=cfg.market.volatility,
        trend_strength=cfg.market.trend_strength,
        seed=cfg.market.seed,
    )
    store = audit_store or AuditStore(max_events=cfg.audit_max_events)
    return AgentController(
        wallets=wallets,
        executor=TradeExecutor(wallets=wallets, chain=chain),
        market=market,
        config=cfg.controller,
        audit=AuditManager(store),
    )


__all__ = ["AgentController", "build_controller", "generate_agent_id"]
