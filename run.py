"""Run the agent wallet demo in the terminal.

Creates a handful of simple-trader agents, funds their wallets from the
simulated faucet, starts them, and echoes every audit event until Ctrl+C
(or --duration-s) elapses. All agents are stopped on the way out.
"""

from __future__ import annotations

import argparse
import asyncio
import signal
from dataclasses import replace

from dotenv import load_dotenv
from termcolor import colored

from agent_wallet.config import load_config
from agent_wallet.data.audit import AuditEvent, AuditStore
from agent_wallet.orchestrator.controller import build_controller


_EVENT_COLORS = {
    "trade_executed": "green",
    "trade_failed": "red",
    "decision_cycle_error": "red",
    "stop_agent_error": "red",
    "balance_refresh_error": "yellow",
    "decision_cycle": "cyan",
}


def _print_event(event: AuditEvent) -> None:
    color = _EVENT_COLORS.get(event.event_type, "white")
    agent = event.agent_id or "-"
    ts = event.timestamp.strftime("%H:%M:%S")
    print(colored(f"[{ts}] {agent} {event.event_type} {event.payload}", color), flush=True)


def _build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Agent wallet demo (simulated chain)")
    p.add_argument("--agents", type=int, default=3, help="Number of agents to create")
    p.add_argument("--fund", type=float, default=1.0, help="SOL airdropped into each wallet")
    p.add_argument("--buy-threshold", type=float, default=90.0)
    p.add_argument("--sell-threshold", type=float, default=110.0)
    p.add_argument("--min-balance", type=float, default=0.1)
    p.add_argument("--interval-s", type=float, default=None, help="Decision interval (default from env/config)")
    p.add_argument("--seed", type=int, default=None, help="Market generator seed")
    p.add_argument("--duration-s", type=float, default=None, help="Stop after this many seconds")
    return p


async def _amain() -> int:
    load_dotenv()
    args = _build_arg_parser().parse_args()

    cfg = load_config()
    if args.interval_s is not None:
        cfg = replace(cfg, controller=replace(cfg.controller, decision_interval_s=float(args.interval_s)))
    if args.seed is not None:
        cfg = replace(cfg, market=replace(cfg.market, seed=int(args.seed)))

    controller = build_controller(cfg, audit_store=AuditStore(max_events=cfg.audit_max_events, listener=_print_event))

    print("[INFO] Starting agent wallet demo")
    print(f"[INFO] agents={args.agents} fund={args.fund} SOL")
    print(f"[INFO] decision_interval_s={cfg.controller.decision_interval_s}")
    print(f"[INFO] thresholds buy<{args.buy_threshold} sell>{args.sell_threshold} min_balance={args.min_balance}")

    stop_event = asyncio.Event()

    def _request_stop(*_args: object) -> None:
        stop_event.set()

    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, _request_stop)
        except NotImplementedError:
            signal.signal(sig, lambda *_a: _request_stop())

    strategy = {
        "kind": "simple-trader",
        "parameters": {
            "buy_threshold": args.buy_threshold,
            "sell_threshold": args.sell_threshold,
            "min_balance": args.min_balance,
        },
    }
    try:
        for _ in range(max(0, int(args.agents))):
            agent = await controller.create_agent(strategy)
            if args.fund > 0:
                await controller.fund_agent(agent.id, args.fund)
            await controller.start_agent(agent.id)

        if args.duration_s is not None:
            try:
                await asyncio.wait_for(stop_event.wait(), timeout=float(args.duration_s))
            except asyncio.TimeoutError:
                pass
        else:
            await stop_event.wait()
    finally:
        await controller.shutdown()

    print("[INFO] Final balances:")
    for agent in controller.list_agents():
        wallet = controller.wallets.get_wallet(agent.wallet_public_key)
        balance = wallet.balance if wallet else 0.0
        trades = [a for a in agent.activity_log if a.transaction_signature]
        print(f"[INFO] {agent.id} balance={balance:.4f} SOL trades={len(trades)}")
    return 0


def main() -> None:
    raise SystemExit(asyncio.run(_amain()))


if __name__ == "__main__":
    main()
