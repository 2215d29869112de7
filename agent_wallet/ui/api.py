"""FastAPI control API for the agent dashboard.

Thin HTTP mirror of `AgentController`: every route maps to one controller
call and the typed errors map to status codes (NotFound -> 404,
InvalidInput -> 422, execution/chain failures -> 400).
"""

from __future__ import annotations

import os
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from fastapi import Depends, FastAPI, HTTPException, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from agent_wallet.agents.schemas import AgentStatus, StrategyConfig
from agent_wallet.config import load_config
from agent_wallet.data.audit import utc_now
from agent_wallet.errors import InvalidInputError, NotFoundError
from agent_wallet.execution.executor import ExecutionError
from agent_wallet.orchestrator.controller import AgentController, build_controller
from agent_wallet.wallet.chain import ChainError


def _parse_origins(value: str) -> List[str]:
    v = (value or "*").strip()
    if v == "*":
        return ["*"]
    return [p.strip() for p in v.split(",") if p.strip()]


def _json_safe(value: Any) -> Any:
    """Convert values to JSON-serializable types for API responses."""
    if value is None:
        return None
    if isinstance(value, (str, int, float, bool)):
        return value
    if isinstance(value, datetime):
        dt = value if value.tzinfo else value.replace(tzinfo=timezone.utc)
        return dt.isoformat()
    if isinstance(value, (list, tuple)):
        return [_json_safe(v) for v in value]
    if isinstance(value, dict):
        return {str(k): _json_safe(v) for k, v in value.items()}
    if hasattr(value, "model_dump"):
        return _json_safe(value.model_dump(mode="json"))
    if hasattr(value, "to_doc"):
        return _json_safe(value.to_doc())
    return str(value)


def _http_error(e: Exception) -> HTTPException:
    if isinstance(e, NotFoundError):
        return HTTPException(status_code=404, detail=str(e))
    if isinstance(e, InvalidInputError):
        return HTTPException(status_code=422, detail=str(e))
    if isinstance(e, (ExecutionError, ChainError)):
        return HTTPException(status_code=400, detail=str(e))
    return HTTPException(status_code=500, detail=f"{type(e).__name__}: {e}")


class FundRequest(BaseModel):
    amount: float = Field(1.0, gt=0, description="SOL to airdrop into the agent wallet.")


def create_app(controller: Optional[AgentController] = None) -> FastAPI:
    if controller is None:
        # Uvicorn does not load `.env` unless you pass `--env-file`.
        from dotenv import load_dotenv

        load_dotenv(override=False)
        controller = build_controller(load_config())

    app = FastAPI(title="Agent Wallet API", version="0.1.0")
    app.state.controller = controller

    app.add_middleware(
        CORSMiddleware,
        allow_origins=_parse_origins(os.getenv("UI_ALLOWED_ORIGINS", "*")),
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.on_event("shutdown")
    async def _shutdown() -> None:
        await app.state.controller.shutdown()

    async def get_controller(request: Request) -> AgentController:
        return request.app.state.controller

    @app.get("/healthz")
    async def healthz(c: AgentController = Depends(get_controller)) -> Dict[str, Any]:
        agents = c.list_agents()
        active = [a for a in agents if a.status == AgentStatus.active]
        return {"ok": True, "time": utc_now().isoformat(), "agents": len(agents), "active": len(active)}

    @app.get("/agents")
    async def list_agents(
        c: AgentController = Depends(get_controller),
        activity_limit: int = Query(20, ge=0, le=100),
    ) -> Dict[str, Any]:
        return {"agents": [_json_safe(a.to_doc(activity_limit=activity_limit)) for a in c.list_agents()]}

    @app.post("/agents")
    async def create_agent(
        strategy: StrategyConfig,
        c: AgentController = Depends(get_controller),
    ) -> Dict[str, Any]:
        try:
            agent = await c.create_agent(strategy)
        except InvalidInputError as e:
            raise _http_error(e) from e
        return {"agent": _json_safe(agent.to_doc())}

    # Registered before /agents/{agent_id} routes so "stop-all" is not taken for an id.
    @app.post("/agents/stop-all")
    async def stop_all(c: AgentController = Depends(get_controller)) -> Dict[str, Any]:
        failed = await c.stop_all_agents()
        return {"ok": not failed, "failed": failed}

    @app.get("/agents/{agent_id}")
    async def get_agent(agent_id: str, c: AgentController = Depends(get_controller)) -> Dict[str, Any]:
        agent = c.get_agent(agent_id)
        if agent is None:
            raise HTTPException(status_code=404, detail=f"Agent not found: {agent_id}")
        wallet = c.wallets.get_wallet(agent.wallet_public_key)
        return {
            "agent": _json_safe(agent.to_doc()),
            "wallet": _json_safe(wallet.to_doc()) if wallet else None,
            "scheduled": c.is_scheduled(agent_id),
        }

    @app.delete("/agents/{agent_id}")
    async def delete_agent(agent_id: str, c: AgentController = Depends(get_controller)) -> Dict[str, Any]:
        try:
            await c.delete_agent(agent_id)
        except NotFoundError as e:
            raise _http_error(e) from e
        return {"ok": True, "agent_id": agent_id}

    @app.post("/agents/{agent_id}/start")
    async def start_agent(agent_id: str, c: AgentController = Depends(get_controller)) -> Dict[str, Any]:
        try:
            await c.start_agent(agent_id)
        except NotFoundError as e:
            raise _http_error(e) from e
        return {"ok": True, "agent": _json_safe(c.require_agent(agent_id).to_doc(activity_limit=5))}

    @app.post("/agents/{agent_id}/stop")
    async def stop_agent(agent_id: str, c: AgentController = Depends(get_controller)) -> Dict[str, Any]:
        try:
            await c.stop_agent(agent_id)
        except NotFoundError as e:
            raise _http_error(e) from e
        return {"ok": True, "agent": _json_safe(c.require_agent(agent_id).to_doc(activity_limit=5))}

    @app.post("/agents/{agent_id}/fund")
    async def fund_agent(
        agent_id: str,
        req: FundRequest,
        c: AgentController = Depends(get_controller),
    ) -> Dict[str, Any]:
        try:
            signature = await c.fund_agent(agent_id, req.amount)
        except (NotFoundError, InvalidInputError, ChainError) as e:
            raise _http_error(e) from e
        wallet = c.wallets.require_wallet(c.require_agent(agent_id).wallet_public_key)
        return {"ok": True, "signature": signature, "wallet": _json_safe(wallet.to_doc())}

    @app.get("/agents/{agent_id}/activity")
    async def agent_activity(
        agent_id: str,
        c: AgentController = Depends(get_controller),
        limit: int = Query(100, ge=1, le=100),
    ) -> Dict[str, Any]:
        agent = c.get_agent(agent_id)
        if agent is None:
            raise HTTPException(status_code=404, detail=f"Agent not found: {agent_id}")
        return {"agent_id": agent_id, "activity": _json_safe(agent.activity_log.tail(limit))}

    @app.get("/wallets")
    async def list_wallets(c: AgentController = Depends(get_controller)) -> Dict[str, Any]:
        return {"wallets": [_json_safe(w.to_doc()) for w in c.wallets.list_wallets()]}

    @app.get("/wallets/{public_key}")
    async def get_wallet(public_key: str, c: AgentController = Depends(get_controller)) -> Dict[str, Any]:
        wallet = c.wallets.get_wallet(public_key)
        if wallet is None:
            raise HTTPException(status_code=404, detail=f"Wallet not found: {public_key}")
        return {"wallet": _json_safe(wallet.to_doc())}

    @app.get("/audit")
    async def audit(
        c: AgentController = Depends(get_controller),
        agent_id: Optional[str] = None,
        event_type: Optional[str] = None,
        limit: int = Query(100, ge=1, le=1000),
    ) -> Dict[str, Any]:
        events = c.audit.store.recent(limit=limit, agent_id=agent_id, event_type=event_type)
        return {"events": [e.to_doc() for e in events]}

    return app
