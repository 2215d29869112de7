"""HTTP smoke test for the control API (in-process controller, no network)."""

from fastapi.testclient import TestClient

from agent_wallet.config import AppConfig, MarketConfig
from agent_wallet.orchestrator.controller import build_controller
from agent_wallet.ui.api import create_app


def _client() -> TestClient:
    controller = build_controller(AppConfig(market=MarketConfig(seed=1)))
    return TestClient(create_app(controller))


def test_agent_lifecycle_over_http():
    with _client() as client:
        r = client.get("/healthz")
        assert r.status_code == 200 and r.json()["agents"] == 0

        r = client.post("/agents", json={"kind": "simple-trader", "parameters": {"buy_threshold": 95}})
        assert r.status_code == 200
        agent = r.json()["agent"]
        agent_id = agent["id"]
        assert agent["status"] == "stopped"
        assert agent["strategy"]["parameters"]["buy_threshold"] == 95.0
        assert [a["action"] for a in agent["activity_log"]] == ["created"]

        r = client.post(f"/agents/{agent_id}/fund", json={"amount": 2.0})
        body = r.json()
        assert r.status_code == 200
        assert body["signature"].startswith("mock_airdrop_")
        assert body["wallet"]["balance"] == 2.0

        r = client.post(f"/agents/{agent_id}/start")
        assert r.status_code == 200
        assert r.json()["agent"]["status"] == "active"

        r = client.get(f"/agents/{agent_id}")
        body = r.json()
        assert body["scheduled"] is True
        assert body["wallet"]["public_key"] == agent["wallet_public_key"]

        r = client.get(f"/agents/{agent_id}/activity?limit=10")
        actions = [a["action"] for a in r.json()["activity"]]
        assert actions[:2] == ["created", "started"]
        assert len(actions) == 3

        r = client.post("/agents/stop-all")
        assert r.json() == {"ok": True, "failed": []}
        r = client.get(f"/agents/{agent_id}")
        assert r.json()["agent"]["status"] == "stopped"
        assert r.json()["scheduled"] is False

        r = client.get("/wallets")
        assert len(r.json()["wallets"]) == 1

        r = client.get(f"/audit?agent_id={agent_id}&event_type=agent_started")
        assert len(r.json()["events"]) == 1

        r = client.delete(f"/agents/{agent_id}")
        assert r.status_code == 200
        assert client.get("/agents").json()["agents"] == []
        assert client.get(f"/wallets/{agent['wallet_public_key']}").status_code == 200


def test_error_mapping():
    with _client() as client:
        assert client.post("/agents/agent_missing/start").status_code == 404
        assert client.post("/agents/agent_missing/stop").status_code == 404
        assert client.delete("/agents/agent_missing").status_code == 404
        assert client.get("/agents/agent_missing").status_code == 404
        assert client.get("/agents/agent_missing/activity").status_code == 404
        assert client.get("/wallets/nope").status_code == 404

        r = client.post("/agents", json={"kind": "simple-trader", "parameters": {"buy_threshold": 120}})
        assert r.status_code == 422
        r = client.post("/agents", json={"kind": "arbitrage"})
        assert r.status_code == 422
        assert client.get("/wallets").json()["wallets"] == []

        agent_id = client.post("/agents", json={}).json()["agent"]["id"]
        assert client.post(f"/agents/{agent_id}/fund", json={"amount": 0}).status_code == 422
        assert client.post(f"/agents/{agent_id}/fund", json={"amount": 50.0}).status_code == 400
