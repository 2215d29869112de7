"""Audit store and manager (in-process, bounded)."""

import asyncio

import pytest

from agent_wallet.agents.activity_log import ActivityLog
from agent_wallet.agents.schemas import Activity
from agent_wallet.data.audit import AuditContext, AuditManager, AuditStore


def test_manager_writes_with_context():
    async def _run():
        audit = AuditManager(AuditStore())
        ctx = AuditContext(agent_id="agent_1", trace_id="t1")
        first = await audit.log("agent_started", {"ok": True}, ctx=ctx)
        second = await audit.log("agent_stopped", {"ok": True}, ctx=ctx, trace_id="t2")
        assert first == "evt_00000001" and second == "evt_00000002"

        events = audit.store.recent()
        assert [e.event_type for e in events] == ["agent_stopped", "agent_started"]
        assert events[0].trace_id == "t2"
        assert events[1].to_doc()["agent_id"] == "agent_1"

    asyncio.run(_run())


def test_store_is_bounded_and_filterable():
    store = AuditStore(max_events=3)
    for i in range(5):
        store.append("tick", {"i": i}, agent_id="a" if i % 2 else "b")
    assert len(store) == 3
    assert [e.payload["i"] for e in store.recent()] == [4, 3, 2]
    assert [e.payload["i"] for e in store.recent(agent_id="a")] == [3]
    assert store.recent(event_type="other") == []
    assert len(store.recent(limit=1)) == 1


def test_listener_sees_events_and_cannot_break_append(capsys):
    seen = []
    store = AuditStore(listener=lambda e: seen.append(e.event_type))
    store.append("one", {})
    assert seen == ["one"]

    def _boom(_event):
        raise RuntimeError("listener broke")

    store.listener = _boom
    store.append("two", {})
    assert len(store) == 2
    out = capsys.readouterr().out
    assert "[WARN] Audit listener failed on evt_00000002 (two)" in out
    assert "listener broke" in out


def test_activity_log_drops_oldest():
    log = ActivityLog(cap=3)
    for i in range(5):
        log.append(Activity(action="wait", decision=f"d{i}", result="success"))
    assert len(log) == 3
    assert [a.decision for a in log] == ["d2", "d3", "d4"]
    assert log.latest().decision == "d4"
    assert [a.decision for a in log.tail(2)] == ["d3", "d4"]
    assert log.tail(0) == []
    with pytest.raises(ValueError):
        ActivityLog(cap=0)
