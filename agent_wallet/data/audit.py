"""Audit logging helpers.

The audit log is the operator-facing record of every lifecycle call and
decision cycle (the per-agent activity log is the user-facing one). Events
live in a bounded in-process `AuditStore`; `AuditManager` is the thin wrapper
other modules call so they don't need to know store details.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from datetime import datetime, timezone
from itertools import count
from typing import Any, Callable, Deque, Dict, List, Optional


def utc_now() -> datetime:
    """UTC timestamp helper."""
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class AuditEvent:
    event_id: str
    timestamp: datetime
    event_type: str
    payload: Dict[str, Any]
    agent_id: Optional[str] = None
    trace_id: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None

    def to_doc(self) -> Dict[str, Any]:
        doc: Dict[str, Any] = {
            "event_id": self.event_id,
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type,
            "payload": self.payload,
        }
        if self.agent_id:
            doc["agent_id"] = self.agent_id
        if self.trace_id:
            doc["trace_id"] = self.trace_id
        if self.metadata:
            doc["metadata"] = self.metadata
        return doc


AuditListener = Callable[[AuditEvent], None]


class AuditStore:
    """Bounded, append-only event buffer (oldest events dropped first)."""

    def __init__(self, *, max_events: int = 1000, listener: Optional[AuditListener] = None):
        if max_events < 1:
            raise ValueError("max_events must be >= 1")
        self._events: Deque[AuditEvent] = deque(maxlen=max_events)
        self._seq = count(1)
        self.listener = listener

    def append(
        self,
        event_type: str,
        payload: Dict[str, Any],
        *,
        agent_id: Optional[str] = None,
        trace_id: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> AuditEvent:
        event = AuditEvent(
            event_id=f"evt_{next(self._seq):08d}",
            timestamp=utc_now(),
            event_type=event_type,
            payload=dict(payload),
            agent_id=agent_id,
            trace_id=trace_id,
            metadata=metadata,
        )
        self._events.append(event)
        if self.listener is not None:
            try:
                self.listener(event)
            except Exception as e:  # pylint: disable=broad-exception-caught
                print(f"[WARN] Audit listener failed on {event.event_id} ({event_type}): {type(e).__name__}: {e}")
        return event

    def recent(
        self,
        *,
        limit: int = 100,
        agent_id: Optional[str] = None,
        event_type: Optional[str] = None,
    ) -> List[AuditEvent]:
        """Most recent events first."""
        out: List[AuditEvent] = []
        for event in reversed(self._events):
            if agent_id and event.agent_id != agent_id:
                continue
            if event_type and event.event_type != event_type:
                continue
            out.append(event)
            if len(out) >= limit:
                break
        return out

    def __len__(self) -> int:
        return len(self._events)


@dataclass(frozen=True)
class AuditContext:
    agent_id: Optional[str] = None
    trace_id: Optional[str] = None


class AuditManager:
    """Thin wrapper around AuditStore for audit events."""

    def __init__(self, store: Optional[AuditStore] = None):
        self.store = store or AuditStore()

    async def log(
        self,
        event_type: str,
        payload: Dict[str, Any],
        *,
        ctx: Optional[AuditContext] = None,
        agent_id: Optional[str] = None,
        trace_id: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> str:
        c = ctx or AuditContext()
        event = self.store.append(
            event_type,
            payload,
            agent_id=agent_id or c.agent_id,
            trace_id=trace_id or c.trace_id,
            metadata=metadata,
        )
        return event.event_id


__all__ = ["AuditContext", "AuditEvent", "AuditListener", "AuditManager", "AuditStore", "utc_now"]
