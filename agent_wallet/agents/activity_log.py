"""Per-agent activity log and the agent record that owns it."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import Any, Deque, Dict, Iterator, List, Optional

from agent_wallet.agents.schemas import Activity, AgentStatus, StrategyConfig


DEFAULT_ACTIVITY_LOG_CAP = 100


class ActivityLog:
    """Fixed-capacity, append-only, time-ordered log. Oldest entries go first."""

    def __init__(self, cap: int = DEFAULT_ACTIVITY_LOG_CAP):
        if cap < 1:
            raise ValueError("activity log cap must be >= 1")
        self._entries: Deque[Activity] = deque(maxlen=cap)

    @property
    def cap(self) -> int:
        return int(self._entries.maxlen or 0)

    def append(self, activity: Activity) -> None:
        self._entries.append(activity)

    def latest(self) -> Optional[Activity]:
        return self._entries[-1] if self._entries else None

    def tail(self, limit: int) -> List[Activity]:
        if limit <= 0:
            return []
        return list(self._entries)[-limit:]

    def __iter__(self) -> Iterator[Activity]:
        return iter(list(self._entries))

    def __len__(self) -> int:
        return len(self._entries)


@dataclass
class Agent:
    id: str
    wallet_public_key: str
    strategy: StrategyConfig
    status: AgentStatus = AgentStatus.stopped
    activity_log: ActivityLog = field(default_factory=ActivityLog)

    def to_doc(self, *, activity_limit: Optional[int] = None) -> Dict[str, Any]:
        entries = list(self.activity_log) if activity_limit is None else self.activity_log.tail(activity_limit)
        return {
            "id": self.id,
            "wallet_public_key": self.wallet_public_key,
            "strategy": self.strategy.model_dump(mode="json"),
            "status": AgentStatus(self.status).value,
            "activity_log": [a.model_dump(mode="json") for a in entries],
        }


__all__ = ["Activity", "ActivityLog", "Agent", "DEFAULT_ACTIVITY_LOG_CAP"]
