"""Agent package.

Contracts (schemas), the bounded activity log, and rule-based strategies.
"""

from agent_wallet.agents.schemas import (  # noqa: F401
    Activity,
    ActivityResult,
    ActionType,
    AgentStatus,
    SimpleTraderParams,
    StrategyAction,
    StrategyConfig,
    StrategyKind,
)
from agent_wallet.agents.activity_log import ActivityLog, Agent  # noqa: F401
from agent_wallet.agents.strategy import SimpleTraderStrategy, Strategy, build_strategy  # noqa: F401
