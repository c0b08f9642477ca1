"""Services package for the agent runtime."""

from .checkpoint_service import CheckpointerRegistry
from .runtime_service import AgentRuntimeService, create_agent_runtime

__all__ = [
    "CheckpointerRegistry",
    "AgentRuntimeService",
    "create_agent_runtime",
]
