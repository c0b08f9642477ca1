"""Core agent runtime components."""

from .checkpoints import ThreadCheckpointer
from .prompts import BASE_SYSTEM_PROMPT, build_system_prompt, build_filesystem_prompt
from .agent_graph import AgentRuntime, create_workspace_agent

__all__ = [
    # Checkpoints
    "ThreadCheckpointer",
    # Prompts
    "BASE_SYSTEM_PROMPT",
    "build_system_prompt",
    "build_filesystem_prompt",
    # Agent
    "AgentRuntime",
    "create_workspace_agent",
]
