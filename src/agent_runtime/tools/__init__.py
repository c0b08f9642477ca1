"""Execution backend and the agent tools built on it."""

from .sandbox import LocalSandbox
from .workspace_tools import create_workspace_tools, EXECUTE_TOOL_NAME

__all__ = [
    "LocalSandbox",
    "create_workspace_tools",
    "EXECUTE_TOOL_NAME",
]
