"""Data models for the agent runtime."""

from .runtime_models import (
    ModelFamily,
    ProviderCredentials,
    AgentRuntimeOptions,
    SandboxSettings,
    ExecuteResponse,
)

__all__ = [
    "ModelFamily",
    "ProviderCredentials",
    "AgentRuntimeOptions",
    "SandboxSettings",
    "ExecuteResponse",
]
