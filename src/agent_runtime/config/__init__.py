"""Configuration for the agent runtime."""

from .runtime_config import RuntimeConfig, resolve_credentials, DEFAULT_MODEL_ID

__all__ = [
    "RuntimeConfig",
    "resolve_credentials",
    "DEFAULT_MODEL_ID",
]
