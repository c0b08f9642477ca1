"""Agent runtime: model resolution, per-thread checkpointing and agent assembly."""

from .config import RuntimeConfig, resolve_credentials
from .errors import AgentRuntimeError, ConfigurationError, ResourceInitializationError
from .models import AgentRuntimeOptions, ModelFamily, ProviderCredentials
from .llm import ModelResolver, classify_model, resolve_model
from .core import AgentRuntime, ThreadCheckpointer
from .services import AgentRuntimeService, CheckpointerRegistry, create_agent_runtime

__version__ = "0.1.0"

__all__ = [
    "RuntimeConfig",
    "resolve_credentials",
    "AgentRuntimeError",
    "ConfigurationError",
    "ResourceInitializationError",
    "AgentRuntimeOptions",
    "ModelFamily",
    "ProviderCredentials",
    "ModelResolver",
    "classify_model",
    "resolve_model",
    "AgentRuntime",
    "ThreadCheckpointer",
    "AgentRuntimeService",
    "CheckpointerRegistry",
    "create_agent_runtime",
]
