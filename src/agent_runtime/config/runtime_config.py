"""Runtime configuration with environment variable loading."""

import os
from pathlib import Path
from typing import Dict, Optional
from pydantic import BaseModel, Field
from dotenv import load_dotenv

from ..errors import ConfigurationError
from ..models.runtime_models import ProviderCredentials

# Load environment variables from .env file
load_dotenv()

DEFAULT_MODEL_ID = "claude-sonnet-4-5-20250929"

# Environment variable prefix per provider: <PREFIX>_API_KEY, _AUTH_TOKEN, _BASE_URL
PROVIDER_ENV_PREFIXES: Dict[str, str] = {
    "anthropic": "ANTHROPIC",
    "openai": "OPENAI",
    "google": "GOOGLE",
}


def _read_env(name: str) -> Optional[str]:
    value = os.getenv(name)
    return value or None


class RuntimeConfig(BaseModel):
    """
    Configuration for the agent runtime.

    Credential getters read the process environment on every call so they
    always reflect current configuration. Nothing here is cached.
    """

    default_model: str = Field(
        default_factory=lambda: os.getenv("AGENT_RUNTIME_DEFAULT_MODEL", DEFAULT_MODEL_ID),
        description="Model used when a request does not name one",
    )
    data_dir: Path = Field(
        default_factory=lambda: Path(
            os.getenv("AGENT_RUNTIME_HOME", "~/.agent-runtime")
        ).expanduser(),
        description="Root directory for per-thread checkpoint databases",
    )

    def get_default_model(self) -> str:
        return self.default_model

    def get_api_key(self, provider: str) -> Optional[str]:
        return self._provider_value(provider, "API_KEY")

    def get_auth_token(self, provider: str) -> Optional[str]:
        return self._provider_value(provider, "AUTH_TOKEN")

    def get_base_url(self, provider: str) -> Optional[str]:
        return self._provider_value(provider, "BASE_URL")

    def get_thread_checkpoint_path(self, thread_id: str) -> Path:
        """
        Get the checkpoint database path for a thread.

        Args:
            thread_id: Thread identifier

        Returns:
            Path of the thread's SQLite database (not created here)

        Raises:
            ConfigurationError: If the thread id is empty or not a plain name
        """
        if not thread_id:
            raise ConfigurationError("thread id required")
        if "/" in thread_id or "\\" in thread_id or thread_id in (".", ".."):
            raise ConfigurationError(
                "thread id must not contain path separators",
                thread_id=thread_id,
            )
        return self.data_dir / "threads" / f"{thread_id}.sqlite"

    def _provider_value(self, provider: str, suffix: str) -> Optional[str]:
        prefix = PROVIDER_ENV_PREFIXES.get(provider.lower())
        if prefix is None:
            return None
        return _read_env(f"{prefix}_{suffix}")


def resolve_credentials(
    provider: str,
    config: Optional[RuntimeConfig] = None,
) -> ProviderCredentials:
    """
    Resolve the effective credentials and endpoint for a provider.

    Pure read: missing values come back as None and the caller decides
    whether their absence is fatal.

    Args:
        provider: Provider name (anthropic, openai, google)
        config: Runtime configuration (creates default if None)

    Returns:
        ProviderCredentials for the provider
    """
    config = config or RuntimeConfig()
    return ProviderCredentials(
        provider=provider,
        api_key=config.get_api_key(provider),
        auth_token=config.get_auth_token(provider),
        base_url=config.get_base_url(provider),
    )
