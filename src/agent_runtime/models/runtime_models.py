"""Runtime data models."""

from pydantic import BaseModel, Field
from typing import Optional
from enum import Enum


class ModelFamily(str, Enum):
    """Provider families a model identifier can belong to."""

    ANTHROPIC = "anthropic"
    OPENAI = "openai"
    GOOGLE = "google"
    PASSTHROUGH = "passthrough"  # Unknown id, handed to the agent framework as-is


class ProviderCredentials(BaseModel):
    """Credentials and endpoint for one provider."""

    provider: str = Field(description="Provider name (anthropic, openai, google)")
    api_key: Optional[str] = Field(default=None, repr=False)
    auth_token: Optional[str] = Field(default=None, repr=False)
    base_url: Optional[str] = Field(default=None, description="Endpoint override")

    @property
    def effective_credential(self) -> Optional[str]:
        """Auth token when present, otherwise the API key."""
        return self.auth_token or self.api_key

    @property
    def has_api_key(self) -> bool:
        return bool(self.api_key)

    @property
    def has_auth_token(self) -> bool:
        return bool(self.auth_token)

    def describe(self) -> dict:
        """
        Summarize the credentials for diagnostic logging.

        Returns:
            Dictionary with presence flags and the endpoint, never secrets
        """
        return {
            "provider": self.provider,
            "has_api_key": self.has_api_key,
            "has_auth_token": self.has_auth_token,
            "base_url": self.base_url or "default",
        }


class AgentRuntimeOptions(BaseModel):
    """Input contract for assembling one agent instance."""

    thread_id: str = Field(description="Conversation thread, keys the checkpointer")
    model_id: Optional[str] = Field(
        default=None,
        description="Model to use (defaults to configured default model)",
    )
    workspace_path: str = Field(description="Workspace root the agent operates on")


class SandboxSettings(BaseModel):
    """Construction settings for the local execution backend."""

    root_dir: str
    virtual_mode: bool = Field(default=False)
    timeout_ms: int = Field(default=120_000, gt=0)
    max_output_bytes: int = Field(default=100_000, gt=0)


class ExecuteResponse(BaseModel):
    """Result of one shell command execution."""

    output: str = Field(default="")
    exit_code: Optional[int] = Field(default=None)
    truncated: bool = Field(default=False)
    timed_out: bool = Field(default=False)

    @property
    def success(self) -> bool:
        return self.exit_code == 0 and not self.timed_out
