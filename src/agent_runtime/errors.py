"""Exception hierarchy for the agent runtime."""

from typing import Optional


class AgentRuntimeError(Exception):
    """Base class for all agent runtime errors."""

    pass


class ConfigurationError(AgentRuntimeError):
    """
    Raised when required configuration is missing or invalid.

    Always fatal to the current call and never retried. The optional context
    attributes identify which provider, thread or workspace was involved.
    """

    def __init__(
        self,
        message: str,
        provider: Optional[str] = None,
        thread_id: Optional[str] = None,
        workspace_path: Optional[str] = None,
    ):
        self.provider = provider
        self.thread_id = thread_id
        self.workspace_path = workspace_path

        context = []
        if provider:
            context.append(f"provider={provider}")
        if thread_id:
            context.append(f"thread_id={thread_id}")
        if workspace_path:
            context.append(f"workspace_path={workspace_path}")

        if context:
            message = f"{message} ({', '.join(context)})"
        super().__init__(message)


class ResourceInitializationError(AgentRuntimeError):
    """Raised when a checkpointer fails to open its storage."""

    def __init__(
        self,
        message: str,
        thread_id: Optional[str] = None,
        path: Optional[str] = None,
    ):
        self.thread_id = thread_id
        self.path = path
        super().__init__(message)
