"""Agent runtime assembly: model, checkpointer, backend and prompts."""

import logging
from typing import Optional

from ..config.runtime_config import RuntimeConfig
from ..core.agent_graph import AgentRuntime, create_workspace_agent
from ..core.checkpoints import ThreadCheckpointer
from ..core.prompts import build_system_prompt, build_filesystem_prompt
from ..errors import ConfigurationError
from ..llm.resolver import ModelResolver
from ..models.runtime_models import AgentRuntimeOptions
from ..tools.sandbox import LocalSandbox
from ..tools.workspace_tools import EXECUTE_TOOL_NAME
from .checkpoint_service import CheckpointerRegistry

logger = logging.getLogger(__name__)

COMMAND_TIMEOUT_MS = 120_000  # 2 minutes
MAX_OUTPUT_BYTES = 100_000  # ~100KB


class AgentRuntimeService:
    """
    Assembles runnable agents for conversation threads.

    PATTERN: Dependencies are injected, the registry is owned by the caller
    that constructs the service and torn down with close_runtime()
    CRITICAL: Preconditions are checked before any resource is acquired
    GOTCHA: No retry and no partial-failure recovery, errors propagate as-is
    """

    def __init__(
        self,
        config: Optional[RuntimeConfig] = None,
        registry: Optional[CheckpointerRegistry] = None,
        resolver: Optional[ModelResolver] = None,
    ):
        """
        Initialize agent runtime service.

        Args:
            config: Runtime configuration (creates default if None)
            registry: Checkpointer registry (creates one over config if None)
            resolver: Model resolver (creates one over config if None)
        """
        self.config = config or RuntimeConfig()
        self.registry = registry or CheckpointerRegistry(config=self.config)
        self.resolver = resolver or ModelResolver(config=self.config)

    async def create_agent_runtime(self, options: AgentRuntimeOptions) -> AgentRuntime:
        """
        Create an agent runtime for a thread and workspace.

        Args:
            options: Thread, optional model and workspace path

        Returns:
            Fully constructed agent, no turns started

        Raises:
            ConfigurationError: On missing thread id, workspace path or credentials
            ResourceInitializationError: If the thread's checkpointer cannot open
        """
        thread_id = options.thread_id
        workspace_path = options.workspace_path

        if not thread_id:
            raise ConfigurationError("thread id required", workspace_path=workspace_path)

        if not workspace_path:
            raise ConfigurationError("workspace path required", thread_id=thread_id)

        logger.info(
            f"Creating agent runtime for thread {thread_id} in {workspace_path}"
        )

        model = self.resolver.resolve(options.model_id)
        logger.info(f"Model instance created: {type(model).__name__}")

        checkpointer = await self.registry.get(thread_id)

        backend = LocalSandbox(
            root_dir=workspace_path,
            virtual_mode=False,  # Absolute paths, consistent with shell commands
            timeout=COMMAND_TIMEOUT_MS,
            max_output_bytes=MAX_OUTPUT_BYTES,
        )

        system_prompt = build_system_prompt(workspace_path)
        filesystem_system_prompt = build_filesystem_prompt(workspace_path)
        interrupt_on = {EXECUTE_TOOL_NAME: True}

        graph = create_workspace_agent(
            model=model,
            checkpointer=checkpointer.saver,
            backend=backend,
            system_prompt=system_prompt,
            filesystem_system_prompt=filesystem_system_prompt,
            interrupt_on=interrupt_on,
        )

        logger.info(f"Agent created with LocalSandbox at {workspace_path}")

        return AgentRuntime(
            thread_id=thread_id,
            graph=graph,
            model=model,
            checkpointer=checkpointer,
            backend=backend,
            system_prompt=system_prompt,
            filesystem_system_prompt=filesystem_system_prompt,
            interrupt_on=interrupt_on,
        )

    async def get_checkpointer(self, thread_id: str) -> ThreadCheckpointer:
        return await self.registry.get(thread_id)

    async def close_checkpointer(self, thread_id: str) -> None:
        await self.registry.close(thread_id)

    async def close_runtime(self) -> None:
        """Close every checkpointer. Call at process shutdown."""
        await self.registry.close_all()


async def create_agent_runtime(
    options: AgentRuntimeOptions,
    service: AgentRuntimeService,
) -> AgentRuntime:
    """Create an agent runtime through a service."""
    return await service.create_agent_runtime(options)
