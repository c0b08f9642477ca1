"""Checkpointer registry for per-thread LangGraph state persistence."""

import asyncio
import logging
from pathlib import Path
from typing import Callable, Dict, List, Optional

from ..config.runtime_config import RuntimeConfig
from ..core.checkpoints import ThreadCheckpointer
from ..errors import ConfigurationError

logger = logging.getLogger(__name__)

CheckpointerFactory = Callable[[Path, str], ThreadCheckpointer]


class CheckpointerRegistry:
    """
    Registry of open checkpointers, one per conversation thread.

    Owned explicitly by whoever creates it: construct at process start, pass
    it to the components that need it, and call close_all() at shutdown.

    PATTERN: Await before publish. A handle only enters the mapping after its
    initialize() completed, so callers never observe a half-open handle.
    CRITICAL: Concurrent first requests for one thread share a single
    in-flight initialization, so at most one handle is ever constructed per
    thread.
    GOTCHA: A get() that arrives while the thread is closing waits for the
    close to finish and then opens a fresh handle.
    """

    def __init__(
        self,
        config: Optional[RuntimeConfig] = None,
        factory: Optional[CheckpointerFactory] = None,
    ):
        """
        Initialize checkpointer registry.

        Args:
            config: Runtime configuration used to derive storage paths
            factory: Builds an unopened handle from (path, thread_id)
                (defaults to ThreadCheckpointer)
        """
        self.config = config or RuntimeConfig()
        self._factory = factory or ThreadCheckpointer
        self._checkpointers: Dict[str, ThreadCheckpointer] = {}
        self._pending: Dict[str, "asyncio.Task[ThreadCheckpointer]"] = {}
        self._closing: Dict[str, "asyncio.Task[None]"] = {}

    def __contains__(self, thread_id: object) -> bool:
        return thread_id in self._checkpointers

    def __len__(self) -> int:
        return len(self._checkpointers)

    def thread_ids(self) -> List[str]:
        return list(self._checkpointers)

    async def get(self, thread_id: str) -> ThreadCheckpointer:
        """
        Get the checkpointer for a thread, opening it on first use.

        Args:
            thread_id: Thread identifier

        Returns:
            Initialized checkpointer handle

        Raises:
            ConfigurationError: If thread_id is empty
            ResourceInitializationError: If the checkpointer fails to open
        """
        if not thread_id:
            raise ConfigurationError("thread id required")

        closing = self._closing.get(thread_id)
        if closing is not None:
            # The handle being closed is unusable, reopen once it is evicted
            logger.debug(f"Waiting for checkpointer close for thread {thread_id}")
            await asyncio.wait([closing])

        checkpointer = self._checkpointers.get(thread_id)
        if checkpointer is not None:
            return checkpointer

        task = self._pending.get(thread_id)
        if task is None:
            task = asyncio.ensure_future(self._open(thread_id))
            self._pending[thread_id] = task
        else:
            logger.debug(f"Waiting for in-flight checkpointer init for thread {thread_id}")

        # A cancelled caller must not cancel the initialization other callers share
        return await asyncio.shield(task)

    async def _open(self, thread_id: str) -> ThreadCheckpointer:
        try:
            path = self.config.get_thread_checkpoint_path(thread_id)
            checkpointer = self._factory(path, thread_id)
            await checkpointer.initialize()
            self._checkpointers[thread_id] = checkpointer
            logger.info(f"Checkpointer ready for thread {thread_id} at {path}")
            return checkpointer
        finally:
            self._pending.pop(thread_id, None)

    async def close(self, thread_id: str) -> None:
        """
        Close and evict the checkpointer for a thread. No-op if absent.

        Args:
            thread_id: Thread identifier
        """
        task = self._pending.get(thread_id)
        if task is not None:
            # Let the in-flight open settle so it cannot publish after eviction
            await asyncio.wait([task])

        closing = self._closing.get(thread_id)
        if closing is None:
            checkpointer = self._checkpointers.get(thread_id)
            if checkpointer is None:
                return
            closing = asyncio.ensure_future(self._close(thread_id, checkpointer))
            self._closing[thread_id] = closing

        await asyncio.shield(closing)

    async def _close(self, thread_id: str, checkpointer: ThreadCheckpointer) -> None:
        try:
            await checkpointer.close()
        finally:
            self._checkpointers.pop(thread_id, None)
            self._closing.pop(thread_id, None)
        logger.info(f"Closed checkpointer for thread {thread_id}")

    async def close_all(self) -> None:
        """Close every checkpointer concurrently and clear the registry."""
        if self._pending:
            await asyncio.wait(list(self._pending.values()))

        thread_ids = list(self._checkpointers)
        try:
            await asyncio.gather(*(self.close(thread_id) for thread_id in thread_ids))
        finally:
            self._checkpointers.clear()

        logger.info(f"Closed {len(thread_ids)} checkpointer(s)")

    async def __aenter__(self) -> "CheckpointerRegistry":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close_all()
