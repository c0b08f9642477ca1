"""Per-thread checkpointer handle backed by a SQLite database."""

import logging
from contextlib import AsyncExitStack
from pathlib import Path
from typing import Optional, Union

from langgraph.checkpoint.sqlite.aio import AsyncSqliteSaver

from ..errors import ResourceInitializationError

logger = logging.getLogger(__name__)


class ThreadCheckpointer:
    """
    Checkpointer handle owning one thread's SQLite connection.

    PATTERN: AsyncSqliteSaver.from_conn_string() is an async context manager,
    its lifetime is held open by an AsyncExitStack between initialize() and
    close().
    CRITICAL: Must not be shared across threads.
    """

    def __init__(self, path: Union[str, Path], thread_id: Optional[str] = None):
        """
        Initialize checkpointer handle.

        Args:
            path: Path of the thread's SQLite database
            thread_id: Thread the handle belongs to (for diagnostics)
        """
        self.path = Path(path)
        self.thread_id = thread_id
        self._exit_stack: Optional[AsyncExitStack] = None
        self._saver: Optional[AsyncSqliteSaver] = None
        self._closed = False

    @property
    def is_initialized(self) -> bool:
        return self._saver is not None

    @property
    def is_closed(self) -> bool:
        return self._closed

    @property
    def saver(self) -> AsyncSqliteSaver:
        """
        Get the LangGraph checkpoint saver.

        Raises:
            RuntimeError: If initialize() has not completed
        """
        if self._saver is None:
            raise RuntimeError(
                f"Checkpointer for {self.path} used before initialize()"
            )
        return self._saver

    async def initialize(self) -> None:
        """
        Open the database and create checkpoint tables.

        Raises:
            ResourceInitializationError: If the database cannot be opened
        """
        if self._saver is not None:
            return

        exit_stack = AsyncExitStack()
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            saver = await exit_stack.enter_async_context(
                AsyncSqliteSaver.from_conn_string(str(self.path))
            )
            await saver.setup()
        except Exception as e:
            await exit_stack.aclose()
            logger.error(f"Failed to open checkpointer at {self.path}: {e}")
            raise ResourceInitializationError(
                f"Failed to open checkpoint database {self.path}: {e}",
                thread_id=self.thread_id,
                path=str(self.path),
            ) from e

        self._exit_stack = exit_stack
        self._saver = saver
        self._closed = False
        logger.debug(f"Opened checkpointer at {self.path}")

    async def close(self) -> None:
        """Close the database connection. Safe to call more than once."""
        if self._exit_stack is not None:
            exit_stack = self._exit_stack
            self._exit_stack = None
            self._saver = None
            await exit_stack.aclose()
            logger.debug(f"Closed checkpointer at {self.path}")
        self._closed = True
