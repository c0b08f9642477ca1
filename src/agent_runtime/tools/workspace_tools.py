"""LangChain tools exposing the execution backend to the agent."""

import logging
from typing import List, Optional

from langchain_core.tools import BaseTool, StructuredTool

from .sandbox import LocalSandbox, DEFAULT_READ_LIMIT

logger = logging.getLogger(__name__)

EXECUTE_TOOL_NAME = "execute"

# Errors the model can act on, reported back as tool output
RECOVERABLE_ERRORS = (OSError, ValueError)


def _error(operation: str, error: Exception) -> str:
    logger.info(f"{operation} failed: {error}")
    return f"Error: {error}"


def create_workspace_tools(backend: LocalSandbox) -> List[BaseTool]:
    """
    Create the filesystem and shell tools bound to a backend.

    Args:
        backend: Execution backend the tools operate on

    Returns:
        Tools named ls, read_file, write_file, edit_file, glob, grep, execute
    """

    def ls(path: str) -> str:
        try:
            entries = backend.ls(path)
        except RECOVERABLE_ERRORS as e:
            return _error("ls", e)
        return "\n".join(entries) if entries else f"{path} is empty"

    def read_file(path: str, offset: int = 0, limit: int = DEFAULT_READ_LIMIT) -> str:
        try:
            return backend.read_file(path, offset=offset, limit=limit)
        except RECOVERABLE_ERRORS as e:
            return _error("read_file", e)

    def write_file(path: str, content: str) -> str:
        try:
            written = backend.write_file(path, content)
        except RECOVERABLE_ERRORS as e:
            return _error("write_file", e)
        return f"Wrote {written}"

    def edit_file(
        path: str,
        old_string: str,
        new_string: str,
        replace_all: bool = False,
    ) -> str:
        try:
            count = backend.edit_file(path, old_string, new_string, replace_all=replace_all)
        except RECOVERABLE_ERRORS as e:
            return _error("edit_file", e)
        return f"Replaced {count} occurrence(s) in {path}"

    def glob(pattern: str, path: Optional[str] = None) -> str:
        try:
            matches = backend.glob(pattern, path)
        except RECOVERABLE_ERRORS as e:
            return _error("glob", e)
        return "\n".join(matches) if matches else f"No files match {pattern}"

    def grep(pattern: str, path: Optional[str] = None, glob: Optional[str] = None) -> str:
        try:
            matches = backend.grep(pattern, path, glob)
        except RECOVERABLE_ERRORS as e:
            return _error("grep", e)
        return "\n".join(matches) if matches else f"No matches for {pattern!r}"

    async def execute(command: str) -> str:
        response = await backend.execute(command)
        output = response.output
        if response.truncated:
            output += f"\n[Output truncated at {backend.max_output_bytes} bytes]"
        # Timeouts and start failures already explain themselves in the output
        if response.timed_out or response.exit_code is None:
            return output
        if not response.success:
            output += f"\n[Command failed with exit code {response.exit_code}]"
        return output

    return [
        StructuredTool.from_function(
            func=ls,
            name="ls",
            description="List files in a directory. Takes an absolute path.",
        ),
        StructuredTool.from_function(
            func=read_file,
            name="read_file",
            description=(
                "Read a file from the filesystem as numbered lines. "
                "Use offset and limit to page through long files."
            ),
        ),
        StructuredTool.from_function(
            func=write_file,
            name="write_file",
            description="Write a new file to the filesystem. Fails if the file exists.",
        ),
        StructuredTool.from_function(
            func=edit_file,
            name="edit_file",
            description=(
                "Edit a file by replacing an exact string. The string must be "
                "unique in the file unless replace_all is true."
            ),
        ),
        StructuredTool.from_function(
            func=glob,
            name="glob",
            description="Find files matching a glob pattern (e.g. '**/*.py').",
        ),
        StructuredTool.from_function(
            func=grep,
            name="grep",
            description="Search for text within files.",
        ),
        StructuredTool.from_function(
            coroutine=execute,
            name=EXECUTE_TOOL_NAME,
            description=(
                "Execute a shell command in the workspace root. Requires user approval."
            ),
        ),
    ]
