"""Local execution backend scoped to a workspace directory."""

import asyncio
import logging
import os
import signal
from pathlib import Path
from typing import List, Optional, Tuple

from ..models.runtime_models import ExecuteResponse, SandboxSettings

logger = logging.getLogger(__name__)

READ_CHUNK_BYTES = 64 * 1024
DEFAULT_READ_LIMIT = 2000
KILL_WAIT_SECONDS = 5


class LocalSandbox:
    """
    Runs shell commands and file operations for the agent on the local host.

    PATTERN: asyncio subprocess bounded by asyncio.wait_for
    CRITICAL: Timeouts and oversized output are reported in the
    ExecuteResponse, never raised
    GOTCHA: virtual_mode=False means paths are real absolute paths, the
    workspace root only anchors relative paths and the command cwd
    """

    def __init__(
        self,
        root_dir: str,
        virtual_mode: bool = False,
        timeout: int = 120_000,
        max_output_bytes: int = 100_000,
    ):
        """
        Initialize local sandbox.

        Args:
            root_dir: Workspace root directory
            virtual_mode: Treat paths as rooted at root_dir and confine them to it
            timeout: Wall-clock limit per command in milliseconds
            max_output_bytes: Cap on captured command output
        """
        self.settings = SandboxSettings(
            root_dir=root_dir,
            virtual_mode=virtual_mode,
            timeout_ms=timeout,
            max_output_bytes=max_output_bytes,
        )
        self.root = Path(root_dir).expanduser().resolve()

    @property
    def root_dir(self) -> str:
        return self.settings.root_dir

    @property
    def virtual_mode(self) -> bool:
        return self.settings.virtual_mode

    @property
    def timeout(self) -> int:
        return self.settings.timeout_ms

    @property
    def max_output_bytes(self) -> int:
        return self.settings.max_output_bytes

    # Commands

    async def execute(self, command: str) -> ExecuteResponse:
        """
        Run a shell command in the workspace root.

        Args:
            command: Shell command line

        Returns:
            ExecuteResponse with merged stdout/stderr and exit code
        """
        logger.info(f"Executing in {self.root}: {command}")

        try:
            # Own session so a timeout can kill the whole process group
            process = await asyncio.create_subprocess_shell(
                command,
                cwd=str(self.root),
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.STDOUT,
                start_new_session=True,
            )
        except OSError as e:
            logger.warning(f"Could not start command: {e}")
            return ExecuteResponse(output=f"Error: could not start command: {e}")

        try:
            output, truncated = await asyncio.wait_for(
                self._collect_output(process),
                timeout=self.timeout / 1000,
            )
        except asyncio.TimeoutError:
            await self._kill(process)
            logger.warning(f"Command timed out after {self.timeout}ms: {command}")
            return ExecuteResponse(
                output=f"Error: command timed out after {self.timeout}ms",
                exit_code=process.returncode,
                timed_out=True,
            )

        return ExecuteResponse(
            output=output.decode("utf-8", errors="replace"),
            exit_code=process.returncode,
            truncated=truncated,
        )

    async def _kill(self, process) -> None:
        """Kill the shell and every process it started."""
        try:
            os.killpg(process.pid, signal.SIGKILL)
        except ProcessLookupError:
            pass  # group already gone
        try:
            await asyncio.wait_for(process.wait(), timeout=KILL_WAIT_SECONDS)
        except asyncio.TimeoutError:
            # A process that left the group can still hold the pipe open
            logger.warning(f"Process {process.pid} did not exit after kill")

    async def _collect_output(self, process) -> Tuple[bytes, bool]:
        chunks = []
        size = 0
        truncated = False

        # Keep draining past the cap so the child never blocks on a full pipe
        while True:
            chunk = await process.stdout.read(READ_CHUNK_BYTES)
            if not chunk:
                break
            remaining = self.max_output_bytes - size
            if len(chunk) > remaining:
                truncated = True
            if remaining > 0:
                kept = chunk[:remaining]
                chunks.append(kept)
                size += len(kept)

        await process.wait()
        return b"".join(chunks), truncated

    # Paths

    def resolve_path(self, path: Optional[str] = None) -> Path:
        """
        Resolve a path the agent supplied.

        Args:
            path: Absolute path, or path relative to the workspace root

        Returns:
            Resolved filesystem path

        Raises:
            ValueError: In virtual mode, if the path escapes the workspace root
        """
        if not path:
            return self.root

        if self.virtual_mode:
            resolved = (self.root / path.lstrip("/")).resolve()
            if resolved != self.root and self.root not in resolved.parents:
                raise ValueError(f"Path '{path}' is outside the workspace root")
            return resolved

        candidate = Path(path).expanduser()
        if not candidate.is_absolute():
            candidate = self.root / candidate
        return candidate.resolve()

    def display_path(self, path: Path) -> str:
        if self.virtual_mode:
            return "/" + path.relative_to(self.root).as_posix()
        return str(path)

    # File operations

    def ls(self, path: Optional[str] = None) -> List[str]:
        """List a directory, marking subdirectories with a trailing slash."""
        directory = self.resolve_path(path)
        if not directory.is_dir():
            raise NotADirectoryError(f"'{path}' is not a directory")

        entries = []
        for child in sorted(directory.iterdir()):
            name = self.display_path(child)
            entries.append(name + "/" if child.is_dir() else name)
        return entries

    def read_file(
        self,
        path: str,
        offset: int = 0,
        limit: int = DEFAULT_READ_LIMIT,
    ) -> str:
        """
        Read a file as numbered lines.

        Args:
            path: File path
            offset: First line to return (0-based)
            limit: Maximum number of lines

        Returns:
            Lines formatted as "<line number>\\t<text>"
        """
        file_path = self.resolve_path(path)
        if not file_path.is_file():
            raise FileNotFoundError(f"File '{path}' not found")

        lines = file_path.read_text(encoding="utf-8", errors="replace").splitlines()
        selected = lines[offset:offset + limit]
        return "\n".join(
            f"{number:6d}\t{line}"
            for number, line in enumerate(selected, start=offset + 1)
        )

    def write_file(self, path: str, content: str) -> str:
        """Create a new file. Existing files must be changed with edit_file."""
        file_path = self.resolve_path(path)
        if file_path.exists():
            raise FileExistsError(
                f"File '{path}' already exists, use edit_file to change it"
            )

        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_text(content, encoding="utf-8")
        return self.display_path(file_path)

    def edit_file(
        self,
        path: str,
        old_string: str,
        new_string: str,
        replace_all: bool = False,
    ) -> int:
        """
        Replace an exact string in a file.

        Args:
            path: File path
            old_string: Text to replace
            new_string: Replacement text
            replace_all: Replace every occurrence instead of requiring one

        Returns:
            Number of replacements made

        Raises:
            FileNotFoundError: If the file does not exist
            ValueError: If old_string is missing, or ambiguous without replace_all
        """
        file_path = self.resolve_path(path)
        if not file_path.is_file():
            raise FileNotFoundError(f"File '{path}' not found")

        content = file_path.read_text(encoding="utf-8")
        occurrences = content.count(old_string)

        if occurrences == 0:
            raise ValueError(f"String not found in '{path}'")
        if occurrences > 1 and not replace_all:
            raise ValueError(
                f"String appears {occurrences} times in '{path}', "
                f"pass replace_all or include more context"
            )

        count = occurrences if replace_all else 1
        file_path.write_text(content.replace(old_string, new_string, count), encoding="utf-8")
        return count

    def glob(self, pattern: str, path: Optional[str] = None) -> List[str]:
        """Find files under path matching a glob pattern such as '**/*.py'."""
        base = self.resolve_path(path)
        return [
            self.display_path(match)
            for match in sorted(base.glob(pattern))
            if match.is_file()
        ]

    def grep(
        self,
        pattern: str,
        path: Optional[str] = None,
        glob: Optional[str] = None,
    ) -> List[str]:
        """
        Search files for a literal string.

        Args:
            pattern: Text to search for
            path: File or directory to search (defaults to workspace root)
            glob: Optional filename filter, e.g. '*.py'

        Returns:
            Matches formatted as "<path>:<line number>: <line>"
        """
        base = self.resolve_path(path)
        if base.is_file():
            candidates = [base]
        else:
            candidates = sorted(p for p in base.rglob(glob or "*") if p.is_file())

        matches = []
        for file_path in candidates:
            try:
                text = file_path.read_text(encoding="utf-8")
            except (UnicodeDecodeError, OSError):
                logger.debug(f"Skipping unreadable file {file_path}")
                continue

            for number, line in enumerate(text.splitlines(), start=1):
                if pattern in line:
                    matches.append(f"{self.display_path(file_path)}:{number}: {line}")
        return matches
