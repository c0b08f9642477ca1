"""Tests for the workspace tools exposed to the agent."""

import pytest

from agent_runtime.tools.sandbox import LocalSandbox
from agent_runtime.tools.workspace_tools import create_workspace_tools, EXECUTE_TOOL_NAME


@pytest.fixture
def tools(workspace):
    backend = LocalSandbox(root_dir=str(workspace), max_output_bytes=50)
    return {tool.name: tool for tool in create_workspace_tools(backend)}


def test_tool_names(tools):
    assert set(tools) == {
        "ls", "read_file", "write_file", "edit_file", "glob", "grep", EXECUTE_TOOL_NAME,
    }


def test_errors_reported_as_text(tools, workspace):
    """Test backend failures come back as tool output, not exceptions."""
    result = tools["read_file"].invoke({"path": str(workspace / "missing.txt")})
    assert result.startswith("Error:")


def test_write_then_edit(tools, workspace):
    path = str(workspace / "a.txt")

    assert tools["write_file"].invoke({"path": path, "content": "hello"}).startswith("Wrote")
    result = tools["edit_file"].invoke(
        {"path": path, "old_string": "hello", "new_string": "bye"}
    )

    assert result == f"Replaced 1 occurrence(s) in {path}"
    assert (workspace / "a.txt").read_text() == "bye"


def test_empty_results(tools, workspace):
    assert tools["ls"].invoke({"path": str(workspace)}).endswith("is empty")
    assert tools["glob"].invoke({"pattern": "*.py"}) == "No files match *.py"
    assert tools["grep"].invoke({"pattern": "x"}).startswith("No matches")


@pytest.mark.asyncio
async def test_execute_annotates_failures(tools):
    result = await tools[EXECUTE_TOOL_NAME].ainvoke({"command": "echo boom; exit 2"})

    assert "boom" in result
    assert "[Command failed with exit code 2]" in result


@pytest.mark.asyncio
async def test_execute_annotates_truncation(tools):
    result = await tools[EXECUTE_TOOL_NAME].ainvoke({"command": "printf '%0100d' 0"})
    assert "[Output truncated at 50 bytes]" in result


@pytest.mark.asyncio
async def test_execute_success_not_annotated(tools):
    result = await tools[EXECUTE_TOOL_NAME].ainvoke({"command": "echo ok"})
    assert result == "ok\n"


@pytest.mark.asyncio
async def test_execute_start_failure_has_no_exit_code(tmp_path):
    backend = LocalSandbox(root_dir=str(tmp_path / "missing"))
    execute = {tool.name: tool for tool in create_workspace_tools(backend)}[EXECUTE_TOOL_NAME]

    result = await execute.ainvoke({"command": "echo ok"})

    assert result.startswith("Error: could not start command")
    assert "exit code" not in result
