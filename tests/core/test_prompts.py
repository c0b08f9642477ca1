"""Tests for system prompt composition."""

from agent_runtime.core.prompts import (
    BASE_SYSTEM_PROMPT,
    build_system_prompt,
    build_filesystem_prompt,
)


def test_system_prompt_prepends_workspace_guidance():
    prompt = build_system_prompt("/home/user/project")

    assert prompt.endswith(BASE_SYSTEM_PROMPT)
    assert prompt.index("/home/user/project") < prompt.index(BASE_SYSTEM_PROMPT)
    assert "The workspace root is: `/home/user/project`" in prompt
    assert 'ls("/home/user/project")' in prompt


def test_filesystem_prompt_lists_operations():
    prompt = build_filesystem_prompt("/home/user/project")

    for operation in ("ls", "read_file", "write_file", "edit_file", "glob", "grep"):
        assert f"- {operation}:" in prompt
    assert "absolute" in prompt
    assert prompt.endswith("The workspace root is: /home/user/project")
