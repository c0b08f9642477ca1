"""Shared pytest fixtures."""

import sys
from pathlib import Path

# Allow running the suite from a checkout without installing the package
_src_dir = str(Path(__file__).parent / "src")
if _src_dir not in sys.path:
    sys.path.insert(0, _src_dir)

import pytest

from agent_runtime.config.runtime_config import RuntimeConfig

PROVIDER_ENV_VARS = [
    f"{prefix}_{suffix}"
    for prefix in ("ANTHROPIC", "OPENAI", "GOOGLE")
    for suffix in ("API_KEY", "AUTH_TOKEN", "BASE_URL")
]


@pytest.fixture(autouse=True)
def clean_provider_env(monkeypatch):
    """Start every test without provider credentials in the environment."""
    for name in PROVIDER_ENV_VARS + ["AGENT_RUNTIME_DEFAULT_MODEL"]:
        # setenv first so monkeypatch restores the variable even if code under test writes it
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)


@pytest.fixture
def runtime_config(tmp_path):
    """Runtime config storing checkpoints under a temporary directory."""
    return RuntimeConfig(default_model="gpt-4o-mini", data_dir=tmp_path / "data")


@pytest.fixture
def workspace(tmp_path):
    """Empty workspace directory."""
    path = tmp_path / "workspace"
    path.mkdir()
    return path
