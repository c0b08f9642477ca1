"""Tests for credential provisioning."""

import os
import pytest

from agent_runtime.llm.provisioning import (
    ExplicitCredentialProvisioner,
    EnvironmentCredentialProvisioner,
)


def test_explicit_provisioner_returns_kwargs():
    """Test explicit provisioning passes the key as a constructor argument."""
    kwargs = ExplicitCredentialProvisioner().provision("openai", "sk-1")

    assert kwargs == {"api_key": "sk-1"}
    assert "OPENAI_API_KEY" not in os.environ


def test_environment_provisioner_writes_env(monkeypatch):
    """Test environment provisioning exports the SDK variable."""
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)

    kwargs = EnvironmentCredentialProvisioner().provision("openai", "sk-1")

    assert kwargs == {}
    assert os.environ["OPENAI_API_KEY"] == "sk-1"


def test_environment_provisioner_last_write_wins(monkeypatch):
    """Test repeated writes overwrite each other."""
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    provisioner = EnvironmentCredentialProvisioner()

    provisioner.provision("openai", "sk-1")
    provisioner.provision("openai", "sk-2")

    assert os.environ["OPENAI_API_KEY"] == "sk-2"


def test_environment_provisioner_unknown_sdk():
    with pytest.raises(ValueError):
        EnvironmentCredentialProvisioner().provision("mistral", "key")
