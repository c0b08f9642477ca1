"""Model provider resolution."""

from .resolver import ModelResolver, ModelHandle, classify_model, resolve_model
from .provisioning import (
    CredentialProvisioner,
    ExplicitCredentialProvisioner,
    EnvironmentCredentialProvisioner,
)

__all__ = [
    "ModelResolver",
    "ModelHandle",
    "classify_model",
    "resolve_model",
    "CredentialProvisioner",
    "ExplicitCredentialProvisioner",
    "EnvironmentCredentialProvisioner",
]
