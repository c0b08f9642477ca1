"""Credential provisioning for provider SDK clients."""

import logging
import os
from abc import ABC, abstractmethod
from typing import Any, Dict

logger = logging.getLogger(__name__)

# Environment channel each SDK reads its credential from
SDK_CREDENTIAL_ENV_VARS: Dict[str, str] = {
    "openai": "OPENAI_API_KEY",
    "anthropic": "ANTHROPIC_API_KEY",
    "google": "GOOGLE_API_KEY",
}


class CredentialProvisioner(ABC):
    """
    Hands an effective credential to a provider SDK client.

    Contract: provision() runs before the client is constructed and returns
    the constructor keyword arguments that carry the credential. Whatever
    the provisioner does, the client built with those arguments must end up
    authenticated with exactly that credential.
    """

    @abstractmethod
    def provision(self, sdk: str, credential: str) -> Dict[str, Any]:
        """
        Provision a credential for an SDK client.

        Args:
            sdk: SDK whose client will be constructed (openai, anthropic, google)
            credential: Effective credential to use

        Returns:
            Keyword arguments to pass to the client constructor
        """
        pass


class ExplicitCredentialProvisioner(CredentialProvisioner):
    """
    Passes the credential as a constructor argument.

    Touches no process-wide state, so concurrent resolutions with different
    credentials cannot interfere with each other.
    """

    def provision(self, sdk: str, credential: str) -> Dict[str, Any]:
        return {"api_key": credential}


class EnvironmentCredentialProvisioner(CredentialProvisioner):
    """
    Exposes the credential through the SDK's environment variable.

    GOTCHA: This mutates os.environ. Repeating an identical write is
    harmless, but two concurrent resolutions with different credentials for
    the same SDK race on the variable and the last writer wins for every
    client constructed afterwards.
    """

    def provision(self, sdk: str, credential: str) -> Dict[str, Any]:
        env_var = SDK_CREDENTIAL_ENV_VARS.get(sdk)
        if env_var is None:
            raise ValueError(f"No credential environment variable known for SDK '{sdk}'")

        os.environ[env_var] = credential
        logger.info(f"Exported credential for {sdk} via ${env_var}")
        return {}
