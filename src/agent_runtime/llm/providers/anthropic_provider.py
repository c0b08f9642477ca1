"""Anthropic model family: native client or OpenAI-compatible proxy."""

import logging
from typing import Union

from langchain_anthropic import ChatAnthropic
from langchain_openai import ChatOpenAI

from ...errors import ConfigurationError
from ...models.runtime_models import ProviderCredentials
from ..provisioning import CredentialProvisioner

logger = logging.getLogger(__name__)


def build_anthropic_model(
    model_id: str,
    credentials: ProviderCredentials,
    provisioner: CredentialProvisioner,
) -> Union[ChatAnthropic, ChatOpenAI]:
    """
    Build a chat model for a Claude model id.

    PATTERN: A configured base URL means a LiteLLM-style proxy speaking the
    OpenAI wire format, so the client is ChatOpenAI pointed at the proxy.
    CRITICAL: Auth token takes precedence over the API key on both paths.

    Args:
        model_id: Claude model identifier
        credentials: Resolved anthropic credentials
        provisioner: Credential provisioning step for the proxy client

    Returns:
        Configured chat model

    Raises:
        ConfigurationError: If neither an auth token nor an API key is set
    """
    effective_key = credentials.effective_credential

    if credentials.base_url:
        logger.info(f"Using OpenAI-compatible proxy for Anthropic: {credentials.describe()}")

        if not effective_key:
            logger.error(f"No credential for Anthropic proxy at {credentials.base_url}")
            raise ConfigurationError(
                "API key not configured for Anthropic proxy",
                provider="anthropic",
            )

        # Must happen before the client is constructed
        client_kwargs = provisioner.provision("openai", effective_key)
        return ChatOpenAI(
            model=model_id,
            base_url=credentials.base_url,
            **client_kwargs,
        )

    logger.info(f"Anthropic config: {credentials.describe()}")

    if not effective_key:
        logger.error("No credential configured for Anthropic")
        raise ConfigurationError("Anthropic API key not configured", provider="anthropic")

    return ChatAnthropic(model=model_id, api_key=effective_key)
