"""OpenAI model family."""

import logging
from typing import Any, Dict

from langchain_openai import ChatOpenAI

from ...errors import ConfigurationError
from ...models.runtime_models import ProviderCredentials

logger = logging.getLogger(__name__)


def build_openai_model(model_id: str, credentials: ProviderCredentials) -> ChatOpenAI:
    """
    Build a chat model for a GPT or o-series model id.

    GOTCHA: base_url is only passed when configured, otherwise the SDK
    default endpoint applies.

    Args:
        model_id: OpenAI model identifier
        credentials: Resolved openai credentials

    Returns:
        Configured ChatOpenAI

    Raises:
        ConfigurationError: If no API key is configured
    """
    logger.info(f"OpenAI config: {credentials.describe()}")

    if not credentials.api_key:
        logger.error("No API key configured for OpenAI")
        raise ConfigurationError("OpenAI API key not configured", provider="openai")

    config: Dict[str, Any] = {
        "model": model_id,
        "api_key": credentials.api_key,
    }

    # Proxy / custom endpoint
    if credentials.base_url:
        config["base_url"] = credentials.base_url

    return ChatOpenAI(**config)
