"""Google model family."""

import logging

from langchain_google_genai import ChatGoogleGenerativeAI

from ...errors import ConfigurationError
from ...models.runtime_models import ProviderCredentials

logger = logging.getLogger(__name__)


def build_google_model(
    model_id: str,
    credentials: ProviderCredentials,
) -> ChatGoogleGenerativeAI:
    """
    Build a chat model for a Gemini model id.

    The base URL override is left to the client library and not wired here.
    """
    logger.info(f"Google config: {credentials.describe()}")

    if not credentials.api_key:
        logger.error("No API key configured for Google")
        raise ConfigurationError("Google API key not configured", provider="google")

    return ChatGoogleGenerativeAI(model=model_id, google_api_key=credentials.api_key)
