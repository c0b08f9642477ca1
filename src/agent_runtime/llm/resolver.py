"""Model provider resolution from a model identifier."""

import logging
from typing import Optional, Tuple, Union

from langchain_core.language_models import BaseChatModel

from ..config.runtime_config import RuntimeConfig, resolve_credentials
from ..models.runtime_models import ModelFamily
from .provisioning import CredentialProvisioner, ExplicitCredentialProvisioner
from .providers import build_anthropic_model, build_openai_model, build_google_model

logger = logging.getLogger(__name__)

# Checked in order, first match wins
MODEL_FAMILY_PREFIXES: Tuple[Tuple[ModelFamily, Tuple[str, ...]], ...] = (
    (ModelFamily.ANTHROPIC, ("claude",)),
    (ModelFamily.OPENAI, ("gpt", "o1", "o3", "o4")),
    (ModelFamily.GOOGLE, ("gemini",)),
)

ModelHandle = Union[BaseChatModel, str]


def classify_model(model_id: str) -> ModelFamily:
    """
    Classify a model identifier into its provider family.

    Args:
        model_id: Model identifier

    Returns:
        Matching family, or PASSTHROUGH when no prefix matches
    """
    for family, prefixes in MODEL_FAMILY_PREFIXES:
        if model_id.startswith(prefixes):
            return family
    return ModelFamily.PASSTHROUGH


class ModelResolver:
    """
    Resolves a model identifier into a ready-to-use chat model.

    PATTERN: Classify by prefix, then dispatch to the family's builder
    CRITICAL: Missing credentials are fatal, never silently defaulted
    GOTCHA: Unknown ids are not errors, the raw string is passed through
    """

    def __init__(
        self,
        config: Optional[RuntimeConfig] = None,
        provisioner: Optional[CredentialProvisioner] = None,
    ):
        """
        Initialize model resolver.

        Args:
            config: Runtime configuration (creates default if None)
            provisioner: Credential provisioning step for proxied clients
                (defaults to passing credentials explicitly)
        """
        self.config = config or RuntimeConfig()
        self.provisioner = provisioner or ExplicitCredentialProvisioner()

    def resolve(self, model_id: Optional[str] = None) -> ModelHandle:
        """
        Resolve a model handle.

        Args:
            model_id: Model identifier (uses configured default if None)

        Returns:
            Configured chat model, or the raw model string for unknown families

        Raises:
            ConfigurationError: If the resolved provider has no usable credential
        """
        model = model_id or self.config.get_default_model()
        family = classify_model(model)
        logger.info(f"Using model: {model} (family={family.value})")

        if family == ModelFamily.ANTHROPIC:
            credentials = resolve_credentials("anthropic", self.config)
            return build_anthropic_model(model, credentials, self.provisioner)

        if family == ModelFamily.OPENAI:
            credentials = resolve_credentials("openai", self.config)
            return build_openai_model(model, credentials)

        if family == ModelFamily.GOOGLE:
            credentials = resolve_credentials("google", self.config)
            return build_google_model(model, credentials)

        logger.info(f"No provider family matched '{model}', passing it through")
        return model


def resolve_model(
    model_id: Optional[str] = None,
    config: Optional[RuntimeConfig] = None,
) -> ModelHandle:
    """Resolve a model handle with the default provisioner."""
    return ModelResolver(config=config).resolve(model_id)
