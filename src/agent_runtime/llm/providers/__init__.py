"""Chat model builders, one per model family."""

from .anthropic_provider import build_anthropic_model
from .openai_provider import build_openai_model
from .google_provider import build_google_model

__all__ = [
    "build_anthropic_model",
    "build_openai_model",
    "build_google_model",
]
