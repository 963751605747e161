"""LLM provider implementations."""

from .base import LLMProvider, ModelConfig
from .openai_compatible import PROVIDER_CONFIGS, OpenAICompatibleProvider, ProviderConfig

__all__ = [
    "LLMProvider",
    "ModelConfig",
    "OpenAICompatibleProvider",
    "PROVIDER_CONFIGS",
    "ProviderConfig",
]
