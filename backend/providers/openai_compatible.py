"""Unified provider for OpenAI-compatible chat APIs.

Groq, a local Ollama server and OpenAI itself all accept the same request
shape, so a single ChatOpenAI-based provider covers them with per-provider
defaults.
"""

from dataclasses import dataclass

from langchain_openai import ChatOpenAI

from .base import LLMProvider, ModelConfig


@dataclass
class ProviderConfig:
    """Configuration for an OpenAI-compatible provider.

    Attributes:
        default_model: Model used when none is configured
        default_base_url: Default API endpoint URL (None uses OpenAI's default)
        default_max_tokens: Completion token cap used when none is configured
        api_key_required: Whether an API key must be provided
        api_key_env_var: Environment variable name for the API key (for error messages)
    """

    default_model: str
    default_base_url: str | None = None
    default_max_tokens: int = 500
    api_key_required: bool = True
    api_key_env_var: str = ""


# Provider configurations registry
PROVIDER_CONFIGS: dict[str, ProviderConfig] = {
    "groq": ProviderConfig(
        default_model="llama-3.1-8b-instant",
        default_base_url="https://api.groq.com/openai/v1",
        default_max_tokens=300,
        api_key_required=True,
        api_key_env_var="GROQ_API_KEY",
    ),
    "ollama": ProviderConfig(
        default_model="llama3.2",
        default_base_url="http://localhost:11434/v1",
        default_max_tokens=500,
        api_key_required=False,
    ),
    "openai": ProviderConfig(
        default_model="gpt-4o-mini",
        default_max_tokens=500,
        api_key_required=True,
        api_key_env_var="OPENAI_API_KEY",
    ),
}


class OpenAICompatibleProvider(LLMProvider):
    """Unified provider for all OpenAI-compatible APIs.

    Handles: groq, ollama, openai

    - Local providers (ollama): No API key required, custom base URL
    - Cloud providers (groq, openai): API key required
    """

    def __init__(self, provider_type: str):
        """Initialize the provider.

        Args:
            provider_type: One of: groq, ollama, openai

        Raises:
            KeyError: If provider_type is not recognized
        """
        if provider_type not in PROVIDER_CONFIGS:
            raise KeyError(
                f"Unknown provider type: {provider_type}. "
                f"Valid types: {list(PROVIDER_CONFIGS.keys())}"
            )
        self.provider_type = provider_type
        self.provider_config = PROVIDER_CONFIGS[provider_type]

    def get_llm(self, config: ModelConfig) -> ChatOpenAI:
        """Return a ChatOpenAI client configured for this provider.

        Retries are disabled; a failed completion is reported to the caller
        rather than repeated inline.

        Raises:
            ValueError: If api_key is required but not provided
        """
        if self.provider_config.api_key_required and not config.api_key:
            raise ValueError(
                f"{self.provider_type.title()} API key is required. "
                f"Set the {self.provider_config.api_key_env_var} environment variable."
            )

        kwargs: dict = {
            "model": config.model_id or self.provider_config.default_model,
            "temperature": config.temperature,
            "max_tokens": config.max_tokens,
            "timeout": config.timeout,
            "max_retries": 0,
        }

        # Set base URL (from config or provider default)
        if base_url := (config.api_base or self.provider_config.default_base_url):
            kwargs["base_url"] = base_url

        # Set API key (use "not-needed" placeholder for local providers)
        kwargs["api_key"] = config.api_key or "not-needed"

        return ChatOpenAI(**kwargs)
