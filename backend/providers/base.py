"""Base classes and models for LLM providers."""

from abc import ABC, abstractmethod

from langchain_openai import ChatOpenAI
from pydantic import BaseModel


class ModelConfig(BaseModel):
    """Configuration for the chat completion model.

    Attributes:
        provider_type: Provider key in PROVIDER_CONFIGS (e.g., "groq")
        model_id: Model identifier (e.g., "llama-3.1-8b-instant")
        api_base: Base URL for the API endpoint (empty uses the provider default)
        api_key: API key (empty string for local servers)
        temperature: Sampling temperature
        max_tokens: Completion token cap
        timeout: Request timeout in seconds
    """

    model_config = {"frozen": True}

    provider_type: str
    model_id: str
    api_base: str = ""
    api_key: str = ""
    temperature: float = 0.7
    max_tokens: int = 500
    timeout: float = 30.0


class LLMProvider(ABC):
    """Abstract base class for LLM providers.

    Every supported backend speaks the OpenAI chat completions API, so
    implementations are thin wrappers around ChatOpenAI.
    """

    @abstractmethod
    def get_llm(self, config: ModelConfig) -> ChatOpenAI:
        """Return a configured LLM client for the given model.

        Args:
            config: Model configuration with provider details

        Returns:
            A configured ChatOpenAI client
        """
        pass
