"""
Chat relay to an external completion provider.

Prepends the portfolio system prompt to the visitor's conversation and
forwards it through LangChain. Provider selection follows the deployment:
Groq when a GROQ_API_KEY is configured, otherwise a local Ollama server,
unless CHAT_PROVIDER names one explicitly.
"""

import logging
from pathlib import Path
from typing import Optional, Sequence

from langchain_core.language_models import BaseChatModel
from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage

from providers import PROVIDER_CONFIGS, ModelConfig, OpenAICompatibleProvider
from shared.config import Settings

from .exceptions import ChatProviderError
from .interfaces import IChatRelay
from .models import ChatMessage, ChatRole

logger = logging.getLogger(__name__)

DEFAULT_PROMPT_PATH = Path(__file__).parent / "prompts" / "portfolio_context.txt"


def load_prompt(prompt_path: Path) -> str:
    """Load the system prompt from a file."""
    return prompt_path.read_text(encoding="utf-8")


def resolve_model_config(settings: Settings) -> ModelConfig:
    """
    Build the model configuration for the chat relay.

    Raises:
        KeyError: If CHAT_PROVIDER names an unknown provider
    """
    provider_type = settings.chat_provider or ("groq" if settings.groq_api_key else "ollama")
    provider_config = PROVIDER_CONFIGS[provider_type]

    api_keys = {"groq": settings.groq_api_key, "openai": settings.openai_api_key}

    return ModelConfig(
        provider_type=provider_type,
        model_id=settings.chat_model or provider_config.default_model,
        api_base=settings.chat_api_base,
        api_key=api_keys.get(provider_type, ""),
        temperature=settings.chat_temperature,
        max_tokens=settings.chat_max_tokens or provider_config.default_max_tokens,
        timeout=settings.chat_timeout,
    )


def to_langchain_messages(system_prompt: str, messages: Sequence[ChatMessage]) -> list[BaseMessage]:
    converted: list[BaseMessage] = [SystemMessage(content=system_prompt)]
    for message in messages:
        if message.role == ChatRole.USER:
            converted.append(HumanMessage(content=message.content))
        else:
            converted.append(AIMessage(content=message.content))
    return converted


class LangChainChatRelay(IChatRelay):
    """IChatRelay backed by a LangChain chat model."""

    def __init__(self, llm: BaseChatModel, system_prompt: str, provider: str):
        self._llm = llm
        self._system_prompt = system_prompt
        self._provider = provider

    @classmethod
    def from_settings(cls, settings: Settings, prompt_path: Optional[Path] = None) -> "LangChainChatRelay":
        config = resolve_model_config(settings)
        llm = OpenAICompatibleProvider(config.provider_type).get_llm(config)

        path = prompt_path or (
            Path(settings.chat_prompt_file) if settings.chat_prompt_file else DEFAULT_PROMPT_PATH
        )
        logger.info(f"Chat relay using {config.provider_type}/{config.model_id}")
        return cls(llm, load_prompt(path), config.provider_type)

    @property
    def provider(self) -> str:
        return self._provider

    async def complete(self, messages: Sequence[ChatMessage]) -> str:
        try:
            response = await self._llm.ainvoke(to_langchain_messages(self._system_prompt, messages))
        except Exception as e:
            logger.error(f"Chat provider {self._provider} failed: {e}")
            raise ChatProviderError(self._provider, "AI service unavailable") from e

        content = response.content if isinstance(response.content, str) else ""
        if not content.strip():
            logger.error(f"Chat provider {self._provider} returned an empty response")
            raise ChatProviderError(self._provider)
        return content
