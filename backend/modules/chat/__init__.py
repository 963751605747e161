"""
Chat module.

Portfolio assistant: admission-guarded relay of a visitor's conversation
to an external completion provider.

Public API:
- IChatRelay: Interface to the completion provider
- LangChainChatRelay: LangChain/OpenAI-compatible implementation
- ChatService: Guard + relay composition used by POST /chat
"""

from .interfaces import IChatRelay
from .models import ChatMessage, ChatRequest, ChatResponse, ChatRole
from .exceptions import ChatProviderError
from .relay import LangChainChatRelay, resolve_model_config
from .service import ChatService

__all__ = [
    "IChatRelay",
    "ChatMessage",
    "ChatRequest",
    "ChatResponse",
    "ChatRole",
    "ChatProviderError",
    "LangChainChatRelay",
    "resolve_model_config",
    "ChatService",
]
