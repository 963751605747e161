"""
Chat module interface.

The relay is the boundary to the external completion provider; tests
replace it with a mock.
"""

from typing import Protocol, Sequence, runtime_checkable

from .models import ChatMessage


@runtime_checkable
class IChatRelay(Protocol):
    """Forwards a sanitized conversation to a completion provider."""

    async def complete(self, messages: Sequence[ChatMessage]) -> str:
        """
        Return the assistant's answer to ``messages``.

        Raises:
            ChatProviderError: If the provider fails or returns nothing
        """
        ...
