"""
Chat service.

Runs the visitor's conversation through the admission guard and hands the
cleaned result to the relay.
"""

import logging

from modules.security import ROUTE_CHAT, IAdmissionGuard, sanitize_text
from shared.models import RequestContext

from .interfaces import IChatRelay
from .models import ChatMessage, ChatRequest, ChatRole

logger = logging.getLogger(__name__)


class ChatService:
    """
    Admission-guarded chat completions.

    User turns are screened and sanitized. Assistant turns are echoed back
    by the client, so they are stripped of markup but not screened. Every
    turn counts towards the aggregate length cap.
    """

    def __init__(self, guard: IAdmissionGuard, relay: IChatRelay):
        self._guard = guard
        self._relay = relay

    async def reply(self, ctx: RequestContext, request: ChatRequest) -> str:
        """
        Produce the assistant's next message.

        Raises:
            FolioError subclasses from the guard on rejection, and
            ChatProviderError when the provider fails
        """
        self._guard.check_request(ctx, ROUTE_CHAT)

        messages = [
            ChatMessage(role=m.role, content=self._clean(ctx, m))
            for m in request.messages
        ]
        self._guard.enforce_total_length(ctx, [m.content for m in messages], ROUTE_CHAT)

        logger.debug(f"Relaying {len(messages)} message(s) for {ctx.client_ip}")
        return await self._relay.complete(messages)

    def _clean(self, ctx: RequestContext, message: ChatMessage) -> str:
        if not message.content:
            return message.content
        if message.role == ChatRole.USER:
            return self._guard.screen(ctx, message.content)
        return sanitize_text(message.content)
