"""
Chat API endpoint.
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_chat_service
from api.middleware.admission import guarded_transport
from api.middleware.client import get_request_context
from modules.security import ROUTE_CHAT
from shared.models import RequestContext

from .models import ChatRequest, ChatResponse
from .service import ChatService

router = APIRouter()


@router.post(
    "",
    response_model=ChatResponse,
    dependencies=[Depends(guarded_transport(ROUTE_CHAT))],
)
async def chat(
    request: ChatRequest,
    ctx: RequestContext = Depends(get_request_context),
    service: ChatService = Depends(get_chat_service),
) -> ChatResponse:
    """
    Answer a question about the portfolio.

    Rejections: 403 (method/origin/content type), 429 (rate limit),
    400 (malformed body, suspicious content or message too long),
    500 (provider failure).
    """
    message = await service.reply(ctx, request)
    return ChatResponse(message=message)
