"""
Identity provider webhook endpoint.
"""

from fastapi import APIRouter, Depends, Request

from api.dependencies import get_identity_webhook_service
from api.middleware.client import get_client_ip

from .models import WebhookResponse
from .service import IdentityWebhookService

router = APIRouter()


@router.post("/identity", response_model=WebhookResponse)
async def identity_webhook(
    request: Request,
    service: IdentityWebhookService = Depends(get_identity_webhook_service),
) -> WebhookResponse:
    """
    Receive a Svix-signed lifecycle notification.

    Returns 400 on missing headers or a bad signature and 500 when the
    signing secret is not configured.
    """
    body = await request.body()
    event = service.verify(body, request.headers)

    recorded = await service.handle(
        event,
        ip_address=get_client_ip(request),
        user_agent=request.headers.get("user-agent") or "unknown",
    )
    return WebhookResponse(success=True, event=recorded.event.value if recorded else None)
