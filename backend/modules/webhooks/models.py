"""
Webhook module data models.
"""

from typing import Any, Optional

from pydantic import BaseModel, Field


class IdentityWebhookEvent(BaseModel):
    """A verified lifecycle notification from the identity provider."""

    type: str = Field(..., description="Event type, e.g. 'session.created'")
    data: dict[str, Any] = Field(default_factory=dict)

    model_config = {"extra": "ignore"}


class WebhookResponse(BaseModel):
    success: bool = True
    event: Optional[str] = Field(None, description="Auth event recorded, if any")
