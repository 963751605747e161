"""
Webhooks module.

Receives signed lifecycle notifications from the identity provider and
records them in the auth event log.
"""

from .models import IdentityWebhookEvent, WebhookResponse
from .exceptions import (
    InvalidWebhookSignatureError,
    MissingWebhookHeadersError,
    WebhookNotConfiguredError,
)
from .mapper import map_identity_event
from .service import IdentityWebhookService

__all__ = [
    "IdentityWebhookEvent",
    "WebhookResponse",
    "InvalidWebhookSignatureError",
    "MissingWebhookHeadersError",
    "WebhookNotConfiguredError",
    "map_identity_event",
    "IdentityWebhookService",
]
