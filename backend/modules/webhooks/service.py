"""
Identity webhook service.

Verifies Svix-signed deliveries and records the auth events they imply.
"""

import logging
from typing import Mapping, Optional

from svix.webhooks import Webhook, WebhookVerificationError

from modules.auth_logs.interfaces import IAuthEventLog
from modules.auth_logs.models import AuthEvent

from .exceptions import (
    InvalidWebhookSignatureError,
    MissingWebhookHeadersError,
    WebhookNotConfiguredError,
)
from .mapper import map_identity_event
from .models import IdentityWebhookEvent

logger = logging.getLogger(__name__)

SIGNATURE_HEADERS = ("svix-id", "svix-timestamp", "svix-signature")


class IdentityWebhookService:
    """Receives identity-provider lifecycle notifications."""

    def __init__(self, secret: str, log: IAuthEventLog):
        self._secret = secret
        self._log = log

    def verify(self, body: bytes, headers: Mapping[str, str]) -> IdentityWebhookEvent:
        """
        Check the delivery signature and parse the payload.

        Raises:
            MissingWebhookHeadersError: If a signature header is absent
            WebhookNotConfiguredError: If no usable secret is configured
            InvalidWebhookSignatureError: If verification fails
        """
        signature_headers = {name: headers.get(name) for name in SIGNATURE_HEADERS}
        missing = [name for name, value in signature_headers.items() if not value]
        if missing:
            raise MissingWebhookHeadersError(missing)

        if not self._secret:
            logger.error("IDENTITY_WEBHOOK_SECRET is not set")
            raise WebhookNotConfiguredError()

        try:
            webhook = Webhook(self._secret)
        except ValueError as e:
            logger.error(f"IDENTITY_WEBHOOK_SECRET is malformed: {e}")
            raise WebhookNotConfiguredError() from e

        try:
            payload = webhook.verify(body, signature_headers)
        except WebhookVerificationError as e:
            logger.warning(f"Webhook signature verification failed: {e}")
            raise InvalidWebhookSignatureError() from e

        try:
            return IdentityWebhookEvent.model_validate(payload)
        except ValueError as e:
            raise InvalidWebhookSignatureError() from e

    async def handle(
        self,
        event: IdentityWebhookEvent,
        ip_address: str,
        user_agent: str,
    ) -> Optional[AuthEvent]:
        """Record the auth event for ``event``; untracked types are ignored."""
        logger.info(f"Webhook received: {event.type}")

        create = map_identity_event(event, ip_address, user_agent)
        if create is None:
            logger.info(f"Unhandled webhook event type: {event.type}")
            return None
        return await self._log.record(create)
