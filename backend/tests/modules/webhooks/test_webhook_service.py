"""Tests for the identity webhook service."""

import json
from datetime import datetime, timedelta, timezone

import pytest
from svix.webhooks import Webhook

from modules.auth_logs.memory import InMemoryAuthEventLog
from modules.auth_logs.models import AuthEventType
from modules.webhooks.exceptions import (
    InvalidWebhookSignatureError,
    MissingWebhookHeadersError,
    WebhookNotConfiguredError,
)
from modules.webhooks.models import IdentityWebhookEvent
from modules.webhooks.service import IdentityWebhookService

from tests.conftest import TEST_WEBHOOK_SECRET


def signed_delivery(
    payload: dict,
    secret: str = TEST_WEBHOOK_SECRET,
    msg_id: str = "msg_test_1",
    timestamp: datetime | None = None,
) -> tuple[bytes, dict[str, str]]:
    """Build a body and Svix headers signed with ``secret``."""
    body = json.dumps(payload)
    timestamp = timestamp or datetime.now(timezone.utc)
    signature = Webhook(secret).sign(msg_id, timestamp, body)
    headers = {
        "svix-id": msg_id,
        "svix-timestamp": str(int(timestamp.timestamp())),
        "svix-signature": signature,
    }
    return body.encode(), headers


@pytest.fixture
def log():
    return InMemoryAuthEventLog()


@pytest.fixture
def service(log):
    return IdentityWebhookService(TEST_WEBHOOK_SECRET, log)


class TestVerify:
    def test_valid_signature(self, service):
        """A correctly signed delivery is parsed."""
        body, headers = signed_delivery({"type": "session.created", "data": {"id": "s1"}})

        event = service.verify(body, headers)

        assert event == IdentityWebhookEvent(type="session.created", data={"id": "s1"})

    def test_missing_headers(self, service):
        """Each absent signature header is reported."""
        body, headers = signed_delivery({"type": "session.created", "data": {}})
        del headers["svix-signature"]
        del headers["svix-id"]

        with pytest.raises(MissingWebhookHeadersError) as exc_info:
            service.verify(body, headers)

        assert exc_info.value.details == {"missing": ["svix-id", "svix-signature"]}

    def test_headers_checked_before_secret(self, log):
        """Missing headers are a 400 even when the secret is unset."""
        with pytest.raises(MissingWebhookHeadersError):
            IdentityWebhookService("", log).verify(b"{}", {})

    def test_secret_not_configured(self, log):
        """An empty secret is a server configuration error."""
        body, headers = signed_delivery({"type": "user.created", "data": {}})

        with pytest.raises(WebhookNotConfiguredError):
            IdentityWebhookService("", log).verify(body, headers)

    def test_wrong_secret(self, log):
        """A signature made with another secret is rejected."""
        body, headers = signed_delivery(
            {"type": "user.created", "data": {}},
            secret="whsec_" + "QUJDREVGR0hJSktMTU5PUFFSU1RVVldY",
        )

        with pytest.raises(InvalidWebhookSignatureError):
            IdentityWebhookService(TEST_WEBHOOK_SECRET, log).verify(body, headers)

    def test_tampered_body(self, service):
        """Changing the body after signing breaks verification."""
        body, headers = signed_delivery({"type": "user.created", "data": {"id": "u1"}})
        tampered = body.replace(b"u1", b"u2")

        with pytest.raises(InvalidWebhookSignatureError):
            service.verify(tampered, headers)

    def test_stale_timestamp(self, service):
        """Deliveries older than the tolerance window are rejected."""
        body, headers = signed_delivery(
            {"type": "user.created", "data": {}},
            timestamp=datetime.now(timezone.utc) - timedelta(hours=1),
        )

        with pytest.raises(InvalidWebhookSignatureError):
            service.verify(body, headers)


class TestHandle:
    @pytest.mark.asyncio
    async def test_records_mapped_event(self, service, log):
        """Tracked event types are stored in the auth log."""
        event = IdentityWebhookEvent(type="session.ended", data={"id": "s9", "user_id": "u9"})

        recorded = await service.handle(event, "52.1.1.1", "Svix-Webhooks/1.0")

        assert recorded.event == AuthEventType.SESSION_REVOKED
        assert recorded.user_id == "u9"
        assert len(log) == 1

    @pytest.mark.asyncio
    async def test_ignores_untracked(self, service, log):
        """Untracked types are acknowledged without a write."""
        event = IdentityWebhookEvent(type="organization.created", data={})

        assert await service.handle(event, "ip", "ua") is None
        assert len(log) == 0
