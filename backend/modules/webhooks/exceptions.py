"""
Webhook module exceptions.
"""

from shared.exceptions import FolioError, ValidationError


class WebhookNotConfiguredError(FolioError):
    """Raised when IDENTITY_WEBHOOK_SECRET is missing or unusable (HTTP 500)."""

    def __init__(self):
        super().__init__("Webhook secret not configured", code="WEBHOOK_NOT_CONFIGURED")


class MissingWebhookHeadersError(ValidationError):
    """Raised when a delivery lacks the svix-id/timestamp/signature headers."""

    def __init__(self, missing: list[str]):
        super().__init__(
            "Missing svix headers",
            code="MISSING_WEBHOOK_HEADERS",
            details={"missing": missing},
        )


class InvalidWebhookSignatureError(ValidationError):
    """Raised when the delivery signature does not verify."""

    def __init__(self):
        super().__init__("Invalid signature", code="INVALID_WEBHOOK_SIGNATURE")
