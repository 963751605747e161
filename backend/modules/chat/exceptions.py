"""
Chat module exceptions.
"""

from shared.exceptions import ExternalServiceError


class ChatProviderError(ExternalServiceError):
    """
    Raised when the completion provider fails or returns an empty answer.

    The provider's own error text goes to the application log only.
    """

    def __init__(self, provider: str, message: str = "No response from AI"):
        super().__init__(message, service=provider, code="CHAT_PROVIDER_ERROR")
