"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations. Each module exposes its service through an interface,
and this file creates the concrete implementations.

Stateful collaborators (rate limiter windows, in-memory auth log, security
log) live exactly as long as the container. The application creates it at
start-up; tests reset it between cases.
"""

from typing import TYPE_CHECKING, Optional

from shared.config import Settings, get_settings

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from modules.auth.interfaces import IAuthService
    from modules.auth_logs.interfaces import IAuthEventLog
    from modules.auth_logs.service import AuthTrackingService
    from modules.chat.interfaces import IChatRelay
    from modules.chat.service import ChatService
    from modules.security.audit import SecurityEventLog
    from modules.security.detector import SuspiciousPatternDetector
    from modules.security.guard import AdmissionGuard
    from modules.security.rate_limiter import FixedWindowRateLimiter
    from modules.webhooks.service import IdentityWebhookService


class ServiceContainer:
    """
    Container for all service instances.

    Services are created lazily on first access and cached as singletons
    within the container. Use reset() to clear them.
    """

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self._settings = settings
        self._security_log: "SecurityEventLog | None" = None
        self._rate_limiter: "FixedWindowRateLimiter | None" = None
        self._detector: "SuspiciousPatternDetector | None" = None
        self._guard: "AdmissionGuard | None" = None
        self._auth_event_log: "IAuthEventLog | None" = None
        self._auth_tracking: "AuthTrackingService | None" = None
        self._auth_service: "IAuthService | None" = None
        self._chat_relay: "IChatRelay | None" = None
        self._chat_service: "ChatService | None" = None
        self._identity_webhooks: "IdentityWebhookService | None" = None

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    @property
    def security_log(self) -> "SecurityEventLog":
        """Get the security event log instance."""
        if self._security_log is None:
            from modules.security.audit import SecurityEventLog
            self._security_log = SecurityEventLog(self.settings.security_log_max_entries)
        return self._security_log

    @property
    def rate_limiter(self) -> "FixedWindowRateLimiter":
        """Get the rate limiter instance."""
        if self._rate_limiter is None:
            from modules.security.rate_limiter import (
                FixedWindowRateLimiter,
                build_rate_limit_rules,
            )
            self._rate_limiter = FixedWindowRateLimiter(
                build_rate_limit_rules(self.settings),
                fail_open=self.settings.rate_limit_fail_open,
            )
        return self._rate_limiter

    @property
    def detector(self) -> "SuspiciousPatternDetector":
        """Get the suspicious-pattern detector instance."""
        if self._detector is None:
            from modules.security.detector import SuspiciousPatternDetector
            self._detector = SuspiciousPatternDetector()
        return self._detector

    @property
    def guard(self) -> "AdmissionGuard":
        """Get the request-admission guard instance."""
        if self._guard is None:
            from modules.security.guard import AdmissionGuard
            self._guard = AdmissionGuard(
                rate_limiter=self.rate_limiter,
                detector=self.detector,
                security_log=self.security_log,
                allowed_origins=self.settings.cors_origins,
            )
        return self._guard

    @property
    def auth_event_log(self) -> "IAuthEventLog":
        """Get the auth event log selected by AUTH_LOG_BACKEND."""
        if self._auth_event_log is None:
            from modules.auth_logs.service import create_auth_event_log
            self._auth_event_log = create_auth_event_log(self.settings)
        return self._auth_event_log

    @property
    def auth_tracking(self) -> "AuthTrackingService":
        """Get the auth tracking service instance."""
        if self._auth_tracking is None:
            from modules.auth_logs.service import AuthTrackingService
            self._auth_tracking = AuthTrackingService(self.guard, self.auth_event_log)
        return self._auth_tracking

    @property
    def auth(self) -> "IAuthService":
        """Get the auth service instance."""
        if self._auth_service is None:
            from modules.auth.service import AuthService
            self._auth_service = AuthService()
        return self._auth_service

    @property
    def chat_relay(self) -> "IChatRelay":
        """Get the chat relay instance."""
        if self._chat_relay is None:
            from modules.chat.relay import LangChainChatRelay
            self._chat_relay = LangChainChatRelay.from_settings(self.settings)
        return self._chat_relay

    @property
    def chat(self) -> "ChatService":
        """Get the chat service instance."""
        if self._chat_service is None:
            from modules.chat.service import ChatService
            self._chat_service = ChatService(self.guard, self.chat_relay)
        return self._chat_service

    @property
    def identity_webhooks(self) -> "IdentityWebhookService":
        """Get the identity webhook service instance."""
        if self._identity_webhooks is None:
            from modules.webhooks.service import IdentityWebhookService
            self._identity_webhooks = IdentityWebhookService(
                self.settings.identity_webhook_secret,
                self.auth_event_log,
            )
        return self._identity_webhooks

    def initialize(self) -> None:
        """Eagerly create the stateful services so they exist before traffic."""
        self.guard
        self.auth_event_log

    def reset(self) -> None:
        """
        Reset all cached services.

        This is primarily for testing - allows tests to get fresh
        service instances with different mock dependencies.
        """
        self._settings = None
        self._security_log = None
        self._rate_limiter = None
        self._detector = None
        self._guard = None
        self._auth_event_log = None
        self._auth_tracking = None
        self._auth_service = None
        self._chat_relay = None
        self._chat_service = None
        self._identity_webhooks = None


# Module-level container singleton
_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Get the singleton service container."""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def reset_container() -> None:
    """
    Reset the service container.

    This clears the cached container, so the next call to get_container()
    will create a fresh container with new service instances.

    Primarily used for testing.
    """
    global _container
    _container = None


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_auth_service() -> "IAuthService":
    """FastAPI dependency for auth service."""
    return get_container().auth


def get_security_log() -> "SecurityEventLog":
    """FastAPI dependency for the security event log."""
    return get_container().security_log


def get_admission_guard() -> "AdmissionGuard":
    """FastAPI dependency for the request-admission guard."""
    return get_container().guard


def get_auth_event_log() -> "IAuthEventLog":
    """FastAPI dependency for the auth event log."""
    return get_container().auth_event_log


def get_auth_tracking_service() -> "AuthTrackingService":
    """FastAPI dependency for the auth tracking service."""
    return get_container().auth_tracking


def get_chat_service() -> "ChatService":
    """FastAPI dependency for the chat service."""
    return get_container().chat


def get_identity_webhook_service() -> "IdentityWebhookService":
    """FastAPI dependency for the identity webhook service."""
    return get_container().identity_webhooks
