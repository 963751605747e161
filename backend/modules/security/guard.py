"""
Request-admission guard.

Decides whether an inbound request to a public endpoint may reach business
logic. Every request runs the same straight-line pipeline:

1. method, origin and content type against the route policy
2. rate limit on (client IP, route bucket)
3. suspicious-pattern check, then sanitization, of each user text field
4. aggregate length cap over the sanitized text
5. forward to the downstream collaborator

The only state carried between requests is the rate limiter's windows.
"""

import logging
from typing import Awaitable, Callable, Iterable, Optional, Sequence, TypeVar

from shared.models import RequestContext

from .audit import SecurityEventLog
from .exceptions import (
    InvalidContentTypeError,
    InvalidOriginError,
    MethodNotAllowedError,
    PayloadTooLargeError,
    RateLimitExceededError,
    SuspiciousContentError,
    UnknownRouteError,
)
from .interfaces import IPatternDetector, IRateLimiter
from .models import AdmissionOutcome, RateLimitDecision, RoutePolicy
from .rate_limiter import BUCKET_AUTH_TRACK, BUCKET_CHAT, BUCKET_CONTACT
from .sanitizer import sanitize_chat_message

logger = logging.getLogger(__name__)

T = TypeVar("T")

ROUTE_CHAT = "chat"
ROUTE_AUTH_TRACK = "auth_track"
ROUTE_CONTACT = "contact"

MAX_CHAT_TOTAL_LENGTH = 10_000


def build_route_policies() -> dict[str, RoutePolicy]:
    """Default admission policies for the public endpoints."""
    return {
        ROUTE_CHAT: RoutePolicy(bucket=BUCKET_CHAT, max_total_length=MAX_CHAT_TOTAL_LENGTH),
        ROUTE_AUTH_TRACK: RoutePolicy(bucket=BUCKET_AUTH_TRACK, max_total_length=2_000),
        ROUTE_CONTACT: RoutePolicy(bucket=BUCKET_CONTACT, max_total_length=5_500),
    }


def _media_type(content_type: Optional[str]) -> str:
    if not content_type:
        return ""
    return content_type.split(";", 1)[0].strip().lower()


class AdmissionGuard:
    """
    Composes the rate limiter, detector and security log into one policy
    decision per request.
    """

    def __init__(
        self,
        rate_limiter: IRateLimiter,
        detector: IPatternDetector,
        security_log: SecurityEventLog,
        policies: Optional[dict[str, RoutePolicy]] = None,
        allowed_origins: Optional[Iterable[str]] = None,
    ):
        self._rate_limiter = rate_limiter
        self._detector = detector
        self._security_log = security_log
        self._policies = policies if policies is not None else build_route_policies()
        self._allowed_origins = {o.rstrip("/") for o in (allowed_origins or [])}

    def policy(self, route: str) -> RoutePolicy:
        """Look up the policy for ``route``."""
        try:
            return self._policies[route]
        except KeyError:
            raise UnknownRouteError(route)

    def check_transport(self, ctx: RequestContext, route: str) -> RoutePolicy:
        """
        Check method, origin and content type against the route policy (step 1).

        Has no side effects on success, so the API layer can run it before
        the body is parsed and the service can run it again.

        Raises:
            MethodNotAllowedError, InvalidOriginError, InvalidContentTypeError:
                On a transport mismatch
        """
        policy = self.policy(route)

        if ctx.method.upper() not in policy.allowed_methods:
            self._reject(ctx, AdmissionOutcome.REJECTED_BY_METHOD)
            raise MethodNotAllowedError(ctx.method)

        if ctx.origin and self._allowed_origins and "*" not in self._allowed_origins:
            if ctx.origin.rstrip("/") not in self._allowed_origins:
                self._reject(ctx, AdmissionOutcome.REJECTED_BY_ORIGIN)
                self._security_log.log_unauthorized_access(
                    ctx.client_ip, ctx.path, f"Origin not allowed: {ctx.origin}"
                )
                raise InvalidOriginError(ctx.origin)

        if policy.allowed_content_types:
            if _media_type(ctx.content_type) not in policy.allowed_content_types:
                self._reject(ctx, AdmissionOutcome.REJECTED_BY_CONTENT_TYPE)
                raise InvalidContentTypeError(ctx.content_type)

        return policy

    def check_request(self, ctx: RequestContext, route: str) -> RateLimitDecision:
        """
        Run the transport checks and the rate limit (steps 1 and 2).

        Raises:
            MethodNotAllowedError, InvalidOriginError, InvalidContentTypeError:
                On a transport mismatch
            RateLimitExceededError: When the client is over budget
        """
        policy = self.check_transport(ctx, route)

        decision = self._rate_limiter.admit(ctx.client_ip, policy.bucket)
        if not decision.allowed:
            self._reject(ctx, AdmissionOutcome.REJECTED_BY_RATE_LIMIT)
            self._security_log.log_rate_limit_exceeded(ctx.client_ip, ctx.path, policy.bucket)
            raise RateLimitExceededError(policy.bucket, decision.retry_after)

        return decision

    def screen(
        self,
        ctx: RequestContext,
        text: str,
        sanitizer: Callable[[str], str] = sanitize_chat_message,
    ) -> str:
        """
        Check one user-supplied field and return its sanitized form (step 3).

        Detection runs on the raw text so markup-based attacks are seen
        before sanitization strips them.

        Raises:
            SuspiciousContentError: If the detector flags the text
        """
        result = self._detector.detect(text)
        if result.is_suspicious:
            reason = result.reason or "Unknown"
            self._reject(ctx, AdmissionOutcome.REJECTED_BY_SUSPICIOUS_CONTENT)
            self._security_log.log_suspicious_input(ctx.client_ip, ctx.path, reason)
            raise SuspiciousContentError(reason)
        return sanitizer(text)

    def enforce_total_length(self, ctx: RequestContext, texts: Sequence[str], route: str) -> None:
        """
        Reject payloads whose combined text exceeds the route cap (step 4).

        Raises:
            PayloadTooLargeError: On overflow
        """
        limit = self.policy(route).max_total_length
        if limit is None:
            return
        total = sum(len(t) for t in texts)
        if total > limit:
            self._reject(ctx, AdmissionOutcome.REJECTED_BY_LENGTH)
            self._security_log.log_api_abuse(ctx.client_ip, ctx.path, "Excessive message length")
            raise PayloadTooLargeError(total, limit)

    async def process(
        self,
        ctx: RequestContext,
        route: str,
        texts: Sequence[str],
        forward: Callable[[list[str]], Awaitable[T]],
        sanitizer: Callable[[str], str] = sanitize_chat_message,
    ) -> T:
        """
        Run the whole pipeline over ``texts`` and forward the sanitized result.

        Returns:
            Whatever ``forward`` returns (the Accepted outcome)
        """
        self.check_request(ctx, route)
        sanitized = [self.screen(ctx, text, sanitizer) for text in texts]
        self.enforce_total_length(ctx, sanitized, route)
        logger.debug(f"{AdmissionOutcome.ACCEPTED.value}: {ctx.method} {ctx.path} from {ctx.client_ip}")
        return await forward(sanitized)

    def _reject(self, ctx: RequestContext, outcome: AdmissionOutcome) -> None:
        logger.info(f"{outcome.value}: {ctx.method} {ctx.path} from {ctx.client_ip}")
