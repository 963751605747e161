"""
Security module interfaces.

Route handlers and services depend on these protocols rather than the
concrete guard and limiter, so tests can substitute mocks freely.
"""

from typing import Awaitable, Callable, Protocol, Sequence, TypeVar, runtime_checkable

from shared.models import RequestContext

from .models import DetectionResult, RateLimitDecision, RoutePolicy

T = TypeVar("T")


@runtime_checkable
class IRateLimiter(Protocol):
    """Per-client, per-bucket request counter."""

    def admit(self, client_key: str, bucket: str) -> RateLimitDecision:
        """
        Count one request and decide whether it may proceed.

        Never raises; storage faults degrade according to the configured
        fail-open policy.
        """
        ...


@runtime_checkable
class IPatternDetector(Protocol):
    """Heuristic scanner for abusive or manipulative input."""

    def detect(self, text: str) -> DetectionResult:
        ...


@runtime_checkable
class IAdmissionGuard(Protocol):
    """
    Interface for the request-admission pipeline.

    Every method raises a FolioError subclass on rejection.
    """

    def check_transport(self, ctx: RequestContext, route: str) -> RoutePolicy:
        """Check method, origin and content type only."""
        ...

    def check_request(self, ctx: RequestContext, route: str) -> RateLimitDecision:
        """Check method, origin, content type and rate limit."""
        ...

    def screen(
        self,
        ctx: RequestContext,
        text: str,
        sanitizer: Callable[[str], str] = ...,
    ) -> str:
        """Reject suspicious text, otherwise return it sanitized."""
        ...

    def enforce_total_length(self, ctx: RequestContext, texts: Sequence[str], route: str) -> None:
        """Reject payloads over the route's aggregate length cap."""
        ...

    async def process(
        self,
        ctx: RequestContext,
        route: str,
        texts: Sequence[str],
        forward: Callable[[list[str]], Awaitable[T]],
        sanitizer: Callable[[str], str] = ...,
    ) -> T:
        """Run the full pipeline and forward the sanitized texts."""
        ...
