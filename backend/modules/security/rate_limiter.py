"""
Fixed-window rate limiter.

Each (client key, bucket) pair owns a window holding a request counter and
the time the window opened. Once a full window length has elapsed the
counter starts again from zero; there is no sliding or token refill.

Storage failures never propagate. By default the limiter fails open and
admits the request, logging the fault; deployments that prefer to deny on
error can construct it with ``fail_open=False``.
"""

import logging
import math
import threading
import time
from dataclasses import dataclass
from typing import Callable, Iterator, Optional, Protocol

from shared.config import Settings

from .models import RateLimitDecision, RateLimitRule

logger = logging.getLogger(__name__)

WindowKey = tuple[str, str]

BUCKET_CHAT = "chat"
BUCKET_AUTH_TRACK = "auth_track"
BUCKET_CONTACT = "contact"


@dataclass
class RateLimitWindow:
    """Counter state for one (client key, bucket) pair."""

    count: int
    window_start: float


class WindowStore(Protocol):
    """Storage for rate limit windows."""

    def get(self, key: WindowKey) -> Optional[RateLimitWindow]: ...

    def put(self, key: WindowKey, window: RateLimitWindow) -> None: ...

    def delete(self, key: WindowKey) -> None: ...

    def items(self) -> Iterator[tuple[WindowKey, RateLimitWindow]]: ...


class InMemoryWindowStore:
    """Process-local window store backed by a dict."""

    def __init__(self) -> None:
        self._windows: dict[WindowKey, RateLimitWindow] = {}

    def get(self, key: WindowKey) -> Optional[RateLimitWindow]:
        return self._windows.get(key)

    def put(self, key: WindowKey, window: RateLimitWindow) -> None:
        self._windows[key] = window

    def delete(self, key: WindowKey) -> None:
        self._windows.pop(key, None)

    def items(self) -> Iterator[tuple[WindowKey, RateLimitWindow]]:
        return iter(list(self._windows.items()))

    def __len__(self) -> int:
        return len(self._windows)


def build_rate_limit_rules(settings: Settings) -> dict[str, RateLimitRule]:
    """Build the per-bucket rules from application settings."""
    return {
        BUCKET_CHAT: RateLimitRule(
            requests=settings.rate_limit_chat_requests,
            window_seconds=settings.rate_limit_chat_window,
        ),
        BUCKET_AUTH_TRACK: RateLimitRule(
            requests=settings.rate_limit_auth_track_requests,
            window_seconds=settings.rate_limit_auth_track_window,
        ),
        BUCKET_CONTACT: RateLimitRule(
            requests=settings.rate_limit_contact_requests,
            window_seconds=settings.rate_limit_contact_window,
        ),
    }


class FixedWindowRateLimiter:
    """
    Per-client, per-bucket fixed-window request counter.

    Window updates happen under a single lock so concurrent handlers can
    never lose an increment. Idle windows are swept at most once per
    longest window length.
    """

    def __init__(
        self,
        rules: dict[str, RateLimitRule],
        store: Optional[WindowStore] = None,
        fail_open: bool = True,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._rules = dict(rules)
        self._store: WindowStore = store if store is not None else InMemoryWindowStore()
        self._fail_open = fail_open
        self._clock = clock
        self._lock = threading.Lock()
        self._sweep_interval = max((r.window_seconds for r in self._rules.values()), default=60)
        self._last_sweep = clock()

    @property
    def rules(self) -> dict[str, RateLimitRule]:
        return dict(self._rules)

    @property
    def fail_open(self) -> bool:
        return self._fail_open

    def admit(self, client_key: str, bucket: str) -> RateLimitDecision:
        """
        Count one request from ``client_key`` against ``bucket``.

        Args:
            client_key: Client identity (usually the client IP)
            bucket: Logical bucket name, e.g. "chat"

        Returns:
            RateLimitDecision; rejected decisions carry the seconds left
            until the window resets
        """
        rule = self._rules.get(bucket)
        if rule is None:
            logger.debug(f"No rate limit rule for bucket '{bucket}', admitting")
            return RateLimitDecision(allowed=True)

        key = (client_key, bucket)
        try:
            with self._lock:
                now = self._clock()
                self._maybe_sweep(now)

                window = self._store.get(key)
                if window is None or now - window.window_start >= rule.window_seconds:
                    window = RateLimitWindow(count=0, window_start=now)
                window = RateLimitWindow(count=window.count + 1, window_start=window.window_start)
                self._store.put(key, window)
                count = window.count
                reset_in = window.window_start + rule.window_seconds - now
        except Exception:
            logger.exception(
                f"Rate limiter storage failure for bucket '{bucket}' "
                f"({'failing open' if self._fail_open else 'failing closed'})"
            )
            if self._fail_open:
                return RateLimitDecision(allowed=True, limit=rule.requests)
            return RateLimitDecision(
                allowed=False,
                retry_after=rule.window_seconds,
                limit=rule.requests,
            )

        if count > rule.requests:
            return RateLimitDecision(
                allowed=False,
                retry_after=max(1, math.ceil(reset_in)),
                limit=rule.requests,
                remaining=0,
            )

        return RateLimitDecision(
            allowed=True,
            retry_after=0,
            limit=rule.requests,
            remaining=rule.requests - count,
        )

    def reset(self, client_key: str, bucket: Optional[str] = None) -> None:
        """Forget the windows of ``client_key`` (all buckets unless one is given)."""
        with self._lock:
            if bucket is not None:
                self._store.delete((client_key, bucket))
                return
            for key, _ in self._store.items():
                if key[0] == client_key:
                    self._store.delete(key)

    def sweep(self) -> int:
        """Evict windows idle for longer than their window length."""
        with self._lock:
            return self._sweep(self._clock())

    def _maybe_sweep(self, now: float) -> None:
        if now - self._last_sweep >= self._sweep_interval:
            self._sweep(now)

    def _sweep(self, now: float) -> int:
        removed = 0
        for key, window in self._store.items():
            rule = self._rules.get(key[1])
            if rule is None or now - window.window_start >= rule.window_seconds:
                self._store.delete(key)
                removed += 1
        self._last_sweep = now
        if removed:
            logger.debug(f"Evicted {removed} expired rate limit window(s)")
        return removed
