"""Per-client sliding-window rate limiting for the ``/api/`` routes.

Clients are keyed by remote address.  Blocked requests receive 429 with a
``Retry-After`` header and the same ``{"error": ...}`` envelope as every other
client error.
"""

import logging
import math
import threading
import time
from dataclasses import dataclass
from typing import Callable

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse, Response

logger: logging.Logger = logging.getLogger(__name__)

RATE_LIMIT_MESSAGE = "Too many requests – please wait a moment and try again."


@dataclass
class RateLimitResult:
    allowed: bool
    remaining: int
    retry_after: int | None = None


class SlidingWindowRateLimiter:
    """Allow at most ``limit`` hits per key within the trailing ``window_seconds``.

    Keys whose newest hit has left the window are dropped by a sweep that runs
    at most once per window, so the table only holds recently active clients.
    """

    def __init__(
        self,
        limit: int,
        window_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.limit = max(1, int(limit))
        self.window_seconds = window_seconds
        self.clock = clock
        self._windows: dict[str, list[float]] = {}
        self._lock = threading.Lock()
        self._last_sweep = clock()

    def _sweep(self, now: float, cutoff: float) -> None:
        stale = [key for key, window in self._windows.items() if not window or window[-1] <= cutoff]
        for key in stale:
            del self._windows[key]
        self._last_sweep = now
        if stale:
            logger.debug("Evicted %d idle rate-limit keys", len(stale))

    def hit(self, key: str) -> RateLimitResult:
        now = self.clock()
        cutoff = now - self.window_seconds
        with self._lock:
            if now - self._last_sweep >= self.window_seconds:
                self._sweep(now, cutoff)
            window = [t for t in self._windows.get(key, ()) if t > cutoff]
            if len(window) >= self.limit:
                self._windows[key] = window
                retry_after = max(1, math.ceil(window[0] + self.window_seconds - now))
                return RateLimitResult(allowed=False, remaining=0, retry_after=retry_after)
            window.append(now)
            self._windows[key] = window
            return RateLimitResult(allowed=True, remaining=self.limit - len(window))

    @property
    def tracked_keys(self) -> int:
        with self._lock:
            return len(self._windows)


class RateLimitMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, limiter: SlidingWindowRateLimiter, prefix: str = "/api/") -> None:  # type: ignore[no-untyped-def]
        super().__init__(app)
        self.limiter = limiter
        self.prefix = prefix

    async def dispatch(self, request: Request, call_next) -> Response:  # type: ignore[no-untyped-def]
        if not request.url.path.startswith(self.prefix):
            return await call_next(request)

        client = request.client.host if request.client else "unknown"
        decision = self.limiter.hit(client)
        if not decision.allowed:
            logger.warning("Rate limit exceeded for client on %s", request.url.path)
            return JSONResponse(
                {"error": RATE_LIMIT_MESSAGE},
                status_code=429,
                headers={"Retry-After": str(decision.retry_after)},
            )

        response = await call_next(request)
        response.headers["X-RateLimit-Limit"] = str(self.limiter.limit)
        response.headers["X-RateLimit-Remaining"] = str(decision.remaining)
        return response
