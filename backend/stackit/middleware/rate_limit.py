"""
StackIt Backend — Rate Limiting Middleware
===========================================

What:  Per-IP sliding window rate limiter with two buckets.
How:   Keeps recent request timestamps per (bucket, IP) in memory.

Buckets:
    auth:    POST /api/auth/login and POST /api/auth/register
             settings.auth_rate_limit_requests per auth_rate_limit_window,
             default 5 per 15 minutes; slows down credential guessing
    general: every other path, including GET/PUT /api/auth/profile
             settings.rate_limit_requests per rate_limit_window,
             default 100 per 15 minutes

Algorithm: Sliding Window Log
    1. Drop timestamps older than the bucket's window
    2. If the remaining count reaches the limit, reject with 429
    3. Otherwise record the current timestamp and let the request through

Limitations:
    State lives in the process. Multiple uvicorn workers each keep their
    own counters; a shared store (Redis) would be needed to enforce a
    global limit.
"""

import logging
import time
from collections import defaultdict
from typing import Dict, List, Tuple

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from stackit.config import settings
from stackit.exceptions import RateLimitExceededError
from stackit.responses import error_response

logger = logging.getLogger(__name__)

CREDENTIAL_PATHS = {"/api/auth/login", "/api/auth/register"}
CLEANUP_EVERY = 1000


def bucket_limits(bucket: str) -> Tuple[int, int]:
    """Return (max requests, window seconds) for a bucket name."""
    if bucket == "auth":
        return settings.auth_rate_limit_requests, settings.auth_rate_limit_window
    return settings.rate_limit_requests, settings.rate_limit_window


def bucket_for_request(method: str, path: str) -> str:
    """Only credential submissions share the tight bucket."""
    if method == "POST" and path.rstrip("/") in CREDENTIAL_PATHS:
        return "auth"
    return "general"


class RateLimitMiddleware(BaseHTTPMiddleware):
    """
    In-memory sliding window rate limiter.

    Excluded paths:
        /health and the generated API docs are never limited.

    Response on rate limit:
        HTTP 429 with a Retry-After header and the standard error body
        built from RateLimitExceededError.
    """

    EXCLUDED_PATHS = {"/health", "/docs", "/openapi.json", "/redoc"}

    def __init__(self, app, **kwargs):
        super().__init__(app, **kwargs)
        self._requests: Dict[Tuple[str, str], List[float]] = defaultdict(list)
        self._seen = 0

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if path in self.EXCLUDED_PATHS or request.method == "OPTIONS":
            return await call_next(request)

        client_ip = request.client.host if request.client else "unknown"
        bucket = bucket_for_request(request.method, path)
        limit, window = bucket_limits(bucket)
        key = (bucket, client_ip)

        now = time.time()
        window_start = now - window
        timestamps = [ts for ts in self._requests[key] if ts > window_start]
        self._requests[key] = timestamps

        if len(timestamps) >= limit:
            retry_after = int(timestamps[0] + window - now) + 1
            logger.warning(
                "Rate limit exceeded for IP %s on %s bucket: %d requests in %ds window",
                client_ip,
                bucket,
                len(timestamps),
                window,
            )
            return self._reject(RateLimitExceededError(retry_after=retry_after))

        timestamps.append(now)

        self._seen += 1
        if self._seen % CLEANUP_EVERY == 0:
            self._cleanup_inactive(now)

        return await call_next(request)

    @staticmethod
    def _reject(exc: RateLimitExceededError) -> JSONResponse:
        # Outside the router: app exception handlers do not apply here
        return error_response(
            429, "rate_limit_exceeded", exc.message,
            details={"retry_after": exc.retry_after},
            headers={"Retry-After": str(exc.retry_after)},
        )

    def _cleanup_inactive(self, now: float) -> None:
        """Forget (bucket, IP) keys whose newest request left the window."""
        inactive = []
        for key, timestamps in self._requests.items():
            _, window = bucket_limits(key[0])
            if not timestamps or timestamps[-1] <= now - window:
                inactive.append(key)
        for key in inactive:
            del self._requests[key]

        if inactive:
            logger.debug("Cleaned up %d inactive rate limit entries", len(inactive))
