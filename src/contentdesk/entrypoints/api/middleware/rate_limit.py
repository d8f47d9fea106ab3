"""Rate limiting middleware."""

import time
from collections.abc import Sequence
from dataclasses import dataclass

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.types import ASGIApp

logger = structlog.get_logger()

RATE_LIMITED_MESSAGE = "Too many requests, please try again later."

# Administrative API surfaces the limiter guards
DEFAULT_LIMITED_PREFIXES = ("/api/users", "/api/roles", "/api/activities")

# A bucket untouched this long has refilled completely
IDLE_BUCKET_SECONDS = 60.0


@dataclass
class RateLimitBucket:
    """Token bucket for rate limiting."""

    tokens: float
    last_update: float
    max_tokens: int
    refill_rate: float  # tokens per second

    def consume(self, tokens: int = 1) -> bool:
        """Try to consume tokens. Returns True if successful."""
        now = time.monotonic()

        # Refill tokens based on time elapsed
        elapsed = now - self.last_update
        self.tokens = min(self.max_tokens, self.tokens + elapsed * self.refill_rate)
        self.last_update = now

        if self.tokens >= tokens:
            self.tokens -= tokens
            return True
        return False


@dataclass
class RateLimitConfig:
    """Rate limit configuration.

    The bucket holds a full minute of requests, so a client may spend its
    whole allowance in a burst and then refills at the per-minute rate.
    """

    requests_per_minute: int = 100
    limited_prefixes: Sequence[str] = DEFAULT_LIMITED_PREFIXES


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Per-client-IP rate limiting using a token bucket."""

    def __init__(
        self,
        app: ASGIApp,
        config: RateLimitConfig | None = None,
        enabled: bool = True,
    ) -> None:
        """Initialize rate limit middleware.

        Args:
            app: The ASGI application.
            config: Rate limiting configuration.
            enabled: Whether rate limiting is enabled.
        """
        super().__init__(app)
        self.config = config or RateLimitConfig()
        self.enabled = enabled

        # Per-IP rate limit buckets
        self.buckets: dict[str, RateLimitBucket] = {}
        self._last_prune = time.monotonic()

    def _create_bucket(self) -> RateLimitBucket:
        """Create a new rate limit bucket."""
        return RateLimitBucket(
            tokens=float(self.config.requests_per_minute),
            last_update=time.monotonic(),
            max_tokens=self.config.requests_per_minute,
            refill_rate=self.config.requests_per_minute / 60.0,
        )

    def _bucket_for(self, identifier: str) -> RateLimitBucket:
        now = time.monotonic()
        if now - self._last_prune >= IDLE_BUCKET_SECONDS:
            self._prune(now)

        bucket = self.buckets.get(identifier)
        if bucket is None:
            bucket = self.buckets[identifier] = self._create_bucket()
        return bucket

    def _prune(self, now: float) -> None:
        """Drop buckets idle for a full refill window."""
        idle = [
            identifier
            for identifier, bucket in self.buckets.items()
            if now - bucket.last_update >= IDLE_BUCKET_SECONDS
        ]
        for identifier in idle:
            del self.buckets[identifier]
        self._last_prune = now

    def _is_limited(self, path: str) -> bool:
        return any(
            path == prefix or path.startswith(prefix + "/")
            for prefix in self.config.limited_prefixes
        )

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        """Process the request with rate limiting."""
        if not self.enabled or not self._is_limited(request.url.path):
            return await call_next(request)

        # Keyed on the socket peer; forwarding headers are client-controlled
        host = request.client.host if request.client else "unknown"
        identifier = f"ip:{host}"
        bucket = self._bucket_for(identifier)

        if not bucket.consume():
            logger.warning("rate_limit_exceeded", identifier=identifier)

            retry_after = max(1, int(1.0 / bucket.refill_rate))

            return JSONResponse(
                status_code=429,
                content={"success": False, "error": RATE_LIMITED_MESSAGE},
                headers={
                    "Retry-After": str(retry_after),
                    "X-RateLimit-Limit": str(self.config.requests_per_minute),
                    "X-RateLimit-Remaining": "0",
                },
            )

        response = await call_next(request)

        # Add rate limit headers
        response.headers["X-RateLimit-Limit"] = str(self.config.requests_per_minute)
        response.headers["X-RateLimit-Remaining"] = str(int(bucket.tokens))

        return response

    def reset(self, identifier: str | None = None) -> None:
        """Reset rate limit for an identifier or all."""
        if identifier:
            if identifier in self.buckets:
                del self.buckets[identifier]
        else:
            self.buckets.clear()
