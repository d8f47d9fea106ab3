"""API middleware and request dependencies."""

from contentdesk.entrypoints.api.middleware.jwt_auth import (
    AuthContext,
    authorize,
    check_permission,
    require_auth,
    try_auth,
)
from contentdesk.entrypoints.api.middleware.rate_limit import (
    RateLimitConfig,
    RateLimitMiddleware,
)
from contentdesk.entrypoints.api.middleware.request_logging import RequestLoggingMiddleware

__all__ = [
    "AuthContext",
    "RateLimitConfig",
    "RateLimitMiddleware",
    "RequestLoggingMiddleware",
    "authorize",
    "check_permission",
    "require_auth",
    "try_auth",
]
