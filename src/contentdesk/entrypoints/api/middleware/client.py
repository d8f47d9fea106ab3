"""Request origin extraction for the activity log.

X-Forwarded-For is client-controlled, so it is recorded here but never
used to key the rate limiter.
"""

from fastapi import Request

from contentdesk.core.activity import ClientInfo


def get_client_ip(request: Request) -> str | None:
    """Extract client IP from request.

    Args:
        request: FastAPI request object.

    Returns:
        Client IP address or None.
    """
    # Check X-Forwarded-For header first (for proxied requests)
    forwarded_for = request.headers.get("x-forwarded-for")
    if forwarded_for:
        # Take the first IP in the chain
        return forwarded_for.split(",")[0].strip()

    # Fall back to direct client
    if request.client:
        return request.client.host

    return None


def get_client_info(request: Request) -> ClientInfo:
    """Request origin for activity entries."""
    return ClientInfo(
        ip_address=get_client_ip(request),
        user_agent=request.headers.get("user-agent"),
    )
