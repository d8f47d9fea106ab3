"""JWT authentication and authorization dependencies.

Protected routes chain these dependencies:

    require_auth -> authorize(*roles) and/or check_permission(*permissions)

require_auth fails closed: every failure becomes an AppError the central
handler renders. try_auth fails open and yields None instead.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Annotated, Any
from uuid import UUID

import structlog
from fastapi import Depends, Request, Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from contentdesk.core.activity import ClientInfo
from contentdesk.core.auth import AuthRepository, TokenError, TokenService
from contentdesk.core.exceptions import AppError, ForbiddenError, UnauthorizedError
from contentdesk.core.rbac import AccessPolicy
from contentdesk.entrypoints.api.deps import (
    get_access_policy,
    get_auth_repository,
    get_token_service,
)
from contentdesk.entrypoints.api.middleware.client import get_client_info

logger = structlog.get_logger()

NOT_AUTHORIZED_MESSAGE = "Not authorized to access this route"

# Use Bearer token authentication
bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class AuthContext:
    """Identity attached to an authenticated request.

    The role comes from the token, not from the stored user, so a role
    change takes effect when the caller next obtains an access token.
    """

    id: UUID
    email: str
    role: str


async def _authenticate(
    credentials: HTTPAuthorizationCredentials | None,
    tokens: TokenService,
    repo: AuthRepository,
) -> AuthContext:
    if not credentials or not credentials.credentials:
        raise UnauthorizedError(NOT_AUTHORIZED_MESSAGE)

    try:
        payload = tokens.verify_access_token(credentials.credentials)
    except TokenError as e:
        logger.warning("jwt_validation_failed", error=str(e))
        raise UnauthorizedError(NOT_AUTHORIZED_MESSAGE) from None

    user_id = UUID(payload.id)
    user = await repo.get_user_by_id(user_id)
    if not user:
        raise UnauthorizedError("User no longer exists")

    if not user.is_active:
        raise ForbiddenError("User account is inactive")

    return AuthContext(id=user.id, email=payload.email, role=payload.role)


async def require_auth(
    request: Request,
    tokens: Annotated[TokenService, Depends(get_token_service)],
    repo: Annotated[AuthRepository, Depends(get_auth_repository)],
    credentials: HTTPAuthorizationCredentials | None = Security(bearer_scheme),  # noqa: B008
) -> AuthContext:
    """Verify the bearer token and that its user still exists and is active.

    Raises:
        UnauthorizedError: Missing/invalid token, or the user is gone.
        ForbiddenError: The user is inactive.
    """
    try:
        context = await _authenticate(credentials, tokens, repo)
    except AppError:
        raise
    except Exception as e:
        logger.warning("authentication_failed", error=str(e))
        raise UnauthorizedError(NOT_AUTHORIZED_MESSAGE) from None

    # Store in request state for downstream use
    request.state.user = context

    logger.debug("jwt_verified", user_id=str(context.id), role=context.role)
    return context


async def try_auth(
    request: Request,
    tokens: Annotated[TokenService, Depends(get_token_service)],
    repo: Annotated[AuthRepository, Depends(get_auth_repository)],
    credentials: HTTPAuthorizationCredentials | None = Security(bearer_scheme),  # noqa: B008
) -> AuthContext | None:
    """Optionally authenticate, returning None on any failure."""
    if not credentials:
        return None

    try:
        context = await _authenticate(credentials, tokens, repo)
    except Exception as e:
        logger.debug("optional_auth_skipped", error=str(e))
        return None

    request.state.user = context
    return context


def authorize(*roles: str) -> Callable[..., Any]:
    """Dependency allowing only the listed roles (or admin-equivalent ones).

    Usage:
        @router.get("/")
        async def list_things(
            auth: Annotated[AuthContext, Depends(authorize("admin", "editor"))],
        ):
            ...

    Args:
        roles: Role strings accepted literally. None listed accepts any
            authenticated caller.

    Returns:
        Dependency function that validates the role.
    """

    async def role_checker(
        auth: Annotated[AuthContext, Depends(require_auth)],
        policy: Annotated[AccessPolicy, Depends(get_access_policy)],
    ) -> AuthContext:
        await policy.authorize(auth.role, roles)
        return auth

    return role_checker


def check_permission(*permissions: str) -> Callable[..., Any]:
    """Dependency requiring the caller's role to hold any of `permissions`.

    Args:
        permissions: Permission slugs, any one of which suffices.

    Returns:
        Dependency function that validates the permission.
    """

    async def permission_checker(
        auth: Annotated[AuthContext, Depends(require_auth)],
        policy: Annotated[AccessPolicy, Depends(get_access_policy)],
    ) -> AuthContext:
        await policy.check_permission(auth.role, permissions)
        return auth

    return permission_checker


# Common dependencies for convenience
RequireAuth = Annotated[AuthContext, Depends(require_auth)]
RequireAdmin = Annotated[AuthContext, Depends(authorize("admin"))]
ClientDep = Annotated[ClientInfo, Depends(get_client_info)]
