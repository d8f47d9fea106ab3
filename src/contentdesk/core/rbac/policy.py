"""Role-gate and permission-gate decisions.

The two gates are independent mechanisms. The role gate matches the role
string carried by the caller's token against an allow-list and only
consults the role table to escalate admin-equivalent roles. The permission
gate always resolves the role record and checks its permission set.

Both gates re-read the role table on every call; there is no cache, so an
edited role takes effect on the next request.
"""

from collections.abc import Sequence

import structlog

from contentdesk.core.exceptions import AppError, ForbiddenError, UnauthorizedError
from contentdesk.core.rbac.repository import RoleRepository
from contentdesk.core.rbac.types import ADMIN_ROLE_ALIASES

logger = structlog.get_logger()


class AccessPolicy:
    """Evaluates role and permission requirements against the role table."""

    def __init__(self, roles: RoleRepository) -> None:
        self._roles = roles

    async def authorize(self, role: str | None, allowed_roles: Sequence[str]) -> None:
        """Allow the caller if its role is listed or escalates to admin.

        Args:
            role: Role string of the authenticated caller, None if anonymous.
            allowed_roles: Roles accepted literally. Empty accepts any caller.

        Raises:
            UnauthorizedError: No authenticated caller.
            ForbiddenError: Role not listed and not admin-equivalent.
        """
        if role is None:
            raise UnauthorizedError("Not authorized")

        if not allowed_roles or role in allowed_roles:
            return

        if await self._escalates(role):
            logger.debug("role_gate_escalated", role=role)
            return

        raise ForbiddenError(f"User role '{role}' is not authorized to access this route")

    async def _escalates(self, role: str) -> bool:
        # Fails closed: an unreachable role table means no escalation
        try:
            record = await self._roles.get_role_by_slug(role)
        except Exception as e:
            logger.warning("role_gate_lookup_failed", role=role, error=str(e))
            return False

        if record is None:
            return False
        return record.has_wildcard() or record.slug in ADMIN_ROLE_ALIASES

    async def check_permission(self, role: str | None, required: Sequence[str]) -> None:
        """Allow the caller if its role holds any of `required`.

        Args:
            role: Role string of the authenticated caller, None if anonymous.
            required: Permission slugs, any one of which suffices.

        Raises:
            UnauthorizedError: No authenticated caller.
            ForbiddenError: Role unknown or lacking every required permission.
            AppError: The role table could not be read (500, still a denial).
        """
        if role is None:
            raise UnauthorizedError("Not authorized")

        try:
            record = await self._roles.get_role_by_slug(role)
        except Exception as e:
            logger.error("permission_gate_lookup_failed", role=role, error=str(e))
            raise AppError("Error checking permissions", 500) from None

        if record is None:
            raise ForbiddenError("Invalid user role")

        if record.has_wildcard() or record.grants_any(tuple(required)):
            return

        raise ForbiddenError(
            "You don't have permission to access this route. "
            f"Required: {' or '.join(required)}"
        )
