"""User administration service."""

from typing import Any
from uuid import UUID

import structlog

from contentdesk.core.activity import ActivityRecorder, ActivityType, ClientInfo
from contentdesk.core.auth import AuthRepository, User, UserStatus, hash_password
from contentdesk.core.auth.service import normalize_email
from contentdesk.core.exceptions import BadRequestError, NotFoundError
from contentdesk.services.pagination import Page

logger = structlog.get_logger()

# Columns an admin may change through update_user
ADMIN_EDITABLE_FIELDS = frozenset({"email", "name", "role", "status", "avatar"})

# Columns a user may change on their own profile
SELF_EDITABLE_FIELDS = frozenset({"email", "name", "avatar"})


class UserService:
    """Admin-facing user management.

    Every mutation is attributed to the acting user in the activity log.
    """

    def __init__(self, repo: AuthRepository, activity: ActivityRecorder) -> None:
        self._repo = repo
        self._activity = activity

    async def list_users(
        self,
        role: str | None = None,
        status: UserStatus | None = None,
        page: int = 1,
        limit: int = 20,
    ) -> dict[str, Any]:
        """List users with overall stats and pagination."""
        window = Page(page=page, limit=limit)
        users, total = await self._repo.list_users(
            role=role, status=status, offset=window.offset, limit=window.limit
        )

        stats = {
            "total": await self._repo.count_users(),
            "active": await self._repo.count_users(status=UserStatus.ACTIVE.value),
            "inactive": await self._repo.count_users(status=UserStatus.INACTIVE.value),
            "admins": await self._repo.count_users(role="admin"),
            "editors": await self._repo.count_users(role="editor"),
            "viewers": await self._repo.count_users(role="viewer"),
        }

        return {
            "users": [u.to_public() for u in users],
            "stats": stats,
            "pagination": window.describe(total),
        }

    async def get_user(self, user_id: UUID) -> User:
        user = await self._repo.get_user_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")
        return user

    async def create_user(
        self,
        email: str,
        name: str,
        password: str,
        actor_id: UUID,
        actor_email: str,
        role: str = "viewer",
        status: UserStatus = UserStatus.ACTIVE,
        avatar: str | None = None,
        client: ClientInfo | None = None,
    ) -> User:
        """Create a user on behalf of an administrator.

        Raises:
            BadRequestError: If the email is already registered.
        """
        normalized = normalize_email(email)
        if await self._repo.get_user_by_email(normalized):
            raise BadRequestError("User already exists with this email")

        user = await self._repo.create_user(
            email=normalized,
            name=name,
            password_hash=hash_password(password),
            role=role,
            status=status,
            avatar=avatar,
        )

        await self._activity.record(
            ActivityType.USER_REGISTER,
            actor_id=actor_id,
            actor_name=actor_email,
            description=f"Created user: {user.email}",
            client=client,
            metadata={"user_id": str(user.id)},
        )

        logger.info("user_created", user_id=str(user.id), actor=actor_email)
        return user

    async def update_user(
        self,
        user_id: UUID,
        changes: dict[str, Any],
        actor_id: UUID,
        actor_email: str,
        client: ClientInfo | None = None,
    ) -> User:
        """Apply an administrator's edits to a user.

        Args:
            user_id: User to edit.
            changes: Submitted fields; None values are ignored.

        Raises:
            BadRequestError: A password was submitted, or the new email is taken.
            NotFoundError: No such user.
        """
        if changes.get("password"):
            raise BadRequestError("Password cannot be updated through this route")

        user = await self.get_user(user_id)
        fields = await self._prepare(user, changes, ADMIN_EDITABLE_FIELDS)

        updated = await self._repo.update_user(user.id, **fields) if fields else user
        if not updated:
            raise NotFoundError("User not found")

        await self._activity.record(
            ActivityType.USER_EDIT,
            actor_id=actor_id,
            actor_name=actor_email,
            description=f"Updated user: {updated.email}",
            client=client,
            metadata={"user_id": str(updated.id)},
        )

        logger.info("user_updated", user_id=str(updated.id), actor=actor_email)
        return updated

    async def delete_user(
        self,
        user_id: UUID,
        actor_id: UUID,
        actor_email: str,
        client: ClientInfo | None = None,
    ) -> None:
        """Delete a user other than the acting administrator.

        Raises:
            NotFoundError: No such user.
            BadRequestError: The administrator targeted their own account.
        """
        user = await self.get_user(user_id)

        if user.id == actor_id:
            raise BadRequestError("You cannot delete your own account")

        await self._repo.delete_user(user.id)

        await self._activity.record(
            ActivityType.USER_DELETE,
            actor_id=actor_id,
            actor_name=actor_email,
            description=f"Deleted user: {user.email}",
            client=client,
            metadata={"user_id": str(user.id)},
        )

        logger.info("user_deleted", user_id=str(user.id), actor=actor_email)

    async def update_me(
        self,
        user_id: UUID,
        changes: dict[str, Any],
        client: ClientInfo | None = None,
    ) -> User:
        """Update the caller's own profile (name, email, avatar).

        Raises:
            BadRequestError: Password or role submitted, or the email is taken.
            NotFoundError: The caller's record is gone.
        """
        if changes.get("password") or changes.get("role"):
            raise BadRequestError("Password and role cannot be updated through this route")

        user = await self.get_user(user_id)
        fields = await self._prepare(user, changes, SELF_EDITABLE_FIELDS)

        updated = await self._repo.update_user(user.id, **fields) if fields else user
        if not updated:
            raise NotFoundError("User not found")

        await self._activity.record(
            ActivityType.USER_EDIT,
            actor_id=updated.id,
            actor_name=updated.email,
            description="Updated own profile",
            client=client,
            metadata={"user_id": str(updated.id)},
        )

        logger.info("profile_updated", user_id=str(updated.id))
        return updated

    async def _prepare(
        self,
        user: User,
        changes: dict[str, Any],
        allowed: frozenset[str],
    ) -> dict[str, Any]:
        fields = {k: v for k, v in changes.items() if k in allowed and v is not None}

        if "email" in fields:
            fields["email"] = normalize_email(fields["email"])
            if fields["email"] == user.email:
                del fields["email"]
            elif await self._repo.get_user_by_email(fields["email"]):
                raise BadRequestError("User already exists with this email")

        if isinstance(fields.get("status"), UserStatus):
            fields["status"] = fields["status"].value

        return fields
