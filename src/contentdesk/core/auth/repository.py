"""Auth repository protocol for database operations."""

from datetime import datetime
from typing import Any, Protocol, runtime_checkable
from uuid import UUID

from contentdesk.core.auth.types import User, UserStatus


@runtime_checkable
class AuthRepository(Protocol):
    """Protocol for credential store operations.

    Implementations provide actual database access (PostgreSQL, etc).
    Emails are passed in already normalized.
    """

    async def get_user_by_id(self, user_id: UUID, include_secrets: bool = False) -> User | None:
        """Get user by ID.

        The password hash and reset token are only loaded when
        include_secrets is set.
        """
        ...

    async def get_user_by_email(self, email: str, include_secrets: bool = False) -> User | None:
        """Get user by email address."""
        ...

    async def get_user_by_reset_token(self, token_hash: str) -> User | None:
        """Get the user holding a password reset token hash."""
        ...

    async def list_users(
        self,
        role: str | None = None,
        status: UserStatus | None = None,
        offset: int = 0,
        limit: int = 20,
    ) -> tuple[list[User], int]:
        """List users matching the filters, newest first, with the match count."""
        ...

    async def count_users(self, **filters: Any) -> int:
        """Count users where each keyword equals its column."""
        ...

    async def create_user(
        self,
        email: str,
        name: str,
        password_hash: str,
        role: str = "viewer",
        status: UserStatus = UserStatus.ACTIVE,
        avatar: str | None = None,
    ) -> User:
        """Create a new user."""
        ...

    async def update_user(self, user_id: UUID, **fields: Any) -> User | None:
        """Update the given user columns and return the stored user."""
        ...

    async def set_reset_token(
        self,
        user_id: UUID,
        token_hash: str | None,
        expires_at: datetime | None,
    ) -> None:
        """Store or clear the password reset token of a user."""
        ...

    async def delete_user(self, user_id: UUID) -> bool:
        """Delete a user. Returns False when nothing was deleted."""
        ...
