"""PostgreSQL implementation of AuthRepository."""

from datetime import UTC, datetime
from typing import Any
from uuid import UUID

from contentdesk.adapters.db.app_db import AppDatabase
from contentdesk.core.auth.types import User, UserStatus

# Everything except credentials; what identity resolution and listings read
PUBLIC_COLUMNS = (
    "id, email, name, role, status, avatar, join_date, last_login, created_at, updated_at"
)
SECRET_COLUMNS = f"{PUBLIC_COLUMNS}, password_hash, reset_password_token, reset_password_expires"

# Columns update_user and count_users accept as keywords
UPDATABLE_COLUMNS = frozenset(
    {"email", "name", "password_hash", "role", "status", "avatar", "last_login"}
)
FILTERABLE_COLUMNS = frozenset({"role", "status"})


class PostgresAuthRepository:
    """PostgreSQL implementation of auth repository."""

    def __init__(self, db: AppDatabase) -> None:
        """Initialize with database connection.

        Args:
            db: Application database instance.
        """
        self._db = db

    def _row_to_user(self, row: dict[str, Any]) -> User:
        """Convert database row to User model."""
        return User(
            id=row["id"],
            email=row["email"],
            name=row["name"],
            password_hash=row.get("password_hash"),
            role=row["role"],
            status=UserStatus(row.get("status", UserStatus.ACTIVE.value)),
            avatar=row.get("avatar"),
            join_date=row["join_date"],
            last_login=row.get("last_login"),
            reset_password_token=row.get("reset_password_token"),
            reset_password_expires=row.get("reset_password_expires"),
            created_at=row["created_at"],
            updated_at=row.get("updated_at"),
        )

    async def get_user_by_id(self, user_id: UUID, include_secrets: bool = False) -> User | None:
        """Get user by ID."""
        columns = SECRET_COLUMNS if include_secrets else PUBLIC_COLUMNS
        row = await self._db.fetch_one(
            f"SELECT {columns} FROM users WHERE id = $1",
            user_id,
        )
        return self._row_to_user(row) if row else None

    async def get_user_by_email(self, email: str, include_secrets: bool = False) -> User | None:
        """Get user by email address."""
        columns = SECRET_COLUMNS if include_secrets else PUBLIC_COLUMNS
        row = await self._db.fetch_one(
            f"SELECT {columns} FROM users WHERE email = $1",
            email,
        )
        return self._row_to_user(row) if row else None

    async def get_user_by_reset_token(self, token_hash: str) -> User | None:
        """Get the user holding a password reset token hash."""
        row = await self._db.fetch_one(
            f"SELECT {SECRET_COLUMNS} FROM users WHERE reset_password_token = $1",
            token_hash,
        )
        return self._row_to_user(row) if row else None

    async def list_users(
        self,
        role: str | None = None,
        status: UserStatus | None = None,
        offset: int = 0,
        limit: int = 20,
    ) -> tuple[list[User], int]:
        """List users newest first."""
        where, params = _where({"role": role, "status": status.value if status else None})

        total = await self._db.fetch_val(f"SELECT COUNT(*) FROM users{where}", *params)
        rows = await self._db.fetch_all(
            f"""
            SELECT {PUBLIC_COLUMNS} FROM users{where}
            ORDER BY created_at DESC
            OFFSET ${len(params) + 1} LIMIT ${len(params) + 2}
            """,
            *params,
            offset,
            limit,
        )
        return [self._row_to_user(row) for row in rows], int(total or 0)

    async def count_users(self, **filters: Any) -> int:
        """Count users where each keyword equals its column."""
        unknown = set(filters) - FILTERABLE_COLUMNS
        if unknown:
            raise ValueError(f"Cannot filter users by: {', '.join(sorted(unknown))}")

        where, params = _where(filters)
        total = await self._db.fetch_val(f"SELECT COUNT(*) FROM users{where}", *params)
        return int(total or 0)

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
        row = await self._db.fetch_one(
            f"""
            INSERT INTO users (email, name, password_hash, role, status, avatar)
            VALUES ($1, $2, $3, $4, $5, $6)
            RETURNING {PUBLIC_COLUMNS}
            """,
            email,
            name,
            password_hash,
            role,
            status.value,
            avatar,
        )
        assert row is not None, "INSERT RETURNING should always return a row"
        return self._row_to_user(row)

    async def update_user(self, user_id: UUID, **fields: Any) -> User | None:
        """Update user fields."""
        unknown = set(fields) - UPDATABLE_COLUMNS
        if unknown:
            raise ValueError(f"Cannot update user columns: {', '.join(sorted(unknown))}")

        if not fields:
            return await self.get_user_by_id(user_id)

        updates = []
        params: list[Any] = []
        for column, value in fields.items():
            params.append(value.value if isinstance(value, UserStatus) else value)
            updates.append(f"{column} = ${len(params)}")

        params.append(datetime.now(UTC))
        updates.append(f"updated_at = ${len(params)}")

        params.append(user_id)
        query = f"""
            UPDATE users SET {", ".join(updates)}
            WHERE id = ${len(params)}
            RETURNING {PUBLIC_COLUMNS}
        """
        row = await self._db.fetch_one(query, *params)
        return self._row_to_user(row) if row else None

    async def set_reset_token(
        self,
        user_id: UUID,
        token_hash: str | None,
        expires_at: datetime | None,
    ) -> None:
        """Store or clear the password reset token of a user."""
        await self._db.execute(
            """
            UPDATE users
            SET reset_password_token = $1, reset_password_expires = $2, updated_at = $3
            WHERE id = $4
            """,
            token_hash,
            expires_at,
            datetime.now(UTC),
            user_id,
        )

    async def delete_user(self, user_id: UUID) -> bool:
        """Delete a user."""
        result = await self._db.execute("DELETE FROM users WHERE id = $1", user_id)
        return result == "DELETE 1"


def _where(filters: dict[str, Any]) -> tuple[str, list[Any]]:
    clauses = []
    params: list[Any] = []
    for column, value in filters.items():
        if value is None:
            continue
        params.append(value)
        clauses.append(f"{column} = ${len(params)}")
    if not clauses:
        return "", params
    return " WHERE " + " AND ".join(clauses), params
