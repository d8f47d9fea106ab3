"""PostgreSQL implementation of RoleRepository."""

from datetime import UTC, datetime
from typing import Any
from uuid import UUID

import asyncpg

from contentdesk.adapters.db.app_db import AppDatabase
from contentdesk.core.exceptions import BadRequestError
from contentdesk.core.rbac.service import DUPLICATE_ROLE_MESSAGE
from contentdesk.core.rbac.types import Permission, PermissionCategory, Role

ROLE_COLUMNS = "id, name, slug, description, permissions, is_system, created_at, updated_at"


class PostgresRoleRepository:
    """Role table and permission catalog backed by PostgreSQL.

    Permissions are stored on the role as a TEXT[] of slugs.
    """

    def __init__(self, db: AppDatabase) -> None:
        self._db = db

    def _row_to_role(self, row: dict[str, Any]) -> Role:
        return Role(
            id=row["id"],
            name=row["name"],
            slug=row["slug"],
            description=row.get("description"),
            permissions=list(row.get("permissions") or []),
            is_system=row.get("is_system", False),
            created_at=row["created_at"],
            updated_at=row.get("updated_at"),
        )

    def _row_to_permission(self, row: dict[str, Any]) -> Permission:
        return Permission(
            id=row["id"],
            name=row["name"],
            slug=row["slug"],
            category=PermissionCategory(row["category"]),
            description=row.get("description"),
            created_at=row.get("created_at"),
        )

    async def get_role_by_id(self, role_id: UUID) -> Role | None:
        """Get role by ID."""
        row = await self._db.fetch_one(f"SELECT {ROLE_COLUMNS} FROM roles WHERE id = $1", role_id)
        return self._row_to_role(row) if row else None

    async def get_role_by_slug(self, slug: str) -> Role | None:
        """Get role by slug."""
        row = await self._db.fetch_one(f"SELECT {ROLE_COLUMNS} FROM roles WHERE slug = $1", slug)
        return self._row_to_role(row) if row else None

    async def get_role_by_name(self, name: str) -> Role | None:
        """Get role by exact name."""
        row = await self._db.fetch_one(f"SELECT {ROLE_COLUMNS} FROM roles WHERE name = $1", name)
        return self._row_to_role(row) if row else None

    async def list_roles(self) -> list[Role]:
        """List all roles sorted by name."""
        rows = await self._db.fetch_all(f"SELECT {ROLE_COLUMNS} FROM roles ORDER BY name")
        return [self._row_to_role(row) for row in rows]

    async def create_role(
        self,
        name: str,
        slug: str,
        description: str | None,
        permissions: list[str],
        is_system: bool = False,
    ) -> Role:
        """Create a role.

        Raises:
            BadRequestError: The name or slug is already taken.
        """
        try:
            row = await self._db.fetch_one(
                f"""
                INSERT INTO roles (name, slug, description, permissions, is_system)
                VALUES ($1, $2, $3, $4, $5)
                RETURNING {ROLE_COLUMNS}
                """,
                name,
                slug,
                description,
                permissions,
                is_system,
            )
        except asyncpg.UniqueViolationError as e:
            raise BadRequestError(DUPLICATE_ROLE_MESSAGE) from e
        assert row is not None, "INSERT RETURNING should always return a row"
        return self._row_to_role(row)

    async def update_role(
        self,
        role_id: UUID,
        name: str,
        slug: str,
        description: str | None,
        permissions: list[str],
    ) -> Role | None:
        """Overwrite the mutable role fields."""
        try:
            row = await self._db.fetch_one(
                f"""
                UPDATE roles
                SET name = $1, slug = $2, description = $3, permissions = $4, updated_at = $5
                WHERE id = $6
                RETURNING {ROLE_COLUMNS}
                """,
                name,
                slug,
                description,
                permissions,
                datetime.now(UTC),
                role_id,
            )
        except asyncpg.UniqueViolationError as e:
            raise BadRequestError(DUPLICATE_ROLE_MESSAGE) from e
        return self._row_to_role(row) if row else None

    async def delete_role(self, role_id: UUID) -> bool:
        """Delete a role."""
        result = await self._db.execute("DELETE FROM roles WHERE id = $1", role_id)
        return result == "DELETE 1"

    async def list_permissions(self) -> list[Permission]:
        """List the permission catalog sorted by category, then name."""
        rows = await self._db.fetch_all(
            """
            SELECT id, name, slug, category, description, created_at
            FROM permissions
            ORDER BY category, name
            """
        )
        return [self._row_to_permission(row) for row in rows]
