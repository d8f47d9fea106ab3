"""Tests for seed data."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from contentdesk.core.rbac.catalog import PERMISSIONS, SYSTEM_ROLES
from contentdesk.models import Permission, Role, User
from contentdesk.seed import (
    seed_admin,
    seed_database,
    seed_permissions,
    seed_system_roles,
    sqlalchemy_url,
)


def query_result(rows: list) -> MagicMock:
    result = MagicMock()
    result.scalars.return_value.all.return_value = rows
    result.scalar_one_or_none.return_value = rows[0] if rows else None
    return result


@pytest.fixture
def session() -> MagicMock:
    session = MagicMock()
    session.execute = AsyncMock(return_value=query_result([]))
    session.commit = AsyncMock()
    return session


def added(session: MagicMock, model: type) -> list:
    return [c.args[0] for c in session.add.call_args_list if isinstance(c.args[0], model)]


class TestSqlalchemyUrl:
    @pytest.mark.parametrize(
        ("dsn", "url"),
        [
            ("postgresql://u@h/db", "postgresql+asyncpg://u@h/db"),
            ("postgres://u@h/db", "postgresql+asyncpg://u@h/db"),
            ("postgresql+asyncpg://u@h/db", "postgresql+asyncpg://u@h/db"),
        ],
    )
    def test_driver_prefix(self, dsn: str, url: str) -> None:
        assert sqlalchemy_url(dsn) == url


class TestSeedPermissions:
    async def test_inserts_whole_catalog(self, session: MagicMock) -> None:
        assert await seed_permissions(session) == len(PERMISSIONS)
        assert {p.slug for p in added(session, Permission)} == {p.slug for p in PERMISSIONS}

    async def test_skips_existing(self, session: MagicMock) -> None:
        session.execute.return_value = query_result(["view_dashboard", "view_users"])

        assert await seed_permissions(session) == len(PERMISSIONS) - 2


class TestSeedSystemRoles:
    async def test_creates_missing_roles(self, session: MagicMock) -> None:
        assert await seed_system_roles(session) == 3

        roles = added(session, Role)
        assert {r.slug for r in roles} == {"admin", "editor", "viewer"}
        assert all(r.is_system for r in roles)

    async def test_restores_existing_permissions(self, session: MagicMock) -> None:
        editor = Role(name="Editor", slug="editor", permissions=["view_dashboard"], is_system=True)
        session.execute.return_value = query_result([editor])

        assert await seed_system_roles(session) == 2

        seed = next(r for r in SYSTEM_ROLES if r.slug == "editor")
        assert editor.permissions == list(seed.permissions)


class TestSeedAdmin:
    async def test_creates_admin(self, session: MagicMock) -> None:
        created = await seed_admin(
            session, " Admin@Example.com ", "Secret123"  # pragma: allowlist secret
        )

        assert created is True
        (admin,) = added(session, User)
        assert admin.email == "admin@example.com"
        assert admin.role == "admin"
        assert admin.password_hash.startswith("$2b$")

    async def test_existing_admin_untouched(self, session: MagicMock) -> None:
        session.execute.return_value = query_result([MagicMock()])

        password = "Secret123"  # pragma: allowlist secret
        assert await seed_admin(session, "admin@example.com", password) is False
        session.add.assert_not_called()


class TestSeedDatabase:
    async def test_without_admin_credentials(self, session: MagicMock) -> None:
        await seed_database(session)

        assert added(session, User) == []
        session.commit.assert_awaited_once()
