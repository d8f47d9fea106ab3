"""Tests for PostgreSQL auth repository."""

from datetime import UTC, datetime
from typing import Any
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest

from contentdesk.adapters.auth.postgres import PostgresAuthRepository
from contentdesk.core.auth import AuthRepository, UserStatus


def user_row(**overrides: Any) -> dict[str, Any]:
    now = datetime.now(UTC)
    row = {
        "id": uuid4(),
        "email": "test@example.com",
        "name": "Test User",
        "role": "editor",
        "status": "active",
        "avatar": None,
        "join_date": now,
        "last_login": None,
        "created_at": now,
        "updated_at": None,
    }
    row.update(overrides)
    return row


class TestPostgresAuthRepository:
    """Test PostgresAuthRepository implementation."""

    @pytest.fixture
    def mock_db(self) -> MagicMock:
        """Create mock database."""
        return MagicMock()

    @pytest.fixture
    def repo(self, mock_db: MagicMock) -> PostgresAuthRepository:
        """Create repository with mock database."""
        return PostgresAuthRepository(mock_db)

    def test_implements_protocol(self, repo: PostgresAuthRepository) -> None:
        """Repository should implement AuthRepository protocol."""
        assert isinstance(repo, AuthRepository)

    async def test_get_user_by_email(
        self, repo: PostgresAuthRepository, mock_db: MagicMock
    ) -> None:
        """Should return user without credentials by default."""
        row = user_row()
        mock_db.fetch_one = AsyncMock(return_value=row)

        result = await repo.get_user_by_email("test@example.com")

        assert result is not None
        assert result.id == row["id"]
        assert result.role == "editor"
        assert result.password_hash is None
        query = mock_db.fetch_one.call_args.args[0]
        assert "password_hash" not in query

    async def test_get_user_with_secrets(
        self, repo: PostgresAuthRepository, mock_db: MagicMock
    ) -> None:
        """include_secrets selects the credential columns."""
        row = user_row(password_hash="hashed")  # pragma: allowlist secret
        mock_db.fetch_one = AsyncMock(return_value=row)

        result = await repo.get_user_by_id(row["id"], include_secrets=True)

        assert result is not None
        assert result.password_hash == "hashed"  # pragma: allowlist secret
        assert "password_hash" in mock_db.fetch_one.call_args.args[0]

    async def test_get_user_not_found(
        self, repo: PostgresAuthRepository, mock_db: MagicMock
    ) -> None:
        """Should return None when user not found."""
        mock_db.fetch_one = AsyncMock(return_value=None)

        assert await repo.get_user_by_email("notfound@example.com") is None

    async def test_list_users_filters_and_pages(
        self, repo: PostgresAuthRepository, mock_db: MagicMock
    ) -> None:
        mock_db.fetch_val = AsyncMock(return_value=1)
        mock_db.fetch_all = AsyncMock(return_value=[user_row()])

        users, total = await repo.list_users(
            role="editor", status=UserStatus.ACTIVE, offset=20, limit=10
        )

        assert total == 1
        assert len(users) == 1
        count_query, *count_params = mock_db.fetch_val.call_args.args
        assert "role = $1 AND status = $2" in count_query
        assert count_params == ["editor", "active"]
        list_query, *list_params = mock_db.fetch_all.call_args.args
        assert "OFFSET $3 LIMIT $4" in list_query
        assert list_params == ["editor", "active", 20, 10]

    async def test_count_users_rejects_unknown_filter(
        self, repo: PostgresAuthRepository
    ) -> None:
        with pytest.raises(ValueError, match="Cannot filter users by: email"):
            await repo.count_users(email="x@example.com")

    async def test_count_users_without_filters(
        self, repo: PostgresAuthRepository, mock_db: MagicMock
    ) -> None:
        mock_db.fetch_val = AsyncMock(return_value=None)

        assert await repo.count_users() == 0
        assert mock_db.fetch_val.call_args.args == ("SELECT COUNT(*) FROM users",)

    async def test_create_user(self, repo: PostgresAuthRepository, mock_db: MagicMock) -> None:
        mock_db.fetch_one = AsyncMock(return_value=user_row(email="new@example.com"))

        user = await repo.create_user(
            email="new@example.com",
            name="New",
            password_hash="hashed",  # pragma: allowlist secret
            role="viewer",
        )

        assert user.email == "new@example.com"
        assert mock_db.fetch_one.call_args.args[1:] == (
            "new@example.com",
            "New",
            "hashed",  # pragma: allowlist secret
            "viewer",
            "active",
            None,
        )

    async def test_update_user_builds_set_clause(
        self, repo: PostgresAuthRepository, mock_db: MagicMock
    ) -> None:
        user_id = uuid4()
        mock_db.fetch_one = AsyncMock(return_value=user_row(id=user_id, name="Renamed"))

        user = await repo.update_user(user_id, name="Renamed", status=UserStatus.INACTIVE)

        assert user is not None
        query, *params = mock_db.fetch_one.call_args.args
        assert "name = $1, status = $2, updated_at = $3" in query
        assert "WHERE id = $4" in query
        assert params[:2] == ["Renamed", "inactive"]
        assert params[-1] == user_id

    async def test_update_user_rejects_unknown_column(
        self, repo: PostgresAuthRepository
    ) -> None:
        with pytest.raises(ValueError, match="Cannot update user columns: id"):
            await repo.update_user(uuid4(), id=uuid4())

    async def test_update_user_without_fields_reads(
        self, repo: PostgresAuthRepository, mock_db: MagicMock
    ) -> None:
        mock_db.fetch_one = AsyncMock(return_value=None)

        assert await repo.update_user(uuid4()) is None
        assert mock_db.fetch_one.call_args.args[0].startswith("SELECT")

    async def test_set_reset_token(
        self, repo: PostgresAuthRepository, mock_db: MagicMock
    ) -> None:
        user_id = uuid4()
        mock_db.execute = AsyncMock(return_value="UPDATE 1")

        await repo.set_reset_token(user_id, None, None)

        params = mock_db.execute.call_args.args[1:]
        assert params[0] is None
        assert params[1] is None
        assert params[-1] == user_id

    async def test_delete_user(self, repo: PostgresAuthRepository, mock_db: MagicMock) -> None:
        mock_db.execute = AsyncMock(return_value="DELETE 1")
        assert await repo.delete_user(uuid4()) is True

        mock_db.execute = AsyncMock(return_value="DELETE 0")
        assert await repo.delete_user(uuid4()) is False
