"""Tests for UserService."""

from unittest.mock import MagicMock
from uuid import uuid4

import pytest

from contentdesk.core.activity import ActivityRecorder, ActivityType
from contentdesk.core.auth import UserStatus
from contentdesk.core.exceptions import BadRequestError, NotFoundError
from contentdesk.services import UserService
from tests.fixtures.domain_objects import make_user

PASSWORD = "Secret123"  # pragma: allowlist secret


@pytest.fixture
def service(mock_auth_repo: MagicMock, activity_recorder: ActivityRecorder) -> UserService:
    return UserService(mock_auth_repo, activity_recorder)


class TestListUsers:
    async def test_list_users_with_stats(
        self, service: UserService, mock_auth_repo: MagicMock
    ) -> None:
        users = [make_user(), make_user(email="b@example.com")]
        mock_auth_repo.list_users.return_value = (users, 45)
        mock_auth_repo.count_users.return_value = 7

        result = await service.list_users(role="editor", page=3, limit=20)

        mock_auth_repo.list_users.assert_awaited_once_with(
            role="editor", status=None, offset=40, limit=20
        )
        assert [u.id for u in result["users"]] == [u.id for u in users]
        assert result["pagination"] == {"page": 3, "limit": 20, "total": 45, "pages": 3}
        assert set(result["stats"]) == {
            "total",
            "active",
            "inactive",
            "admins",
            "editors",
            "viewers",
        }
        mock_auth_repo.count_users.assert_any_await(status="active")
        mock_auth_repo.count_users.assert_any_await(role="admin")


class TestCreateUser:
    async def test_create_user(
        self,
        service: UserService,
        mock_auth_repo: MagicMock,
        mock_activity_repo: MagicMock,
    ) -> None:
        admin = make_user(role="admin", email="admin@example.com")
        created = make_user(email="new@example.com", role="editor")
        mock_auth_repo.create_user.return_value = created

        user = await service.create_user(
            "New@Example.com",
            "New User",
            PASSWORD,
            actor_id=admin.id,
            actor_email=admin.email,
            role="editor",
        )

        assert user == created
        kwargs = mock_auth_repo.create_user.call_args.kwargs
        assert kwargs["email"] == "new@example.com"
        assert kwargs["password_hash"].startswith("$2b$")

        entry = mock_activity_repo.record.call_args.args[0]
        assert entry.type == ActivityType.USER_REGISTER
        assert entry.actor_id == admin.id
        assert entry.metadata == {"user_id": str(created.id)}

    async def test_create_duplicate(
        self, service: UserService, mock_auth_repo: MagicMock
    ) -> None:
        mock_auth_repo.get_user_by_email.return_value = make_user()

        with pytest.raises(BadRequestError, match="User already exists with this email"):
            await service.create_user("JANE@example.com", "Jane", PASSWORD, uuid4(), "a@x.com")


class TestUpdateUser:
    async def test_password_rejected(self, service: UserService) -> None:
        with pytest.raises(BadRequestError, match="Password cannot be updated"):
            await service.update_user(uuid4(), {"password": "x"}, uuid4(), "a@x.com")

    async def test_missing_user(self, service: UserService) -> None:
        with pytest.raises(NotFoundError, match="User not found"):
            await service.update_user(uuid4(), {"name": "X"}, uuid4(), "a@x.com")

    async def test_update_filters_and_normalizes(
        self, service: UserService, mock_auth_repo: MagicMock
    ) -> None:
        user = make_user()
        mock_auth_repo.get_user_by_id.return_value = user
        mock_auth_repo.update_user.return_value = user

        await service.update_user(
            user.id,
            {
                "email": " Other@Example.com ",
                "role": "editor",
                "status": UserStatus.INACTIVE,
                "name": None,
                "password_hash": "smuggled",
            },
            uuid4(),
            "admin@example.com",
        )

        mock_auth_repo.update_user.assert_awaited_once_with(
            user.id, email="other@example.com", role="editor", status="inactive"
        )

    async def test_unchanged_email_not_checked(
        self, service: UserService, mock_auth_repo: MagicMock
    ) -> None:
        user = make_user()
        mock_auth_repo.get_user_by_id.return_value = user

        result = await service.update_user(
            user.id, {"email": "JANE@example.com"}, uuid4(), "admin@example.com"
        )

        assert result == user
        mock_auth_repo.get_user_by_email.assert_not_called()
        mock_auth_repo.update_user.assert_not_called()

    async def test_email_taken(self, service: UserService, mock_auth_repo: MagicMock) -> None:
        user = make_user()
        mock_auth_repo.get_user_by_id.return_value = user
        mock_auth_repo.get_user_by_email.return_value = make_user(email="taken@example.com")

        with pytest.raises(BadRequestError, match="User already exists with this email"):
            await service.update_user(
                user.id, {"email": "taken@example.com"}, uuid4(), "admin@example.com"
            )


class TestDeleteUser:
    async def test_delete_user(
        self,
        service: UserService,
        mock_auth_repo: MagicMock,
        mock_activity_repo: MagicMock,
    ) -> None:
        target = make_user(email="bob@example.com")
        mock_auth_repo.get_user_by_id.return_value = target

        await service.delete_user(target.id, uuid4(), "admin@example.com")

        mock_auth_repo.delete_user.assert_awaited_once_with(target.id)
        entry = mock_activity_repo.record.call_args.args[0]
        assert entry.type == ActivityType.USER_DELETE
        assert entry.description == "Deleted user: bob@example.com"

    async def test_cannot_delete_self(
        self, service: UserService, mock_auth_repo: MagicMock
    ) -> None:
        admin = make_user(role="admin")
        mock_auth_repo.get_user_by_id.return_value = admin

        with pytest.raises(BadRequestError, match="You cannot delete your own account"):
            await service.delete_user(admin.id, admin.id, admin.email)

        mock_auth_repo.delete_user.assert_not_called()


class TestUpdateMe:
    @pytest.mark.parametrize("changes", [{"password": "x"}, {"role": "admin"}])
    async def test_forbidden_fields(self, service: UserService, changes: dict) -> None:
        with pytest.raises(BadRequestError, match="Password and role cannot be updated"):
            await service.update_me(uuid4(), changes)

    async def test_update_me(
        self,
        service: UserService,
        mock_auth_repo: MagicMock,
        mock_activity_repo: MagicMock,
    ) -> None:
        user = make_user()
        renamed = user.model_copy(update={"name": "Janet"})
        mock_auth_repo.get_user_by_id.return_value = user
        mock_auth_repo.update_user.return_value = renamed

        result = await service.update_me(user.id, {"name": "Janet", "status": "inactive"})

        assert result.name == "Janet"
        mock_auth_repo.update_user.assert_awaited_once_with(user.id, name="Janet")
        assert mock_activity_repo.record.call_args.args[0].description == "Updated own profile"
