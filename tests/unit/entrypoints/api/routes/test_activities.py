"""Tests for activity log routes."""

from collections.abc import Callable
from unittest.mock import MagicMock
from uuid import uuid4

from fastapi.testclient import TestClient

from contentdesk.core.activity import ActivityType
from contentdesk.core.auth import User
from tests.fixtures.domain_objects import make_activity, make_user

LoginAs = Callable[[User], dict[str, str]]


class TestActivityRoutes:
    def test_list_activities(
        self,
        client: TestClient,
        login_as: LoginAs,
        admin_user: User,
        mock_activity_repo: MagicMock,
    ) -> None:
        mock_activity_repo.list_activities.return_value = (
            [make_activity(type=ActivityType.LOGIN)],
            1,
        )
        mock_activity_repo.count_since.return_value = 1

        response = client.get("/api/activities?type=login", headers=login_as(admin_user))

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["activities"][0]["type"] == "login"
        assert data["stats"]["todayCount"] == 1
        assert (
            mock_activity_repo.list_activities.call_args.kwargs["activity_type"]
            == ActivityType.LOGIN
        )

    def test_unknown_type_rejected(
        self, client: TestClient, login_as: LoginAs, admin_user: User
    ) -> None:
        response = client.get("/api/activities?type=bogus", headers=login_as(admin_user))

        assert response.status_code == 400

    def test_user_activities(
        self,
        client: TestClient,
        login_as: LoginAs,
        admin_user: User,
        mock_activity_repo: MagicMock,
    ) -> None:
        user_id = uuid4()

        response = client.get(f"/api/activities/user/{user_id}", headers=login_as(admin_user))

        assert response.status_code == 200
        assert "stats" not in response.json()["data"]
        assert mock_activity_repo.list_activities.call_args.kwargs["actor_id"] == user_id

    def test_requires_admin(self, client: TestClient, login_as: LoginAs) -> None:
        response = client.get("/api/activities", headers=login_as(make_user(role="editor")))

        assert response.status_code == 403
