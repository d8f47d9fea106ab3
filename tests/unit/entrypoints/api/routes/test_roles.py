"""Tests for role management routes."""

from collections.abc import Callable
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from contentdesk.core.auth import User
from contentdesk.core.rbac import PermissionCategory, Role
from tests.fixtures.domain_objects import make_permission, make_role, make_user

LoginAs = Callable[[User], dict[str, str]]


@pytest.fixture
def admin_headers(login_as: LoginAs, admin_user: User) -> dict[str, str]:
    return login_as(admin_user)


class TestRoleRoutes:
    def test_list_roles(
        self,
        client: TestClient,
        admin_headers: dict[str, str],
        mock_role_repo: MagicMock,
        system_roles: dict[str, Role],
    ) -> None:
        mock_role_repo.list_roles.return_value = list(system_roles.values())

        response = client.get("/api/roles", headers=admin_headers)

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["count"] == 3
        assert data["roles"][0]["isSystem"] is True

    def test_list_permissions_not_shadowed_by_id_route(
        self,
        client: TestClient,
        admin_headers: dict[str, str],
        mock_role_repo: MagicMock,
    ) -> None:
        mock_role_repo.list_permissions.return_value = [
            make_permission("view_users", PermissionCategory.USERS),
            make_permission("manage_settings", PermissionCategory.SETTINGS),
        ]

        response = client.get("/api/roles/permissions", headers=admin_headers)

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["count"] == 2
        assert set(data["grouped"]) == {"users", "settings"}

    def test_create_role(
        self,
        client: TestClient,
        admin_headers: dict[str, str],
        mock_role_repo: MagicMock,
    ) -> None:
        mock_role_repo.create_role.return_value = make_role(
            "content-lead", ["edit_articles"], name="Content Lead"
        )

        response = client.post(
            "/api/roles",
            json={"name": "Content Lead", "permissions": ["edit_articles"]},
            headers=admin_headers,
        )

        assert response.status_code == 201
        assert response.json()["data"]["role"]["slug"] == "content-lead"
        assert mock_role_repo.create_role.call_args.kwargs["slug"] == "content-lead"

    def test_create_role_blank_name(
        self, client: TestClient, admin_headers: dict[str, str]
    ) -> None:
        response = client.post("/api/roles", json={"name": "   "}, headers=admin_headers)

        assert response.status_code == 400

    def test_create_role_name_without_slug(
        self,
        client: TestClient,
        admin_headers: dict[str, str],
        mock_role_repo: MagicMock,
    ) -> None:
        response = client.post("/api/roles", json={"name": "!!!"}, headers=admin_headers)

        assert response.status_code == 400
        assert "letter or digit" in response.json()["error"]
        mock_role_repo.create_role.assert_not_called()

    def test_create_role_duplicate(
        self,
        client: TestClient,
        admin_headers: dict[str, str],
        mock_role_repo: MagicMock,
    ) -> None:
        mock_role_repo.get_role_by_name.return_value = make_role("content-lead")

        response = client.post(
            "/api/roles", json={"name": "Content Lead"}, headers=admin_headers
        )

        assert response.status_code == 400
        assert response.json()["error"] == "Role with this name already exists"

    def test_update_system_role_forbidden(
        self,
        client: TestClient,
        admin_headers: dict[str, str],
        mock_role_repo: MagicMock,
        system_roles: dict[str, Role],
    ) -> None:
        admin_role = system_roles["admin"]
        mock_role_repo.get_role_by_id.return_value = admin_role

        response = client.put(
            f"/api/roles/{admin_role.id}", json={"permissions": []}, headers=admin_headers
        )

        assert response.status_code == 403
        assert response.json()["error"] == "Cannot modify system roles"
        mock_role_repo.update_role.assert_not_called()

    @pytest.mark.parametrize("name", ["   ", "!!!"])
    def test_rename_to_blank_or_unsluggable_name(
        self,
        client: TestClient,
        admin_headers: dict[str, str],
        mock_role_repo: MagicMock,
        name: str,
    ) -> None:
        role = make_role("content-lead", name="Content Lead")
        mock_role_repo.get_role_by_id.return_value = role

        response = client.put(f"/api/roles/{role.id}", json={"name": name}, headers=admin_headers)

        assert response.status_code == 400
        assert response.json()["success"] is False
        mock_role_repo.update_role.assert_not_called()

    def test_delete_system_role_forbidden(
        self,
        client: TestClient,
        admin_headers: dict[str, str],
        mock_role_repo: MagicMock,
        system_roles: dict[str, Role],
    ) -> None:
        viewer = system_roles["viewer"]
        mock_role_repo.get_role_by_id.return_value = viewer

        response = client.delete(f"/api/roles/{viewer.id}", headers=admin_headers)

        assert response.status_code == 403
        assert response.json()["error"] == "Cannot delete system roles"
        mock_role_repo.delete_role.assert_not_called()

    def test_delete_custom_role(
        self,
        client: TestClient,
        admin_headers: dict[str, str],
        mock_role_repo: MagicMock,
    ) -> None:
        role = make_role("content-lead")
        mock_role_repo.get_role_by_id.return_value = role

        response = client.delete(f"/api/roles/{role.id}", headers=admin_headers)

        assert response.status_code == 200
        assert response.json()["message"] == "Role deleted successfully"

    def test_editor_cannot_manage_roles(self, client: TestClient, login_as: LoginAs) -> None:
        response = client.get("/api/roles", headers=login_as(make_user(role="editor")))

        assert response.status_code == 403
