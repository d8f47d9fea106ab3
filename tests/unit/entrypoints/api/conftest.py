"""Fixtures for API tests.

The real application is built and every repository dependency is
overridden with a mock, so requests run the full dependency chain.
"""

from collections.abc import Iterator
from unittest.mock import AsyncMock, MagicMock
from uuid import UUID

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from contentdesk.core.auth import TokenService, User
from contentdesk.core.rbac import Role
from contentdesk.entrypoints.api.app import create_app
from contentdesk.entrypoints.api.deps import (
    get_activity_repository,
    get_auth_repository,
    get_frontend_url,
    get_recovery_adapter,
    get_role_repository,
    get_token_service,
)
from tests.fixtures.mocks import role_table


@pytest.fixture
def users() -> dict[UUID, User]:
    """Users the mocked credential store resolves by id."""
    return {}


@pytest.fixture
def mock_recovery() -> MagicMock:
    recovery = MagicMock()
    recovery.initiate_recovery = AsyncMock(return_value=True)
    return recovery


@pytest.fixture
def app(
    token_service: TokenService,
    mock_auth_repo: MagicMock,
    mock_role_repo: MagicMock,
    mock_activity_repo: MagicMock,
    mock_recovery: MagicMock,
    users: dict[UUID, User],
    system_roles: dict[str, Role],
) -> FastAPI:
    async def get_user_by_id(user_id: UUID, include_secrets: bool = False) -> User | None:
        return users.get(user_id)

    mock_auth_repo.get_user_by_id = AsyncMock(side_effect=get_user_by_id)
    mock_role_repo.get_role_by_slug = role_table(system_roles)

    application = create_app()
    application.dependency_overrides[get_token_service] = lambda: token_service
    application.dependency_overrides[get_auth_repository] = lambda: mock_auth_repo
    application.dependency_overrides[get_role_repository] = lambda: mock_role_repo
    application.dependency_overrides[get_activity_repository] = lambda: mock_activity_repo
    application.dependency_overrides[get_recovery_adapter] = lambda: mock_recovery
    application.dependency_overrides[get_frontend_url] = lambda: "http://localhost:5173"
    return application


@pytest.fixture
def client(app: FastAPI) -> Iterator[TestClient]:
    """Test client that skips the lifespan (no database)."""
    yield TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def login_as(users: dict[UUID, User], token_service: TokenService):
    """Register a user as existing and return bearer headers for them."""

    def _login(user: User) -> dict[str, str]:
        users[user.id] = user
        return {"Authorization": f"Bearer {token_service.issue_access_token(user)}"}

    return _login
