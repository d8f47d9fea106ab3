"""User management routes."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from contentdesk.core.auth import UserStatus
from contentdesk.entrypoints.api.deps import get_user_service
from contentdesk.entrypoints.api.middleware.jwt_auth import ClientDep, RequireAdmin, RequireAuth
from contentdesk.entrypoints.api.schemas import (
    CreateUserRequest,
    Envelope,
    MessageResponse,
    UpdateMeRequest,
    UpdateUserRequest,
    UserData,
    UserListData,
    UserOut,
)
from contentdesk.services import UserService

router = APIRouter(prefix="/users", tags=["users"])

UserServiceDep = Annotated[UserService, Depends(get_user_service)]


# Self-service route (must be before /{user_id} routes)
@router.put("/me", response_model=Envelope[UserData])
async def update_me(
    body: UpdateMeRequest,
    auth: RequireAuth,
    service: UserServiceDep,
    client: ClientDep,
) -> Envelope[UserData]:
    """Update the current user's name, email or avatar."""
    user = await service.update_me(auth.id, body.model_dump(exclude_unset=True), client=client)
    return Envelope(data=UserData(user=UserOut.model_validate(user)))


@router.get("", response_model=Envelope[UserListData])
async def list_users(
    auth: RequireAdmin,
    service: UserServiceDep,
    role: str | None = None,
    status: UserStatus | None = None,
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=100)] = 20,
) -> Envelope[UserListData]:
    """List users with stats and pagination."""
    result = await service.list_users(role=role, status=status, page=page, limit=limit)
    return Envelope(data=UserListData.model_validate(result))


@router.post("", response_model=Envelope[UserData], status_code=201)
async def create_user(
    body: CreateUserRequest,
    auth: RequireAdmin,
    service: UserServiceDep,
    client: ClientDep,
) -> Envelope[UserData]:
    """Create a user (admin only)."""
    user = await service.create_user(
        email=body.email,
        name=body.name,
        password=body.password,
        role=body.role,
        status=body.status,
        avatar=body.avatar,
        actor_id=auth.id,
        actor_email=auth.email,
        client=client,
    )
    return Envelope(data=UserData(user=UserOut.model_validate(user)))


@router.get("/{user_id}", response_model=Envelope[UserData])
async def get_user(
    user_id: UUID,
    auth: RequireAdmin,
    service: UserServiceDep,
) -> Envelope[UserData]:
    """Get a single user."""
    user = await service.get_user(user_id)
    return Envelope(data=UserData(user=UserOut.model_validate(user)))


@router.put("/{user_id}", response_model=Envelope[UserData])
async def update_user(
    user_id: UUID,
    body: UpdateUserRequest,
    auth: RequireAdmin,
    service: UserServiceDep,
    client: ClientDep,
) -> Envelope[UserData]:
    """Update a user's profile, role or status (admin only)."""
    user = await service.update_user(
        user_id,
        body.model_dump(exclude_unset=True),
        actor_id=auth.id,
        actor_email=auth.email,
        client=client,
    )
    return Envelope(data=UserData(user=UserOut.model_validate(user)))


@router.delete("/{user_id}", response_model=MessageResponse)
async def delete_user(
    user_id: UUID,
    auth: RequireAdmin,
    service: UserServiceDep,
    client: ClientDep,
) -> MessageResponse:
    """Delete a user other than yourself (admin only)."""
    await service.delete_user(user_id, actor_id=auth.id, actor_email=auth.email, client=client)
    return MessageResponse(message="User deleted successfully")
