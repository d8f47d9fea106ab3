"""Role management routes."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends

from contentdesk.core.rbac import RoleService
from contentdesk.entrypoints.api.deps import get_role_service
from contentdesk.entrypoints.api.middleware.jwt_auth import RequireAdmin
from contentdesk.entrypoints.api.schemas import (
    CreateRoleRequest,
    Envelope,
    MessageResponse,
    PermissionCatalogData,
    RoleData,
    RoleListData,
    RoleOut,
    UpdateRoleRequest,
)

router = APIRouter(prefix="/roles", tags=["roles"])

RoleServiceDep = Annotated[RoleService, Depends(get_role_service)]


@router.get("", response_model=Envelope[RoleListData])
async def list_roles(auth: RequireAdmin, service: RoleServiceDep) -> Envelope[RoleListData]:
    """List all roles sorted by name."""
    roles = await service.list_roles()
    return Envelope(
        data=RoleListData(roles=[RoleOut.model_validate(r) for r in roles], count=len(roles))
    )


# Static path (must be before /{role_id})
@router.get("/permissions", response_model=Envelope[PermissionCatalogData])
async def list_permissions(
    auth: RequireAdmin,
    service: RoleServiceDep,
) -> Envelope[PermissionCatalogData]:
    """List the permission catalog grouped by category."""
    result = await service.list_permissions()
    return Envelope(data=PermissionCatalogData.model_validate(result))


@router.get("/{role_id}", response_model=Envelope[RoleData])
async def get_role(
    role_id: UUID,
    auth: RequireAdmin,
    service: RoleServiceDep,
) -> Envelope[RoleData]:
    """Get a single role."""
    role = await service.get_role(role_id)
    return Envelope(data=RoleData(role=RoleOut.model_validate(role)))


@router.post("", response_model=Envelope[RoleData], status_code=201)
async def create_role(
    body: CreateRoleRequest,
    auth: RequireAdmin,
    service: RoleServiceDep,
) -> Envelope[RoleData]:
    """Create a custom role."""
    role = await service.create_role(
        name=body.name,
        description=body.description,
        permissions=body.permissions,
        actor_email=auth.email,
    )
    return Envelope(data=RoleData(role=RoleOut.model_validate(role)))


@router.put("/{role_id}", response_model=Envelope[RoleData])
async def update_role(
    role_id: UUID,
    body: UpdateRoleRequest,
    auth: RequireAdmin,
    service: RoleServiceDep,
) -> Envelope[RoleData]:
    """Update a custom role. System roles are immutable."""
    role = await service.update_role(
        role_id,
        name=body.name,
        description=body.description,
        permissions=body.permissions,
        actor_email=auth.email,
    )
    return Envelope(data=RoleData(role=RoleOut.model_validate(role)))


@router.delete("/{role_id}", response_model=MessageResponse)
async def delete_role(
    role_id: UUID,
    auth: RequireAdmin,
    service: RoleServiceDep,
) -> MessageResponse:
    """Delete a custom role. System roles cannot be deleted."""
    await service.delete_role(role_id, actor_email=auth.email)
    return MessageResponse(message="Role deleted successfully")
