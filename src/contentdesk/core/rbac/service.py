"""Custom-role management and permission catalog reads."""

from typing import Any
from uuid import UUID

import structlog

from contentdesk.core.exceptions import BadRequestError, ForbiddenError, NotFoundError
from contentdesk.core.rbac.repository import RoleRepository
from contentdesk.core.rbac.types import Permission, Role, slugify_role_name

logger = structlog.get_logger()

DUPLICATE_ROLE_MESSAGE = "Role with this name already exists"
ROLE_NAME_REQUIRED_MESSAGE = "Role name is required"
ROLE_SLUG_EMPTY_MESSAGE = "Role name must contain at least one letter or digit"


class RoleService:
    """Service enforcing the role table invariants.

    System roles are immutable through this service; custom roles are
    created with is_system=False and can be renamed, edited and deleted.
    """

    def __init__(self, repo: RoleRepository) -> None:
        self._repo = repo

    async def list_roles(self) -> list[Role]:
        """List every role, sorted by name."""
        return await self._repo.list_roles()

    async def get_role(self, role_id: UUID) -> Role:
        """Get a role or raise 404."""
        role = await self._repo.get_role_by_id(role_id)
        if not role:
            raise NotFoundError("Role not found")
        return role

    async def create_role(
        self,
        name: str,
        description: str | None = None,
        permissions: list[str] | None = None,
        actor_email: str | None = None,
    ) -> Role:
        """Create a custom role.

        Raises:
            BadRequestError: The name is blank or derives an empty slug, or
                the name or its slug is taken.
        """
        name, slug = _name_and_slug(name)
        await self._ensure_available(name, slug)

        role = await self._repo.create_role(
            name=name,
            slug=slug,
            description=description,
            permissions=_dedupe(permissions or []),
            is_system=False,
        )

        logger.info("role_created", role=role.slug, actor=actor_email)
        return role

    async def update_role(
        self,
        role_id: UUID,
        name: str | None = None,
        description: str | None = None,
        permissions: list[str] | None = None,
        actor_email: str | None = None,
    ) -> Role:
        """Update a custom role. Omitted fields keep their value.

        Renaming re-derives the slug. Users keep the role string they were
        assigned, so a rename detaches them from this role until they are
        reassigned.

        Raises:
            NotFoundError: No such role.
            ForbiddenError: The role is a system role.
            BadRequestError: The new name is blank, derives an empty slug or
                collides with another role.
        """
        role = await self.get_role(role_id)

        if role.is_system:
            raise ForbiddenError("Cannot modify system roles")

        new_name, new_slug = role.name, role.slug
        if name is not None and name.strip() != role.name:
            new_name, new_slug = _name_and_slug(name)
            await self._ensure_available(new_name, new_slug, exclude=role.id)

        updated = await self._repo.update_role(
            role.id,
            name=new_name,
            slug=new_slug,
            description=description if description is not None else role.description,
            permissions=_dedupe(permissions) if permissions is not None else role.permissions,
        )
        if not updated:
            raise NotFoundError("Role not found")

        if new_slug != role.slug:
            logger.warning("role_slug_changed", old_slug=role.slug, new_slug=new_slug)
        logger.info("role_updated", role=updated.slug, actor=actor_email)
        return updated

    async def delete_role(self, role_id: UUID, actor_email: str | None = None) -> None:
        """Delete a custom role.

        Raises:
            NotFoundError: No such role.
            ForbiddenError: The role is a system role.
        """
        role = await self.get_role(role_id)

        if role.is_system:
            raise ForbiddenError("Cannot delete system roles")

        await self._repo.delete_role(role.id)
        logger.info("role_deleted", role=role.slug, actor=actor_email)

    async def list_permissions(self) -> dict[str, Any]:
        """Return the permission catalog and its grouping by category."""
        permissions = await self._repo.list_permissions()

        grouped: dict[str, list[Permission]] = {}
        for permission in permissions:
            grouped.setdefault(permission.category.value, []).append(permission)

        return {
            "permissions": permissions,
            "grouped": grouped,
            "count": len(permissions),
        }

    async def _ensure_available(self, name: str, slug: str, exclude: UUID | None = None) -> None:
        for existing in (
            await self._repo.get_role_by_name(name),
            await self._repo.get_role_by_slug(slug),
        ):
            if existing and existing.id != exclude:
                raise BadRequestError(DUPLICATE_ROLE_MESSAGE)


def _name_and_slug(name: str) -> tuple[str, str]:
    name = name.strip()
    if not name:
        raise BadRequestError(ROLE_NAME_REQUIRED_MESSAGE)
    slug = slugify_role_name(name)
    if not slug:
        raise BadRequestError(ROLE_SLUG_EMPTY_MESSAGE)
    return name, slug


def _dedupe(permissions: list[str]) -> list[str]:
    # Membership is what matters; keep first-seen order for display
    return list(dict.fromkeys(permissions))
