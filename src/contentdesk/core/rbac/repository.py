"""Role/permission repository protocol."""

from typing import Protocol, runtime_checkable
from uuid import UUID

from contentdesk.core.rbac.types import Permission, Role


@runtime_checkable
class RoleRepository(Protocol):
    """Protocol for the role table and permission catalog."""

    async def get_role_by_id(self, role_id: UUID) -> Role | None:
        """Get role by ID."""
        ...

    async def get_role_by_slug(self, slug: str) -> Role | None:
        """Get role by slug. This is the lookup the authorization gates use."""
        ...

    async def get_role_by_name(self, name: str) -> Role | None:
        """Get role by exact name."""
        ...

    async def list_roles(self) -> list[Role]:
        """List all roles sorted by name."""
        ...

    async def create_role(
        self,
        name: str,
        slug: str,
        description: str | None,
        permissions: list[str],
        is_system: bool = False,
    ) -> Role:
        """Create a role."""
        ...

    async def update_role(
        self,
        role_id: UUID,
        name: str,
        slug: str,
        description: str | None,
        permissions: list[str],
    ) -> Role | None:
        """Overwrite the mutable role fields."""
        ...

    async def delete_role(self, role_id: UUID) -> bool:
        """Delete a role. Returns False when nothing was deleted."""
        ...

    async def list_permissions(self) -> list[Permission]:
        """List the permission catalog sorted by category, then name."""
        ...
