"""RBAC domain types."""

import re
from datetime import datetime
from enum import Enum
from uuid import UUID

from pydantic import BaseModel

# Sentinel permission strings granting unconditional access
WILDCARD_PERMISSIONS = frozenset({"*", "all"})

# Role slugs the role gate always lets through
ADMIN_ROLE_ALIASES = frozenset({"admin", "super-admin", "superadmin"})

_WHITESPACE_RE = re.compile(r"\s+")
_SLUG_STRIP_RE = re.compile(r"[^a-z0-9-]")


class PermissionCategory(str, Enum):
    """Presentation grouping for the permission catalog."""

    DASHBOARD = "dashboard"
    USERS = "users"
    CONTENT = "content"
    ANALYTICS = "analytics"
    SETTINGS = "settings"


def slugify_role_name(name: str) -> str:
    """Derive the role slug users reference.

    Lowercases, turns whitespace runs into one hyphen and drops anything
    outside [a-z0-9-].
    """
    slug = _WHITESPACE_RE.sub("-", name.strip().lower())
    return _SLUG_STRIP_RE.sub("", slug)


class Role(BaseModel):
    """A named set of permission slugs."""

    id: UUID
    name: str
    slug: str
    description: str | None = None
    permissions: list[str] = []
    is_system: bool = False
    created_at: datetime
    updated_at: datetime | None = None

    def has_wildcard(self) -> bool:
        """Whether the role holds a wildcard permission."""
        return not WILDCARD_PERMISSIONS.isdisjoint(self.permissions)

    def grants_any(self, permissions: list[str] | tuple[str, ...]) -> bool:
        """Whether the role holds at least one of `permissions`."""
        held = set(self.permissions)
        return any(p in held for p in permissions)


class Permission(BaseModel):
    """Catalog entry describing one permission slug."""

    id: UUID
    name: str
    slug: str
    category: PermissionCategory
    description: str | None = None
    created_at: datetime | None = None
