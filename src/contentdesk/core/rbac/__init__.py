"""RBAC module for role and permission checks."""

from contentdesk.core.rbac.catalog import PERMISSIONS, SYSTEM_ROLES, PermissionSeed, RoleSeed
from contentdesk.core.rbac.policy import AccessPolicy
from contentdesk.core.rbac.repository import RoleRepository
from contentdesk.core.rbac.service import RoleService
from contentdesk.core.rbac.types import (
    ADMIN_ROLE_ALIASES,
    WILDCARD_PERMISSIONS,
    Permission,
    PermissionCategory,
    Role,
    slugify_role_name,
)

__all__ = [
    "ADMIN_ROLE_ALIASES",
    "PERMISSIONS",
    "SYSTEM_ROLES",
    "WILDCARD_PERMISSIONS",
    "AccessPolicy",
    "Permission",
    "PermissionCategory",
    "PermissionSeed",
    "Role",
    "RoleRepository",
    "RoleSeed",
    "RoleService",
    "slugify_role_name",
]
