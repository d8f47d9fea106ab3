"""Seed definitions for the permission catalog and the system roles."""

from dataclasses import dataclass

from contentdesk.core.rbac.types import PermissionCategory


@dataclass(frozen=True)
class PermissionSeed:
    name: str
    slug: str
    description: str
    category: PermissionCategory


@dataclass(frozen=True)
class RoleSeed:
    name: str
    slug: str
    description: str
    permissions: tuple[str, ...]


PERMISSIONS: tuple[PermissionSeed, ...] = (
    PermissionSeed("View Dashboard", "view_dashboard", "Access to admin dashboard", PermissionCategory.DASHBOARD),
    PermissionSeed("View Analytics", "view_analytics", "View analytics page", PermissionCategory.ANALYTICS),
    PermissionSeed("View Users", "view_users", "View users list", PermissionCategory.USERS),
    PermissionSeed("Create Users", "create_users", "Create new users", PermissionCategory.USERS),
    PermissionSeed("Edit Users", "edit_users", "Edit existing users", PermissionCategory.USERS),
    PermissionSeed("Delete Users", "delete_users", "Delete users", PermissionCategory.USERS),
    PermissionSeed("Manage Roles", "manage_roles", "Assign roles to users", PermissionCategory.USERS),
    PermissionSeed("View Articles", "view_articles", "View articles list", PermissionCategory.CONTENT),
    PermissionSeed("Create Articles", "create_articles", "Create new articles", PermissionCategory.CONTENT),
    PermissionSeed("Edit Articles", "edit_articles", "Edit existing articles", PermissionCategory.CONTENT),
    PermissionSeed("Delete Articles", "delete_articles", "Delete articles", PermissionCategory.CONTENT),
    PermissionSeed("Publish Articles", "publish_articles", "Publish/unpublish articles", PermissionCategory.CONTENT),
    PermissionSeed("Manage Categories", "manage_categories", "Create/edit/delete categories", PermissionCategory.CONTENT),
    PermissionSeed("Manage Carousel", "manage_carousel", "Manage carousel slides", PermissionCategory.CONTENT),
    PermissionSeed("View Messages", "view_messages", "View messages", PermissionCategory.CONTENT),
    PermissionSeed("Reply Messages", "reply_messages", "Reply to messages", PermissionCategory.CONTENT),
    PermissionSeed("Delete Messages", "delete_messages", "Delete messages", PermissionCategory.CONTENT),
    PermissionSeed("Export Reports", "export_reports", "Export analytics reports", PermissionCategory.ANALYTICS),
    PermissionSeed("Manage Settings", "manage_settings", "Manage system settings", PermissionCategory.SETTINGS),
    PermissionSeed("View Activity Log", "view_activity_log", "View activity logs", PermissionCategory.SETTINGS),
)  # fmt: skip

SYSTEM_ROLES: tuple[RoleSeed, ...] = (
    RoleSeed(
        name="Admin",
        slug="admin",
        description="Full system access",
        permissions=tuple(p.slug for p in PERMISSIONS),
    ),
    RoleSeed(
        name="Editor",
        slug="editor",
        description="Content management access",
        permissions=(
            "view_dashboard",
            "view_articles",
            "create_articles",
            "edit_articles",
            "publish_articles",
            "manage_categories",
            "manage_carousel",
            "view_messages",
            "reply_messages",
        ),
    ),
    RoleSeed(
        name="Viewer",
        slug="viewer",
        description="Read-only access",
        permissions=("view_dashboard", "view_articles", "view_messages"),
    ),
)
