"""RBAC adapters."""

from contentdesk.adapters.rbac.postgres import PostgresRoleRepository

__all__ = ["PostgresRoleRepository"]
