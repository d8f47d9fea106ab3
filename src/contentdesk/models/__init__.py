"""SQLAlchemy models for the application database."""

from contentdesk.models.activity import Activity
from contentdesk.models.base import BaseModel
from contentdesk.models.permission import Permission
from contentdesk.models.role import Role
from contentdesk.models.user import User

__all__ = [
    "BaseModel",
    "User",
    "Role",
    "Permission",
    "Activity",
]
