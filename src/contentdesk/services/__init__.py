"""Application services built on the core domain."""

from contentdesk.services.activities import ActivityService
from contentdesk.services.users import UserService

__all__ = ["ActivityService", "UserService"]
