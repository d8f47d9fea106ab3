"""Activity (audit) log domain."""

from contentdesk.core.activity.recorder import ActivityRecorder
from contentdesk.core.activity.repository import ActivityRepository
from contentdesk.core.activity.types import (
    ActivityCreate,
    ActivityEntry,
    ActivityType,
    ClientInfo,
)

__all__ = [
    "ActivityCreate",
    "ActivityEntry",
    "ActivityRecorder",
    "ActivityRepository",
    "ActivityType",
    "ClientInfo",
]
