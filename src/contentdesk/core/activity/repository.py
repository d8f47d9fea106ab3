"""Activity repository protocol."""

from datetime import datetime
from typing import Protocol, runtime_checkable
from uuid import UUID

from contentdesk.core.activity.types import ActivityCreate, ActivityEntry, ActivityType


@runtime_checkable
class ActivityRepository(Protocol):
    """Append-only store of activity entries."""

    async def record(self, entry: ActivityCreate) -> ActivityEntry:
        """Append an entry."""
        ...

    async def list_activities(
        self,
        activity_type: ActivityType | None = None,
        actor_id: UUID | None = None,
        offset: int = 0,
        limit: int = 50,
    ) -> tuple[list[ActivityEntry], int]:
        """List entries newest first, with the total match count."""
        ...

    async def count_since(self, since: datetime | None = None) -> int:
        """Count entries created at or after `since` (all entries when None)."""
        ...
