"""Activity log queries."""

from datetime import UTC, datetime, timedelta
from typing import Any
from uuid import UUID

from contentdesk.core.activity import ActivityRepository, ActivityType
from contentdesk.services.pagination import Page


class ActivityService:
    """Read side of the activity log."""

    def __init__(self, repo: ActivityRepository) -> None:
        self._repo = repo

    async def list_activities(
        self,
        activity_type: ActivityType | None = None,
        actor_id: UUID | None = None,
        page: int = 1,
        limit: int = 50,
    ) -> dict[str, Any]:
        """List entries newest first, with volume stats and pagination.

        Today counts from midnight UTC; week and month are rolling
        7 and 30 day windows.
        """
        window = Page(page=page, limit=limit)
        activities, total = await self._repo.list_activities(
            activity_type=activity_type,
            actor_id=actor_id,
            offset=window.offset,
            limit=window.limit,
        )

        now = datetime.now(UTC)
        midnight = now.replace(hour=0, minute=0, second=0, microsecond=0)
        stats = {
            "total": await self._repo.count_since(),
            "today_count": await self._repo.count_since(midnight),
            "this_week_count": await self._repo.count_since(now - timedelta(days=7)),
            "this_month_count": await self._repo.count_since(now - timedelta(days=30)),
        }

        return {
            "activities": activities,
            "stats": stats,
            "pagination": window.describe(total),
        }

    async def list_user_activities(
        self,
        user_id: UUID,
        page: int = 1,
        limit: int = 20,
    ) -> dict[str, Any]:
        """List one actor's entries, newest first."""
        window = Page(page=page, limit=limit)
        activities, total = await self._repo.list_activities(
            actor_id=user_id, offset=window.offset, limit=window.limit
        )
        return {"activities": activities, "pagination": window.describe(total)}
