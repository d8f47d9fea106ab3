"""Fire-and-forget activity recording for mutating operations."""

from typing import Any
from uuid import UUID

import structlog

from contentdesk.core.activity.repository import ActivityRepository
from contentdesk.core.activity.types import ActivityCreate, ActivityType, ClientInfo

logger = structlog.get_logger()


class ActivityRecorder:
    """Appends activity entries without ever failing the caller.

    A failed write is logged and swallowed: the mutation it describes has
    already happened and the client must not see an error for it.
    """

    def __init__(self, repo: ActivityRepository) -> None:
        self._repo = repo

    async def record(
        self,
        activity_type: ActivityType,
        actor_id: UUID,
        actor_name: str,
        description: str,
        client: ClientInfo | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> None:
        """Append one activity entry."""
        client = client or ClientInfo()
        try:
            entry = ActivityCreate(
                type=activity_type,
                actor_id=actor_id,
                actor_name=actor_name,
                description=description[:500],
                metadata=metadata,
                ip_address=client.ip_address,
                user_agent=client.user_agent,
            )
            await self._repo.record(entry)
        except Exception as e:
            # Log but don't fail the request
            logger.error(
                "activity_record_failed",
                activity_type=activity_type.value,
                actor_id=str(actor_id),
                error=str(e),
            )
