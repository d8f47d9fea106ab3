"""PostgreSQL implementation of ActivityRepository."""

import json
from datetime import datetime
from typing import Any
from uuid import UUID

from contentdesk.adapters.db.app_db import AppDatabase
from contentdesk.core.activity.types import ActivityCreate, ActivityEntry, ActivityType

ACTIVITY_COLUMNS = (
    "id, type, actor_id, actor_name, description, metadata, ip_address, user_agent, created_at"
)


class PostgresActivityRepository:
    """Append-only activity table."""

    def __init__(self, db: AppDatabase) -> None:
        self._db = db

    def _row_to_entry(self, row: dict[str, Any]) -> ActivityEntry:
        metadata = row.get("metadata")
        # asyncpg hands JSONB back as text unless a codec is registered
        if isinstance(metadata, str):
            metadata = json.loads(metadata)
        return ActivityEntry(
            id=row["id"],
            type=ActivityType(row["type"]),
            actor_id=row.get("actor_id"),
            actor_name=row["actor_name"],
            description=row["description"],
            metadata=metadata,
            ip_address=row.get("ip_address"),
            user_agent=row.get("user_agent"),
            created_at=row["created_at"],
        )

    async def record(self, entry: ActivityCreate) -> ActivityEntry:
        """Append an entry."""
        row = await self._db.fetch_one(
            f"""
            INSERT INTO activities
                (type, actor_id, actor_name, description, metadata, ip_address, user_agent)
            VALUES ($1, $2, $3, $4, $5, $6, $7)
            RETURNING {ACTIVITY_COLUMNS}
            """,
            entry.type.value,
            entry.actor_id,
            entry.actor_name,
            entry.description,
            json.dumps(entry.metadata) if entry.metadata is not None else None,
            entry.ip_address,
            entry.user_agent,
        )
        assert row is not None, "INSERT RETURNING should always return a row"
        return self._row_to_entry(row)

    async def list_activities(
        self,
        activity_type: ActivityType | None = None,
        actor_id: UUID | None = None,
        offset: int = 0,
        limit: int = 50,
    ) -> tuple[list[ActivityEntry], int]:
        """List entries newest first, with the total match count."""
        clauses = []
        params: list[Any] = []
        if activity_type is not None:
            params.append(activity_type.value)
            clauses.append(f"type = ${len(params)}")
        if actor_id is not None:
            params.append(actor_id)
            clauses.append(f"actor_id = ${len(params)}")
        where = f" WHERE {' AND '.join(clauses)}" if clauses else ""

        total = await self._db.fetch_val(f"SELECT COUNT(*) FROM activities{where}", *params)
        rows = await self._db.fetch_all(
            f"""
            SELECT {ACTIVITY_COLUMNS} FROM activities{where}
            ORDER BY created_at DESC
            OFFSET ${len(params) + 1} LIMIT ${len(params) + 2}
            """,
            *params,
            offset,
            limit,
        )
        return [self._row_to_entry(row) for row in rows], int(total or 0)

    async def count_since(self, since: datetime | None = None) -> int:
        """Count entries created at or after `since`."""
        if since is None:
            total = await self._db.fetch_val("SELECT COUNT(*) FROM activities")
        else:
            total = await self._db.fetch_val(
                "SELECT COUNT(*) FROM activities WHERE created_at >= $1", since
            )
        return int(total or 0)
