"""Activity log adapters."""

from contentdesk.adapters.activity.postgres import PostgresActivityRepository

__all__ = ["PostgresActivityRepository"]
