"""Auth adapters."""

from contentdesk.adapters.auth.postgres import PostgresAuthRepository
from contentdesk.adapters.auth.recovery_console import ConsoleRecoveryAdapter

__all__ = ["ConsoleRecoveryAdapter", "PostgresAuthRepository"]
