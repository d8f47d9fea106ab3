"""Auth domain types and utilities."""

from contentdesk.core.auth.jwt import (
    TokenConfig,
    TokenError,
    TokenService,
    parse_duration,
)
from contentdesk.core.auth.password import hash_password, verify_password
from contentdesk.core.auth.recovery import PasswordRecoveryAdapter
from contentdesk.core.auth.repository import AuthRepository
from contentdesk.core.auth.service import AuthService, normalize_email
from contentdesk.core.auth.types import (
    DEFAULT_ROLE,
    TokenPayload,
    TokenType,
    User,
    UserPublic,
    UserStatus,
)

__all__ = [
    "DEFAULT_ROLE",
    "AuthRepository",
    "AuthService",
    "PasswordRecoveryAdapter",
    "TokenConfig",
    "TokenError",
    "TokenPayload",
    "TokenService",
    "TokenType",
    "User",
    "UserPublic",
    "UserStatus",
    "hash_password",
    "normalize_email",
    "parse_duration",
    "verify_password",
]
