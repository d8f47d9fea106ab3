"""JWT token creation and validation.

Access and refresh tokens carry the same claims but are signed with
independent secrets, so a leaked access token can never be presented
at the refresh endpoint and vice versa.
"""

import re
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any, Protocol

import jwt
from pydantic import ValidationError

from contentdesk.core.auth.types import TokenPayload, TokenType
from contentdesk.core.exceptions import ContentDeskError

ALGORITHM = "HS256"
DEFAULT_EXPIRY_SECONDS = 3600

_DURATION_RE = re.compile(r"^(\d+)([smhd])$")
_UNIT_SECONDS = {"s": 1, "m": 60, "h": 3600, "d": 86400}


class TokenError(ContentDeskError):
    """Raised when token validation fails."""

    pass


class TokenSubject(Protocol):
    """Anything a token can be issued for."""

    @property
    def id(self) -> Any: ...

    @property
    def email(self) -> str: ...

    @property
    def role(self) -> str: ...


def parse_duration(value: str) -> int:
    """Convert a duration string such as "7d" or "15m" to seconds.

    Supported suffixes are s, m, h and d. Anything else falls back to
    one hour.
    """
    match = _DURATION_RE.match(value.strip()) if value else None
    if not match:
        return DEFAULT_EXPIRY_SECONDS
    amount, unit = match.groups()
    return int(amount) * _UNIT_SECONDS[unit]


@dataclass(frozen=True)
class TokenConfig:
    """Secrets and lifetimes for both token kinds."""

    access_secret: str
    refresh_secret: str
    access_expire: str = "7d"
    refresh_expire: str = "30d"


class TokenService:
    """Issues and verifies bearer tokens."""

    def __init__(self, config: TokenConfig) -> None:
        self._config = config
        self.access_ttl = parse_duration(config.access_expire)
        self.refresh_ttl = parse_duration(config.refresh_expire)

    def issue_access_token(self, user: TokenSubject) -> str:
        """Create a short-lived access token.

        Args:
            user: User the token is issued for.

        Returns:
            Encoded JWT string
        """
        return self._encode(user, TokenType.ACCESS, self.access_ttl, self._config.access_secret)

    def issue_refresh_token(self, user: TokenSubject) -> str:
        """Create a long-lived refresh token.

        Args:
            user: User the token is issued for.

        Returns:
            Encoded JWT string
        """
        return self._encode(
            user, TokenType.REFRESH, self.refresh_ttl, self._config.refresh_secret
        )

    def verify_access_token(self, token: str) -> TokenPayload:
        """Decode and validate an access token.

        Raises:
            TokenError: If token is invalid, tampered or expired.
        """
        return self._decode(
            token,
            TokenType.ACCESS,
            self._config.access_secret,
            "Invalid or expired token",
        )

    def verify_refresh_token(self, token: str) -> TokenPayload:
        """Decode and validate a refresh token.

        Raises:
            TokenError: If token is invalid, tampered or expired.
        """
        return self._decode(
            token,
            TokenType.REFRESH,
            self._config.refresh_secret,
            "Invalid or expired refresh token",
        )

    @staticmethod
    def _encode(user: TokenSubject, kind: TokenType, ttl: int, secret: str) -> str:
        now = datetime.now(UTC)
        expire = now + timedelta(seconds=ttl)

        payload = {
            "id": str(user.id),
            "email": user.email,
            "role": user.role,
            "type": kind.value,
            "exp": int(expire.timestamp()),
            "iat": int(now.timestamp()),
        }

        return jwt.encode(payload, secret, algorithm=ALGORITHM)

    @staticmethod
    def _decode(token: str, kind: TokenType, secret: str, message: str) -> TokenPayload:
        # Expired and tampered tokens are deliberately indistinguishable
        try:
            claims = jwt.decode(
                token,
                secret,
                algorithms=[ALGORITHM],
                options={"require": ["exp", "iat"]},
            )
            payload = TokenPayload(**claims)
        except (jwt.InvalidTokenError, ValidationError, TypeError):
            raise TokenError(message) from None

        if payload.type != kind:
            raise TokenError(message)
        return payload
