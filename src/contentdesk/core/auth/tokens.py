"""One-time password reset tokens.

The plaintext token travels only in the reset link. The user record keeps
its SHA-256 digest and a deadline, so a leaked database row cannot be
replayed against /api/auth/reset-password.
"""

import hashlib
import secrets
from datetime import UTC, datetime, timedelta

RESET_TOKEN_BYTES = 32
RESET_TOKEN_TTL = timedelta(hours=1)


def new_reset_token() -> str:
    """Random token for a reset link, hex encoded."""
    return secrets.token_hex(RESET_TOKEN_BYTES)


def digest_reset_token(token: str) -> str:
    """Digest stored on the user and used to look the user up again."""
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


def reset_deadline(ttl: timedelta = RESET_TOKEN_TTL) -> datetime:
    return datetime.now(UTC) + ttl


def reset_window_closed(deadline: datetime | None) -> bool:
    """Whether a stored reset deadline no longer admits a reset.

    A user who never requested a reset has no deadline and is closed.
    Deadlines read back without tzinfo are taken as UTC.
    """
    if deadline is None:
        return True
    if deadline.tzinfo is None:
        deadline = deadline.replace(tzinfo=UTC)
    return datetime.now(UTC) > deadline
