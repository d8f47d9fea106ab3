"""Auth domain types."""

from datetime import datetime
from enum import Enum
from uuid import UUID

from pydantic import BaseModel, EmailStr


class UserStatus(str, Enum):
    """Account status. Only active accounts may authenticate."""

    ACTIVE = "active"
    INACTIVE = "inactive"


class TokenType(str, Enum):
    """Kinds of bearer tokens issued by the token service."""

    ACCESS = "access"
    REFRESH = "refresh"


DEFAULT_ROLE = "viewer"


class User(BaseModel):
    """User domain model.

    The password hash and reset token fields are loaded only by the
    credential-checking paths; API responses are built from UserPublic.
    """

    id: UUID
    email: EmailStr
    name: str
    password_hash: str | None = None
    role: str = DEFAULT_ROLE
    status: UserStatus = UserStatus.ACTIVE
    avatar: str | None = None
    join_date: datetime
    last_login: datetime | None = None
    reset_password_token: str | None = None
    reset_password_expires: datetime | None = None
    created_at: datetime
    updated_at: datetime | None = None

    @property
    def is_active(self) -> bool:
        """Whether the account may authenticate."""
        return self.status == UserStatus.ACTIVE

    def to_public(self) -> "UserPublic":
        """Strip credential fields."""
        return UserPublic(
            id=self.id,
            email=self.email,
            name=self.name,
            role=self.role,
            status=self.status,
            avatar=self.avatar,
            join_date=self.join_date,
            last_login=self.last_login,
        )


class UserPublic(BaseModel):
    """User fields that may leave the service."""

    id: UUID
    email: str
    name: str
    role: str
    status: UserStatus
    avatar: str | None = None
    join_date: datetime
    last_login: datetime | None = None


class TokenPayload(BaseModel):
    """JWT token payload claims."""

    id: str  # user id
    email: str
    role: str
    type: TokenType
    exp: int  # expiration timestamp
    iat: int  # issued at timestamp
