"""Request and response bodies.

Responses serialize with camelCase keys; requests accept either camelCase
or snake_case.
"""

import re
from datetime import datetime
from typing import Annotated, Any, Generic, Literal, TypeVar
from uuid import UUID

from pydantic import AfterValidator, BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel

from contentdesk.core.activity import ActivityType
from contentdesk.core.auth import UserStatus
from contentdesk.core.rbac import PermissionCategory

T = TypeVar("T")

PASSWORD_RULES_MESSAGE = (
    "Password must contain at least one uppercase letter, one lowercase letter, and one number"
)
_PASSWORD_RE = re.compile(r"^(?=.*[a-z])(?=.*[A-Z])(?=.*\d)")


def check_password_strength(value: str) -> str:
    """Require a lowercase letter, an uppercase letter and a digit."""
    if not _PASSWORD_RE.match(value):
        raise ValueError(PASSWORD_RULES_MESSAGE)
    return value


StrongPassword = Annotated[str, Field(min_length=8), AfterValidator(check_password_strength)]


class CamelModel(BaseModel):
    """Base for every body on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class Envelope(CamelModel, Generic[T]):
    """Successful response carrying data."""

    success: bool = True
    data: T


class MessageResponse(CamelModel):
    """Successful response carrying only a message."""

    success: bool = True
    message: str


# Users


class UserOut(CamelModel):
    """Public view of a user."""

    id: UUID
    email: str
    name: str
    role: str
    status: UserStatus
    avatar: str | None = None
    join_date: datetime
    last_login: datetime | None = None


class UserData(CamelModel):
    user: UserOut


class SessionData(CamelModel):
    """A user plus a fresh token pair."""

    user: UserOut
    access_token: str
    refresh_token: str


class AccessTokenData(CamelModel):
    access_token: str


class UserStats(CamelModel):
    total: int
    active: int
    inactive: int
    admins: int
    editors: int
    viewers: int


class Pagination(CamelModel):
    page: int
    limit: int
    total: int
    pages: int


class UserListData(CamelModel):
    users: list[UserOut]
    stats: UserStats
    pagination: Pagination


# Auth requests


class RegisterRequest(CamelModel):
    """Self-registration body."""

    email: EmailStr
    name: str = Field(..., min_length=2, max_length=50)
    password: StrongPassword
    role: Literal["admin", "editor", "viewer"] = "viewer"


class LoginRequest(CamelModel):
    email: EmailStr
    password: str


class RefreshRequest(CamelModel):
    refresh_token: str | None = None


class UpdatePasswordRequest(CamelModel):
    current_password: str
    new_password: StrongPassword


class ForgotPasswordRequest(CamelModel):
    email: EmailStr


class ResetPasswordRequest(CamelModel):
    password: StrongPassword


# User administration requests


class CreateUserRequest(CamelModel):
    """Admin-created account."""

    email: EmailStr
    name: str = Field(..., min_length=2, max_length=50)
    password: StrongPassword
    role: str = Field("viewer", min_length=1, max_length=50)
    status: UserStatus = UserStatus.ACTIVE
    avatar: str | None = None


class UpdateUserRequest(CamelModel):
    """Admin edit of a user. `password` is accepted only to be rejected."""

    email: EmailStr | None = None
    name: str | None = Field(None, min_length=2, max_length=50)
    role: str | None = Field(None, min_length=1, max_length=50)
    status: UserStatus | None = None
    avatar: str | None = None
    password: str | None = None


class UpdateMeRequest(CamelModel):
    """Self-service profile edit. `password` and `role` are rejected."""

    email: EmailStr | None = None
    name: str | None = Field(None, min_length=2, max_length=50)
    avatar: str | None = None
    password: str | None = None
    role: str | None = None


# Roles


class RoleOut(CamelModel):
    id: UUID
    name: str
    slug: str
    description: str | None = None
    permissions: list[str]
    is_system: bool
    created_at: datetime
    updated_at: datetime | None = None


class RoleData(CamelModel):
    role: RoleOut


class RoleListData(CamelModel):
    roles: list[RoleOut]
    count: int


class PermissionOut(CamelModel):
    id: UUID
    name: str
    slug: str
    category: PermissionCategory
    description: str | None = None


class PermissionCatalogData(CamelModel):
    permissions: list[PermissionOut]
    grouped: dict[str, list[PermissionOut]]
    count: int


class CreateRoleRequest(CamelModel):
    name: str = Field(..., min_length=1, max_length=50)
    description: str | None = Field(None, max_length=200)
    permissions: list[str] = []

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Role name is required")
        return value.strip()


class UpdateRoleRequest(CamelModel):
    name: str | None = Field(None, min_length=1, max_length=50)
    description: str | None = Field(None, max_length=200)
    permissions: list[str] | None = None

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str | None) -> str | None:
        if value is not None and not value.strip():
            raise ValueError("Role name is required")
        return value.strip() if value is not None else None


# Activities


class ActivityOut(CamelModel):
    id: UUID
    type: ActivityType
    actor_id: UUID | None = None
    actor_name: str
    description: str
    metadata: dict[str, Any] | None = None
    ip_address: str | None = None
    user_agent: str | None = None
    created_at: datetime


class ActivityStats(CamelModel):
    total: int
    today_count: int
    this_week_count: int
    this_month_count: int


class ActivityListData(CamelModel):
    activities: list[ActivityOut]
    stats: ActivityStats
    pagination: Pagination


class UserActivityListData(CamelModel):
    activities: list[ActivityOut]
    pagination: Pagination
