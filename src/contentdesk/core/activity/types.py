"""Activity log types."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class ActivityType(str, Enum):
    """Kinds of audited platform activity."""

    NEWS_ADD = "news_add"
    NEWS_EDIT = "news_edit"
    NEWS_DELETE = "news_delete"
    CAROUSEL_ADD = "carousel_add"
    CAROUSEL_EDIT = "carousel_edit"
    CAROUSEL_DELETE = "carousel_delete"
    CATEGORY_ADD = "category_add"
    CATEGORY_EDIT = "category_edit"
    CATEGORY_DELETE = "category_delete"
    MESSAGE_REPLY = "message_reply"
    USER_REGISTER = "user_register"
    USER_DELETE = "user_delete"
    USER_EDIT = "user_edit"
    LOGIN = "login"
    LOGOUT = "logout"


@dataclass(frozen=True)
class ClientInfo:
    """Where a request came from."""

    ip_address: str | None = None
    user_agent: str | None = None


class ActivityCreate(BaseModel):
    """Request to append an activity entry."""

    model_config = ConfigDict(frozen=True)

    type: ActivityType
    actor_id: UUID
    actor_name: str
    description: str = Field(..., max_length=500)
    metadata: dict[str, Any] | None = None
    ip_address: str | None = None
    user_agent: str | None = None


class ActivityEntry(BaseModel):
    """Activity entry from the database."""

    model_config = ConfigDict(frozen=True)

    id: UUID
    type: ActivityType
    actor_id: UUID | None = None
    actor_name: str
    description: str
    metadata: dict[str, Any] | None = None
    ip_address: str | None = None
    user_agent: str | None = None
    created_at: datetime
