"""Activity log routes."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from contentdesk.core.activity import ActivityType
from contentdesk.entrypoints.api.deps import get_activity_service
from contentdesk.entrypoints.api.middleware.jwt_auth import RequireAdmin
from contentdesk.entrypoints.api.schemas import (
    ActivityListData,
    Envelope,
    UserActivityListData,
)
from contentdesk.services import ActivityService

router = APIRouter(prefix="/activities", tags=["activities"])

ActivityServiceDep = Annotated[ActivityService, Depends(get_activity_service)]


@router.get("", response_model=Envelope[ActivityListData])
async def list_activities(
    auth: RequireAdmin,
    service: ActivityServiceDep,
    activity_type: Annotated[ActivityType | None, Query(alias="type")] = None,
    actor: UUID | None = None,
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=200)] = 50,
) -> Envelope[ActivityListData]:
    """List activity entries, newest first, with volume stats."""
    result = await service.list_activities(
        activity_type=activity_type, actor_id=actor, page=page, limit=limit
    )
    return Envelope(data=ActivityListData.model_validate(result))


@router.get("/user/{user_id}", response_model=Envelope[UserActivityListData])
async def list_user_activities(
    user_id: UUID,
    auth: RequireAdmin,
    service: ActivityServiceDep,
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=200)] = 20,
) -> Envelope[UserActivityListData]:
    """List one user's activity entries."""
    result = await service.list_user_activities(user_id, page=page, limit=limit)
    return Envelope(data=UserActivityListData.model_validate(result))
