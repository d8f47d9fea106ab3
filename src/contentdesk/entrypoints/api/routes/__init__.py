"""API route modules."""

from fastapi import APIRouter

from contentdesk.entrypoints.api.routes.activities import router as activities_router
from contentdesk.entrypoints.api.routes.auth import router as auth_router
from contentdesk.entrypoints.api.routes.roles import router as roles_router
from contentdesk.entrypoints.api.routes.users import router as users_router

# Create main API router
api_router = APIRouter()

# Include all route modules
api_router.include_router(auth_router)
api_router.include_router(users_router)
api_router.include_router(roles_router)
api_router.include_router(activities_router)

__all__ = ["api_router"]
