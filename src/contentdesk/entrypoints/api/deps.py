"""Dependency injection and application lifespan management."""

from __future__ import annotations

import os
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Annotated

import structlog
from fastapi import Depends, Request

from contentdesk.adapters.activity.postgres import PostgresActivityRepository
from contentdesk.adapters.auth.postgres import PostgresAuthRepository
from contentdesk.adapters.auth.recovery_console import ConsoleRecoveryAdapter
from contentdesk.adapters.db.app_db import AppDatabase
from contentdesk.adapters.rbac.postgres import PostgresRoleRepository
from contentdesk.core.activity import ActivityRecorder, ActivityRepository
from contentdesk.core.auth import (
    AuthRepository,
    AuthService,
    PasswordRecoveryAdapter,
    TokenConfig,
    TokenService,
)
from contentdesk.core.exceptions import ConfigurationError
from contentdesk.core.rbac import AccessPolicy, RoleRepository, RoleService
from contentdesk.logging_config import configure_logging
from contentdesk.seed import run_seed
from contentdesk.services import ActivityService, UserService

if TYPE_CHECKING:
    from fastapi import FastAPI

logger = structlog.get_logger()

# Development fallbacks; Settings.validate() refuses them outside development
DEV_JWT_SECRET = "contentdesk-dev-access-secret"  # pragma: allowlist secret
DEV_JWT_REFRESH_SECRET = "contentdesk-dev-refresh-secret"  # pragma: allowlist secret

RELAXED_ENVIRONMENTS = frozenset({"development", "test"})


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


class Settings:
    """Application settings loaded from environment."""

    def __init__(self) -> None:
        """Load settings from environment variables."""
        self.app_env = os.getenv("APP_ENV", "development").strip().lower()
        self.database_url = os.getenv("DATABASE_URL", "postgresql://localhost:5432/contentdesk")

        # Token settings; empty values count as unset
        self.jwt_secret = os.getenv("JWT_SECRET") or DEV_JWT_SECRET
        self.jwt_expire = os.getenv("JWT_EXPIRE", "7d")
        self.jwt_refresh_secret = os.getenv("JWT_REFRESH_SECRET") or DEV_JWT_REFRESH_SECRET
        self.jwt_refresh_expire = os.getenv("JWT_REFRESH_EXPIRE", "30d")

        # Frontend URL for building reset links
        self.frontend_url = os.getenv("FRONTEND_URL", "http://localhost:5173")
        self.cors_origins = [
            origin.strip()
            for origin in os.getenv("CORS_ORIGINS", "http://localhost:5173").split(",")
            if origin.strip()
        ]

        self.log_level = os.getenv("LOG_LEVEL", "INFO")
        self.log_json = _env_flag("LOG_JSON", self.app_env != "development")

        self.rate_limit_per_minute = int(os.getenv("RATE_LIMIT_PER_MINUTE", "100"))
        self.rate_limit_enabled = _env_flag("RATE_LIMIT_ENABLED", True)

        # Seeding
        self.seed_on_startup = _env_flag("SEED_ON_STARTUP", False)
        self.admin_email = os.getenv("ADMIN_EMAIL") or None
        self.admin_password = os.getenv("ADMIN_PASSWORD") or None
        self.admin_name = os.getenv("ADMIN_NAME") or None

    @property
    def token_config(self) -> TokenConfig:
        """Token secrets and lifetimes."""
        return TokenConfig(
            access_secret=self.jwt_secret,
            refresh_secret=self.jwt_refresh_secret,
            access_expire=self.jwt_expire,
            refresh_expire=self.jwt_refresh_expire,
        )

    def validate(self) -> None:
        """Refuse to run with development secrets outside development.

        Raises:
            ConfigurationError: Unsafe JWT secrets in a non-development
                environment.
        """
        problems = []
        if self.jwt_secret == DEV_JWT_SECRET:
            problems.append("JWT_SECRET is unset")
        if self.jwt_refresh_secret == DEV_JWT_REFRESH_SECRET:
            problems.append("JWT_REFRESH_SECRET is unset")
        if self.jwt_secret == self.jwt_refresh_secret:
            problems.append("JWT_SECRET and JWT_REFRESH_SECRET must differ")

        if not problems:
            return

        if self.app_env in RELAXED_ENVIRONMENTS:
            logger.warning("insecure_jwt_configuration", app_env=self.app_env, problems=problems)
            return

        raise ConfigurationError(
            f"Refusing to start in '{self.app_env}': {'; '.join(problems)}"
        )


settings = Settings()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan - setup and teardown.

    This context manager handles:
    - Configuration validation
    - Optional schema creation and seeding
    - Database connection pool setup
    """
    settings.validate()

    if settings.seed_on_startup:
        logger.info("seeding_on_startup")
        await run_seed(
            settings.database_url,
            admin_email=settings.admin_email,
            admin_password=settings.admin_password,
            admin_name=settings.admin_name,
        )

    app_db = AppDatabase(settings.database_url)
    await app_db.connect()

    # Store in app state
    app.state.app_db = app_db
    app.state.token_service = TokenService(settings.token_config)
    app.state.recovery_adapter = ConsoleRecoveryAdapter()
    app.state.frontend_url = settings.frontend_url

    logger.info("application_started", app_env=settings.app_env)

    yield

    await app_db.close()


def setup_logging() -> None:
    """Configure structlog from the loaded settings."""
    configure_logging(settings.log_level, settings.log_json)


def get_app_db(request: Request) -> AppDatabase:
    """Get the application database from app state.

    Args:
        request: The current request.

    Returns:
        The configured AppDatabase.
    """
    app_db: AppDatabase = request.app.state.app_db
    return app_db


def get_token_service(request: Request) -> TokenService:
    """Get the token service from app state."""
    tokens: TokenService = request.app.state.token_service
    return tokens


def get_recovery_adapter(request: Request) -> PasswordRecoveryAdapter:
    """Get password recovery adapter from app state.

    Args:
        request: The current request.

    Returns:
        The configured password recovery adapter.
    """
    adapter: PasswordRecoveryAdapter = request.app.state.recovery_adapter
    return adapter


def get_frontend_url(request: Request) -> str:
    """Get frontend URL from app state."""
    frontend_url: str = request.app.state.frontend_url
    return frontend_url


AppDbDep = Annotated[AppDatabase, Depends(get_app_db)]


def get_auth_repository(app_db: AppDbDep) -> AuthRepository:
    """Credential store over the app database."""
    return PostgresAuthRepository(app_db)


def get_role_repository(app_db: AppDbDep) -> RoleRepository:
    """Role table over the app database."""
    return PostgresRoleRepository(app_db)


def get_activity_repository(app_db: AppDbDep) -> ActivityRepository:
    """Activity log over the app database."""
    return PostgresActivityRepository(app_db)


def get_activity_recorder(
    repo: Annotated[ActivityRepository, Depends(get_activity_repository)],
) -> ActivityRecorder:
    """Fire-and-forget activity recorder."""
    return ActivityRecorder(repo)


def get_access_policy(
    roles: Annotated[RoleRepository, Depends(get_role_repository)],
) -> AccessPolicy:
    """Role and permission gate evaluator."""
    return AccessPolicy(roles)


def get_auth_service(
    repo: Annotated[AuthRepository, Depends(get_auth_repository)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
    activity: Annotated[ActivityRecorder, Depends(get_activity_recorder)],
    recovery: Annotated[PasswordRecoveryAdapter, Depends(get_recovery_adapter)],
    frontend_url: Annotated[str, Depends(get_frontend_url)],
) -> AuthService:
    """Get auth service for the current request."""
    return AuthService(repo, tokens, activity, recovery=recovery, frontend_url=frontend_url)


def get_user_service(
    repo: Annotated[AuthRepository, Depends(get_auth_repository)],
    activity: Annotated[ActivityRecorder, Depends(get_activity_recorder)],
) -> UserService:
    """Get user administration service for the current request."""
    return UserService(repo, activity)


def get_role_service(
    roles: Annotated[RoleRepository, Depends(get_role_repository)],
) -> RoleService:
    """Get role service for the current request."""
    return RoleService(roles)


def get_activity_service(
    repo: Annotated[ActivityRepository, Depends(get_activity_repository)],
) -> ActivityService:
    """Get activity query service for the current request."""
    return ActivityService(repo)
