"""Auth service for login, registration, and token management."""

from datetime import UTC, datetime
from typing import Any
from uuid import UUID

import structlog

from contentdesk.core.activity import ActivityRecorder, ActivityType, ClientInfo
from contentdesk.core.auth.jwt import TokenError, TokenService
from contentdesk.core.auth.password import hash_password, verify_password
from contentdesk.core.auth.recovery import PasswordRecoveryAdapter
from contentdesk.core.auth.repository import AuthRepository
from contentdesk.core.auth.tokens import (
    digest_reset_token,
    new_reset_token,
    reset_deadline,
    reset_window_closed,
)
from contentdesk.core.auth.types import DEFAULT_ROLE, User, UserStatus
from contentdesk.core.exceptions import (
    AppError,
    BadRequestError,
    ForbiddenError,
    NotFoundError,
    UnauthorizedError,
)

logger = structlog.get_logger()

RESET_REQUESTED_MESSAGE = (
    "If an account with that email exists, a password reset link has been sent."
)


def normalize_email(email: str) -> str:
    """Canonical form used for every email lookup and write."""
    return email.strip().lower()


class AuthService:
    """Service for authentication operations."""

    def __init__(
        self,
        repo: AuthRepository,
        tokens: TokenService,
        activity: ActivityRecorder,
        recovery: PasswordRecoveryAdapter | None = None,
        frontend_url: str = "",
    ) -> None:
        """Initialize with the credential store and collaborators.

        Args:
            repo: Auth repository for database operations.
            tokens: Token service used to mint access/refresh tokens.
            activity: Recorder for login/registration activity.
            recovery: Delivers password reset links.
            frontend_url: Base URL of the dashboard, used in reset links.
        """
        self._repo = repo
        self._tokens = tokens
        self._activity = activity
        self._recovery = recovery
        self._frontend_url = frontend_url.rstrip("/")

    def _session(self, user: User) -> dict[str, Any]:
        return {
            "user": user.to_public(),
            "access_token": self._tokens.issue_access_token(user),
            "refresh_token": self._tokens.issue_refresh_token(user),
        }

    async def register(
        self,
        email: str,
        name: str,
        password: str,
        role: str | None = None,
        client: ClientInfo | None = None,
    ) -> dict[str, Any]:
        """Register a new user and return a session.

        Args:
            email: User's email address, any case.
            name: User's display name.
            password: Plain text password.
            role: Role identifier, "viewer" when omitted.
            client: Request origin for the activity log.

        Returns:
            Dict with the public user and both tokens.

        Raises:
            BadRequestError: If the email is already registered.
        """
        normalized = normalize_email(email)

        existing = await self._repo.get_user_by_email(normalized)
        if existing:
            raise BadRequestError("User already exists with this email")

        user = await self._repo.create_user(
            email=normalized,
            name=name,
            password_hash=hash_password(password),
            role=role or DEFAULT_ROLE,
            status=UserStatus.ACTIVE,
        )

        await self._activity.record(
            ActivityType.USER_REGISTER,
            actor_id=user.id,
            actor_name=user.name,
            description=f"New user registered: {user.email}",
            client=client,
        )

        logger.info("user_registered", user_id=str(user.id), role=user.role)
        return self._session(user)

    async def login(
        self,
        email: str,
        password: str,
        client: ClientInfo | None = None,
    ) -> dict[str, Any]:
        """Authenticate user and return a session.

        Args:
            email: User's email address, any case.
            password: Plain text password.
            client: Request origin for the activity log.

        Returns:
            Dict with the public user and both tokens.

        Raises:
            UnauthorizedError: Unknown email or wrong password.
            ForbiddenError: The account is inactive.
        """
        user = await self._repo.get_user_by_email(normalize_email(email), include_secrets=True)
        if not user:
            raise UnauthorizedError("Invalid credentials")

        if not user.is_active:
            raise ForbiddenError("Account is inactive. Please contact support.")

        if not verify_password(password, user.password_hash):
            logger.info("login_failed", user_id=str(user.id))
            raise UnauthorizedError("Invalid credentials")

        user = await self._repo.update_user(user.id, last_login=datetime.now(UTC)) or user

        await self._activity.record(
            ActivityType.LOGIN,
            actor_id=user.id,
            actor_name=user.name,
            description=f"User logged in: {user.email}",
            client=client,
        )

        logger.info("user_logged_in", user_id=str(user.id))
        return self._session(user)

    async def refresh(self, refresh_token: str) -> dict[str, Any]:
        """Exchange a refresh token for a new access token.

        The user is re-read so that deleted or deactivated accounts
        cannot keep minting access tokens.

        Raises:
            BadRequestError: No token supplied.
            UnauthorizedError: Token invalid, or user gone or inactive.
        """
        if not refresh_token or not refresh_token.strip():
            raise BadRequestError("Refresh token is required")

        try:
            payload = self._tokens.verify_refresh_token(refresh_token)
        except TokenError as e:
            raise UnauthorizedError(str(e)) from None

        user = await self._repo.get_user_by_id(_parse_uuid(payload.id))
        if not user or not user.is_active:
            raise UnauthorizedError("Invalid refresh token")

        return {"access_token": self._tokens.issue_access_token(user)}

    async def get_me(self, user_id: UUID) -> User:
        """Load the caller's own record."""
        user = await self._repo.get_user_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")
        return user

    async def update_password(
        self,
        user_id: UUID,
        current_password: str,
        new_password: str,
    ) -> None:
        """Change the caller's password after checking the current one."""
        user = await self._repo.get_user_by_id(user_id, include_secrets=True)
        if not user:
            raise NotFoundError("User not found")

        if not verify_password(current_password, user.password_hash):
            raise BadRequestError("Current password is incorrect")

        await self._repo.update_user(user.id, password_hash=hash_password(new_password))
        logger.info("password_updated", user_id=str(user.id))

    async def forgot_password(self, email: str) -> str:
        """Start a password reset.

        Unknown and inactive emails get the same answer as real ones so
        that the endpoint cannot be used to enumerate accounts.

        Returns:
            The message to show the caller.

        Raises:
            AppError: The recovery adapter failed to deliver the link.
        """
        normalized = normalize_email(email)
        user = await self._repo.get_user_by_email(normalized)

        if not user:
            logger.warning("password_reset_requested_unknown_email")
            return RESET_REQUESTED_MESSAGE

        if not user.is_active:
            logger.warning("password_reset_requested_inactive_user", user_id=str(user.id))
            return RESET_REQUESTED_MESSAGE

        token = new_reset_token()
        await self._repo.set_reset_token(user.id, digest_reset_token(token), reset_deadline())

        reset_url = f"{self._frontend_url}/reset-password/{token}"
        delivered = False
        if self._recovery is not None:
            delivered = await self._recovery.initiate_recovery(
                user_email=user.email,
                user_name=user.name,
                token=token,
                reset_url=reset_url,
            )

        if not delivered:
            logger.error("password_reset_delivery_failed", user_id=str(user.id))
            await self._repo.set_reset_token(user.id, None, None)
            raise AppError("Failed to send password reset email. Please try again later.", 500)

        logger.info("password_reset_link_sent", user_id=str(user.id))
        return "Password reset link has been sent to your email."

    async def reset_password(
        self,
        token: str,
        new_password: str,
        client: ClientInfo | None = None,
    ) -> None:
        """Set a new password using a reset token.

        Raises:
            BadRequestError: Token unknown or expired.
        """
        user = await self._repo.get_user_by_reset_token(digest_reset_token(token))
        if not user or reset_window_closed(user.reset_password_expires):
            raise BadRequestError("Invalid or expired password reset token")

        await self._repo.update_user(user.id, password_hash=hash_password(new_password))
        await self._repo.set_reset_token(user.id, None, None)

        await self._activity.record(
            ActivityType.USER_EDIT,
            actor_id=user.id,
            actor_name=user.name,
            description=f"Password reset for user: {user.email}",
            client=client,
        )

        logger.info("password_reset_successful", user_id=str(user.id))

    async def logout(
        self,
        user_id: UUID,
        email: str,
        client: ClientInfo | None = None,
    ) -> None:
        """Record a logout. Tokens are stateless and stay valid until expiry."""
        await self._activity.record(
            ActivityType.LOGOUT,
            actor_id=user_id,
            actor_name=email,
            description=f"User logged out: {email}",
            client=client,
        )


def _parse_uuid(value: str) -> UUID:
    try:
        return UUID(value)
    except ValueError:
        raise UnauthorizedError("Invalid refresh token") from None
