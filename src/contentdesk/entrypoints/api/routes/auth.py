"""Auth API routes for registration, login, tokens and password recovery."""

from typing import Annotated

from fastapi import APIRouter, Depends

from contentdesk.core.auth import AuthService
from contentdesk.entrypoints.api.deps import get_auth_service
from contentdesk.entrypoints.api.middleware.jwt_auth import ClientDep, RequireAuth
from contentdesk.entrypoints.api.schemas import (
    AccessTokenData,
    Envelope,
    ForgotPasswordRequest,
    LoginRequest,
    MessageResponse,
    RefreshRequest,
    RegisterRequest,
    ResetPasswordRequest,
    SessionData,
    UpdatePasswordRequest,
    UserData,
    UserOut,
)

router = APIRouter(prefix="/auth", tags=["auth"])

AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]


@router.post("/register", response_model=Envelope[SessionData], status_code=201)
async def register(
    body: RegisterRequest,
    service: AuthServiceDep,
    client: ClientDep,
) -> Envelope[SessionData]:
    """Register a new account and sign it in."""
    result = await service.register(
        email=body.email,
        name=body.name,
        password=body.password,
        role=body.role,
        client=client,
    )
    return Envelope(data=SessionData.model_validate(result))


@router.post("/login", response_model=Envelope[SessionData])
async def login(
    body: LoginRequest,
    service: AuthServiceDep,
    client: ClientDep,
) -> Envelope[SessionData]:
    """Authenticate user and return tokens.

    Args:
        body: Login credentials.
        service: Auth service.
        client: Request origin for the activity log.

    Returns:
        The user with an access and a refresh token.
    """
    result = await service.login(email=body.email, password=body.password, client=client)
    return Envelope(data=SessionData.model_validate(result))


@router.post("/refresh", response_model=Envelope[AccessTokenData])
async def refresh(
    body: RefreshRequest,
    service: AuthServiceDep,
) -> Envelope[AccessTokenData]:
    """Exchange a refresh token for a new access token."""
    result = await service.refresh(body.refresh_token or "")
    return Envelope(data=AccessTokenData.model_validate(result))


@router.get("/me", response_model=Envelope[UserData])
async def get_me(auth: RequireAuth, service: AuthServiceDep) -> Envelope[UserData]:
    """Get the current user's profile."""
    user = await service.get_me(auth.id)
    return Envelope(data=UserData(user=UserOut.model_validate(user)))


@router.post("/logout", response_model=MessageResponse)
async def logout(
    auth: RequireAuth,
    service: AuthServiceDep,
    client: ClientDep,
) -> MessageResponse:
    """Record a logout. The client discards its tokens."""
    await service.logout(auth.id, auth.email, client=client)
    return MessageResponse(message="Logged out successfully")


@router.put("/password", response_model=MessageResponse)
async def update_password(
    body: UpdatePasswordRequest,
    auth: RequireAuth,
    service: AuthServiceDep,
) -> MessageResponse:
    """Change the current user's password."""
    await service.update_password(auth.id, body.current_password, body.new_password)
    return MessageResponse(message="Password updated successfully")


@router.post("/forgot-password", response_model=MessageResponse)
async def forgot_password(
    body: ForgotPasswordRequest,
    service: AuthServiceDep,
) -> MessageResponse:
    """Send a password reset link if the account exists."""
    message = await service.forgot_password(body.email)
    return MessageResponse(message=message)


@router.post("/reset-password/{token}", response_model=MessageResponse)
async def reset_password(
    token: str,
    body: ResetPasswordRequest,
    service: AuthServiceDep,
    client: ClientDep,
) -> MessageResponse:
    """Set a new password using an emailed reset token."""
    await service.reset_password(token, body.password, client=client)
    return MessageResponse(
        message="Password has been reset successfully. You can now log in with your new password."
    )
