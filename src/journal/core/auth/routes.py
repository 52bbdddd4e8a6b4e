"""Authentication API routes."""

from fastapi import APIRouter

from journal.core.auth.dependencies import CurrentUser
from journal.core.auth.schemas import LoginRequest, TokenResponse
from journal.core.auth.service import AuthSvc
from journal.modules.users.schemas import UserResponse


router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/login",
    response_model=TokenResponse,
    summary="Login with email and password",
    description="Authenticate with email and password to receive an access token.",
)
async def login(data: LoginRequest, service: AuthSvc) -> TokenResponse:
    """Login with email and password."""
    _user, token = await service.login(email=data.email, password=data.password)
    return token


@router.get(
    "/me",
    response_model=UserResponse,
    summary="Get current user",
    description="Returns the currently authenticated user's profile and role.",
)
async def get_me(current_user: CurrentUser) -> UserResponse:
    """Get current user profile."""
    return UserResponse.model_validate(current_user)
