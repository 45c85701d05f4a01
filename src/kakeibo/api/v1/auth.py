"""Authentication API endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from kakeibo.api.deps import get_auth_service, get_current_user, get_household_id
from kakeibo.models.user import User
from kakeibo.schemas.auth import (
    CurrentUser,
    LoginRequest,
    ProfileResponse,
    RefreshRequest,
    TokenPair,
    UserResponse,
    UserSignup,
)
from kakeibo.services.auth import AuthService

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/signup",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
    description="""
    Create a user account, its profile and its household membership.

    New users join the shared household. Their role (`papa` or `mama`) is also
    the tag they use by default.

    ## Error Codes
    - AUTH_003: Email already registered (409)
    - DB_001: The database rejected the sign-up
    """,
)
async def signup(
    user_data: UserSignup,
    auth_service: AuthService = Depends(get_auth_service),
) -> UserResponse:
    user = await auth_service.signup(
        email=user_data.email,
        password=user_data.password,
        role=user_data.role,
        display_name=user_data.display_name,
    )
    return UserResponse.model_validate(user)


@router.post(
    "/login",
    response_model=TokenPair,
    summary="Login with email and password",
)
async def login(
    credentials: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> TokenPair:
    """Authenticate and return an access/refresh token pair."""
    return await auth_service.login(credentials.email, credentials.password)


@router.post("/refresh", response_model=TokenPair, summary="Refresh access token")
async def refresh(
    refresh_data: RefreshRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> TokenPair:
    return await auth_service.refresh_tokens(refresh_data.refresh_token)


@router.get("/me", response_model=CurrentUser, summary="Get current user")
async def get_me(
    current_user: User = Depends(get_current_user),
    household_id: UUID = Depends(get_household_id),
    auth_service: AuthService = Depends(get_auth_service),
) -> CurrentUser:
    """Current user with profile and the household their data belongs to."""
    profile = await auth_service.get_profile(current_user.id)
    return CurrentUser(
        id=current_user.id,
        email=current_user.email,
        profile=ProfileResponse.model_validate(profile) if profile else None,
        household_id=household_id,
    )
