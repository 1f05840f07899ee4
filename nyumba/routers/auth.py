"""
Authentication API endpoints for registration, login, token refresh and the
current profile.
"""

from fastapi import APIRouter, Depends, status

from nyumba.config import settings
from nyumba.models.user import Profile
from nyumba.schemas.auth import (
    AccessTokenResponse,
    LoginRequest,
    LoginResponse,
    RefreshTokenRequest
)
from nyumba.schemas.error import get_common_error_responses, get_error_responses
from nyumba.schemas.user import ProfileCreate, ProfileResponse, ProfileUpdate
from nyumba.services.auth import AuthService
from nyumba.utils.dependencies import get_auth_service, get_current_active_user


router = APIRouter(prefix="/auth", tags=["Authentication"])


def _login_response(profile: Profile, access_token: str, refresh_token: str) -> LoginResponse:
    return LoginResponse(
        user=ProfileResponse.model_validate(profile.to_dict()),
        access_token=access_token,
        refresh_token=refresh_token,
        token_type="bearer",
        expires_in=settings.access_token_expire_minutes * 60
    )


@router.post(
    "/register",
    response_model=LoginResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create an account",
    description="Sign up as a tenant, caretaker or mover. Returns the profile with JWT tokens.",
    responses=get_error_responses(403, 409, 422)
)
async def register(
    profile_data: ProfileCreate,
    auth_service: AuthService = Depends(get_auth_service)
) -> LoginResponse:
    profile, access_token, refresh_token = await auth_service.register(profile_data)
    return _login_response(profile, access_token, refresh_token)


@router.post(
    "/login",
    response_model=LoginResponse,
    status_code=status.HTTP_200_OK,
    summary="User login",
    description="Authenticate with email and password, returns JWT tokens",
    responses=get_error_responses(401, 403, 422)
)
async def login(
    login_data: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service)
) -> LoginResponse:
    """
    Raises:
        InvalidCredentialsError: If credentials are invalid
        InactiveUserError: If the account is inactive
    """
    profile, access_token, refresh_token = await auth_service.login(
        email=login_data.email,
        password=login_data.password
    )
    return _login_response(profile, access_token, refresh_token)


@router.post(
    "/refresh",
    response_model=AccessTokenResponse,
    status_code=status.HTTP_200_OK,
    summary="Refresh access token",
    description="Generate a new access token using a refresh token",
    responses=get_error_responses(401, 403, 422)
)
async def refresh_token(
    refresh_data: RefreshTokenRequest,
    auth_service: AuthService = Depends(get_auth_service)
) -> AccessTokenResponse:
    access_token = await auth_service.refresh_access_token(refresh_data.refresh_token)
    return AccessTokenResponse(
        access_token=access_token,
        token_type="bearer",
        expires_in=settings.access_token_expire_minutes * 60
    )


@router.get(
    "/me",
    response_model=ProfileResponse,
    status_code=status.HTTP_200_OK,
    summary="Get current profile",
    responses=get_common_error_responses()
)
async def get_current_user_info(
    current_user: Profile = Depends(get_current_active_user)
) -> ProfileResponse:
    return ProfileResponse.model_validate(current_user.to_dict())


@router.put(
    "/me",
    response_model=ProfileResponse,
    status_code=status.HTTP_200_OK,
    summary="Update current profile",
    description="Change the display name, phone number or avatar",
    responses=get_common_error_responses()
)
async def update_current_user(
    profile_data: ProfileUpdate,
    current_user: Profile = Depends(get_current_active_user),
    auth_service: AuthService = Depends(get_auth_service)
) -> ProfileResponse:
    profile = await auth_service.update_profile(current_user, profile_data)
    return ProfileResponse.model_validate(profile.to_dict())
