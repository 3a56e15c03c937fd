# =============================================================================
# DOG ADOPTION PLATFORM API - AUTH ROUTES
# =============================================================================
# File: api/routes/auth_routes.py
# Description: Authentication API endpoints (register, login, profile)
# =============================================================================

from fastapi import APIRouter, status

from dog_adoption.auth.schemas import (
    RegisterRequest,
    LoginRequest,
    ApiResponse,
    ErrorResponse,
    AuthData,
    ProfileData,
)
from dog_adoption.auth.dependencies import AuthServiceDep, CurrentUserId


router = APIRouter(
    prefix="/auth",
    tags=["Authentication"],
    responses={
        400: {"model": ErrorResponse, "description": "Validation failed"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
    },
)


# =============================================================================
# REGISTRATION
# =============================================================================

@router.post(
    "/register",
    response_model=ApiResponse[AuthData],
    response_model_exclude_unset=True,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
    description="Create an account and receive an access token.",
)
async def register(
    user_data: RegisterRequest,
    auth_service: AuthServiceDep,
) -> ApiResponse[AuthData]:
    """
    Register a new user account.

    - **username**: 3-30 characters, letters, numbers and underscores
    - **password**: Minimum 6 characters
    """
    data = await auth_service.register(
        username=user_data.username,
        password=user_data.password,
    )
    return ApiResponse(
        success=True,
        message="User registered successfully",
        data=data,
    )


# =============================================================================
# LOGIN
# =============================================================================

@router.post(
    "/login",
    response_model=ApiResponse[AuthData],
    response_model_exclude_unset=True,
    summary="Authenticate user",
    description="Login with username and password to receive an access token.",
)
async def login(
    login_data: LoginRequest,
    auth_service: AuthServiceDep,
) -> ApiResponse[AuthData]:
    data = await auth_service.login(
        username=login_data.username,
        password=login_data.password,
    )
    return ApiResponse(success=True, message="Login successful", data=data)


# =============================================================================
# PROFILE
# =============================================================================

@router.get(
    "/profile",
    response_model=ApiResponse[ProfileData],
    response_model_exclude_unset=True,
    summary="Current user profile",
    description="Public profile of the authenticated user.",
)
async def get_profile(
    user_id: CurrentUserId,
    auth_service: AuthServiceDep,
) -> ApiResponse[ProfileData]:
    user = await auth_service.get_profile(user_id)
    return ApiResponse(success=True, data=ProfileData(user=user))
