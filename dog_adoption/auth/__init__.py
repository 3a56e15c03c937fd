# =============================================================================
# AUTH MODULE INITIALIZATION
# =============================================================================
# File: auth/__init__.py
# Description: Auth module exports
#              FastAPI dependencies live in auth.dependencies
# =============================================================================

from dog_adoption.auth.schemas import (
    BaseSchema,
    ApiResponse,
    MessageResponse,
    ErrorResponse,
    RegisterRequest,
    LoginRequest,
    UserPublic,
    UserProfile,
    AuthData,
    ProfileData,
)
from dog_adoption.auth.repository import UserRepository
from dog_adoption.auth.service import AuthService

__all__ = [
    # Schemas
    "BaseSchema",
    "ApiResponse",
    "MessageResponse",
    "ErrorResponse",
    "RegisterRequest",
    "LoginRequest",
    "UserPublic",
    "UserProfile",
    "AuthData",
    "ProfileData",

    # Repository
    "UserRepository",

    # Service
    "AuthService",
]
