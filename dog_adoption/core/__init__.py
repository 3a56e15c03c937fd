# =============================================================================
# CORE MODULE INITIALIZATION
# =============================================================================
# File: core/__init__.py
# Description: Core module exports for centralized access
# =============================================================================

from dog_adoption.core.config import get_settings, Settings
from dog_adoption.core.exceptions import (
    # Base
    DogAdoptionException,

    # Validation
    ValidationError,

    # Authentication
    AuthenticationError,
    InvalidCredentialsError,
    TokenError,
    TokenMissingError,
    TokenInvalidError,
    TokenExpiredError,

    # Authorization
    AuthorizationError,
    NotDogOwnerError,

    # User
    UserError,
    UserNotFoundError,
    UserExistsError,

    # Dog
    DogError,
    DogNotFoundError,
    DogAlreadyAdoptedError,
    SelfAdoptionError,

    # Rate Limiting
    RateLimitExceededError,

    # Infrastructure
    DatabaseError,
    RedisConnectionError,
)
from dog_adoption.core.security import (
    PasswordManager,
    JWTManager,
    TokenPayload,
)

__all__ = [
    "get_settings",
    "Settings",
    "DogAdoptionException",
    "ValidationError",
    "AuthenticationError",
    "InvalidCredentialsError",
    "TokenError",
    "TokenMissingError",
    "TokenInvalidError",
    "TokenExpiredError",
    "AuthorizationError",
    "NotDogOwnerError",
    "UserError",
    "UserNotFoundError",
    "UserExistsError",
    "DogError",
    "DogNotFoundError",
    "DogAlreadyAdoptedError",
    "SelfAdoptionError",
    "RateLimitExceededError",
    "DatabaseError",
    "RedisConnectionError",
    "PasswordManager",
    "JWTManager",
    "TokenPayload",
]
