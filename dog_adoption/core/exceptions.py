# =============================================================================
# DOG ADOPTION PLATFORM API - CORE EXCEPTIONS MODULE
# =============================================================================
# File: core/exceptions.py
# Description: Custom exception hierarchy for the adoption platform
#              Provides granular error handling with HTTP status code mapping
# =============================================================================

from typing import Optional, Dict, Any, List
from fastapi import status


class DogAdoptionException(Exception):
    """
    ┌─────────────────────────────────────────────────────────────────────────┐
    │                    BASE EXCEPTION CLASS                                  │
    │  All custom exceptions inherit from this base class                      │
    │  Renders to the standard {success, message, errors} response envelope   │
    └─────────────────────────────────────────────────────────────────────────┘

    Attributes:
        message: Human-readable error description (sent to the client)
        error_code: Machine-readable error identifier (used in logs)
        status_code: HTTP status code for API responses
        errors: Field-level details, only set for validation failures
    """

    def __init__(
        self,
        message: str = "An error occurred",
        error_code: str = "ERROR",
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        errors: Optional[List[Dict[str, Any]]] = None
    ):
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        self.errors = errors or []
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to the JSON response envelope."""
        body: Dict[str, Any] = {
            "success": False,
            "message": self.message,
        }
        if self.errors:
            body["errors"] = self.errors
        return body


# =============================================================================
# VALIDATION EXCEPTIONS
# =============================================================================

class ValidationError(DogAdoptionException):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str = "Validation failed",
        errors: Optional[List[Dict[str, Any]]] = None
    ):
        super().__init__(
            message=message,
            error_code="VALIDATION_ERROR",
            status_code=status.HTTP_400_BAD_REQUEST,
            errors=errors
        )


# =============================================================================
# AUTHENTICATION EXCEPTIONS
# =============================================================================

class AuthenticationError(DogAdoptionException):
    """
    Raised when authentication fails (invalid credentials, bad token, etc.)

    Examples:
        - Unknown username or wrong password
        - Expired or malformed JWT token
        - Missing authentication header
    """

    def __init__(
        self,
        message: str = "Authentication failed",
        error_code: str = "AUTHENTICATION_FAILED",
    ):
        super().__init__(
            message=message,
            error_code=error_code,
            status_code=status.HTTP_401_UNAUTHORIZED,
        )


class InvalidCredentialsError(AuthenticationError):
    """Raised for an unknown username or a wrong password alike."""

    def __init__(self):
        super().__init__(
            message="Invalid credentials",
            error_code="INVALID_CREDENTIALS",
        )


class TokenError(AuthenticationError):
    """Base class for all token-related errors."""


class TokenMissingError(TokenError):
    """Raised when authentication token is not provided."""

    def __init__(self):
        super().__init__(
            message="Access token required",
            error_code="TOKEN_MISSING",
        )


class TokenInvalidError(TokenError):
    """Raised when JWT token is malformed or signature is invalid."""

    def __init__(self, message: str = "Invalid token", error_code: str = "TOKEN_INVALID"):
        super().__init__(message=message, error_code=error_code)


class TokenExpiredError(TokenInvalidError):
    """Raised when JWT token has expired."""

    def __init__(self):
        super().__init__(
            message="Token has expired",
            error_code="TOKEN_EXPIRED",
        )


# =============================================================================
# AUTHORIZATION EXCEPTIONS
# =============================================================================

class AuthorizationError(DogAdoptionException):
    """Raised when the caller may not mutate the requested resource."""

    def __init__(
        self,
        message: str = "Access denied",
        error_code: str = "AUTHORIZATION_FAILED",
    ):
        super().__init__(
            message=message,
            error_code=error_code,
            status_code=status.HTTP_403_FORBIDDEN,
        )


class NotDogOwnerError(AuthorizationError):
    """Raised when someone other than the owner tries to remove a dog."""

    def __init__(self):
        super().__init__(
            message="You can only remove dogs that you registered",
            error_code="NOT_DOG_OWNER",
        )


# =============================================================================
# USER EXCEPTIONS
# =============================================================================

class UserError(DogAdoptionException):
    """Base class for user-related errors."""

    def __init__(
        self,
        message: str = "User error",
        error_code: str = "USER_ERROR",
        status_code: int = status.HTTP_400_BAD_REQUEST,
    ):
        super().__init__(
            message=message,
            error_code=error_code,
            status_code=status_code,
        )


class UserNotFoundError(UserError):
    """Raised when requested user does not exist."""

    def __init__(self):
        super().__init__(
            message="User not found",
            error_code="USER_NOT_FOUND",
            status_code=status.HTTP_404_NOT_FOUND,
        )


class UserExistsError(UserError):
    """Raised when attempting to register a username that is taken."""

    def __init__(self):
        super().__init__(
            message="Username already exists",
            error_code="USER_EXISTS",
            status_code=status.HTTP_400_BAD_REQUEST,
        )


# =============================================================================
# DOG LISTING EXCEPTIONS
# =============================================================================

class DogError(DogAdoptionException):
    """Base class for listing business-rule violations."""

    def __init__(
        self,
        message: str = "Dog error",
        error_code: str = "DOG_ERROR",
        status_code: int = status.HTTP_400_BAD_REQUEST,
    ):
        super().__init__(
            message=message,
            error_code=error_code,
            status_code=status_code,
        )


class DogNotFoundError(DogError):
    """Raised when the requested dog does not exist."""

    def __init__(self):
        super().__init__(
            message="Dog not found",
            error_code="DOG_NOT_FOUND",
            status_code=status.HTTP_404_NOT_FOUND,
        )


class DogAlreadyAdoptedError(DogError):
    """Raised when an adopted dog is adopted again or removed."""

    def __init__(self, message: str = "Dog has already been adopted"):
        super().__init__(
            message=message,
            error_code="DOG_ALREADY_ADOPTED",
        )


class SelfAdoptionError(DogError):
    """Raised when an owner tries to adopt their own dog."""

    def __init__(self):
        super().__init__(
            message="You cannot adopt your own dog",
            error_code="SELF_ADOPTION",
        )


# =============================================================================
# RATE LIMITING EXCEPTIONS
# =============================================================================

class RateLimitExceededError(DogAdoptionException):
    """Raised when a client exceeds the request budget for the window."""

    def __init__(
        self,
        message: str = "Too many requests, please try again later",
        retry_after: Optional[int] = None,
    ):
        self.retry_after = retry_after
        super().__init__(
            message=message,
            error_code="RATE_LIMIT_EXCEEDED",
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        )


# =============================================================================
# INFRASTRUCTURE EXCEPTIONS
# =============================================================================

class DatabaseError(DogAdoptionException):
    """Base class for database-related errors."""

    def __init__(
        self,
        message: str = "Internal server error",
        error_code: str = "DATABASE_ERROR",
    ):
        super().__init__(
            message=message,
            error_code=error_code,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )


class RedisConnectionError(DogAdoptionException):
    """Raised when Redis connection fails."""

    def __init__(self, url: Optional[str] = None):
        self.url = url
        super().__init__(
            message="Failed to connect to Redis",
            error_code="REDIS_CONNECTION_ERROR",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
