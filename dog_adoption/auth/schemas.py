# =============================================================================
# DOG ADOPTION PLATFORM API - AUTH SCHEMAS
# =============================================================================
# File: auth/schemas.py
# Description: Pydantic models for request/response validation
#              Shared response envelope and the account DTOs
# =============================================================================

from typing import Generic, List, Optional, TypeVar, Dict, Any
from datetime import datetime
import re

from pydantic import BaseModel, Field, field_validator, ConfigDict
from pydantic.alias_generators import to_camel


T = TypeVar("T")

USERNAME_PATTERN = re.compile(r"^[a-zA-Z0-9_]+$")


# =============================================================================
# BASE SCHEMAS
# =============================================================================

class BaseSchema(BaseModel):
    """Base schema: camelCase on the wire, snake_case in Python."""
    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class ApiResponse(BaseModel, Generic[T]):
    """
    Standard response envelope.

    Routes use ``response_model_exclude_unset`` so only the keys that were
    passed in are rendered.
    """
    success: bool = True
    message: Optional[str] = None
    data: Optional[T] = None


class MessageResponse(BaseModel):
    """Envelope for responses that carry no payload."""
    success: bool = True
    message: str


class ErrorResponse(BaseModel):
    """Envelope rendered for every failure."""
    success: bool = False
    message: str
    errors: Optional[List[Dict[str, Any]]] = None


# =============================================================================
# REQUEST SCHEMAS
# =============================================================================

class RegisterRequest(BaseSchema):
    """
    Schema for user registration request.

    Validation Rules:
        - username: trimmed, 3-30 characters, letters, digits and underscores
        - password: at least 6 characters, taken verbatim
    """
    username: str = Field(
        ...,
        description="Unique username (letters, numbers and underscores)",
        examples=["rex_lover"]
    )
    password: str = Field(
        ...,
        description="Password (min 6 chars)",
        examples=["woof123"]
    )

    @field_validator("username")
    @classmethod
    def validate_username(cls, v: str) -> str:
        """Validate username length and character set."""
        v = v.strip()
        if not 3 <= len(v) <= 30:
            raise ValueError("Username must be between 3 and 30 characters")
        if not USERNAME_PATTERN.match(v):
            raise ValueError(
                "Username can only contain letters, numbers, and underscores"
            )
        return v

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        """Validate password length."""
        if len(v) < 6:
            raise ValueError("Password must be at least 6 characters long")
        return v


class LoginRequest(BaseSchema):
    """Schema for login request."""
    username: str = Field(..., description="Username", examples=["rex_lover"])
    password: str = Field(..., description="Password", examples=["woof123"])

    @field_validator("username")
    @classmethod
    def validate_username(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Username is required")
        return v

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        if not v:
            raise ValueError("Password is required")
        return v


# =============================================================================
# RESPONSE SCHEMAS
# =============================================================================

class UserPublic(BaseSchema):
    """Public user fields, also embedded as dog owner/adopter."""
    id: str
    username: str


class UserProfile(UserPublic):
    """Profile of the authenticated user."""
    created_at: datetime


class AuthData(BaseSchema):
    """Payload of a successful register or login."""
    token: str
    user: UserPublic


class ProfileData(BaseSchema):
    """Payload of the profile endpoint."""
    user: UserProfile
