# =============================================================================
# DOG ADOPTION PLATFORM API - DOG SCHEMAS
# =============================================================================
# File: dogs/schemas.py
# Description: Pydantic models for dog listing requests and responses
# =============================================================================

from typing import Optional, List
from datetime import datetime

from pydantic import Field, field_validator

from dog_adoption.auth.schemas import BaseSchema, UserPublic
from dog_adoption.db.models import DogStatus


# =============================================================================
# REQUEST SCHEMAS
# =============================================================================

class DogCreate(BaseSchema):
    """
    Schema for registering a dog.

    Validation Rules:
        - name: trimmed, 1-50 characters
        - description: trimmed, 1-500 characters
    """
    name: str = Field(..., description="Dog's name", examples=["Rex"])
    description: str = Field(
        ...,
        description="Temperament, age, needs...",
        examples=["Friendly two year old retriever, good with kids"]
    )

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if not 1 <= len(v) <= 50:
            raise ValueError("Dog name must be between 1 and 50 characters")
        return v

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: str) -> str:
        v = v.strip()
        if not 1 <= len(v) <= 500:
            raise ValueError("Description must be between 1 and 500 characters")
        return v


class AdoptRequest(BaseSchema):
    """Optional note left by the adopter. Blank is treated as absent."""
    message: Optional[str] = Field(
        None,
        description="Message for the owner (max 200 chars)",
        examples=["We have a big garden!"]
    )

    @field_validator("message")
    @classmethod
    def validate_message(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        v = v.strip()
        if len(v) > 200:
            raise ValueError("Adoption message cannot exceed 200 characters")
        return v or None


# =============================================================================
# RESPONSE SCHEMAS
# =============================================================================

class DogResponse(BaseSchema):
    """A listing with owner/adopter public info resolved."""
    id: str
    name: str
    description: str
    status: DogStatus
    owner: Optional[UserPublic] = None
    adopter: Optional[UserPublic] = None
    adoption_message: Optional[str] = None
    adopted_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


class Pagination(BaseSchema):
    """Page metadata for list endpoints."""
    current_page: int
    total_pages: int
    total_dogs: int
    has_next_page: bool
    has_prev_page: bool


class DogData(BaseSchema):
    """Payload carrying a single dog."""
    dog: DogResponse


class DogListData(BaseSchema):
    """Payload of a paginated listing."""
    dogs: List[DogResponse]
    pagination: Pagination
