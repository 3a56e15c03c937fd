# =============================================================================
# DOG ADOPTION PLATFORM API - DATABASE MODELS
# =============================================================================
# File: db/models.py
# Description: SQLAlchemy ORM models for Users and Dogs
#              Owner/adopter are plain id columns, resolved at read time
# =============================================================================

from typing import Optional
from datetime import datetime
from enum import Enum

from sqlalchemy import (
    String,
    Text,
    ForeignKey,
    Index,
    CheckConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from dog_adoption.db.base import Base, UTCDateTime
from dog_adoption.utils.helpers import generate_uuid, utc_now


# =============================================================================
# USER MODEL
# =============================================================================

class User(Base):
    """
    ┌─────────────────────────────────────────────────────────────────────────┐
    │                    USER MODEL                                            │
    │  Account with a salted password hash; never deleted by the API          │
    └─────────────────────────────────────────────────────────────────────────┘

    Fields:
        - id:             UUID primary key (auto-generated)
        - username:       Unique, case-sensitive username (indexed)
        - password_hash:  Argon2id/Bcrypt hashed password
        - created_at:     Account creation timestamp
        - updated_at:     Last update timestamp
    """

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=generate_uuid,
    )
    username: Mapped[str] = mapped_column(
        String(30),
        unique=True,
        nullable=False,
        index=True
    )
    password_hash: Mapped[str] = mapped_column(
        String(255),
        nullable=False
    )

    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime(),
        default=utc_now,
        nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        UTCDateTime(),
        default=utc_now,
        onupdate=utc_now,
        nullable=False
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username={self.username})>"


# =============================================================================
# DOG MODEL
# =============================================================================

class DogStatus(str, Enum):
    """Listing lifecycle. The only transition is AVAILABLE -> ADOPTED."""

    AVAILABLE = "available"
    ADOPTED = "adopted"


class Dog(Base):
    """
    ┌─────────────────────────────────────────────────────────────────────────┐
    │                    DOG MODEL                                             │
    │  A listing that is available for, or already subject to, adoption       │
    └─────────────────────────────────────────────────────────────────────────┘

    Fields:
        - id:               UUID primary key
        - name:             1-50 characters
        - description:      1-500 characters
        - owner_id:         Registering user, immutable
        - adopter_id:       Adopting user, NULL until adopted
        - adoption_message: Optional note left by the adopter (<= 200 chars)
        - status:           "available" or "adopted"
        - adopted_at:       Adoption timestamp, NULL until adopted
        - created_at / updated_at

    The CHECK constraints mirror the listing invariants so a buggy write
    is rejected by the store itself.
    """

    __tablename__ = "dogs"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=generate_uuid,
    )
    name: Mapped[str] = mapped_column(String(50), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)

    owner_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id"),
        nullable=False,
    )
    adopter_id: Mapped[Optional[str]] = mapped_column(
        String(36),
        ForeignKey("users.id"),
        nullable=True,
    )
    adoption_message: Mapped[Optional[str]] = mapped_column(
        String(200),
        nullable=True
    )

    status: Mapped[str] = mapped_column(
        String(16),
        default=DogStatus.AVAILABLE.value,
        nullable=False,
    )
    adopted_at: Mapped[Optional[datetime]] = mapped_column(
        UTCDateTime(),
        nullable=True
    )

    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime(),
        default=utc_now,
        nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        UTCDateTime(),
        default=utc_now,
        onupdate=utc_now,
        nullable=False
    )

    __table_args__ = (
        Index("ix_dogs_owner_status", "owner_id", "status"),
        Index("ix_dogs_adopter", "adopter_id"),
        Index("ix_dogs_status_created", "status", "created_at"),
        CheckConstraint(
            "status IN ('available', 'adopted')",
            name="status_valid",
        ),
        CheckConstraint(
            "(status = 'available' AND adopter_id IS NULL AND adopted_at IS NULL)"
            " OR (status = 'adopted' AND adopter_id IS NOT NULL AND adopted_at IS NOT NULL)",
            name="adoption_consistent",
        ),
        CheckConstraint(
            "adopter_id IS NULL OR adopter_id <> owner_id",
            name="no_self_adoption",
        ),
    )

    @property
    def is_adopted(self) -> bool:
        """Check if the dog has been adopted."""
        return self.status == DogStatus.ADOPTED.value

    def __repr__(self) -> str:
        return f"<Dog(id={self.id}, name={self.name}, status={self.status})>"
