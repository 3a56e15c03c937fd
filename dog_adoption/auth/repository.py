# =============================================================================
# DOG ADOPTION PLATFORM API - AUTH REPOSITORY
# =============================================================================
# File: auth/repository.py
# Description: Data access layer for user operations
#              Implements repository pattern with SQLAlchemy async
# =============================================================================

from typing import Optional, Iterable, Dict

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from dog_adoption.db.models import User


class UserRepository:
    """
    ┌─────────────────────────────────────────────────────────────────────────┐
    │                    USER REPOSITORY                                       │
    │  Data access layer for User entity operations                           │
    │  Provides clean separation between business logic and data access       │
    └─────────────────────────────────────────────────────────────────────────┘

    All methods are async and work with SQLAlchemy AsyncSession.
    The repository does not handle transactions - that's the caller's
    responsibility.

    Usernames are matched exactly: "Rex" and "rex" are different accounts.
    """

    def __init__(self, session: AsyncSession):
        """
        Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self._session = session

    # =========================================================================
    # CREATE OPERATIONS
    # =========================================================================

    async def create(self, username: str, password_hash: str) -> User:
        """
        Create a new user.

        Args:
            username: User's username
            password_hash: Hashed password

        Returns:
            User: Created user entity

        Raises:
            IntegrityError: If the username was taken concurrently
        """
        user = User(
            username=username,
            password_hash=password_hash,
        )

        self._session.add(user)
        await self._session.flush()
        await self._session.refresh(user)

        return user

    # =========================================================================
    # READ OPERATIONS
    # =========================================================================

    async def get_by_id(self, user_id: str) -> Optional[User]:
        """
        Get user by ID.

        Args:
            user_id: User UUID

        Returns:
            User if found, None otherwise
        """
        result = await self._session.execute(
            select(User).where(User.id == user_id)
        )
        return result.scalar_one_or_none()

    async def get_by_username(self, username: str) -> Optional[User]:
        """
        Get user by username.

        Args:
            username: User's username

        Returns:
            User if found, None otherwise
        """
        result = await self._session.execute(
            select(User).where(User.username == username)
        )
        return result.scalar_one_or_none()

    async def get_public_map(self, user_ids: Iterable[str]) -> Dict[str, User]:
        """
        Resolve user ids to users in one query.

        Unknown ids are simply absent from the result.

        Args:
            user_ids: Ids to resolve; duplicates and None are ignored

        Returns:
            Dict[str, User]: id -> user
        """
        ids = {user_id for user_id in user_ids if user_id}
        if not ids:
            return {}

        result = await self._session.execute(
            select(User).where(User.id.in_(ids))
        )
        return {user.id: user for user in result.scalars().all()}

    async def exists_username(self, username: str) -> bool:
        """Check if username is already taken."""
        result = await self._session.execute(
            select(func.count()).select_from(User).where(
                User.username == username
            )
        )
        return result.scalar_one() > 0

    # =========================================================================
    # UPDATE OPERATIONS
    # =========================================================================

    async def update_password(self, user: User, password_hash: str) -> None:
        """
        Replace a user's password hash.

        Args:
            user: User entity
            password_hash: New hashed password
        """
        user.password_hash = password_hash
        await self._session.flush()
