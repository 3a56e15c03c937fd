# =============================================================================
# DOG ADOPTION PLATFORM API - DOG REPOSITORY
# =============================================================================
# File: dogs/repository.py
# Description: Data access layer for dog listings
#              State transitions are single conditional statements
# =============================================================================

from typing import Optional, List, Any
from datetime import datetime

from sqlalchemy import select, update, delete, func
from sqlalchemy.ext.asyncio import AsyncSession

from dog_adoption.db.models import Dog, DogStatus
from dog_adoption.utils.helpers import utc_now


class DogRepository:
    """
    ┌─────────────────────────────────────────────────────────────────────────┐
    │                    DOG REPOSITORY                                        │
    │  Data access layer for Dog entity operations                            │
    │  Adoption and removal are compare-and-set writes judged by rowcount    │
    └─────────────────────────────────────────────────────────────────────────┘

    The repository does not handle transactions - that's the caller's
    responsibility. It never reads a row to decide whether to write it.
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

    async def create(self, owner_id: str, name: str, description: str) -> Dog:
        """
        Create a new, available listing.

        Args:
            owner_id: Registering user's ID
            name: Dog's name
            description: Dog's description

        Returns:
            Dog: Created dog entity
        """
        dog = Dog(
            owner_id=owner_id,
            name=name,
            description=description,
            status=DogStatus.AVAILABLE.value,
        )

        self._session.add(dog)
        await self._session.flush()
        await self._session.refresh(dog)

        return dog

    # =========================================================================
    # READ OPERATIONS
    # =========================================================================

    async def get_by_id(self, dog_id: str) -> Optional[Dog]:
        """
        Get dog by ID, always reflecting the latest write in this session.

        Args:
            dog_id: Dog UUID

        Returns:
            Dog if found, None otherwise
        """
        result = await self._session.execute(
            select(Dog)
            .where(Dog.id == dog_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    @staticmethod
    def _conditions(
        owner_id: Optional[str] = None,
        adopter_id: Optional[str] = None,
        status: Optional[DogStatus] = None,
    ) -> List[Any]:
        """Build WHERE clauses for list/count queries."""
        conditions = []
        if owner_id is not None:
            conditions.append(Dog.owner_id == owner_id)
        if adopter_id is not None:
            conditions.append(Dog.adopter_id == adopter_id)
        if status is not None:
            conditions.append(Dog.status == DogStatus(status).value)
        return conditions

    async def list_page(
        self,
        offset: int,
        limit: int,
        owner_id: Optional[str] = None,
        adopter_id: Optional[str] = None,
        status: Optional[DogStatus] = None,
    ) -> List[Dog]:
        """
        List dogs newest first.

        Args:
            offset: Rows to skip
            limit: Maximum rows to return
            owner_id / adopter_id / status: Optional filters (ANDed)

        Returns:
            List of dogs
        """
        result = await self._session.execute(
            select(Dog)
            .where(*self._conditions(owner_id, adopter_id, status))
            .order_by(Dog.created_at.desc(), Dog.id.desc())
            .offset(offset)
            .limit(limit)
        )
        return list(result.scalars().all())

    async def count(
        self,
        owner_id: Optional[str] = None,
        adopter_id: Optional[str] = None,
        status: Optional[DogStatus] = None,
    ) -> int:
        """Count dogs matching the same filters as ``list_page``."""
        result = await self._session.execute(
            select(func.count())
            .select_from(Dog)
            .where(*self._conditions(owner_id, adopter_id, status))
        )
        return result.scalar_one()

    # =========================================================================
    # STATE TRANSITIONS
    # =========================================================================

    async def mark_adopted(
        self,
        dog_id: str,
        adopter_id: str,
        message: Optional[str] = None,
        adopted_at: Optional[datetime] = None,
    ) -> bool:
        """
        Adopt a dog if it is still available and not owned by the adopter.

        Returns:
            bool: True if this call performed the transition
        """
        now = adopted_at or utc_now()
        result = await self._session.execute(
            update(Dog)
            .where(
                Dog.id == dog_id,
                Dog.status == DogStatus.AVAILABLE.value,
                Dog.owner_id != adopter_id,
            )
            .values(
                status=DogStatus.ADOPTED.value,
                adopter_id=adopter_id,
                adoption_message=message,
                adopted_at=now,
                updated_at=now,
            )
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    async def delete_if_owned_and_available(
        self,
        dog_id: str,
        owner_id: str,
    ) -> bool:
        """
        Delete a dog if the requester owns it and it is still available.

        Returns:
            bool: True if a row was deleted
        """
        result = await self._session.execute(
            delete(Dog)
            .where(
                Dog.id == dog_id,
                Dog.owner_id == owner_id,
                Dog.status == DogStatus.AVAILABLE.value,
            )
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1
