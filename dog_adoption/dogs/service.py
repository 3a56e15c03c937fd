# =============================================================================
# DOG ADOPTION PLATFORM API - DOG SERVICE
# =============================================================================
# File: dogs/service.py
# Description: Business logic for dog listings and the adoption transition
# =============================================================================

import logging
from typing import Optional, Dict, List

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from dog_adoption.auth.repository import UserRepository
from dog_adoption.auth.schemas import UserPublic
from dog_adoption.dogs.repository import DogRepository
from dog_adoption.dogs.schemas import DogResponse, DogListData, Pagination
from dog_adoption.db.models import Dog, DogStatus, User
from dog_adoption.utils.helpers import total_pages
from dog_adoption.core.exceptions import (
    DogNotFoundError,
    DogAlreadyAdoptedError,
    SelfAdoptionError,
    NotDogOwnerError,
    UserNotFoundError,
    ValidationError,
)


logger = logging.getLogger(__name__)

MAX_PAGE_SIZE = 100
# Keeps the row offset inside a signed 64-bit integer
MAX_PAGE = 1_000_000_000


class DogService:
    """
    ┌─────────────────────────────────────────────────────────────────────────┐
    │                    DOG LISTING SERVICE                                   │
    │  Registration, adoption, removal and paginated browsing of listings     │
    └─────────────────────────────────────────────────────────────────────────┘

    Adoption and removal try the write first and only read the row when
    nothing changed, to tell the caller why. Two concurrent adoptions of
    the same dog therefore produce exactly one winner.
    """

    def __init__(self, session: AsyncSession):
        """
        Initialize service with database session.

        Args:
            session: SQLAlchemy async session
        """
        self._session = session
        self._dog_repo = DogRepository(session)
        self._user_repo = UserRepository(session)

    # =========================================================================
    # RESPONSE ASSEMBLY
    # =========================================================================

    @staticmethod
    def _public(users: Dict[str, User], user_id: Optional[str]) -> Optional[UserPublic]:
        user = users.get(user_id) if user_id else None
        if user is None:
            return None
        return UserPublic(id=user.id, username=user.username)

    def _to_response(self, dog: Dog, users: Dict[str, User]) -> DogResponse:
        return DogResponse(
            id=dog.id,
            name=dog.name,
            description=dog.description,
            status=DogStatus(dog.status),
            owner=self._public(users, dog.owner_id),
            adopter=self._public(users, dog.adopter_id),
            adoption_message=dog.adoption_message,
            adopted_at=dog.adopted_at,
            created_at=dog.created_at,
            updated_at=dog.updated_at,
        )

    async def _resolve(self, dogs: List[Dog]) -> List[DogResponse]:
        """Attach owner/adopter public info with a single user lookup."""
        ids = [dog.owner_id for dog in dogs] + [dog.adopter_id for dog in dogs]
        users = await self._user_repo.get_public_map(ids)
        return [self._to_response(dog, users) for dog in dogs]

    # =========================================================================
    # REGISTRATION
    # =========================================================================

    async def register_dog(
        self,
        owner_id: str,
        name: str,
        description: str,
    ) -> DogResponse:
        """
        Register a new dog for adoption.

        Args:
            owner_id: Authenticated user's ID
            name: Validated dog name
            description: Validated description

        Returns:
            DogResponse: The new, available listing with owner info

        Raises:
            UserNotFoundError: The owner account no longer exists
        """
        try:
            dog = await self._dog_repo.create(
                owner_id=owner_id,
                name=name,
                description=description,
            )
        except IntegrityError:
            # Token outlived its account
            raise UserNotFoundError()
        logger.info(f"Dog registered: {dog.id} by user {owner_id}")

        [response] = await self._resolve([dog])
        return response

    # =========================================================================
    # ADOPTION
    # =========================================================================

    async def adopt_dog(
        self,
        dog_id: str,
        adopter_id: str,
        message: Optional[str] = None,
    ) -> DogResponse:
        """
        Adopt an available dog.

        Raises (checked in this order when the update matched nothing):
            DogNotFoundError: Unknown dog
            DogAlreadyAdoptedError: Dog is no longer available
            SelfAdoptionError: Adopter owns the dog
            UserNotFoundError: The adopter account no longer exists
        """
        try:
            adopted = await self._dog_repo.mark_adopted(
                dog_id=dog_id,
                adopter_id=adopter_id,
                message=message,
            )
        except IntegrityError:
            raise UserNotFoundError()

        dog = await self._dog_repo.get_by_id(dog_id)
        if not adopted:
            if dog is None:
                raise DogNotFoundError()
            if dog.is_adopted:
                raise DogAlreadyAdoptedError()
            raise SelfAdoptionError()

        logger.info(f"Dog adopted: {dog_id} by user {adopter_id}")

        [response] = await self._resolve([dog])
        return response

    # =========================================================================
    # REMOVAL
    # =========================================================================

    async def remove_dog(self, dog_id: str, requester_id: str) -> None:
        """
        Remove a listing owned by the requester that is still available.

        Raises (checked in this order when the delete matched nothing):
            DogNotFoundError: Unknown dog
            NotDogOwnerError: Requester is not the owner
            DogAlreadyAdoptedError: Dog has been adopted
        """
        removed = await self._dog_repo.delete_if_owned_and_available(
            dog_id=dog_id,
            owner_id=requester_id,
        )
        if removed:
            logger.info(f"Dog removed: {dog_id} by user {requester_id}")
            return

        dog = await self._dog_repo.get_by_id(dog_id)
        if dog is None:
            raise DogNotFoundError()
        if dog.owner_id != requester_id:
            raise NotDogOwnerError()
        raise DogAlreadyAdoptedError(message="Cannot remove an adopted dog")

    # =========================================================================
    # QUERIES
    # =========================================================================

    async def get_dog(self, dog_id: str) -> DogResponse:
        """
        Get a single dog with owner and adopter info.

        Raises:
            DogNotFoundError: Unknown dog
        """
        dog = await self._dog_repo.get_by_id(dog_id)
        if dog is None:
            raise DogNotFoundError()

        [response] = await self._resolve([dog])
        return response

    async def _paginate(
        self,
        page: int,
        limit: int,
        owner_id: Optional[str] = None,
        adopter_id: Optional[str] = None,
        status: Optional[DogStatus] = None,
    ) -> DogListData:
        if not 1 <= page <= MAX_PAGE:
            raise ValidationError(
                errors=[{"field": "page", "message": f"Page must be between 1 and {MAX_PAGE}"}]
            )
        if not 1 <= limit <= MAX_PAGE_SIZE:
            raise ValidationError(
                errors=[{"field": "limit", "message": "Limit must be between 1 and 100"}]
            )

        filters = dict(owner_id=owner_id, adopter_id=adopter_id, status=status)
        total = await self._dog_repo.count(**filters)
        dogs = await self._dog_repo.list_page(
            offset=(page - 1) * limit,
            limit=limit,
            **filters,
        )
        pages = total_pages(total, limit)

        return DogListData(
            dogs=await self._resolve(dogs),
            pagination=Pagination(
                current_page=page,
                total_pages=pages,
                total_dogs=total,
                has_next_page=page < pages,
                has_prev_page=page > 1,
            ),
        )

    async def list_registered(
        self,
        owner_id: str,
        status: Optional[DogStatus] = None,
        page: int = 1,
        limit: int = 10,
    ) -> DogListData:
        """Dogs registered by ``owner_id``, optionally filtered by status."""
        return await self._paginate(page, limit, owner_id=owner_id, status=status)

    async def list_adopted(
        self,
        adopter_id: str,
        page: int = 1,
        limit: int = 10,
    ) -> DogListData:
        """Dogs adopted by ``adopter_id``."""
        return await self._paginate(page, limit, adopter_id=adopter_id)

    async def list_available(self, page: int = 1, limit: int = 10) -> DogListData:
        """Dogs that can still be adopted."""
        return await self._paginate(page, limit, status=DogStatus.AVAILABLE)
