# =============================================================================
# DOG ADOPTION PLATFORM API - DOG SERVICE TESTS
# =============================================================================
# File: tests/test_dog_service.py
# Description: Unit tests for listing registration, adoption and removal
# =============================================================================

import asyncio
from datetime import timezone

import pytest
import pytest_asyncio

from dog_adoption.auth.repository import UserRepository
from dog_adoption.core.exceptions import (
    DogAlreadyAdoptedError,
    DogNotFoundError,
    NotDogOwnerError,
    SelfAdoptionError,
    UserNotFoundError,
    ValidationError,
)
from dog_adoption.db.models import DogStatus
from dog_adoption.dogs.service import DogService

MISSING_ID = "00000000-0000-0000-0000-000000000000"


@pytest_asyncio.fixture
async def users(db_session):
    """Three accounts: an owner and two would-be adopters."""
    repo = UserRepository(db_session)
    owner = await repo.create("owner", "hash")
    alice = await repo.create("alice", "hash")
    bob = await repo.create("bob", "hash")
    return owner, alice, bob


class TestRegisterDog:
    """Test suite for DogService.register_dog."""

    async def test_new_dog_is_available(self, dog_service: DogService, users):
        owner, _, _ = users

        dog = await dog_service.register_dog(owner.id, "Rex", "Friendly retriever")

        assert dog.status == DogStatus.AVAILABLE
        assert dog.owner.id == owner.id
        assert dog.owner.username == "owner"
        assert dog.adopter is None
        assert dog.adopted_at is None
        assert dog.adoption_message is None

    async def test_timestamps_are_utc(self, dog_service: DogService, users):
        owner, _, _ = users

        dog = await dog_service.register_dog(owner.id, "Rex", "Friendly retriever")

        assert dog.created_at.tzinfo == timezone.utc
        assert dog.updated_at.tzinfo == timezone.utc

    async def test_unknown_owner(self, dog_service: DogService, db_session):
        with pytest.raises(UserNotFoundError):
            await dog_service.register_dog(MISSING_ID, "Rex", "Friendly retriever")

        await db_session.rollback()


class TestAdoptDog:
    """Test suite for DogService.adopt_dog."""

    async def test_adopt_sets_adoption_fields(self, dog_service: DogService, users):
        owner, alice, _ = users
        dog = await dog_service.register_dog(owner.id, "Rex", "Friendly retriever")

        adopted = await dog_service.adopt_dog(dog.id, alice.id, "We have a garden")

        assert adopted.status == DogStatus.ADOPTED
        assert adopted.adopter.id == alice.id
        assert adopted.adopter.username == "alice"
        assert adopted.owner.id == owner.id
        assert adopted.adoption_message == "We have a garden"
        assert adopted.adopted_at is not None
        assert adopted.adopted_at.tzinfo == timezone.utc

    async def test_second_adoption_fails(self, dog_service: DogService, users):
        owner, alice, bob = users
        dog = await dog_service.register_dog(owner.id, "Rex", "Friendly retriever")
        await dog_service.adopt_dog(dog.id, alice.id)

        with pytest.raises(DogAlreadyAdoptedError) as exc_info:
            await dog_service.adopt_dog(dog.id, bob.id)

        assert exc_info.value.message == "Dog has already been adopted"
        still = await dog_service.get_dog(dog.id)
        assert still.adopter.id == alice.id

    @pytest.mark.parametrize("message", [None, "Please, it's my own dog"])
    async def test_owner_cannot_adopt_own_dog(self, dog_service: DogService, users, message):
        owner, _, _ = users
        dog = await dog_service.register_dog(owner.id, "Rex", "Friendly retriever")

        with pytest.raises(SelfAdoptionError):
            await dog_service.adopt_dog(dog.id, owner.id, message)

        unchanged = await dog_service.get_dog(dog.id)
        assert unchanged.status == DogStatus.AVAILABLE

    async def test_adopted_check_comes_before_self_adoption(self, dog_service: DogService, users):
        owner, alice, _ = users
        dog = await dog_service.register_dog(owner.id, "Rex", "Friendly retriever")
        await dog_service.adopt_dog(dog.id, alice.id)

        with pytest.raises(DogAlreadyAdoptedError):
            await dog_service.adopt_dog(dog.id, owner.id)

    async def test_adopt_unknown_dog(self, dog_service: DogService, users):
        _, alice, _ = users

        with pytest.raises(DogNotFoundError):
            await dog_service.adopt_dog(MISSING_ID, alice.id)

    async def test_unknown_adopter(self, dog_service: DogService, users, db_session):
        owner, _, _ = users
        dog = await dog_service.register_dog(owner.id, "Rex", "Friendly retriever")

        with pytest.raises(UserNotFoundError):
            await dog_service.adopt_dog(dog.id, MISSING_ID)

        await db_session.rollback()


class TestRemoveDog:
    """Test suite for DogService.remove_dog."""

    async def test_owner_removes_available_dog(self, dog_service: DogService, users):
        owner, _, _ = users
        dog = await dog_service.register_dog(owner.id, "Rex", "Friendly retriever")

        await dog_service.remove_dog(dog.id, owner.id)

        with pytest.raises(DogNotFoundError):
            await dog_service.get_dog(dog.id)

    async def test_non_owner_cannot_remove(self, dog_service: DogService, users):
        owner, alice, _ = users
        dog = await dog_service.register_dog(owner.id, "Rex", "Friendly retriever")

        with pytest.raises(NotDogOwnerError) as exc_info:
            await dog_service.remove_dog(dog.id, alice.id)

        assert exc_info.value.status_code == 403
        assert (await dog_service.get_dog(dog.id)).id == dog.id

    async def test_owner_cannot_remove_adopted_dog(self, dog_service: DogService, users):
        owner, alice, _ = users
        dog = await dog_service.register_dog(owner.id, "Rex", "Friendly retriever")
        await dog_service.adopt_dog(dog.id, alice.id)

        with pytest.raises(DogAlreadyAdoptedError) as exc_info:
            await dog_service.remove_dog(dog.id, owner.id)

        assert exc_info.value.message == "Cannot remove an adopted dog"
        assert exc_info.value.status_code == 400

    async def test_non_owner_check_comes_before_adopted(self, dog_service: DogService, users):
        owner, alice, _ = users
        dog = await dog_service.register_dog(owner.id, "Rex", "Friendly retriever")
        await dog_service.adopt_dog(dog.id, alice.id)

        with pytest.raises(NotDogOwnerError):
            await dog_service.remove_dog(dog.id, alice.id)

    async def test_remove_unknown_dog(self, dog_service: DogService, users):
        owner, _, _ = users

        with pytest.raises(DogNotFoundError):
            await dog_service.remove_dog(MISSING_ID, owner.id)


class TestListings:
    """Test suite for the paginated listing queries."""

    async def test_limit_one_over_two_dogs(self, dog_service: DogService, users):
        owner, _, _ = users
        await dog_service.register_dog(owner.id, "Rex", "First")
        await dog_service.register_dog(owner.id, "Fido", "Second")

        result = await dog_service.list_registered(owner.id, page=1, limit=1)

        assert len(result.dogs) == 1
        assert result.pagination.total_pages == 2
        assert result.pagination.total_dogs == 2
        assert result.pagination.has_next_page is True
        assert result.pagination.has_prev_page is False

    async def test_newest_first(self, dog_service: DogService, users):
        owner, _, _ = users
        await dog_service.register_dog(owner.id, "Rex", "First")
        await dog_service.register_dog(owner.id, "Fido", "Second")

        result = await dog_service.list_registered(owner.id)

        assert [dog.name for dog in result.dogs] == ["Fido", "Rex"]

    async def test_registered_status_filter(self, dog_service: DogService, users):
        owner, alice, _ = users
        rex = await dog_service.register_dog(owner.id, "Rex", "First")
        await dog_service.register_dog(owner.id, "Fido", "Second")
        await dog_service.adopt_dog(rex.id, alice.id)

        adopted = await dog_service.list_registered(owner.id, status=DogStatus.ADOPTED)
        available = await dog_service.list_registered(owner.id, status=DogStatus.AVAILABLE)

        assert [dog.name for dog in adopted.dogs] == ["Rex"]
        assert [dog.name for dog in available.dogs] == ["Fido"]

    async def test_available_never_lists_adopted(self, dog_service: DogService, users):
        owner, alice, _ = users
        rex = await dog_service.register_dog(owner.id, "Rex", "First")
        await dog_service.register_dog(owner.id, "Fido", "Second")
        await dog_service.adopt_dog(rex.id, alice.id)

        result = await dog_service.list_available()

        assert [dog.name for dog in result.dogs] == ["Fido"]
        assert all(dog.status == DogStatus.AVAILABLE for dog in result.dogs)

    async def test_adopted_by_me(self, dog_service: DogService, users):
        owner, alice, bob = users
        rex = await dog_service.register_dog(owner.id, "Rex", "First")
        fido = await dog_service.register_dog(owner.id, "Fido", "Second")
        await dog_service.adopt_dog(rex.id, alice.id)
        await dog_service.adopt_dog(fido.id, bob.id)

        result = await dog_service.list_adopted(alice.id)

        assert [dog.id for dog in result.dogs] == [rex.id]

    async def test_page_past_the_end_is_empty(self, dog_service: DogService, users):
        owner, _, _ = users
        await dog_service.register_dog(owner.id, "Rex", "First")

        result = await dog_service.list_registered(owner.id, page=3, limit=10)

        assert result.dogs == []
        assert result.pagination.total_pages == 1
        assert result.pagination.has_prev_page is True
        assert result.pagination.has_next_page is False

    @pytest.mark.parametrize("page,limit", [(0, 10), (10**20, 10), (1, 0), (1, 101)])
    async def test_invalid_pagination(self, dog_service: DogService, page, limit):
        with pytest.raises(ValidationError):
            await dog_service.list_available(page=page, limit=limit)


class TestConcurrentAdoption:
    """Two adopters racing for the same dog."""

    async def test_exactly_one_adoption_wins(self, db_adapter):
        async with db_adapter.get_session() as session:
            repo = UserRepository(session)
            owner = await repo.create("owner", "hash")
            alice = await repo.create("alice", "hash")
            bob = await repo.create("bob", "hash")
            dog = await DogService(session).register_dog(owner.id, "Rex", "Friendly")

        async def adopt(adopter_id: str):
            async with db_adapter.get_session() as session:
                return await DogService(session).adopt_dog(dog.id, adopter_id)

        results = await asyncio.gather(
            adopt(alice.id),
            adopt(bob.id),
            return_exceptions=True,
        )

        successes = [r for r in results if not isinstance(r, BaseException)]
        failures = [r for r in results if isinstance(r, BaseException)]
        assert len(successes) == 1
        assert len(failures) == 1
        assert isinstance(failures[0], DogAlreadyAdoptedError)

        async with db_adapter.get_session() as session:
            final = await DogService(session).get_dog(dog.id)
        assert final.status == DogStatus.ADOPTED
        assert final.adopter.id == successes[0].adopter.id
