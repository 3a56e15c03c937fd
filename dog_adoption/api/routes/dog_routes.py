# =============================================================================
# DOG ADOPTION PLATFORM API - DOG ROUTES
# =============================================================================
# File: api/routes/dog_routes.py
# Description: Dog listing endpoints (register, browse, adopt, remove)
#              All routes require a bearer token
# =============================================================================

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Query, status

from dog_adoption.auth.schemas import ApiResponse, ErrorResponse, MessageResponse
from dog_adoption.auth.dependencies import DogServiceDep, CurrentUserId
from dog_adoption.db.models import DogStatus
from dog_adoption.dogs.schemas import (
    DogCreate,
    AdoptRequest,
    DogData,
    DogListData,
)
from dog_adoption.dogs.service import MAX_PAGE, MAX_PAGE_SIZE


router = APIRouter(
    prefix="/dogs",
    tags=["Dogs"],
    responses={
        400: {"model": ErrorResponse, "description": "Invalid request"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        404: {"model": ErrorResponse, "description": "Dog or account not found"},
    },
)

Page = Query(1, ge=1, le=MAX_PAGE, description="Page number (1-based)")
Limit = Query(10, ge=1, le=MAX_PAGE_SIZE, description="Items per page (1-100)")


# =============================================================================
# REGISTRATION
# =============================================================================

@router.post(
    "",
    response_model=ApiResponse[DogData],
    response_model_exclude_unset=True,
    status_code=status.HTTP_201_CREATED,
    summary="Register a dog",
    description="List a dog for adoption. The caller becomes its owner.",
)
async def register_dog(
    dog_data: DogCreate,
    owner_id: CurrentUserId,
    dog_service: DogServiceDep,
) -> ApiResponse[DogData]:
    dog = await dog_service.register_dog(
        owner_id=owner_id,
        name=dog_data.name,
        description=dog_data.description,
    )
    return ApiResponse(
        success=True,
        message="Dog registered successfully",
        data=DogData(dog=dog),
    )


# =============================================================================
# LISTINGS
# =============================================================================

@router.get(
    "",
    response_model=ApiResponse[DogListData],
    response_model_exclude_unset=True,
    summary="Browse available dogs",
    description="Dogs that can still be adopted, newest first.",
)
async def list_available_dogs(
    user_id: CurrentUserId,
    dog_service: DogServiceDep,
    page: int = Page,
    limit: int = Limit,
) -> ApiResponse[DogListData]:
    data = await dog_service.list_available(page=page, limit=limit)
    return ApiResponse(success=True, data=data)


@router.get(
    "/registered",
    response_model=ApiResponse[DogListData],
    response_model_exclude_unset=True,
    summary="Dogs I registered",
    description="Dogs registered by the caller, optionally filtered by status.",
)
async def list_registered_dogs(
    owner_id: CurrentUserId,
    dog_service: DogServiceDep,
    page: int = Page,
    limit: int = Limit,
    dog_status: Optional[DogStatus] = Query(
        None,
        alias="status",
        description="available or adopted",
    ),
) -> ApiResponse[DogListData]:
    data = await dog_service.list_registered(
        owner_id=owner_id,
        status=dog_status,
        page=page,
        limit=limit,
    )
    return ApiResponse(success=True, data=data)


@router.get(
    "/adopted",
    response_model=ApiResponse[DogListData],
    response_model_exclude_unset=True,
    summary="Dogs I adopted",
    description="Dogs adopted by the caller.",
)
async def list_adopted_dogs(
    adopter_id: CurrentUserId,
    dog_service: DogServiceDep,
    page: int = Page,
    limit: int = Limit,
) -> ApiResponse[DogListData]:
    data = await dog_service.list_adopted(
        adopter_id=adopter_id,
        page=page,
        limit=limit,
    )
    return ApiResponse(success=True, data=data)


@router.get(
    "/{dog_id}",
    response_model=ApiResponse[DogData],
    response_model_exclude_unset=True,
    summary="Get a dog",
    description="A single dog with owner and adopter info.",
)
async def get_dog(
    dog_id: UUID,
    user_id: CurrentUserId,
    dog_service: DogServiceDep,
) -> ApiResponse[DogData]:
    dog = await dog_service.get_dog(str(dog_id))
    return ApiResponse(success=True, data=DogData(dog=dog))


# =============================================================================
# ADOPTION / REMOVAL
# =============================================================================

@router.put(
    "/{dog_id}/adopt",
    response_model=ApiResponse[DogData],
    response_model_exclude_unset=True,
    summary="Adopt a dog",
    description="Adopt an available dog registered by someone else.",
)
async def adopt_dog(
    dog_id: UUID,
    adopter_id: CurrentUserId,
    dog_service: DogServiceDep,
    adoption: Optional[AdoptRequest] = None,
) -> ApiResponse[DogData]:
    """
    Adopt a dog.

    - **message**: Optional note for the owner (max 200 characters)
    """
    dog = await dog_service.adopt_dog(
        dog_id=str(dog_id),
        adopter_id=adopter_id,
        message=adoption.message if adoption else None,
    )
    return ApiResponse(
        success=True,
        message="Dog adopted successfully",
        data=DogData(dog=dog),
    )


@router.delete(
    "/{dog_id}",
    response_model=MessageResponse,
    summary="Remove a dog",
    responses={403: {"model": ErrorResponse, "description": "Not the owner"}},
    description="Remove a dog you registered that has not been adopted.",
)
async def remove_dog(
    dog_id: UUID,
    requester_id: CurrentUserId,
    dog_service: DogServiceDep,
) -> MessageResponse:
    await dog_service.remove_dog(str(dog_id), requester_id)
    return MessageResponse(success=True, message="Dog removed successfully")
