# =============================================================================
# DOGS MODULE INITIALIZATION
# =============================================================================
# File: dogs/__init__.py
# Description: Dog listing module exports
# =============================================================================

from dog_adoption.dogs.schemas import (
    DogCreate,
    AdoptRequest,
    DogResponse,
    Pagination,
    DogData,
    DogListData,
)
from dog_adoption.dogs.repository import DogRepository
from dog_adoption.dogs.service import DogService

__all__ = [
    "DogCreate",
    "AdoptRequest",
    "DogResponse",
    "Pagination",
    "DogData",
    "DogListData",
    "DogRepository",
    "DogService",
]
