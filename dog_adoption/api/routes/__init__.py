# =============================================================================
# API ROUTES MODULE INITIALIZATION
# =============================================================================
# File: api/routes/__init__.py
# Description: Router aggregation under the /api prefix
# =============================================================================

from fastapi import APIRouter

from dog_adoption.api.routes.auth_routes import router as auth_router
from dog_adoption.api.routes.dog_routes import router as dog_router
from dog_adoption.api.routes.health_routes import router as health_router


# Create main API router
api_router = APIRouter(prefix="/api")

# Include sub-routers
api_router.include_router(auth_router)
api_router.include_router(dog_router)
api_router.include_router(health_router)


__all__ = [
    "api_router",
    "auth_router",
    "dog_router",
    "health_router",
]
