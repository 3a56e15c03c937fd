# =============================================================================
# DOG ADOPTION PLATFORM API - HEALTH ROUTES
# =============================================================================
# File: api/routes/health_routes.py
# Description: Health check endpoints for monitoring and orchestration
# =============================================================================

import logging
from datetime import datetime
from typing import Dict, Any

from fastapi import APIRouter
from pydantic import BaseModel, Field
from sqlalchemy.exc import SQLAlchemyError

from dog_adoption.auth.schemas import ApiResponse
from dog_adoption.auth.dependencies import Context
from dog_adoption.utils.helpers import utc_now


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["Health"])


# =============================================================================
# RESPONSE MODELS
# =============================================================================

class HealthData(BaseModel):
    """Health check payload."""
    timestamp: datetime = Field(..., description="Check timestamp")


class ReadinessData(HealthData):
    """Readiness payload with component statuses."""
    status: str = Field(..., description="Overall status: healthy or degraded")
    version: str = Field(..., description="Application version")
    environment: str = Field(..., description="Environment name")
    components: Dict[str, Dict[str, Any]] = Field(
        default_factory=dict,
        description="Individual component health"
    )


# =============================================================================
# HEALTH ENDPOINTS
# =============================================================================

@router.get(
    "",
    response_model=ApiResponse[HealthData],
    response_model_exclude_unset=True,
    summary="Basic health check",
    description="Quick liveness check; does not touch dependencies.",
)
async def health_check() -> ApiResponse[HealthData]:
    return ApiResponse(
        success=True,
        message="Dog Adoption Platform API is running",
        data=HealthData(timestamp=utc_now()),
    )


@router.get(
    "/ready",
    response_model=ApiResponse[ReadinessData],
    response_model_exclude_unset=True,
    summary="Readiness check",
    description="Check the database and Redis connections.",
)
async def readiness_check(context: Context) -> ApiResponse[ReadinessData]:
    """
    Readiness check.

    Reports each dependency; Redis being disabled is not a failure since
    the rate limiter then lets requests through.
    """
    settings = context.settings
    components: Dict[str, Dict[str, Any]] = {}
    overall_status = "healthy"

    try:
        db_ok = await context.db.ping()
    except SQLAlchemyError as e:
        logger.warning(f"Database readiness check failed: {e}")
        db_ok = False

    components["database"] = {
        "status": "healthy" if db_ok else "unhealthy",
        "type": settings.db_type,
    }
    if not db_ok:
        overall_status = "degraded"

    if context.redis is None:
        components["redis"] = {"status": "disabled"}
    elif await context.redis.check_health():
        components["redis"] = {"status": "healthy"}
    else:
        components["redis"] = {"status": "unhealthy"}
        overall_status = "degraded"

    return ApiResponse(
        success=True,
        data=ReadinessData(
            status=overall_status,
            timestamp=utc_now(),
            version=settings.app_version,
            environment=settings.app_env,
            components=components,
        ),
    )
