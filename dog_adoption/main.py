# =============================================================================
# DOG ADOPTION PLATFORM API - MAIN APPLICATION
# =============================================================================
# File: main.py
# Description: FastAPI application entry point with lifecycle management
# =============================================================================

import logging
from contextlib import asynccontextmanager
from typing import Optional, List, Dict, Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from dog_adoption.api.routes import api_router
from dog_adoption.api.middleware import (
    RateLimiterMiddleware,
    SecurityHeadersMiddleware,
    RequestIDMiddleware,
    LoggingMiddleware,
)
from dog_adoption.core.config import get_settings
from dog_adoption.core.context import AppContext
from dog_adoption.core.exceptions import DogAdoptionException, ValidationError


logger = logging.getLogger(__name__)


# =============================================================================
# LOGGING CONFIGURATION
# =============================================================================

def configure_logging(level: str) -> None:
    """Configure root logging once per process."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


# =============================================================================
# APPLICATION LIFECYCLE
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifecycle manager.

    Handles startup and shutdown events:
    - Startup: Connect database and Redis, create tables in development
    - Shutdown: Close all connections gracefully
    """
    context: AppContext = app.state.context
    settings = context.settings

    # STARTUP
    logger.info(f"Starting {settings.app_name} in {settings.app_env} mode")
    try:
        await context.startup()
    except DogAdoptionException as e:
        logger.error(f"Startup failed: {e.error_code}")
        raise
    logger.info(f"{settings.app_name} started successfully")

    yield  # Application runs here

    # SHUTDOWN
    logger.info(f"Shutting down {settings.app_name}")
    await context.shutdown()
    logger.info(f"{settings.app_name} shutdown complete")


# =============================================================================
# VALIDATION ERROR FORMATTING
# =============================================================================

def format_validation_errors(errors: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """
    Flatten pydantic errors into ``{field, message, location}`` items.
    """
    formatted = []
    for error in errors:
        loc = [str(part) for part in error.get("loc", ())]
        location = loc[0] if loc else "body"
        field = ".".join(loc[1:]) or location

        message = error.get("msg", "Invalid value")
        ctx_error = error.get("ctx", {}).get("error")
        if error.get("type") == "value_error" and ctx_error is not None:
            message = str(ctx_error)

        formatted.append({
            "field": field,
            "message": message,
            "location": location,
        })
    return formatted


# =============================================================================
# APPLICATION FACTORY
# =============================================================================

def create_application(context: Optional[AppContext] = None) -> FastAPI:
    """
    Create and configure FastAPI application.

    Args:
        context: Prepared application context; built from the environment
                 when omitted

    Returns:
        FastAPI: Configured application instance
    """
    if context is None:
        settings = get_settings()
        configure_logging(settings.log_level)
        context = AppContext.from_settings(settings)
    settings = context.settings

    app = FastAPI(
        title=settings.app_name,
        description="Register dogs, browse listings and adopt",
        version=settings.app_version,
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
        openapi_url="/openapi.json" if settings.is_development else None,
        lifespan=lifespan,
    )
    app.state.context = context

    # =========================================================================
    # MIDDLEWARE STACK (order matters - last added = outermost)
    # =========================================================================

    # Rate Limiting (innermost)
    app.add_middleware(RateLimiterMiddleware)

    # Security Headers (also applied to 429 responses)
    app.add_middleware(SecurityHeadersMiddleware)

    # Logging (captures request/response info)
    app.add_middleware(LoggingMiddleware)

    # Request ID (must wrap logging)
    app.add_middleware(RequestIDMiddleware)

    # CORS (outermost - answers preflight requests directly)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
        expose_headers=[
            "X-Request-ID",
            "X-RateLimit-Limit",
            "X-RateLimit-Remaining",
            "X-RateLimit-Reset",
            "Retry-After",
        ],
    )

    # =========================================================================
    # EXCEPTION HANDLERS
    # =========================================================================

    @app.exception_handler(DogAdoptionException)
    async def app_exception_handler(
        request: Request,
        exc: DogAdoptionException,
    ) -> JSONResponse:
        """Handle domain exceptions."""
        if exc.status_code >= 500:
            logger.error(f"{exc.error_code}: {exc.message}")
        return JSONResponse(
            status_code=exc.status_code,
            content=exc.to_dict(),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """Render request validation failures as 400."""
        error = ValidationError(errors=format_validation_errors(exc.errors()))
        return JSONResponse(
            status_code=error.status_code,
            content=error.to_dict(),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request,
        exc: StarletteHTTPException,
    ) -> JSONResponse:
        """Handle standard HTTP exceptions (unknown route, bad method)."""
        message = exc.detail if isinstance(exc.detail, str) else "Request failed"
        if exc.status_code == status.HTTP_404_NOT_FOUND:
            message = f"Route {request.url.path} not found"
        return JSONResponse(
            status_code=exc.status_code,
            content={"success": False, "message": message},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """Handle unexpected exceptions without leaking internals."""
        logger.exception("Unhandled exception")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"success": False, "message": "Internal server error"},
        )

    # =========================================================================
    # ROUTES
    # =========================================================================

    app.include_router(api_router)

    @app.get("/", include_in_schema=False)
    async def root():
        """Root endpoint with API info."""
        return {
            "success": True,
            "message": f"Welcome to {settings.app_name}",
            "version": settings.app_version,
            "endpoints": {
                "auth": "/api/auth",
                "dogs": "/api/dogs",
                "health": "/api/health",
            },
        }

    return app


# =============================================================================
# APPLICATION INSTANCE
# =============================================================================

app = create_application()


# =============================================================================
# ENTRYPOINT
# =============================================================================

if __name__ == "__main__":
    import uvicorn

    _settings = get_settings()
    uvicorn.run(
        "dog_adoption.main:app",
        host=_settings.host,
        port=_settings.port,
        reload=_settings.is_development,
        log_level=_settings.log_level.lower(),
    )
