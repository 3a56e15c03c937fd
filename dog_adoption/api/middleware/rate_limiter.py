# =============================================================================
# DOG ADOPTION PLATFORM API - RATE LIMITER MIDDLEWARE
# =============================================================================
# File: api/middleware/rate_limiter.py
# Description: Global fixed-window rate limiting backed by Redis,
#              security headers and request ID propagation
# =============================================================================

import logging
import uuid
from typing import Callable

from fastapi import Request, Response
from redis.exceptions import RedisError
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse

from dog_adoption.core.context import AppContext
from dog_adoption.core.exceptions import RateLimitExceededError
from dog_adoption.utils.helpers import get_client_ip


logger = logging.getLogger(__name__)


class RateLimiterMiddleware(BaseHTTPMiddleware):
    """
    ┌─────────────────────────────────────────────────────────────────────────┐
    │                    RATE LIMITER MIDDLEWARE                               │
    │  Fixed window per client IP, shared across workers through Redis       │
    │  Protects API from abuse and ensures fair usage                         │
    └─────────────────────────────────────────────────────────────────────────┘

    Every request counts against one budget per IP, whatever the route.
    When Redis is missing or failing the request is let through.

    Headers Added:
        - X-RateLimit-Limit: Maximum requests allowed
        - X-RateLimit-Remaining: Requests remaining
        - X-RateLimit-Reset: Seconds until reset
        - Retry-After: Seconds to wait (when limited)
    """

    # Endpoints exempt from rate limiting
    EXEMPT_ENDPOINTS = {
        "/docs",
        "/redoc",
        "/openapi.json",
    }

    async def dispatch(
        self,
        request: Request,
        call_next: Callable,
    ) -> Response:
        """
        Process request with rate limiting.

        Args:
            request: Incoming request
            call_next: Next middleware/handler

        Returns:
            Response with rate limit headers
        """
        context: AppContext = request.app.state.context
        settings = context.settings

        if (
            not settings.rate_limit_enabled
            or context.redis is None
            or request.url.path in self.EXEMPT_ENDPOINTS
        ):
            return await call_next(request)

        limit = settings.rate_limit_max_requests
        key = f"rate:{get_client_ip(request)}"

        try:
            current, ttl = await context.redis.incr_window(
                key,
                settings.rate_limit_window_seconds,
            )
        except (RedisError, RuntimeError) as e:
            logger.warning(f"Rate limiter unavailable, allowing request: {e}")
            return await call_next(request)

        headers = {
            "X-RateLimit-Limit": str(limit),
            "X-RateLimit-Remaining": str(max(0, limit - current)),
            "X-RateLimit-Reset": str(ttl),
        }

        if current > limit:
            exc = RateLimitExceededError(
                message=settings.rate_limit_message,
                retry_after=ttl,
            )
            return JSONResponse(
                status_code=exc.status_code,
                content=exc.to_dict(),
                headers={**headers, "Retry-After": str(ttl)},
            )

        response = await call_next(request)
        response.headers.update(headers)
        return response


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """
    ┌─────────────────────────────────────────────────────────────────────────┐
    │                    SECURITY HEADERS MIDDLEWARE                           │
    │  Adds security-related HTTP headers to all responses                    │
    └─────────────────────────────────────────────────────────────────────────┘
    """

    # Paths that need relaxed CSP for Swagger UI
    DOCS_PATHS = {"/docs", "/redoc", "/openapi.json"}

    async def dispatch(
        self,
        request: Request,
        call_next: Callable,
    ) -> Response:
        """Add security headers to response."""
        response = await call_next(request)
        settings = request.app.state.context.settings

        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "no-referrer"
        response.headers["Cross-Origin-Opener-Policy"] = "same-origin"

        if settings.is_production:
            response.headers["Strict-Transport-Security"] = (
                "max-age=31536000; includeSubDomains"
            )

        if request.url.path in self.DOCS_PATHS:
            response.headers["Content-Security-Policy"] = (
                "default-src 'self'; "
                "script-src 'self' 'unsafe-inline' https://cdn.jsdelivr.net; "
                "style-src 'self' 'unsafe-inline' https://cdn.jsdelivr.net; "
                "img-src 'self' data: https://fastapi.tiangolo.com"
            )
        else:
            response.headers["Content-Security-Policy"] = (
                "default-src 'none'; frame-ancestors 'none'"
            )

        return response


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    ┌─────────────────────────────────────────────────────────────────────────┐
    │                    REQUEST ID MIDDLEWARE                                 │
    │  Reuses the caller's X-Request-ID or generates one for tracing         │
    └─────────────────────────────────────────────────────────────────────────┘
    """

    async def dispatch(
        self,
        request: Request,
        call_next: Callable,
    ) -> Response:
        """Add X-Request-ID to request and response."""
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request.state.request_id = request_id

        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id

        return response
