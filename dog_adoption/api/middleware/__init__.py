# =============================================================================
# MIDDLEWARE MODULE INITIALIZATION
# =============================================================================
# File: api/middleware/__init__.py
# Description: Middleware module exports
# =============================================================================

from dog_adoption.api.middleware.rate_limiter import (
    RateLimiterMiddleware,
    SecurityHeadersMiddleware,
    RequestIDMiddleware,
)
from dog_adoption.api.middleware.logging_middleware import LoggingMiddleware

__all__ = [
    "RateLimiterMiddleware",
    "SecurityHeadersMiddleware",
    "RequestIDMiddleware",
    "LoggingMiddleware",
]
