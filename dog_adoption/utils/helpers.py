# =============================================================================
# DOG ADOPTION PLATFORM API - UTILITIES
# =============================================================================
# File: utils/helpers.py
# Description: Common utility functions used across the application
# =============================================================================

from datetime import datetime, timezone
from uuid import uuid4
import math

from starlette.requests import Request


def utc_now() -> datetime:
    """
    Get current UTC timestamp.

    Returns:
        datetime: Current UTC time with timezone info
    """
    return datetime.now(timezone.utc)


def generate_uuid() -> str:
    """Generate a new UUID string."""
    return str(uuid4())


def get_client_ip(request: Request) -> str:
    """
    Extract client IP from request.

    Handles proxy headers (X-Forwarded-For, X-Real-IP).

    Args:
        request: Incoming request

    Returns:
        str: Client IP address
    """
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        # Take first IP in chain
        return forwarded_for.split(",")[0].strip()

    real_ip = request.headers.get("X-Real-IP")
    if real_ip:
        return real_ip.strip()

    return request.client.host if request.client else "unknown"


def total_pages(total: int, limit: int) -> int:
    """Number of pages needed to show ``total`` items ``limit`` at a time."""
    return math.ceil(total / limit) if limit > 0 else 0
