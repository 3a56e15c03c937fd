# =============================================================================
# DOG ADOPTION PLATFORM API - LOGGING MIDDLEWARE
# =============================================================================
# File: api/middleware/logging_middleware.py
# Description: Access log line per request
# =============================================================================

import logging
import time
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from dog_adoption.utils.helpers import get_client_ip


logger = logging.getLogger(__name__)


class LoggingMiddleware(BaseHTTPMiddleware):
    """
    ┌─────────────────────────────────────────────────────────────────────────┐
    │                    LOGGING MIDDLEWARE                                    │
    │  Logs request/response details for monitoring and debugging             │
    └─────────────────────────────────────────────────────────────────────────┘
    """

    async def dispatch(
        self,
        request: Request,
        call_next: Callable,
    ) -> Response:
        """Log request and response details."""
        start_time = time.perf_counter()

        method = request.method
        path = request.url.path
        client_ip = get_client_ip(request)
        request_id = getattr(request.state, "request_id", "unknown")

        try:
            response = await call_next(request)
        except Exception as e:
            duration_ms = round((time.perf_counter() - start_time) * 1000, 2)
            logger.error(
                f"{method} {path} - ERROR - {duration_ms}ms - "
                f"IP: {client_ip} - RequestID: {request_id} - {e}"
            )
            raise

        duration_ms = round((time.perf_counter() - start_time) * 1000, 2)
        logger.info(
            f"{method} {path} - {response.status_code} - {duration_ms}ms - "
            f"IP: {client_ip} - RequestID: {request_id}"
        )

        return response
