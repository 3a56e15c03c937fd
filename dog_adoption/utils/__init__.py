# =============================================================================
# UTILS MODULE INITIALIZATION
# =============================================================================
# File: utils/__init__.py
# Description: Utils module exports
# =============================================================================

from dog_adoption.utils.helpers import (
    utc_now,
    generate_uuid,
    get_client_ip,
    total_pages,
)

__all__ = [
    "utc_now",
    "generate_uuid",
    "get_client_ip",
    "total_pages",
]
