# =============================================================================
# DOG ADOPTION PLATFORM API
# =============================================================================
# File: __init__.py
# Description: REST backend for registering, browsing and adopting dogs
# =============================================================================

__version__ = "1.0.0"
