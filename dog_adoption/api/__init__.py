# =============================================================================
# API MODULE INITIALIZATION
# =============================================================================
# File: api/__init__.py
# Description: HTTP layer: routers and middleware
# =============================================================================
