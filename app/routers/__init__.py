# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Liveness and readiness endpoints
# - posts.py: Post listing, upload, delete and like endpoints
# - comments.py: Comment listing and creation endpoints
# - frontend.py: Static bundle and fallback document (mounted last)
#
# Each router is mounted in main.py with a URL prefix.
# =============================================================================

from . import health
from . import posts
from . import comments
from . import frontend

__all__ = [
    "health",
    "posts",
    "comments",
    "frontend",
]
