# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .storage_service import StorageService
from .post_service import PostService
from .comment_service import CommentService

__all__ = [
    "StorageService",
    "PostService",
    "CommentService",
]
