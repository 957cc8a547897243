# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - post.py: Post responses (with signed URL and like count)
# - comment.py: Comment request/response schemas
#
# These models define the "contract" between API and clients.
# =============================================================================

from .post import OkResponse, PostResponse
from .comment import CommentCreateRequest, CommentResponse

__all__ = [
    "OkResponse",
    "PostResponse",
    "CommentCreateRequest",
    "CommentResponse",
]
