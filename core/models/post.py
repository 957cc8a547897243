# =============================================================================
# core/models/post.py - Post Schemas
# =============================================================================
# These models define the API contract for post operations:
# - PostResponse: A post row enriched with its signed URL and like count
# - OkResponse: Bare acknowledgement for delete / like
#
# Rows are stored in the `posts` table; likes live in `post_likes`, one row
# per like with count = 1.
# =============================================================================

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class PostResponse(BaseModel):
    """
    Schema for returning a post to clients.

    Returned by:
    - GET /api/posts (newest first)
    - POST /api/posts (like_count is always 0)

    Example:
        {
            "id": "6f1c0e0a-...",
            "caption": "sunset",
            "image_path": "6f1c0e0a-....jpg",
            "created_at": "2024-01-15T10:30:00Z",
            "signed_url": "https://xxx.supabase.co/storage/v1/object/sign/...",
            "like_count": 3
        }
    """

    # Columns the store adds later are passed through untouched
    model_config = ConfigDict(extra="allow")

    id: str = Field(..., description="Unique post identifier")

    caption: str | None = Field(default="", description="Post caption (passed through as stored)")

    image_path: str = Field(..., description="Object key of the image in storage")

    created_at: datetime | None = Field(
        default=None,
        description="Timestamp assigned by the store on insert"
    )

    # Read-time fields, never persisted
    signed_url: str | None = Field(
        default=None,
        description="Time-limited read URL for the image (null if signing failed)"
    )

    like_count: int = Field(default=0, ge=0, description="Total likes")


class OkResponse(BaseModel):
    """Acknowledgement body: {"ok": true}."""
    ok: bool = True
