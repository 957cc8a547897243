# =============================================================================
# core/models/comment.py - Comment Schemas
# =============================================================================

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class CommentCreateRequest(BaseModel):
    """
    Body of POST /api/posts/{id}/comments.

    `body` is accepted as any JSON scalar and cast to text by the service,
    so {"body": 42} stores "42".
    """
    body: Any = Field(default=None, examples=["Nice shot!"])


class CommentResponse(BaseModel):
    """
    Schema for returning a comment to clients.

    List responses carry only id/body/created_at; the create response
    echoes the full inserted row, including post_id.
    """

    model_config = ConfigDict(extra="allow")

    id: str = Field(..., description="Unique comment identifier")

    body: str = Field(..., description="Comment text")

    created_at: datetime | None = Field(
        default=None,
        description="Timestamp assigned by the store on insert"
    )
