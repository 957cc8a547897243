# =============================================================================
# app/routers/comments.py - Comment Endpoints
# =============================================================================

from typing import Annotated, Any

from fastapi import APIRouter, Body, Path

from app.dependencies import CommentServiceDep
from core.models.comment import CommentCreateRequest, CommentResponse

router = APIRouter()

PostId = Annotated[str, Path(description="Post ID")]


@router.get("/{post_id}/comments", response_model=list[CommentResponse])
async def list_comments(post_id: PostId, comments: CommentServiceDep):
    """
    List a post's comments, oldest first.
    """
    return await comments.list_comments(post_id)


@router.post("/{post_id}/comments", status_code=201, response_model=CommentResponse)
async def create_comment(
    post_id: PostId,
    comments: CommentServiceDep,
    payload: Annotated[Any, Body(description="JSON object with a `body` field")] = None,
):
    """
    Add a comment to a post.

    The body is trimmed and clipped to 500 characters; an empty body is
    rejected with {"error": "empty"}. Payloads that are not a JSON object
    (form data, arrays, scalars) count as an empty body.
    """
    body = None
    if isinstance(payload, dict):
        body = CommentCreateRequest.model_validate(payload).body
    return await comments.create_comment(post_id, body)
