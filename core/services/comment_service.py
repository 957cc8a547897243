# =============================================================================
# core/services/comment_service.py - Comment Business Logic
# =============================================================================

import logging
from typing import Any

from lib.supabase_client import RecordStore, SupabaseClientError
from lib.utils import clip_text, new_id
from core.services.post_service import COMMENTS_TABLE
from app.exceptions import EmptyCommentError, UpstreamError

logger = logging.getLogger(__name__)


class CommentService:
    """Service for listing and creating comments on a post."""

    def __init__(self, records: RecordStore, max_comment_length: int = 500):
        self.records = records
        self.max_comment_length = max_comment_length

    async def list_comments(self, post_id: str) -> list[dict[str, Any]]:
        """
        Fetch a post's comments, oldest first.

        Raises:
            UpstreamError: If the query fails
        """
        try:
            return await self.records.select(
                COMMENTS_TABLE,
                "id, body, created_at",
                eq={"post_id": post_id},
                order_by="created_at",
            )
        except SupabaseClientError as e:
            raise UpstreamError(e.message, details=e.details) from e

    async def create_comment(self, post_id: str, body: Any) -> dict[str, Any]:
        """
        Add a comment to a post.

        Leading and trailing whitespace is stripped before both the
        emptiness check and storage, so the stored body never carries it.

        Args:
            post_id: Post the comment belongs to
            body: Raw body value; cast to text, trimmed and clipped

        Returns:
            The inserted comment row

        Raises:
            EmptyCommentError: If nothing is left after trimming
            UpstreamError: If the insert fails
        """
        text = clip_text("" if body is None else str(body).strip(), self.max_comment_length)
        if not text:
            raise EmptyCommentError(post_id)

        try:
            comment = await self.records.insert(
                COMMENTS_TABLE,
                {"id": new_id(), "post_id": post_id, "body": text},
            )
        except SupabaseClientError as e:
            raise UpstreamError(e.message, details=e.details) from e

        logger.info(f"Added comment {comment.get('id')} to post {post_id}")
        return comment
