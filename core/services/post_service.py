# =============================================================================
# core/services/post_service.py - Post Business Logic
# =============================================================================
# Handles post listing, upload, cascade deletion and likes.
# Separates HTTP concerns from database/storage logic.
#
# None of the multi-step operations here are transactional: the record
# store and the object store are separate systems.
# =============================================================================

import logging
from collections import defaultdict
from typing import Any, Iterable

from lib.supabase_client import RecordStore, SupabaseClientError
from lib.utils import clip_text, new_id
from core.services.storage_service import StorageService
from app.exceptions import PostNotFoundError, UpstreamError

logger = logging.getLogger(__name__)

POSTS_TABLE = "posts"
LIKES_TABLE = "post_likes"
COMMENTS_TABLE = "post_comments"

DEFAULT_IMAGE_EXTENSION = "jpg"


def image_key(post_id: str, filename: str | None) -> str:
    """
    Build the storage key for a post's image.

    Example:
        image_key("abc", "Beach.PNG")  # "abc.png"
        image_key("abc", "photo")      # "abc.jpg"
    """
    ext = ""
    if filename and "." in filename:
        ext = filename.rsplit(".", 1)[-1].strip().lower()
    return f"{post_id}.{ext or DEFAULT_IMAGE_EXTENSION}"


def sum_like_counts(rows: Iterable[dict[str, Any]]) -> dict[str, int]:
    """Sum post_likes.count per post_id."""
    totals: dict[str, int] = defaultdict(int)
    for row in rows:
        totals[row["post_id"]] += int(row.get("count") or 0)
    return dict(totals)


class PostService:
    """
    Service for post operations.

    Both store clients are injected so tests can substitute fakes.
    """

    def __init__(
        self,
        records: RecordStore,
        storage: StorageService,
        signed_url_expires_in: int = 3600,
        max_caption_length: int = 2000,
    ):
        self.records = records
        self.storage = storage
        self.signed_url_expires_in = signed_url_expires_in
        self.max_caption_length = max_caption_length

    async def list_posts(self) -> list[dict[str, Any]]:
        """
        List every post, newest first, with like counts and signed URLs.

        Returns:
            Post dicts with `signed_url` (None if signing failed) and
            `like_count` added

        Raises:
            UpstreamError: If the posts or likes query fails
        """
        try:
            posts = await self.records.select(
                POSTS_TABLE,
                order_by="created_at",
                descending=True,
            )
            if not posts:
                return []

            like_rows = await self.records.select(
                LIKES_TABLE,
                "post_id, count",
                in_=("post_id", [post["id"] for post in posts]),
            )
        except SupabaseClientError as e:
            logger.error(f"Failed to list posts: {e}")
            raise UpstreamError(e.message, details=e.details) from e

        like_counts = sum_like_counts(like_rows)
        signed_urls = await self.storage.create_signed_urls(
            [post["image_path"] for post in posts],
            self.signed_url_expires_in,
        )

        logger.debug(f"Listed {len(posts)} posts")
        return [
            {
                **post,
                "signed_url": signed_urls.get(post["image_path"]),
                "like_count": like_counts.get(post["id"], 0),
            }
            for post in posts
        ]

    async def create_post(
        self,
        content: bytes,
        filename: str | None,
        content_type: str | None = None,
        caption: str | None = None,
    ) -> dict[str, Any]:
        """
        Store an image and create its post row.

        The image is written first; the row is inserted only if the
        upload succeeded. If the insert fails the image is removed again.

        Args:
            content: Image bytes
            filename: Original filename (used for the extension only)
            content_type: MIME type reported by the client
            caption: Optional caption, clipped to max_caption_length

        Returns:
            The inserted post with a fresh signed URL and like_count 0

        Raises:
            UpstreamError: If the upload or the insert fails
        """
        post_id = new_id()
        key = image_key(post_id, filename)

        try:
            await self.storage.upload(key, content, content_type)
        except SupabaseClientError as e:
            raise UpstreamError(e.message, details=e.details) from e

        row = {
            "id": post_id,
            "caption": clip_text(caption, self.max_caption_length),
            "image_path": key,
        }

        try:
            post = await self.records.insert(POSTS_TABLE, row)
        except SupabaseClientError as e:
            logger.error(f"Failed to insert post {post_id}: {e}")
            await self._remove_orphan_image(key)
            raise UpstreamError(e.message, details=e.details) from e

        signed_url = await self.storage.create_signed_url(key, self.signed_url_expires_in)

        logger.info(f"Created post: {post_id}")
        return {**post, "signed_url": signed_url, "like_count": 0}

    async def _remove_orphan_image(self, key: str) -> None:
        try:
            await self.storage.remove(key)
        except SupabaseClientError as e:
            logger.warning(f"Orphan image left in storage: {key} ({e})")

    async def delete_post(self, post_id: str) -> None:
        """
        Delete a post together with its image, comments and likes.

        Order: image, comments, likes, post row. Failures of the first
        three steps are logged and skipped; only the post row deletion
        is reported.

        Raises:
            PostNotFoundError: If no post has this id
            UpstreamError: If the lookup or the final deletion fails
        """
        try:
            rows = await self.records.select(
                POSTS_TABLE,
                "image_path",
                eq={"id": post_id},
                limit=1,
            )
        except SupabaseClientError as e:
            raise UpstreamError(e.message, details=e.details) from e

        if not rows:
            raise PostNotFoundError(post_id)

        try:
            await self.storage.remove(rows[0]["image_path"])
        except SupabaseClientError as e:
            logger.warning(f"Failed to remove image for post {post_id}: {e}")

        for table in (COMMENTS_TABLE, LIKES_TABLE):
            try:
                await self.records.delete(table, eq={"post_id": post_id})
            except SupabaseClientError as e:
                logger.warning(f"Failed to clear {table} for post {post_id}: {e}")

        try:
            await self.records.delete(POSTS_TABLE, eq={"id": post_id})
        except SupabaseClientError as e:
            logger.error(f"Failed to delete post {post_id}: {e}")
            raise UpstreamError(e.message, details=e.details) from e

        logger.info(f"Deleted post: {post_id}")

    async def like_post(self, post_id: str) -> None:
        """
        Record one like. Each like is its own row with count = 1.

        The post is not looked up first; an orphan like is rejected by
        the store's foreign key, if one is configured.

        Raises:
            UpstreamError: If the insert fails
        """
        try:
            await self.records.insert(
                LIKES_TABLE,
                {"id": new_id(), "post_id": post_id, "count": 1},
            )
        except SupabaseClientError as e:
            raise UpstreamError(e.message, details=e.details) from e
