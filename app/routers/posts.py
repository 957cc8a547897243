# =============================================================================
# app/routers/posts.py - Post Endpoints
# =============================================================================
# Listing, uploading, deleting and liking posts.
# =============================================================================

import logging
from typing import Annotated

from fastapi import APIRouter, File, Form, Path, UploadFile
from starlette.datastructures import UploadFile as StarletteUploadFile

from app.config import settings
from app.dependencies import PostServiceDep
from app.exceptions import FileTooLargeError, MissingFileError
from core.models.post import OkResponse, PostResponse

logger = logging.getLogger(__name__)

router = APIRouter()

PostId = Annotated[str, Path(description="Post ID")]


@router.get("", response_model=list[PostResponse])
async def list_posts(posts: PostServiceDep):
    """
    List all posts, newest first.

    Each post carries a signed image URL (valid for one hour, null if it
    could not be issued) and its like count.
    """
    return await posts.list_posts()


@router.post("", status_code=201, response_model=PostResponse)
async def create_post(
    posts: PostServiceDep,
    image: Annotated[UploadFile | str | None, File(description="Image file")] = None,
    caption: Annotated[str | None, Form(description="Optional caption")] = None,
):
    """
    Upload an image and create a post for it.

    This endpoint:
    1. Validates the file (present, within the size limit)
    2. Uploads the image to storage
    3. Inserts the post row

    Returns the new post with a signed URL and like_count 0.
    """
    # A plain text "image" field is treated as no file at all
    if not isinstance(image, StarletteUploadFile):
        raise MissingFileError()

    content = await image.read()
    if len(content) > settings.max_upload_size_bytes:
        raise FileTooLargeError(len(content) / (1024 * 1024), settings.MAX_UPLOAD_SIZE_MB)

    logger.info(f"Processing upload: {image.filename} ({len(content)} bytes)")

    return await posts.create_post(
        content=content,
        filename=image.filename,
        content_type=image.content_type,
        caption=caption,
    )


@router.delete("/{post_id}", response_model=OkResponse)
async def delete_post(post_id: PostId, posts: PostServiceDep):
    """
    Delete a post with its image, comments and likes.
    """
    await posts.delete_post(post_id)
    return OkResponse()


@router.post("/{post_id}/like", response_model=OkResponse)
async def like_post(post_id: PostId, posts: PostServiceDep):
    """
    Add one like to a post.
    """
    await posts.like_post(post_id)
    return OkResponse()
