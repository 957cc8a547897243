# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
# These are injected into route handlers using Depends().
#
# The store clients are created once in the app lifespan and kept on
# app.state; tests swap them via app.dependency_overrides.
# =============================================================================

from typing import Annotated

from fastapi import Depends, Request

from app.config import settings
from core.services.comment_service import CommentService
from core.services.post_service import PostService
from core.services.storage_service import StorageService
from lib.supabase_client import RecordStore


def get_record_store(request: Request) -> RecordStore:
    """Get the shared record store client."""
    return request.app.state.record_store


def get_storage_service(request: Request) -> StorageService:
    """Get the shared object store client."""
    return request.app.state.storage_service


RecordStoreDep = Annotated[RecordStore, Depends(get_record_store)]
StorageDep = Annotated[StorageService, Depends(get_storage_service)]


def get_post_service(records: RecordStoreDep, storage: StorageDep) -> PostService:
    return PostService(
        records,
        storage,
        signed_url_expires_in=settings.SIGNED_URL_EXPIRES_IN,
        max_caption_length=settings.MAX_CAPTION_LENGTH,
    )


def get_comment_service(records: RecordStoreDep) -> CommentService:
    return CommentService(records, max_comment_length=settings.MAX_COMMENT_LENGTH)


# Type aliases for dependency injection
PostServiceDep = Annotated[PostService, Depends(get_post_service)]
CommentServiceDep = Annotated[CommentService, Depends(get_comment_service)]
