# =============================================================================
# core/services/storage_service.py - Supabase Storage Operations
# =============================================================================
# Handles image upload/removal and signed URL issuance for the private
# photo bucket.
# =============================================================================

import logging
from typing import Any

from supabase import AsyncClient

from lib.supabase_client import SupabaseClientError, error_message

logger = logging.getLogger(__name__)


def _signed_url_from(result: Any) -> str | None:
    """storage3 has returned both spellings across releases."""
    if not isinstance(result, dict):
        return None
    return result.get("signedURL") or result.get("signedUrl") or None


class StorageService:
    """
    Service for Supabase Storage operations.

    All objects live in a single bucket; keys are flat file names.
    """

    def __init__(self, client: AsyncClient, bucket: str):
        self._client = client
        self.bucket = bucket

    def _bucket(self):
        return self._client.storage.from_(self.bucket)

    async def upload(
        self,
        key: str,
        content: bytes,
        content_type: str | None = None,
    ) -> str:
        """
        Upload raw bytes under `key`. Existing objects are never overwritten.

        Returns:
            Storage key

        Raises:
            SupabaseClientError: If upload fails
        """
        file_options = {"upsert": "false"}
        if content_type:
            file_options["content-type"] = content_type

        try:
            await self._bucket().upload(
                path=key,
                file=content,
                file_options=file_options,
            )
        except Exception as e:
            logger.error(f"Storage upload failed: {e}")
            raise SupabaseClientError(
                message=error_message(e),
                code="STORAGE_UPLOAD_FAILED",
                details={"key": key},
            ) from e

        logger.info(f"Uploaded file to storage: {key} ({len(content)} bytes)")
        return key

    async def remove(self, key: str) -> None:
        """
        Remove an object from the bucket.

        Raises:
            SupabaseClientError: If removal fails
        """
        try:
            await self._bucket().remove([key])
        except Exception as e:
            raise SupabaseClientError(
                message=error_message(e),
                code="STORAGE_REMOVE_FAILED",
                details={"key": key},
            ) from e

        logger.info(f"Deleted file from storage: {key}")

    async def create_signed_url(self, key: str, expires_in: int) -> str | None:
        """
        Issue a time-limited read URL for one object.

        Returns None instead of raising: a missing URL must not fail
        the surrounding request.
        """
        try:
            result = await self._bucket().create_signed_url(key, expires_in)
        except Exception as e:
            logger.warning(f"Failed to sign {key}: {e}")
            return None
        return _signed_url_from(result)

    async def create_signed_urls(
        self,
        keys: list[str],
        expires_in: int,
    ) -> dict[str, str | None]:
        """
        Issue signed URLs for many objects in one storage round trip.

        Args:
            keys: Object keys to sign
            expires_in: URL lifetime in seconds

        Returns:
            Mapping of key -> signed URL. Keys the store could not sign
            (or all keys, if the batch call itself fails) map to None.
        """
        urls: dict[str, str | None] = {key: None for key in keys}
        if not keys:
            return urls

        try:
            results = await self._bucket().create_signed_urls(keys, expires_in)
        except Exception as e:
            logger.warning(f"Batch signing of {len(keys)} objects failed: {e}")
            return urls

        for item in results or []:
            if not isinstance(item, dict):
                continue
            path = item.get("path")
            if item.get("error"):
                logger.warning(f"Failed to sign {path}: {item['error']}")
                continue
            if path in urls:
                urls[path] = _signed_url_from(item)

        return urls

    async def ping(self) -> None:
        """Cheap round trip used by the readiness check."""
        try:
            await self._client.storage.list_buckets()
        except Exception as e:
            raise SupabaseClientError(
                message=error_message(e),
                code="STORAGE_UNAVAILABLE",
            ) from e
