# =============================================================================
# tests/test_supabase_client.py - Store Client Tests
# =============================================================================
# Tests RecordStore and StorageService against a mocked Supabase client:
# - query building (filters, ordering)
# - error wrapping (upstream message preserved)
# - signed URL parsing
# =============================================================================

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from core.services.storage_service import StorageService
from lib.supabase_client import RecordStore, SupabaseClientError, error_message


class UpstreamAPIError(Exception):
    """Shaped like postgrest.APIError: the text lives on .message."""

    def __init__(self, message):
        super().__init__({"message": message})
        self.message = message


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def query():
    """A PostgREST builder whose chained calls all return itself."""
    builder = MagicMock()
    for method in ("select", "insert", "delete", "eq", "in_", "order", "limit"):
        getattr(builder, method).return_value = builder
    builder.execute = AsyncMock(return_value=MagicMock(data=[]))
    return builder


@pytest.fixture
def supabase(query):
    client = MagicMock()
    client.table.return_value = query
    return client


@pytest.fixture
def bucket(supabase):
    proxy = MagicMock()
    supabase.storage.from_.return_value = proxy
    return proxy


# =============================================================================
# RecordStore Tests
# =============================================================================

class TestRecordStore:

    def test_select_builds_query(self, supabase, query):
        query.execute.return_value = MagicMock(data=[{"id": "c1"}])
        records = RecordStore(supabase)

        rows = asyncio.run(records.select(
            "post_comments",
            "id, body, created_at",
            eq={"post_id": "p1"},
            order_by="created_at",
        ))

        assert rows == [{"id": "c1"}]
        supabase.table.assert_called_once_with("post_comments")
        query.select.assert_called_once_with("id, body, created_at")
        query.eq.assert_called_once_with("post_id", "p1")
        query.order.assert_called_once_with("created_at", desc=False)
        query.in_.assert_not_called()

    def test_select_membership_filter(self, supabase, query):
        records = RecordStore(supabase)

        asyncio.run(records.select("post_likes", "post_id, count", in_=("post_id", ("a", "b"))))

        query.in_.assert_called_once_with("post_id", ["a", "b"])

    def test_select_none_data_is_empty_list(self, supabase, query):
        query.execute.return_value = MagicMock(data=None)

        assert asyncio.run(RecordStore(supabase).select("posts")) == []

    def test_select_error_keeps_upstream_message(self, supabase, query):
        query.execute.side_effect = UpstreamAPIError("relation \"posts\" does not exist")

        with pytest.raises(SupabaseClientError) as exc_info:
            asyncio.run(RecordStore(supabase).select("posts"))

        assert exc_info.value.message == "relation \"posts\" does not exist"
        assert exc_info.value.code == "SELECT_FAILED"

    def test_insert_returns_stored_row(self, supabase, query):
        stored = {"id": "p1", "caption": "hi", "created_at": "2024-01-15T10:00:00Z"}
        query.execute.return_value = MagicMock(data=[stored])

        row = asyncio.run(RecordStore(supabase).insert("posts", {"id": "p1", "caption": "hi"}))

        assert row == stored
        query.insert.assert_called_once_with({"id": "p1", "caption": "hi"})

    def test_insert_without_data_fails(self, supabase, query):
        with pytest.raises(SupabaseClientError) as exc_info:
            asyncio.run(RecordStore(supabase).insert("posts", {"id": "p1"}))

        assert exc_info.value.code == "INSERT_NO_DATA"

    def test_delete_applies_filters(self, supabase, query):
        asyncio.run(RecordStore(supabase).delete("post_likes", eq={"post_id": "p1"}))

        query.delete.assert_called_once_with()
        query.eq.assert_called_once_with("post_id", "p1")

    def test_delete_requires_filter(self, supabase):
        with pytest.raises(ValueError):
            asyncio.run(RecordStore(supabase).delete("posts", eq={}))


# =============================================================================
# StorageService Tests
# =============================================================================

class TestStorageService:

    def test_upload_never_overwrites(self, supabase, bucket):
        bucket.upload = AsyncMock()
        storage = StorageService(supabase, "private-photos")

        key = asyncio.run(storage.upload("p1.jpg", b"data", "image/jpeg"))

        assert key == "p1.jpg"
        supabase.storage.from_.assert_called_with("private-photos")
        bucket.upload.assert_awaited_once_with(
            path="p1.jpg",
            file=b"data",
            file_options={"upsert": "false", "content-type": "image/jpeg"},
        )

    def test_upload_error_keeps_upstream_message(self, supabase, bucket):
        bucket.upload = AsyncMock(side_effect=UpstreamAPIError("The resource already exists"))

        with pytest.raises(SupabaseClientError) as exc_info:
            asyncio.run(StorageService(supabase, "b").upload("p1.jpg", b"data"))

        assert exc_info.value.message == "The resource already exists"

    def test_remove(self, supabase, bucket):
        bucket.remove = AsyncMock(return_value=[])

        asyncio.run(StorageService(supabase, "b").remove("p1.jpg"))

        bucket.remove.assert_awaited_once_with(["p1.jpg"])

    def test_signed_url(self, supabase, bucket):
        bucket.create_signed_url = AsyncMock(return_value={"signedURL": "https://x/sign/p1.jpg"})

        url = asyncio.run(StorageService(supabase, "b").create_signed_url("p1.jpg", 3600))

        assert url == "https://x/sign/p1.jpg"
        bucket.create_signed_url.assert_awaited_once_with("p1.jpg", 3600)

    def test_signed_url_failure_is_none(self, supabase, bucket):
        bucket.create_signed_url = AsyncMock(side_effect=UpstreamAPIError("Object not found"))

        assert asyncio.run(StorageService(supabase, "b").create_signed_url("p1.jpg", 3600)) is None

    def test_batch_signing(self, supabase, bucket):
        bucket.create_signed_urls = AsyncMock(return_value=[
            {"path": "a.jpg", "signedURL": "https://x/a", "error": None},
            {"path": "b.jpg", "signedURL": None, "error": "Either the object does not exist or you do not have access to it"},
        ])

        urls = asyncio.run(StorageService(supabase, "b").create_signed_urls(["a.jpg", "b.jpg", "c.jpg"], 3600))

        assert urls == {"a.jpg": "https://x/a", "b.jpg": None, "c.jpg": None}
        bucket.create_signed_urls.assert_awaited_once_with(["a.jpg", "b.jpg", "c.jpg"], 3600)

    def test_batch_signing_failure_is_all_none(self, supabase, bucket):
        bucket.create_signed_urls = AsyncMock(side_effect=UpstreamAPIError("timeout"))

        urls = asyncio.run(StorageService(supabase, "b").create_signed_urls(["a.jpg"], 60))

        assert urls == {"a.jpg": None}

    def test_batch_signing_no_keys(self, supabase, bucket):
        bucket.create_signed_urls = AsyncMock()

        assert asyncio.run(StorageService(supabase, "b").create_signed_urls([], 60)) == {}
        bucket.create_signed_urls.assert_not_awaited()


def test_error_message_prefers_message_attribute():
    assert error_message(UpstreamAPIError("boom")) == "boom"
    assert error_message(RuntimeError("plain")) == "plain"
