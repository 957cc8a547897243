# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - In-memory stand-ins for the record store and storage service
# - A TestClient wired to those stand-ins through dependency overrides
# =============================================================================

import os
from collections import defaultdict
from datetime import datetime, timedelta, timezone

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_SERVICE_ROLE", "test-service-role-key")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")

import pytest
from fastapi.testclient import TestClient

from lib.supabase_client import SupabaseClientError


# =============================================================================
# In-memory stores
# =============================================================================

class InMemoryRecordStore:
    """
    Mimics RecordStore over plain lists of dicts.

    created_at advances one second per insert so ordering is strict.
    Set `failures[(operation, table)] = "message"` to make a call fail.
    """

    def __init__(self):
        self.tables: dict[str, list[dict]] = defaultdict(list)
        self.failures: dict[tuple[str, str], str] = {}
        self.calls: list[tuple[str, str]] = []
        self._clock = datetime(2024, 1, 15, 10, 0, 0, tzinfo=timezone.utc)

    def _record(self, operation: str, table: str) -> None:
        self.calls.append((operation, table))
        message = self.failures.get((operation, table))
        if message:
            raise SupabaseClientError(message=message, code=f"{operation.upper()}_FAILED")

    @staticmethod
    def _matches(row: dict, eq: dict | None) -> bool:
        return all(row.get(column) == value for column, value in (eq or {}).items())

    async def select(
        self,
        table,
        columns="*",
        *,
        eq=None,
        in_=None,
        order_by=None,
        descending=False,
        limit=None,
    ):
        self._record("select", table)
        rows = [row for row in self.tables[table] if self._matches(row, eq)]
        if in_ is not None:
            column, values = in_
            values = list(values)
            rows = [row for row in rows if row.get(column) in values]
        if order_by:
            rows.sort(key=lambda row: row[order_by], reverse=descending)
        if limit is not None:
            rows = rows[:limit]
        if columns != "*":
            wanted = [c.strip() for c in columns.split(",")]
            rows = [{c: row.get(c) for c in wanted} for row in rows]
        return [dict(row) for row in rows]

    async def insert(self, table, row):
        self._record("insert", table)
        if any(existing["id"] == row["id"] for existing in self.tables[table]):
            raise SupabaseClientError(message="duplicate key value violates unique constraint")
        self._clock += timedelta(seconds=1)
        stored = {**row, "created_at": self._clock.isoformat()}
        self.tables[table].append(stored)
        return dict(stored)

    async def delete(self, table, *, eq):
        self._record("delete", table)
        removed = [row for row in self.tables[table] if self._matches(row, eq)]
        self.tables[table] = [row for row in self.tables[table] if not self._matches(row, eq)]
        return removed

    async def ping(self, table):
        await self.select(table, "id", limit=1)


class InMemoryStorage:
    """
    Mimics StorageService over a dict of key -> bytes.

    Signing never raises, matching StorageService: unsignable keys get None.
    """

    bucket = "private-photos"

    def __init__(self):
        self.objects: dict[str, bytes] = {}
        self.content_types: dict[str, str | None] = {}
        self.upload_error: str | None = None
        self.remove_error: str | None = None
        self.signing_broken = False
        self.batch_sign_calls = 0

    async def upload(self, key, content, content_type=None):
        if self.upload_error:
            raise SupabaseClientError(message=self.upload_error, code="STORAGE_UPLOAD_FAILED")
        if key in self.objects:
            raise SupabaseClientError(message="The resource already exists")
        self.objects[key] = content
        self.content_types[key] = content_type
        return key

    async def remove(self, key):
        if self.remove_error:
            raise SupabaseClientError(message=self.remove_error, code="STORAGE_REMOVE_FAILED")
        self.objects.pop(key, None)

    def _sign(self, key, expires_in):
        if self.signing_broken or key not in self.objects:
            return None
        return f"https://test-project.supabase.co/storage/v1/object/sign/{self.bucket}/{key}?expires={expires_in}"

    async def create_signed_url(self, key, expires_in):
        return self._sign(key, expires_in)

    async def create_signed_urls(self, keys, expires_in):
        self.batch_sign_calls += 1
        return {key: self._sign(key, expires_in) for key in keys}

    async def ping(self):
        return None


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def record_store():
    """Empty in-memory record store."""
    return InMemoryRecordStore()


@pytest.fixture
def storage():
    """Empty in-memory object store."""
    return InMemoryStorage()


@pytest.fixture
def client(record_store, storage):
    """TestClient with both store dependencies replaced by fakes."""
    from app.dependencies import get_record_store, get_storage_service
    from app.main import app

    app.dependency_overrides[get_record_store] = lambda: record_store
    app.dependency_overrides[get_storage_service] = lambda: storage

    # Not entered as a context manager: the lifespan (real Supabase
    # connection) must not run.
    yield TestClient(app)

    app.dependency_overrides.clear()


@pytest.fixture
def upload(client):
    """Helper that uploads a small image and returns the response."""

    def _upload(caption: str | None = "hi", filename: str = "photo.jpg", content: bytes = b"\xff\xd8\xff\xe0fake-jpeg"):
        data = {"caption": caption} if caption is not None else {}
        return client.post(
            "/api/posts",
            files={"image": (filename, content, "image/jpeg")},
            data=data,
        )

    return _upload
