# =============================================================================
# lib/supabase_client.py - Supabase Client Wrapper
# =============================================================================
# This module owns the connection to Supabase and provides RecordStore, a
# small typed wrapper over the PostgREST table API:
# - select with equality / membership filters and ordering
# - insert returning the stored row
# - delete by equality filters
#
# The async client is created once at startup (see app.main.lifespan) and
# handed to RecordStore and StorageService explicitly.
#
# Usage:
#   client = await create_supabase_client(settings)
#   records = RecordStore(client)
#   posts = await records.select("posts", order_by="created_at", descending=True)
# =============================================================================

from __future__ import annotations

import logging
from typing import Any, Iterable

from supabase import AsyncClient, acreate_client

from app.config import Settings

# Set up logging for this module
logger = logging.getLogger(__name__)


class SupabaseClientError(Exception):
    """
    Error during Supabase operations.

    `message` carries the upstream error text unchanged so it can be
    reported to API clients as-is.
    """

    def __init__(
        self,
        message: str,
        code: str = "SUPABASE_ERROR",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


def error_message(exc: BaseException) -> str:
    """
    Extract the human-readable message from a Supabase exception.

    postgrest.APIError and storage3 errors both expose `.message`;
    anything else falls back to str().
    """
    message = getattr(exc, "message", None)
    if isinstance(message, str) and message:
        return message
    return str(exc)


async def create_supabase_client(settings: Settings) -> AsyncClient:
    """
    Create the async Supabase client.

    Uses the service_role key which bypasses Row Level Security (RLS).
    This is appropriate for server-side operations.

    Raises:
        SupabaseClientError: If client creation fails
    """
    try:
        client = await acreate_client(
            settings.SUPABASE_URL,
            settings.SUPABASE_SERVICE_ROLE,
        )
    except Exception as e:
        raise SupabaseClientError(
            message=f"Failed to create Supabase client: {e}",
            code="CLIENT_INIT_FAILED",
        ) from e

    logger.info("Supabase client initialized successfully")
    return client


class RecordStore:
    """
    Typed wrapper for Supabase table operations.

    One instance is shared across the application. Every method raises
    SupabaseClientError on failure.

    Example:
        rows = await records.select(
            "post_comments",
            "id, body, created_at",
            eq={"post_id": post_id},
            order_by="created_at",
        )
    """

    def __init__(self, client: AsyncClient):
        self._client = client

    async def select(
        self,
        table: str,
        columns: str = "*",
        *,
        eq: dict[str, Any] | None = None,
        in_: tuple[str, Iterable[Any]] | None = None,
        order_by: str | None = None,
        descending: bool = False,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        """
        Fetch rows from a table.

        Args:
            table: Table name
            columns: PostgREST column list (default: all columns)
            eq: Column -> value equality filters
            in_: (column, values) membership filter
            order_by: Column to sort on
            descending: Sort newest/largest first
            limit: Maximum number of rows

        Returns:
            List of row dicts (empty if nothing matched)
        """
        query = self._client.table(table).select(columns)

        for column, value in (eq or {}).items():
            query = query.eq(column, value)
        if in_ is not None:
            column, values = in_
            query = query.in_(column, list(values))
        if order_by:
            query = query.order(order_by, desc=descending)
        if limit is not None:
            query = query.limit(limit)

        try:
            response = await query.execute()
        except Exception as e:
            raise SupabaseClientError(
                message=error_message(e),
                code="SELECT_FAILED",
                details={"table": table},
            ) from e

        rows = response.data or []
        logger.debug(f"Fetched {len(rows)} rows from {table}")
        return rows

    async def insert(self, table: str, row: dict[str, Any]) -> dict[str, Any]:
        """
        Insert one row and return it as stored (with server defaults
        such as created_at filled in).
        """
        try:
            response = await self._client.table(table).insert(row).execute()
        except Exception as e:
            raise SupabaseClientError(
                message=error_message(e),
                code="INSERT_FAILED",
                details={"table": table},
            ) from e

        if not response.data:
            raise SupabaseClientError(
                message="Insert returned no data",
                code="INSERT_NO_DATA",
                details={"table": table},
            )

        logger.info(f"Inserted row {row.get('id')} into {table}")
        return response.data[0]

    async def delete(self, table: str, *, eq: dict[str, Any]) -> list[dict[str, Any]]:
        """
        Delete rows matching all equality filters.

        Returns:
            The deleted rows
        """
        if not eq:
            raise ValueError("delete requires at least one filter")

        query = self._client.table(table).delete()
        for column, value in eq.items():
            query = query.eq(column, value)

        try:
            response = await query.execute()
        except Exception as e:
            raise SupabaseClientError(
                message=error_message(e),
                code="DELETE_FAILED",
                details={"table": table, **eq},
            ) from e

        rows = response.data or []
        logger.info(f"Deleted {len(rows)} rows from {table}")
        return rows

    async def ping(self, table: str) -> None:
        """Cheap round trip used by the readiness check."""
        await self.select(table, "id", limit=1)
