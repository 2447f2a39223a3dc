# =============================================================================
# lib/supabase_store.py - Supabase Document Store
# =============================================================================
# DocumentStore backed by Supabase (PostgREST). Each collection maps to a
# table; each document maps to a row.
#
# Expected tables (SQL):
#   create table users (
#     id text primary key,
#     username text unique not null,
#     password text not null,
#     created_at timestamptz not null
#   );
#   create table contacts (
#     id text primary key,
#     user_id text not null references users(id),
#     name text not null, email text not null, phone text not null,
#     created_at timestamptz not null, updated_at timestamptz not null
#   );
#
# Usage:
#   store = SupabaseDocumentStore(url, service_key)
#   store.connect()
# =============================================================================

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

from supabase import create_client, Client

from lib.document_store import DocumentStore, DocumentStoreError, DuplicateDocumentError

# Set up logging for this module
logger = logging.getLogger(__name__)

# PostgreSQL unique_violation
UNIQUE_VIOLATION = "23505"


def _to_row(document: dict[str, Any]) -> dict[str, Any]:
    """Serialize datetimes to ISO 8601 for the JSON request body."""
    return {
        key: value.isoformat() if isinstance(value, datetime) else value
        for key, value in document.items()
    }


class SupabaseDocumentStore(DocumentStore):
    """
    Typed wrapper for Supabase table operations.

    Uses the service_role key, which bypasses Row Level Security; ownership
    is enforced by the services through explicit user_id filters.

    Example:
        store = SupabaseDocumentStore(
            url="https://xxx.supabase.co",
            key="service-role-key",
            probe_table="users",
        )
        store.connect()
        store.find("contacts", {"user_id": user_id}, sort_by="created_at")
    """

    def __init__(
        self,
        url: str | None,
        key: str | None,
        probe_table: str = "users",
        client: Client | None = None,
        unique_fields: dict[str, list[str]] | None = None,
    ):
        self._url = url
        self._key = key
        self._probe_table = probe_table
        self._client = client
        self._unique_fields = unique_fields or {}

    # -------------------------------------------------------------------------
    # Connection
    # -------------------------------------------------------------------------

    def get_client(self) -> Client:
        """
        Get or create the Supabase client.

        Raises:
            DocumentStoreError: If client creation fails
        """
        if self._client is None:
            if not self._url or not self._key:
                raise DocumentStoreError(
                    message="Supabase is not configured",
                    code="CLIENT_NOT_CONFIGURED",
                    suggestion="Set SUPABASE_URL and SUPABASE_SERVICE_KEY in your .env file",
                )
            try:
                self._client = create_client(self._url, self._key)
                logger.info("Supabase client initialized successfully")
            except Exception as e:
                raise DocumentStoreError(
                    message=f"Failed to create Supabase client: {e}",
                    code="CLIENT_INIT_FAILED",
                    suggestion="Check SUPABASE_URL and SUPABASE_SERVICE_KEY in your .env file",
                )
        return self._client

    def connect(self) -> None:
        self.get_client()
        if not self.ping():
            raise DocumentStoreError(
                message=f"Supabase did not answer a query on '{self._probe_table}'",
                code="CONNECT_FAILED",
                suggestion="Check that the project is running and the tables exist",
            )
        self.connected = True

    def ping(self) -> bool:
        try:
            self.get_client().table(self._probe_table).select("id").limit(1).execute()
            return True
        except Exception as e:
            logger.warning(f"Supabase ping failed: {e}")
            return False

    def close(self) -> None:
        self._client = None
        self.connected = False

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    @staticmethod
    def _apply_filters(query, filters: dict[str, Any]):
        for key, value in filters.items():
            query = query.eq(key, value)
        return query

    def insert(self, collection: str, document: dict[str, Any]) -> dict[str, Any]:
        client = self.get_client()
        try:
            response = client.table(collection).insert(_to_row(document)).execute()
        except Exception as e:
            if getattr(e, "code", None) == UNIQUE_VIOLATION:
                # PostgREST doesn't name the column; report the first unique one we know
                fields = self._unique_fields.get(collection, [])
                field = fields[0] if fields else None
                raise DuplicateDocumentError(collection, field, document.get(field) if field else None)
            raise DocumentStoreError(
                message=f"Failed to insert into {collection}: {e}",
                code="INSERT_FAILED",
                details={"collection": collection},
            )

        if not response.data:
            raise DocumentStoreError(
                message=f"Insert into {collection} returned no data",
                code="INSERT_FAILED",
                details={"collection": collection},
            )
        logger.debug(f"Inserted row {response.data[0].get('id')} into {collection}")
        return response.data[0]

    def find_one(self, collection: str, filters: dict[str, Any]) -> dict[str, Any] | None:
        client = self.get_client()
        try:
            query = self._apply_filters(client.table(collection).select("*"), filters)
            response = query.limit(1).execute()
        except Exception as e:
            raise DocumentStoreError(
                message=f"Failed to query {collection}: {e}",
                code="FETCH_FAILED",
                details={"collection": collection},
            )
        return response.data[0] if response.data else None

    def find(
        self,
        collection: str,
        filters: dict[str, Any],
        sort_by: str | None = None,
    ) -> list[dict[str, Any]]:
        client = self.get_client()
        try:
            query = self._apply_filters(client.table(collection).select("*"), filters)
            if sort_by:
                query = query.order(sort_by)
            response = query.execute()
        except Exception as e:
            raise DocumentStoreError(
                message=f"Failed to query {collection}: {e}",
                code="FETCH_FAILED",
                details={"collection": collection},
            )
        return response.data or []

    def update(
        self,
        collection: str,
        filters: dict[str, Any],
        changes: dict[str, Any],
    ) -> dict[str, Any] | None:
        client = self.get_client()
        try:
            query = self._apply_filters(client.table(collection).update(_to_row(changes)), filters)
            response = query.execute()
        except Exception as e:
            raise DocumentStoreError(
                message=f"Failed to update {collection}: {e}",
                code="UPDATE_FAILED",
                details={"collection": collection},
            )
        return response.data[0] if response.data else None

    def delete(self, collection: str, filters: dict[str, Any]) -> dict[str, Any] | None:
        client = self.get_client()
        try:
            query = self._apply_filters(client.table(collection).delete(), filters)
            response = query.execute()
        except Exception as e:
            raise DocumentStoreError(
                message=f"Failed to delete from {collection}: {e}",
                code="DELETE_FAILED",
                details={"collection": collection},
            )
        return response.data[0] if response.data else None
