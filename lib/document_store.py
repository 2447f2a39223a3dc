# =============================================================================
# lib/document_store.py - Document Store Interface
# =============================================================================
# Defines the small storage contract the services depend on, plus an
# in-process implementation used for development and tests.
#
# Documents are plain dicts keyed by "id". Filters are equality matches on
# top-level fields, which is all the auth and contacts services need.
#
# Usage:
#   store = InMemoryDocumentStore(unique_fields={"users": ["username"]})
#   store.connect()
#   store.insert("users", {"id": "...", "username": "alice"})
#   store.find("contacts", {"user_id": "..."}, sort_by="created_at")
# =============================================================================

from __future__ import annotations

import copy
import logging
import threading
from abc import ABC, abstractmethod
from typing import Any

from lib.utils import ApplicationError

logger = logging.getLogger(__name__)


class DocumentStoreError(ApplicationError):
    """Raised when the store cannot complete an operation."""

    def __init__(
        self,
        message: str,
        code: str = "STORE_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, code=code, suggestion=suggestion, details=details)


class DuplicateDocumentError(DocumentStoreError):
    """Raised when an insert would break a unique field."""

    def __init__(self, collection: str, field: str | None, value: Any):
        super().__init__(
            message=(
                f"Duplicate value for {collection}.{field}"
                if field else f"Duplicate document in {collection}"
            ),
            code="DUPLICATE_DOCUMENT",
            details={"collection": collection, "field": field, "value": value},
        )
        self.collection = collection
        self.field = field
        self.value = value


class DocumentStore(ABC):
    """
    Storage contract for users and contacts.

    Implementations are constructed once per application and passed to the
    services explicitly; nothing in the app reaches for a global handle.
    """

    #: Set by connect(); read by the health endpoint.
    connected: bool = False

    @abstractmethod
    def connect(self) -> None:
        """Open the connection. Raises DocumentStoreError on failure."""

    @abstractmethod
    def ping(self) -> bool:
        """Return True if the store currently answers requests."""

    @abstractmethod
    def insert(self, collection: str, document: dict[str, Any]) -> dict[str, Any]:
        """Insert a document and return the stored copy."""

    @abstractmethod
    def find_one(self, collection: str, filters: dict[str, Any]) -> dict[str, Any] | None:
        """Return the first document matching all filters, or None."""

    @abstractmethod
    def find(
        self,
        collection: str,
        filters: dict[str, Any],
        sort_by: str | None = None,
    ) -> list[dict[str, Any]]:
        """Return all matching documents, ascending by `sort_by` if given."""

    @abstractmethod
    def update(
        self,
        collection: str,
        filters: dict[str, Any],
        changes: dict[str, Any],
    ) -> dict[str, Any] | None:
        """Apply `changes` to the first match and return it, or None."""

    @abstractmethod
    def delete(self, collection: str, filters: dict[str, Any]) -> dict[str, Any] | None:
        """Remove the first match and return it, or None."""

    def close(self) -> None:
        """Release resources. Default is a no-op."""
        self.connected = False


class InMemoryDocumentStore(DocumentStore):
    """
    Process-local document store.

    Collections are insertion-ordered lists; a lock serializes writers so
    threadpool-executed handlers see consistent state. Returned documents
    are deep copies, so callers can't mutate stored state by accident.
    """

    def __init__(self, unique_fields: dict[str, list[str]] | None = None):
        self._collections: dict[str, list[dict[str, Any]]] = {}
        self._unique_fields = unique_fields or {}
        self._lock = threading.Lock()

    def connect(self) -> None:
        self.connected = True
        logger.info("In-memory document store ready")

    def ping(self) -> bool:
        return self.connected

    @staticmethod
    def _matches(document: dict[str, Any], filters: dict[str, Any]) -> bool:
        return all(document.get(key) == value for key, value in filters.items())

    def _collection(self, name: str) -> list[dict[str, Any]]:
        return self._collections.setdefault(name, [])

    def insert(self, collection: str, document: dict[str, Any]) -> dict[str, Any]:
        with self._lock:
            docs = self._collection(collection)
            for field in self._unique_fields.get(collection, []):
                value = document.get(field)
                if any(existing.get(field) == value for existing in docs):
                    raise DuplicateDocumentError(collection, field, value)
            stored = copy.deepcopy(document)
            docs.append(stored)
            return copy.deepcopy(stored)

    def find_one(self, collection: str, filters: dict[str, Any]) -> dict[str, Any] | None:
        with self._lock:
            for document in self._collection(collection):
                if self._matches(document, filters):
                    return copy.deepcopy(document)
        return None

    def find(
        self,
        collection: str,
        filters: dict[str, Any],
        sort_by: str | None = None,
    ) -> list[dict[str, Any]]:
        with self._lock:
            found = [
                copy.deepcopy(document)
                for document in self._collection(collection)
                if self._matches(document, filters)
            ]
        if sort_by:
            # sorted() is stable, so ties keep insertion order
            found = sorted(found, key=lambda document: document.get(sort_by))
        return found

    def update(
        self,
        collection: str,
        filters: dict[str, Any],
        changes: dict[str, Any],
    ) -> dict[str, Any] | None:
        with self._lock:
            for document in self._collection(collection):
                if self._matches(document, filters):
                    document.update(copy.deepcopy(changes))
                    return copy.deepcopy(document)
        return None

    def delete(self, collection: str, filters: dict[str, Any]) -> dict[str, Any] | None:
        with self._lock:
            docs = self._collection(collection)
            for index, document in enumerate(docs):
                if self._matches(document, filters):
                    return docs.pop(index)
        return None

    def count(self, collection: str) -> int:
        """Number of documents in a collection."""
        with self._lock:
            return len(self._collection(collection))
