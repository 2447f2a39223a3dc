# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable utilities:
# - document_store.py: DocumentStore contract and the in-memory backend
# - supabase_store.py: Supabase-backed DocumentStore
# - utils.py: Shared utilities (ids, timestamps, base error)
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================

from lib.document_store import (
    DocumentStore,
    DocumentStoreError,
    DuplicateDocumentError,
    InMemoryDocumentStore,
)
from lib.utils import ApplicationError, new_id, normalize_id, parse_timestamp, utc_now

__all__ = [
    # Stores
    "DocumentStore",
    "DocumentStoreError",
    "DuplicateDocumentError",
    "InMemoryDocumentStore",
    # Utils
    "ApplicationError",
    "new_id",
    "normalize_id",
    "parse_timestamp",
    "utc_now",
]
