# =============================================================================
# core/services/contact_service.py - Contact Business Logic
# =============================================================================
# Handles contact CRUD operations scoped to the owning user.
# Separates HTTP concerns from database/business logic.
#
# Every query filters on user_id taken from the verified session token.
# A contact that exists but belongs to someone else is reported exactly
# like a missing one.
# =============================================================================

import logging
from datetime import timedelta
from typing import Any

from app.exceptions import ContactNotFoundError
from core.models.contact import Contact
from core.services.validation import ContactValidator
from lib.document_store import DocumentStore
from lib.utils import new_id, normalize_id, parse_timestamp, utc_now

logger = logging.getLogger(__name__)


class ContactService:
    """
    Service for contact management operations.

    Provides a clean interface between API routes and the document store.

    Example:
        contacts = ContactService(store, ContactValidator("lenient"))
        bob = contacts.create_contact(user_id, {"name": "Bob", "email": "bob@x.com", "phone": "555-0100"})
        contacts.get_contact(user_id, bob.id)
    """

    def __init__(
        self,
        store: DocumentStore,
        validator: ContactValidator,
        contacts_table: str = "contacts",
    ):
        self.store = store
        self.validator = validator
        self.contacts_table = contacts_table

    def _owned(self, user_id: str, contact_id: str) -> dict[str, Any]:
        return {"id": normalize_id(contact_id), "user_id": user_id}

    def list_contacts(self, user_id: str) -> list[Contact]:
        """
        List all contacts owned by a user, oldest first.

        Ties on created_at keep store insertion order.
        """
        documents = self.store.find(
            self.contacts_table,
            {"user_id": user_id},
            sort_by="created_at",
        )
        logger.debug(f"Listed {len(documents)} contacts for user: {user_id}")
        return [Contact(**document) for document in documents]

    def create_contact(self, user_id: str, fields: dict[str, Any]) -> Contact:
        """
        Create a contact owned by `user_id`.

        Args:
            user_id: Owner, from the session token
            fields: Raw name/email/phone values

        Returns:
            The stored Contact

        Raises:
            ValidationFailedError: If any field is missing or malformed
        """
        clean = self.validator.validate_new(fields)
        now = utc_now()
        document = {
            "id": new_id(),
            "user_id": user_id,
            **clean,
            "created_at": now,
            "updated_at": now,
        }
        stored = self.store.insert(self.contacts_table, document)
        logger.info(f"Created contact: {stored['id']} for user: {user_id}")
        return Contact(**stored)

    def get_contact(self, user_id: str, contact_id: str) -> Contact:
        """
        Get a contact by ID.

        Raises:
            ContactNotFoundError: If it doesn't exist or the user doesn't own it
        """
        document = self.store.find_one(self.contacts_table, self._owned(user_id, contact_id))
        if document is None:
            raise ContactNotFoundError(str(contact_id))
        return Contact(**document)

    def update_contact(self, user_id: str, contact_id: str, fields: dict[str, Any]) -> Contact:
        """
        Apply a partial update and refresh updated_at.

        Args:
            user_id: Owner, from the session token
            contact_id: The contact to change
            fields: Any subset of name/email/phone; None means unchanged

        Raises:
            ContactNotFoundError: If it doesn't exist or the user doesn't own it
            ValidationFailedError: If a provided value is blank or malformed
        """
        current = self.get_contact(user_id, contact_id)
        changes = self.validator.validate_changes(fields)

        # updated_at must move forward even if the clock hasn't ticked
        previous = parse_timestamp(current.updated_at)
        now = utc_now()
        if now <= previous:
            now = previous + timedelta(microseconds=1)
        changes["updated_at"] = now

        updated = self.store.update(
            self.contacts_table,
            self._owned(user_id, current.id),
            changes,
        )
        if updated is None:
            # Deleted between the read and the write
            raise ContactNotFoundError(str(contact_id))

        logger.info(f"Updated contact: {current.id} fields: {sorted(changes)}")
        return Contact(**updated)

    def delete_contact(self, user_id: str, contact_id: str) -> Contact:
        """
        Delete a contact and return what was removed.

        Not idempotent: deleting the same id again raises ContactNotFoundError.
        """
        removed = self.store.delete(self.contacts_table, self._owned(user_id, contact_id))
        if removed is None:
            raise ContactNotFoundError(str(contact_id))
        logger.info(f"Deleted contact: {removed['id']} for user: {user_id}")
        return Contact(**removed)
