# =============================================================================
# tests/test_contact_service.py - Contact Service Tests
# =============================================================================
# Tests for owner-scoped contact CRUD:
# - Create/get/list/update/delete for the owner
# - Other users see "not found" for contacts they don't own
# - updatedAt always moves forward on update
# =============================================================================

from datetime import timedelta
from unittest.mock import patch

import pytest

from app.exceptions import ContactNotFoundError, ValidationFailedError


BOB = {"name": "Bob", "email": "bob@x.com", "phone": "555-0100"}


# =============================================================================
# Create / Read
# =============================================================================

class TestCreateAndGet:
    """Tests for creating and fetching contacts."""

    def test_create_contact(self, contact_service):
        contact = contact_service.create_contact("u1", BOB)

        assert contact.user_id == "u1"
        assert contact.name == "Bob"
        assert contact.created_at == contact.updated_at

    def test_get_contact(self, contact_service):
        created = contact_service.create_contact("u1", BOB)

        assert contact_service.get_contact("u1", created.id) == created

    def test_other_user_sees_not_found(self, contact_service):
        created = contact_service.create_contact("u1", BOB)

        with pytest.raises(ContactNotFoundError) as exc_info:
            contact_service.get_contact("u2", created.id)

        assert exc_info.value.status_code == 404
        assert exc_info.value.message == "Contact not found"

    def test_unknown_id(self, contact_service):
        with pytest.raises(ContactNotFoundError):
            contact_service.get_contact("u1", "0" * 32)

    def test_invalid_contact_is_not_stored(self, contact_service, store):
        with pytest.raises(ValidationFailedError):
            contact_service.create_contact("u1", {**BOB, "email": "not-an-email"})

        assert store.count("contacts") == 0

    def test_missing_field_is_not_stored(self, contact_service, store):
        with pytest.raises(ValidationFailedError):
            contact_service.create_contact("u1", {"name": "Bob", "email": "bob@x.com", "phone": None})

        assert store.count("contacts") == 0


class TestListContacts:
    """Tests for listing a user's contacts."""

    def test_only_own_contacts(self, contact_service):
        contact_service.create_contact("u1", BOB)
        contact_service.create_contact("u2", {**BOB, "name": "Carol"})

        listed = contact_service.list_contacts("u1")

        assert [c.name for c in listed] == ["Bob"]

    def test_empty(self, contact_service):
        assert contact_service.list_contacts("u1") == []

    def test_oldest_first(self, contact_service):
        for name in ("Ann", "Ben", "Cid"):
            contact_service.create_contact("u1", {**BOB, "name": name})

        assert [c.name for c in contact_service.list_contacts("u1")] == ["Ann", "Ben", "Cid"]


# =============================================================================
# Update
# =============================================================================

class TestUpdateContact:
    """Tests for partial updates."""

    def test_partial_update(self, contact_service):
        created = contact_service.create_contact("u1", BOB)

        updated = contact_service.update_contact("u1", created.id, {"phone": "555-0199"})

        assert updated.phone == "555-0199"
        assert updated.name == "Bob"
        assert updated.email == "bob@x.com"
        assert updated.created_at == created.created_at
        assert updated.updated_at > created.updated_at

    def test_updated_at_advances_when_clock_stalls(self, contact_service):
        created = contact_service.create_contact("u1", BOB)

        frozen = created.updated_at - timedelta(seconds=5)
        with patch("core.services.contact_service.utc_now", return_value=frozen):
            updated = contact_service.update_contact("u1", created.id, {"name": "Robert"})

        assert updated.updated_at == created.updated_at + timedelta(microseconds=1)

    def test_empty_update_still_touches(self, contact_service):
        created = contact_service.create_contact("u1", BOB)

        updated = contact_service.update_contact("u1", created.id, {})

        assert updated.updated_at > created.updated_at

    def test_cannot_change_owner(self, contact_service):
        created = contact_service.create_contact("u1", BOB)

        updated = contact_service.update_contact("u1", created.id, {"user_id": "u2"})

        assert updated.user_id == "u1"

    def test_other_user_cannot_update(self, contact_service):
        created = contact_service.create_contact("u1", BOB)

        with pytest.raises(ContactNotFoundError):
            contact_service.update_contact("u2", created.id, {"name": "Mallory"})

        assert contact_service.get_contact("u1", created.id).name == "Bob"

    def test_invalid_update_changes_nothing(self, contact_service):
        created = contact_service.create_contact("u1", BOB)

        with pytest.raises(ValidationFailedError):
            contact_service.update_contact("u1", created.id, {"name": "Rob", "email": "nope"})

        assert contact_service.get_contact("u1", created.id) == created

    def test_not_found_before_validation(self, contact_service):
        with pytest.raises(ContactNotFoundError):
            contact_service.update_contact("u1", "missing", {"email": "nope"})


# =============================================================================
# Delete
# =============================================================================

class TestDeleteContact:
    """Tests for deletion."""

    def test_delete_returns_removed_contact(self, contact_service):
        created = contact_service.create_contact("u1", BOB)

        removed = contact_service.delete_contact("u1", created.id)

        assert removed == created
        assert contact_service.list_contacts("u1") == []

    def test_delete_twice(self, contact_service):
        created = contact_service.create_contact("u1", BOB)
        contact_service.delete_contact("u1", created.id)

        with pytest.raises(ContactNotFoundError):
            contact_service.delete_contact("u1", created.id)

    def test_other_user_cannot_delete(self, contact_service):
        created = contact_service.create_contact("u1", BOB)

        with pytest.raises(ContactNotFoundError):
            contact_service.delete_contact("u2", created.id)

        assert contact_service.get_contact("u1", created.id) == created
