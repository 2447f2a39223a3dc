# =============================================================================
# app/routers/contacts.py - Contact CRUD Endpoints
# =============================================================================
# Handles contact creation and management.
# All endpoints require authentication and only see the caller's contacts.
# Store calls are synchronous, so handlers are plain functions run in
# FastAPI's threadpool.
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Depends, Path, status

from app.auth import AuthUser, get_current_user
from app.dependencies import ContactServiceDep
from core.models.contact import Contact, ContactCreate, ContactUpdate

router = APIRouter()

ContactId = Annotated[str, Path(description="Contact identifier")]


@router.get("", response_model=list[Contact])
def list_contacts(
    contacts: ContactServiceDep,
    user: AuthUser = Depends(get_current_user),
):
    """
    List all contacts owned by the authenticated user.

    Sorted by creation time, oldest first. Searching and filtering happen
    client-side over this full list.
    """
    return contacts.list_contacts(user.id)


@router.post("", response_model=Contact, status_code=status.HTTP_201_CREATED)
def create_contact(
    request: ContactCreate,
    contacts: ContactServiceDep,
    user: AuthUser = Depends(get_current_user),
):
    """
    Create a new contact.

    name, email and phone are all required. Nothing is stored if any of
    them fails validation.
    """
    return contacts.create_contact(user.id, request.provided_fields())


@router.get("/{contact_id}", response_model=Contact)
def get_contact(
    contact_id: ContactId,
    contacts: ContactServiceDep,
    user: AuthUser = Depends(get_current_user),
):
    """
    Get contact details.

    Returns 404 if the contact doesn't exist or belongs to another user.
    """
    return contacts.get_contact(user.id, contact_id)


@router.put("/{contact_id}", response_model=Contact)
def update_contact(
    contact_id: ContactId,
    request: ContactUpdate,
    contacts: ContactServiceDep,
    user: AuthUser = Depends(get_current_user),
):
    """
    Update a contact.

    Partial: only the fields sent are changed. updatedAt always advances.
    """
    return contacts.update_contact(user.id, contact_id, request.provided_fields())


@router.delete("/{contact_id}", response_model=Contact)
def delete_contact(
    contact_id: ContactId,
    contacts: ContactServiceDep,
    user: AuthUser = Depends(get_current_user),
):
    """
    Delete a contact and return it.

    Deleting an id that is already gone returns 404.
    """
    return contacts.delete_contact(user.id, contact_id)
