# =============================================================================
# core/models/contact.py - Contact Schemas
# =============================================================================
# These models define the API contract for contact operations:
# - ContactCreate: Input for POST /api/contacts
# - ContactUpdate: Partial input for PUT /api/contacts/{id}
# - Contact: Output when returning contact data to clients
#
# A contact always belongs to exactly one user (user_id).
# =============================================================================

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ContactCreate(BaseModel):
    """
    Schema for creating a contact.

    All three fields are required, but presence and format are checked by
    the contact validator so the client gets one message per field.

    Example:
        {"name": "Bob", "email": "bob@x.com", "phone": "555-0100"}
    """

    name: str | None = Field(default=None, examples=["Bob"])
    email: str | None = Field(default=None, examples=["bob@x.com"])
    phone: str | None = Field(default=None, examples=["555-0100"])

    def provided_fields(self) -> dict[str, str | None]:
        """Fields as a plain dict, including missing ones as None."""
        return self.model_dump()


class ContactUpdate(BaseModel):
    """
    Schema for a partial contact update.

    Omitted or null fields are left unchanged.

    Example:
        {"phone": "555-0199"}
    """

    name: str | None = Field(default=None, examples=["Robert"])
    email: str | None = Field(default=None, examples=["robert@x.com"])
    phone: str | None = Field(default=None, examples=["555-0199"])

    def provided_fields(self) -> dict[str, str]:
        """Only the fields the client actually sent with a value."""
        return self.model_dump(exclude_none=True)


class Contact(BaseModel):
    """
    Schema for returning contact data to clients.

    Returned by every /api/contacts endpoint.

    Example:
        {
            "_id": "9a1f3c5e7b2d4f6a8c0e1b3d5f7a9c2e",
            "user_id": "6f1c0b9e2d8a4c1f9b3e7a5d4c2b1a09",
            "name": "Bob",
            "email": "bob@x.com",
            "phone": "555-0100",
            "createdAt": "2024-01-15T10:30:00Z",
            "updatedAt": "2024-01-15T10:30:00Z"
        }
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., alias="_id", description="Unique contact identifier")
    user_id: str = Field(..., description="Owning user identifier")
    name: str
    email: str
    phone: str
    created_at: datetime = Field(..., alias="createdAt")
    updated_at: datetime = Field(..., alias="updatedAt")
