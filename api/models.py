"""Request models for the contacts API."""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ContactCreateRequest(BaseModel):
    """Request body for creating a contact."""
    model_config = ConfigDict(populate_by_name=True)

    name: str
    phone_number: str = Field(..., alias="phoneNumber")
    photo: Optional[str] = None
    rename_existing: bool = Field(
        False,
        alias="renameExisting",
        description="If the phone number is taken, rename that contact instead.",
    )


class ContactUpdateRequest(BaseModel):
    """Request body for editing a contact. Omitted fields are left unchanged."""
    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = None
    phone_number: Optional[str] = Field(None, alias="phoneNumber")
    photo: Optional[str] = Field(
        None,
        description="Photo URI. Send null to remove the photo; omit to keep it.",
    )


class ContactImportRequest(BaseModel):
    """Request body for importing contacts from a vCard export."""
    path: str = Field(..., description="Path to a .vcf file readable by the server.")
