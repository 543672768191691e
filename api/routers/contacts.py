"""Contacts Router - CRUD, search and vCard import.

Mounted at /contacts. Validation and duplicate resolution are delegated to
pocket_contacts.contacts.service; this module only maps outcomes to HTTP.
"""
from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, Query

from api.dependencies import serialize_contact
from api.models import ContactCreateRequest, ContactImportRequest, ContactUpdateRequest
from pocket_contacts.contacts import (
    ContactNotFoundError,
    DuplicatePhoneNumberError,
    PermissionDeniedError,
    ValidationError,
    VCardAddressBook,
    create_contact,
    delete_contact,
    edit_contact,
    import_device_contacts,
    load_contact_by_id,
    save_imported_contacts,
    search_contacts,
)
from pocket_contacts.contacts.service import KEEP

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("")
def list_contacts(
    search: str = Query("", description="Case-insensitive name substring."),
) -> dict:
    """List contacts sorted by name, optionally filtered by name."""
    contacts = search_contacts(search)
    return {"contacts": [serialize_contact(c) for c in contacts]}


@router.post("", status_code=201)
def create_contact_endpoint(request: ContactCreateRequest) -> dict:
    """Create a contact, or rename the holder of the phone number on request."""
    try:
        contact = create_contact(
            request.name,
            request.phone_number,
            request.photo,
            rename_existing=request.rename_existing,
        )
    except ValidationError as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    except DuplicatePhoneNumberError as exc:
        raise HTTPException(
            status_code=409,
            detail={
                "message": str(exc),
                "existing": serialize_contact(exc.existing),
            },
        )
    return serialize_contact(contact)


@router.post("/import")
def import_contacts_endpoint(request: ContactImportRequest) -> dict:
    """Import contacts from a vCard export, skipping known phone numbers."""
    try:
        imported = import_device_contacts(VCardAddressBook(request.path))
    except PermissionDeniedError as exc:
        raise HTTPException(status_code=403, detail=str(exc))

    summary = save_imported_contacts(imported)
    return {
        "imported": [serialize_contact(c) for c in summary.imported],
        "skippedDuplicates": len(summary.skipped_duplicates),
        "failed": len(summary.failed),
    }


@router.get("/{contact_id}")
def get_contact_endpoint(contact_id: str) -> dict:
    contact = load_contact_by_id(contact_id)
    if contact is None:
        raise HTTPException(status_code=404, detail="Contact not found.")
    return serialize_contact(contact)


@router.put("/{contact_id}")
def update_contact_endpoint(contact_id: str, request: ContactUpdateRequest) -> dict:
    """Edit a contact. Renaming moves it to a new file under the same id."""
    photo = request.photo if "photo" in request.model_fields_set else KEEP
    try:
        contact = edit_contact(
            contact_id,
            name=request.name,
            phone_number=request.phone_number,
            photo=photo,
        )
    except ContactNotFoundError:
        raise HTTPException(status_code=404, detail="Contact not found.")
    except ValidationError as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    return serialize_contact(contact)


@router.delete("/{contact_id}")
def delete_contact_endpoint(contact_id: str) -> dict:
    deleted = delete_contact(contact_id)
    if deleted:
        logger.info(f"Deleted contact {contact_id}")
    return {"deleted": deleted}
