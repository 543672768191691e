"""Create/edit boundary: validation, duplicate resolution and batch import.

The store persists whatever it is given. Callers that take user input go
through this module so names and phone numbers are checked first, and so a
phone number that already belongs to someone is resolved instead of
duplicated.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from .formatters import clean_phone_number, validate_phone_number
from .search import find_contact_by_phone_number
from .store import load_all_contacts, load_contact_by_id, save_contact, update_contact
from .types import Contact

logger = logging.getLogger(__name__)

# Sentinel for "leave the photo unchanged" in edit_contact.
KEEP = object()


class ValidationError(ValueError):
    """Raised when contact fields fail the input checks."""


class ContactNotFoundError(LookupError):
    """Raised when an edit targets a contact id that is not stored."""

    def __init__(self, contact_id: str) -> None:
        super().__init__(f"Contact {contact_id} not found")
        self.contact_id = contact_id


class DuplicatePhoneNumberError(Exception):
    """Raised when a new contact's phone number already belongs to someone.

    The caller is expected to offer renaming ``existing`` instead, by calling
    ``create_contact`` again with ``rename_existing=True``.
    """

    def __init__(self, existing: Contact, requested_name: str) -> None:
        super().__init__(
            f"Phone number {existing.phone_number} already belongs to {existing.name}"
        )
        self.existing = existing
        self.requested_name = requested_name


@dataclass
class ImportSummary:
    """Outcome of saving a batch of imported contacts."""

    imported: List[Contact] = field(default_factory=list)
    skipped_duplicates: List[Contact] = field(default_factory=list)
    failed: List[Contact] = field(default_factory=list)


def validate_contact_fields(name: str, phone_number: str) -> None:
    """Check user-entered fields before they reach the store.

    Raises:
        ValidationError: on a blank name or a phone that is not 7 digits.
    """
    if not name.strip():
        raise ValidationError("Name is required")
    if not validate_phone_number(phone_number):
        raise ValidationError("Phone number must be exactly 7 digits")


def create_contact(
    name: str,
    phone_number: str,
    photo: Optional[str] = None,
    *,
    rename_existing: bool = False,
) -> Contact:
    """Validate and save a new contact, resolving phone-number duplicates.

    Args:
        name: Display name; surrounding whitespace is trimmed.
        phone_number: Any representation with exactly 7 digits.
        photo: Optional photo URI.
        rename_existing: When the phone number is already stored, rename that
            contact to ``name`` instead of raising. Its photo is kept unless
            ``photo`` is given.

    Returns:
        The created contact, or the renamed existing one.

    Raises:
        ValidationError: if the fields are invalid.
        DuplicatePhoneNumberError: if the number is taken and
            ``rename_existing`` is False.
    """
    validate_contact_fields(name, phone_number)
    name = name.strip()
    cleaned = clean_phone_number(phone_number)

    existing = find_contact_by_phone_number(cleaned)
    if existing is not None:
        if not rename_existing:
            raise DuplicatePhoneNumberError(existing, name)
        renamed = existing.with_changes(name=name, photo=photo or existing.photo)
        update_contact(renamed)
        logger.info(f"Renamed contact {existing.id} from {existing.name!r} to {name!r}")
        return renamed

    contact = Contact.new(name=name, phone_number=cleaned, photo=photo)
    save_contact(contact)
    logger.info(f"Created contact {contact.id}")
    return contact


def edit_contact(
    contact_id: str,
    *,
    name: Optional[str] = None,
    phone_number: Optional[str] = None,
    photo=KEEP,
) -> Contact:
    """Apply changes to a stored contact and persist the full record.

    Fields left as None keep their stored value. ``photo`` may be a URI,
    None to remove the photo, or omitted to keep it.

    Raises:
        ContactNotFoundError: if no contact has ``contact_id``.
        ValidationError: if the resulting fields are invalid.
    """
    existing = load_contact_by_id(contact_id)
    if existing is None:
        raise ContactNotFoundError(contact_id)

    new_name = existing.name if name is None else name
    new_phone = existing.phone_number if phone_number is None else phone_number
    validate_contact_fields(new_name, new_phone)

    updated = existing.with_changes(
        name=new_name.strip(),
        phone_number=clean_phone_number(new_phone),
        photo=existing.photo if photo is KEEP else photo,
    )
    update_contact(updated)
    logger.info(f"Updated contact {contact_id}")
    return updated


def save_imported_contacts(contacts: Iterable[Contact]) -> ImportSummary:
    """Persist imported contacts one at a time.

    Contacts whose phone number is already stored (or appeared earlier in the
    same batch) are skipped. A failure saving one contact is logged and the
    remaining contacts are still saved.
    """
    summary = ImportSummary()
    known_numbers = {c.phone_number for c in load_all_contacts()}

    for contact in contacts:
        if contact.phone_number in known_numbers:
            summary.skipped_duplicates.append(contact)
            continue
        try:
            save_contact(contact)
        except Exception as exc:
            logger.exception(f"Error saving imported contact {contact.name!r}: {exc}")
            summary.failed.append(contact)
            continue
        known_numbers.add(contact.phone_number)
        summary.imported.append(contact)

    logger.info(
        f"Import finished: {len(summary.imported)} saved, "
        f"{len(summary.skipped_duplicates)} duplicates, {len(summary.failed)} failed"
    )
    return summary
