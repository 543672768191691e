"""Read-only queries over the stored contacts."""
from __future__ import annotations

from typing import List, Optional

from .store import load_all_contacts
from .types import Contact


def search_contacts(term: str) -> List[Contact]:
    """Case-insensitive substring search on contact names.

    A blank term returns every contact. Results keep the name ordering of
    ``load_all_contacts``.
    """
    contacts = load_all_contacts()
    if not term.strip():
        return contacts

    needle = term.lower()
    return [contact for contact in contacts if needle in contact.name.lower()]


def find_contact_by_phone_number(phone_number: str) -> Optional[Contact]:
    """Return the first contact whose phone number equals ``phone_number``."""
    return next(
        (c for c in load_all_contacts() if c.phone_number == phone_number),
        None,
    )


def find_contact_by_name(name: str) -> Optional[Contact]:
    """Return the first contact whose trimmed name matches, ignoring case."""
    normalized = name.strip().lower()
    return next(
        (c for c in load_all_contacts() if c.name.strip().lower() == normalized),
        None,
    )
