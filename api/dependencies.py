"""Shared dependencies and serialization helpers for API routers.

Usage in routers:
    from api.dependencies import get_settings, serialize_contact
"""
from __future__ import annotations

import os
from functools import lru_cache

from pocket_contacts.config import Settings, load_settings
from pocket_contacts.contacts import Contact, format_phone_number, get_initials


ALLOWED_ORIGINS = [
    "http://localhost:8081",
    "http://127.0.0.1:8081",
    os.getenv("POCKET_CONTACTS_ALLOWED_FRONTEND", "").strip(),
]


@lru_cache
def get_settings() -> Settings:
    """Get application settings (cached)."""
    return load_settings()


def serialize_contact(contact: Contact) -> dict:
    """Serialize a Contact to API response format."""
    return {
        "id": contact.id,
        "name": contact.name,
        "phoneNumber": contact.phone_number,
        "photo": contact.photo,
        "displayPhone": format_phone_number(contact.phone_number),
        "initials": get_initials(contact.name),
    }
