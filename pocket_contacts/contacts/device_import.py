"""Import contacts from an external address book.

An address book is anything with ``request_permission()`` and
``get_contacts()``. Two are provided: ``VCardAddressBook`` reads a ``.vcf``
export (the usual way a phone hands its address book to a desktop) and
``StaticAddressBook`` wraps records already in memory.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional, Protocol

import vobject

from .formatters import PHONE_NUMBER_LENGTH, strip_non_digits
from .types import Contact

logger = logging.getLogger(__name__)


class PermissionDeniedError(PermissionError):
    """Raised when the address book refuses read access."""

    def __init__(self, message: str = "Permission to access contacts was denied") -> None:
        super().__init__(message)


@dataclass(slots=True)
class DevicePhoneNumber:
    """A phone entry as the address book reports it."""

    number: Optional[str] = None  # as typed, e.g. "(555) 123-4567"
    digits: Optional[str] = None  # normalized form, when the source has one

    @property
    def raw(self) -> str:
        return self.number or self.digits or ""


@dataclass(slots=True)
class DeviceContact:
    """An address-book record before it is mapped to a Contact."""

    name: Optional[str]
    phone_numbers: List[DevicePhoneNumber] = field(default_factory=list)
    image_uri: Optional[str] = None


class AddressBook(Protocol):
    def request_permission(self) -> bool: ...

    def get_contacts(self) -> List[DeviceContact]: ...


class StaticAddressBook:
    """Address book over a fixed list of records."""

    def __init__(self, entries: Iterable[DeviceContact], *, granted: bool = True) -> None:
        self._entries = list(entries)
        self._granted = granted

    def request_permission(self) -> bool:
        return self._granted

    def get_contacts(self) -> List[DeviceContact]:
        return list(self._entries)


class VCardAddressBook:
    """Address book read from a vCard (``.vcf``) export."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    def request_permission(self) -> bool:
        return self.path.is_file() and os.access(self.path, os.R_OK)

    def get_contacts(self) -> List[DeviceContact]:
        content = self.path.read_text(encoding="utf-8", errors="replace")
        entries: List[DeviceContact] = []
        for component in vobject.readComponents(content):
            if component.name.upper() != "VCARD":
                continue
            entries.append(_device_contact_from_vcard(component))
        logger.info(f"Read {len(entries)} vCards from {self.path.name}")
        return entries


def _join_name_part(part) -> str:
    if isinstance(part, (list, tuple)):
        return " ".join(p for p in part if p)
    return part or ""


def _vcard_name(card) -> Optional[str]:
    fn = card.contents.get("fn")
    if fn and fn[0].value and fn[0].value.strip():
        return fn[0].value.strip()

    n = card.contents.get("n")
    if n:
        value = n[0].value
        parts = [
            _join_name_part(getattr(value, attr, ""))
            for attr in ("prefix", "given", "additional", "family", "suffix")
        ]
        joined = " ".join(p for p in parts if p).strip()
        if joined:
            return joined
    return None


def _vcard_photo_uri(card) -> Optional[str]:
    for line in card.contents.get("photo", []):
        value = line.value
        # Inline base64 photos decode to bytes; only URI references are kept.
        if isinstance(value, str) and ":" in value:
            return value.strip()
    return None


def _device_contact_from_vcard(card) -> DeviceContact:
    phones = [
        DevicePhoneNumber(number=line.value)
        for line in card.contents.get("tel", [])
        if isinstance(line.value, str)
    ]
    return DeviceContact(
        name=_vcard_name(card),
        phone_numbers=phones,
        image_uri=_vcard_photo_uri(card),
    )


def to_contact(entry: DeviceContact) -> Optional[Contact]:
    """Map one address-book record to a new Contact, or None if it is unusable.

    Only the first phone number is considered; when it does not clean to
    exactly 7 digits the whole record is skipped.
    """
    if not entry.name or not entry.phone_numbers:
        return None

    phone = strip_non_digits(entry.phone_numbers[0].raw)
    if len(phone) != PHONE_NUMBER_LENGTH:
        return None

    return Contact.new(name=entry.name, phone_number=phone, photo=entry.image_uri or None)


def import_device_contacts(address_book: AddressBook) -> List[Contact]:
    """Read the address book and return new, unsaved contacts.

    Raises:
        PermissionDeniedError: if the address book denies access. Nothing is
            read in that case.
    """
    if not address_book.request_permission():
        raise PermissionDeniedError()

    entries = address_book.get_contacts()
    imported = [contact for contact in map(to_contact, entries) if contact is not None]
    logger.info(
        f"Mapped {len(imported)} of {len(entries)} address book entries to contacts"
    )
    return imported
