"""File-backed contact storage: one pretty-printed JSON file per contact.

Files are named ``<sanitized-name>-<id>.json`` so the directory stays
browsable and the id can always be recovered from the filename. The directory
is the only source of truth; every read rescans it.
"""
from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import List, Optional

from ..config import resolve_contacts_dir
from .formatters import name_sort_key
from .types import Contact

logger = logging.getLogger(__name__)

CONTACT_FILE_SUFFIX = ".json"

_UNSAFE_FILENAME_CHARS = re.compile(r"[^a-zA-Z0-9]")
_UUID_PATTERN = re.compile(
    r"[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}"
)


class ContactParseError(ValueError):
    """Raised when a contact file cannot be parsed into a Contact."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Could not parse contact file {path.name}: {reason}")
        self.path = path


def _contacts_dir() -> Path:
    return resolve_contacts_dir()


def sanitize_name(name: str) -> str:
    """Replace every character outside ``[A-Za-z0-9]`` with a hyphen."""
    return _UNSAFE_FILENAME_CHARS.sub("-", name)


def contact_filename(contact: Contact) -> str:
    return f"{sanitize_name(contact.name)}-{contact.id}{CONTACT_FILE_SUFFIX}"


def _is_contact_file(path: Path) -> bool:
    return path.is_file() and path.name.endswith(CONTACT_FILE_SUFFIX)


def _matches_id(path: Path, contact_id: str) -> bool:
    """True when ``path`` holds the contact with exactly ``contact_id``.

    The filename suffix only narrows the candidates: sanitized names and ids
    both contain hyphens, so ``-<id>.json`` also matches the tail of a longer
    id. The stored ``id`` decides. An unreadable file is matched by name only
    when ``contact_id`` is a full UUID, which no shorter fragment can mimic.
    """
    if not path.name.endswith(f"-{contact_id}{CONTACT_FILE_SUFFIX}"):
        return False
    try:
        return _read_contact(path).id == contact_id
    except ContactParseError:
        return _UUID_PATTERN.fullmatch(contact_id) is not None


def _contact_files(directory: Path) -> List[Path]:
    return sorted(
        (entry for entry in directory.iterdir() if _is_contact_file(entry)),
        key=lambda entry: entry.name,
    )


def initialize_contacts_directory() -> Path:
    """Create the contacts directory (and parents) if it does not exist."""
    directory = _contacts_dir()
    directory.mkdir(parents=True, exist_ok=True)
    return directory


def save_contact(contact: Contact) -> Path:
    """Write a contact to its file, overwriting a file with the same name.

    No validation is performed on the contact's fields.

    Returns:
        Path of the written file.
    """
    directory = initialize_contacts_directory()
    filepath = directory / contact_filename(contact)
    payload = json.dumps(contact.to_dict(), indent=4, ensure_ascii=False)
    filepath.write_text(payload, encoding="utf-8")
    logger.debug(f"Saved contact {contact.id} to {filepath.name}")
    return filepath


def _read_contact(path: Path) -> Contact:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        return Contact.from_dict(data)
    except (ValueError, KeyError, TypeError) as exc:
        raise ContactParseError(path, str(exc)) from exc


def load_all_contacts(*, strict: bool = True) -> List[Contact]:
    """Load every contact in the directory, sorted by name.

    Args:
        strict: When True (the default) one unreadable file fails the whole
            listing with ContactParseError. When False the file is skipped
            and a warning is logged.

    Returns:
        Contacts ordered ascending by name collation.
    """
    directory = initialize_contacts_directory()

    contacts: List[Contact] = []
    for filepath in _contact_files(directory):
        try:
            contacts.append(_read_contact(filepath))
        except ContactParseError as exc:
            if strict:
                raise
            logger.warning(f"Skipping unreadable contact file: {exc}")

    contacts.sort(key=lambda c: name_sort_key(c.name))
    return contacts


def load_contact_by_id(contact_id: str) -> Optional[Contact]:
    """Return the contact with the given id, or None."""
    return next(
        (contact for contact in load_all_contacts() if contact.id == contact_id),
        None,
    )


def update_contact(contact: Contact) -> Path:
    """Replace the stored record for ``contact.id`` with ``contact``.

    The new file is written before the old one is removed, so an interrupted
    update leaves a stale duplicate rather than no copy at all. Afterwards
    exactly one file carries the contact's id.
    """
    new_path = save_contact(contact)
    for filepath in _contact_files(new_path.parent):
        if filepath != new_path and _matches_id(filepath, contact.id):
            filepath.unlink()
            logger.debug(f"Removed stale file {filepath.name} for contact {contact.id}")
    return new_path


def delete_contact(contact_id: str) -> bool:
    """Delete the file for a contact.

    Returns:
        True if a file was removed, False if no file carried the id.
    """
    directory = initialize_contacts_directory()
    for filepath in _contact_files(directory):
        if _matches_id(filepath, contact_id):
            filepath.unlink()
            logger.debug(f"Deleted contact {contact_id} ({filepath.name})")
            return True
    return False
