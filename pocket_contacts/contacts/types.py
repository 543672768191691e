"""Contact record and its JSON mapping."""
from __future__ import annotations

import uuid
from dataclasses import dataclass, replace
from typing import Any, Dict, Optional


def generate_contact_id() -> str:
    """Return a fresh random UUID4 string (36 characters).

    No registry or collision check is kept; the 128-bit random space makes
    collisions negligible, not impossible.
    """
    return str(uuid.uuid4())


@dataclass(slots=True)
class Contact:
    """A single entry in the user's address book."""

    id: str
    name: str
    phone_number: str
    photo: Optional[str] = None  # URI of an image outside the store

    @classmethod
    def new(
        cls,
        name: str,
        phone_number: str,
        photo: Optional[str] = None,
    ) -> "Contact":
        """Build a contact with a freshly generated id."""
        return cls(
            id=generate_contact_id(),
            name=name,
            phone_number=phone_number,
            photo=photo,
        )

    def with_changes(self, **changes: Any) -> "Contact":
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the on-disk JSON shape."""
        return {
            "id": self.id,
            "name": self.name,
            "phoneNumber": self.phone_number,
            "photo": self.photo,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Contact":
        """Create from the on-disk JSON shape.

        Raises:
            KeyError: if ``id``, ``name`` or ``phoneNumber`` is missing.
            TypeError: if ``data`` is not a mapping.
        """
        if not isinstance(data, dict):
            raise TypeError(f"Expected a JSON object, got {type(data).__name__}")
        return cls(
            id=data["id"],
            name=data["name"],
            phone_number=data["phoneNumber"],
            photo=data.get("photo"),
        )
