"""Pure formatting and validation helpers for contact fields."""
from __future__ import annotations

import re
import unicodedata
from typing import Tuple

PHONE_NUMBER_LENGTH = 7

# ASCII digits only; ``\D`` would also keep non-ASCII decimal digits.
_NON_DIGIT = re.compile(r"[^0-9]")


def strip_non_digits(phone: str) -> str:
    return _NON_DIGIT.sub("", phone)


def clean_phone_number(phone: str) -> str:
    """Remove non-numeric characters and cap the result at 7 digits."""
    return strip_non_digits(phone)[:PHONE_NUMBER_LENGTH]


def format_phone_number(phone: str) -> str:
    """Format a phone number as ``XXX XXXX``.

    Inputs with three or fewer digits are returned as bare digits so partial
    input can be displayed while it is being typed.
    """
    cleaned = strip_non_digits(phone)
    if len(cleaned) <= 3:
        return cleaned
    return f"{cleaned[:3]} {cleaned[3:PHONE_NUMBER_LENGTH]}"


def validate_phone_number(phone: str) -> bool:
    """Return True when the number has exactly 7 digits after cleaning."""
    return len(strip_non_digits(phone)) == PHONE_NUMBER_LENGTH


def get_initials(name: str) -> str:
    """First letter of each word, uppercased; ``"?"`` for a blank name."""
    if not name.strip():
        return "?"
    return "".join(part[0] for part in name.split()).upper()


def name_sort_key(name: str) -> Tuple[str, str, str]:
    """Collation key approximating a locale-aware string comparison.

    Names compare first on their letters ignoring accents and case, then on
    accents, then on case with lowercase ordered before uppercase.
    """
    decomposed = unicodedata.normalize("NFKD", name)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return (base.casefold(), decomposed.casefold(), name.swapcase())
