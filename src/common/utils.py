import re

from ulid import ULID

ULID_PATTERN = re.compile(r"^[0-9A-HJKMNP-TV-Z]{26}$")


def new_ulid() -> str:
    """Generate a new ULID as its canonical 26-character string."""
    return str(ULID())


def is_valid_ulid(value: object) -> bool:
    """Check whether a value is a canonical (uppercase Crockford base32) ULID string."""
    return isinstance(value, str) and bool(ULID_PATTERN.match(value))
