"""Symbol identifier generation.

Turns arbitrary file name stems into identifiers that are safe to use as XML
ids, CSS selectors and module keys.
"""

import re

from svg_icon_sprite.constants import IDENTIFIER_PREFIX, MAX_IDENTIFIER_LENGTH
from svg_icon_sprite.exceptions import EmptyIdentifierError

_INVALID_CHARS = re.compile(r"[^A-Za-z0-9_-]+")
_INVALID_START = re.compile(r"^[0-9-]")


def to_valid_id(raw: str) -> str:
    """Convert a raw string into a valid symbol identifier.

    Steps are applied in order: trim whitespace, collapse every run of
    characters outside ``[A-Za-z0-9_-]`` into one hyphen, prefix ``id-`` when
    the result starts with a digit or hyphen, truncate to 64 characters and
    strip a single trailing hyphen.

    Args:
        raw: The raw input, usually a file name without extension.

    Returns:
        The sanitized identifier.

    Raises:
        EmptyIdentifierError: If nothing usable remains of the input.
    """
    sanitized = _INVALID_CHARS.sub("-", raw.strip())

    if _INVALID_START.match(sanitized):
        sanitized = IDENTIFIER_PREFIX + sanitized

    if not sanitized:
        raise EmptyIdentifierError("Failed to generate ID for symbol", {"input": raw})

    sanitized = sanitized[:MAX_IDENTIFIER_LENGTH]

    if sanitized.endswith("-"):
        sanitized = sanitized[:-1]

    return sanitized
