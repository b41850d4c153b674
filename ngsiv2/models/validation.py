"""Field syntax and value restrictions imposed by the context broker.

See the broker documentation on forbidden characters and field syntax
restrictions: ids, types and attribute names must be 1-256 characters
without whitespace, control characters or ``& ? / #``; free-text values
must not contain ``< > " ' = ; ( )``.
"""

import unicodedata

from .errors import AttributeNameError, FieldSyntaxError

INVALID_CHARS: frozenset[str] = frozenset("<>\"'=;()")
INVALID_FIELD_CHARS: frozenset[str] = frozenset("&?/#")
RESERVED_ATTRIBUTE_NAMES: tuple[str, ...] = (
    "id",
    "type",
    "geo:distance",
    "dateCreated",
    "dateModified",
)

MIN_FIELD_LENGTH = 1
MAX_FIELD_LENGTH = 256


def _is_control(char: str) -> bool:
    return unicodedata.category(char) == "Cc"


def is_valid_string(value: str) -> bool:
    """Check whether a value contains none of the forbidden characters."""
    return not any(char in INVALID_CHARS for char in value)


def sanitize_string(value: str) -> str:
    """Remove every forbidden character from a value."""
    return "".join(char for char in value if char not in INVALID_CHARS)


def is_valid_field_syntax(value: str) -> bool:
    """Check whether an id, type or attribute name respects field syntax."""
    if not MIN_FIELD_LENGTH <= len(value) <= MAX_FIELD_LENGTH:
        return False
    for char in value:
        if _is_control(char) or char.isspace() or char in INVALID_FIELD_CHARS:
            return False
    return True


def is_valid_attribute_name(name: str) -> bool:
    """Check whether a name can be used for an ordinary attribute."""
    return is_valid_field_syntax(name) and name not in RESERVED_ATTRIBUTE_NAMES


def validate_field_syntax(value: str) -> str:
    """Return the value unchanged or raise FieldSyntaxError."""
    if not is_valid_field_syntax(value):
        raise FieldSyntaxError(value)
    return value


def validate_attribute_name(name: str) -> str:
    """Return the name unchanged or raise FieldSyntaxError/AttributeNameError."""
    validate_field_syntax(name)
    if name in RESERVED_ATTRIBUTE_NAMES:
        raise AttributeNameError(name)
    return name
