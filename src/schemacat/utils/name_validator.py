"""Name validation utilities for schemacat.

Project names become directory names inside the catalog, so they must be
safe for filesystem operations.
"""

import re


# Windows device names that cannot be used as directory names
RESERVED_NAMES = {
    "con",
    "prn",
    "aux",
    "nul",
    "com1",
    "com2",
    "com3",
    "com4",
    "com5",
    "com6",
    "com7",
    "com8",
    "com9",
    "lpt1",
    "lpt2",
    "lpt3",
    "lpt4",
    "lpt5",
    "lpt6",
    "lpt7",
    "lpt8",
    "lpt9",
}

MAX_NAME_LENGTH = 255


class InvalidNameError(ValueError):
    """Raised when a name doesn't meet validation requirements."""

    pass


def validate_name(name: str, entity_type: str = "project") -> None:
    """Validate that a name can be used as a catalog directory name.

    Valid names must:
    - Be at least 1 character long
    - Not exceed 255 characters (filesystem limit)
    - Not be "." or contain path separators or ".." sequences
    - Not contain control characters
    - Not be a reserved device name

    Args:
        name: The name to validate
        entity_type: Type of entity for error messages

    Raises:
        InvalidNameError: If the name is invalid
    """
    if not name:
        raise InvalidNameError(f"{entity_type.capitalize()} name cannot be empty")

    if len(name) > MAX_NAME_LENGTH:
        raise InvalidNameError(
            f"{entity_type.capitalize()} name cannot exceed {MAX_NAME_LENGTH} characters"
        )

    if name == "." or ".." in name or "/" in name or "\\" in name:
        raise InvalidNameError(
            f"Security violation: {entity_type} name '{name}' contains "
            f"forbidden path traversal characters"
        )

    if any(ord(c) < 32 for c in name):
        raise InvalidNameError(
            f"Security violation: {entity_type} name contains invalid control characters"
        )

    if name.lower() in RESERVED_NAMES:
        raise InvalidNameError(
            f"'{name}' is a reserved name and cannot be used as a {entity_type} name"
        )


def clean_name(name: str) -> str:
    """Clean a name to make it valid if possible.

    Replaces path separators and control characters with dashes and
    collapses ".." sequences. The result should still be validated with
    validate_name() before use.
    """
    cleaned = re.sub(r"[/\\\x00-\x1f]", "-", name)
    cleaned = re.sub(r"\.{2,}", ".", cleaned)
    return cleaned.strip("-. ")


def is_valid_name(name: str) -> bool:
    """Check if a name is valid without raising an exception."""
    try:
        validate_name(name)
        return True
    except InvalidNameError:
        return False
