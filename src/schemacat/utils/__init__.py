"""Utility modules for schemacat."""

from schemacat.utils.name_validator import (
    validate_name,
    clean_name,
    is_valid_name,
    InvalidNameError,
)

__all__ = [
    "validate_name",
    "clean_name",
    "is_valid_name",
    "InvalidNameError",
]
