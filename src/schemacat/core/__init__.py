"""Core schemacat functionality."""

from schemacat.core.discovery import (
    SourceType,
    detect_source_type,
    discover_schema_files,
)
from schemacat.core.extractor import extract_tables, register_extractor
from schemacat.core.revision import git_revision, no_revision
from schemacat.core.scanner import ScanResult, SchemaScanner

__all__ = [
    "SourceType",
    "detect_source_type",
    "discover_schema_files",
    "extract_tables",
    "register_extractor",
    "git_revision",
    "no_revision",
    "ScanResult",
    "SchemaScanner",
]
