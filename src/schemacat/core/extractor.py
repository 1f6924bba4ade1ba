"""Schema extraction from source text.

Only SQL ``CREATE TABLE`` statements are understood. Other source types are
discovered but yield no tables until an extractor is registered for them.
"""

import logging
import re
from typing import Callable, Dict, List, Optional

from schemacat.core.discovery import SourceType
from schemacat.models import Column, Table

logger = logging.getLogger(__name__)

Extractor = Callable[[str], List[Table]]

QUOTE_CHARS = "'\"`"
IDENTIFIER_QUOTES = "`\"[]"

CREATE_TABLE_PATTERN = re.compile(
    r"CREATE\s+TABLE(?:\s+IF\s+NOT\s+EXISTS)?\s+"
    r"(?:`(\w+)`|\"(\w+)\"|(\w+))\s*\((.*?)\)\s*;",
    re.IGNORECASE | re.DOTALL,
)

CONSTRAINT_PATTERN = re.compile(
    r"^(?:PRIMARY\s+KEY|FOREIGN\s+KEY|UNIQUE|INDEX|KEY|CONSTRAINT|CHECK)\b",
    re.IGNORECASE,
)

NOT_NULL_PATTERN = re.compile(r"\bNOT\s+NULL\b", re.IGNORECASE)
PRIMARY_KEY_PATTERN = re.compile(r"\bPRIMARY\s+KEY\b", re.IGNORECASE)
UNIQUE_PATTERN = re.compile(r"\bUNIQUE\b", re.IGNORECASE)


def strip_comments(sql: str) -> str:
    """Remove ``--`` and ``/* */`` comments that sit outside quoted text."""
    out = []
    i = 0
    quote: Optional[str] = None
    length = len(sql)
    while i < length:
        ch = sql[i]
        if quote:
            out.append(ch)
            if ch == quote:
                quote = None
            i += 1
        elif ch in QUOTE_CHARS:
            quote = ch
            out.append(ch)
            i += 1
        elif sql.startswith("--", i):
            end = sql.find("\n", i)
            i = length if end == -1 else end
        elif sql.startswith("/*", i):
            end = sql.find("*/", i + 2)
            i = length if end == -1 else end + 2
            out.append(" ")
        else:
            out.append(ch)
            i += 1
    return "".join(out)


def split_top_level(text: str, separator: Optional[str] = ",") -> List[str]:
    """Split text on a separator, ignoring separators nested in parentheses
    or quoted literals.

    With ``separator=None`` the text is split on runs of whitespace.

    Args:
        text: Text to split
        separator: Single separator character, or None for whitespace

    Returns:
        Non-empty, stripped parts
    """
    parts: List[str] = []
    current: List[str] = []
    depth = 0
    quote: Optional[str] = None

    for ch in text:
        if quote:
            current.append(ch)
            if ch == quote:
                quote = None
            continue
        if ch in QUOTE_CHARS:
            quote = ch
        elif ch == "(":
            depth += 1
        elif ch == ")":
            depth = max(depth - 1, 0)
        elif depth == 0 and (
            ch == separator if separator is not None else ch.isspace()
        ):
            parts.append("".join(current))
            current = []
            continue
        current.append(ch)

    parts.append("".join(current))
    return [part.strip() for part in parts if part.strip()]


def mask_literals(text: str) -> str:
    """Blank out the contents of single-quoted literals.

    Keyword checks then ignore text such as ``DEFAULT 'NOT NULL'``.
    """
    return re.sub(r"'(?:[^']|'')*'", "''", text)


def is_constraint_clause(fragment: str) -> bool:
    """Return True if a body fragment is a table constraint, not a column."""
    return CONSTRAINT_PATTERN.match(fragment.strip()) is not None


def parse_column(fragment: str) -> Optional[Column]:
    """Parse one column definition fragment.

    Args:
        fragment: Text such as ``email VARCHAR(255) NOT NULL UNIQUE``

    Returns:
        Column, or None if the fragment is not a column definition
    """
    if is_constraint_clause(fragment):
        return None

    tokens = split_top_level(fragment, separator=None)
    if len(tokens) < 2:
        return None

    name = tokens[0].strip(IDENTIFIER_QUOTES)
    if not name:
        return None

    modifiers = mask_literals(" ".join(tokens[2:]))
    primary_key = PRIMARY_KEY_PATTERN.search(modifiers) is not None
    nullable = not (primary_key or NOT_NULL_PATTERN.search(modifiers))

    default = None
    for i, token in enumerate(tokens[2:-1], start=2):
        if token.upper() == "DEFAULT":
            default = tokens[i + 1]
            break

    return Column(
        name=name,
        type=tokens[1],
        nullable=nullable,
        primary_key=primary_key,
        unique=UNIQUE_PATTERN.search(modifiers) is not None,
        default=default,
    )


def parse_columns(body: str, table_name: str = "") -> List[Column]:
    """Parse the body of a CREATE TABLE statement into columns.

    Constraint clauses are skipped. When a column name repeats, the first
    declaration wins.
    """
    columns: List[Column] = []
    seen = set()
    for fragment in split_top_level(body):
        column = parse_column(fragment)
        if column is None:
            continue
        if column.name in seen:
            logger.debug(
                f"Ignoring duplicate column '{column.name}' in table '{table_name}'"
            )
            continue
        seen.add(column.name)
        columns.append(column)
    return columns


def parse_sql_schema(content: str) -> List[Table]:
    """Extract tables from SQL ``CREATE TABLE`` statements.

    Args:
        content: SQL source text

    Returns:
        Tables in the order they appear. Tables whose body holds only
        constraints are returned with no columns.
    """
    tables: List[Table] = []
    for match in CREATE_TABLE_PATTERN.finditer(strip_comments(content)):
        name = match.group(1) or match.group(2) or match.group(3)
        columns = parse_columns(match.group(4), name)
        tables.append(Table(name=name, columns=columns))
    return tables


EXTRACTORS: Dict[SourceType, Extractor] = {
    SourceType.SQL: parse_sql_schema,
}


def register_extractor(source_type: SourceType, extractor: Extractor) -> None:
    """Register an extractor for a source type, replacing any existing one."""
    EXTRACTORS[SourceType(source_type)] = extractor


def extract_tables(content: str, source_type: SourceType) -> List[Table]:
    """Extract table definitions from source text.

    Never raises on malformed input: content that cannot be understood
    yields no tables.

    Args:
        content: Raw file content
        source_type: Declared kind of source

    Returns:
        Extracted tables (empty for source types without an extractor)
    """
    extractor = EXTRACTORS.get(SourceType(source_type))
    if extractor is None:
        logger.debug(f"No extractor for source type '{source_type}'")
        return []
    try:
        return extractor(content)
    except ValueError as e:
        logger.debug(f"Extraction failed for {source_type} source: {e}")
        return []
