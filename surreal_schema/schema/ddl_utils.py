# ============================================================================
# DDL UTILITIES
# ============================================================================
# STATUS: Core - Shared SurrealQL generation helpers
# PURPOSE: Type mapping, identifier/literal escaping and clause builders
# CREATED: 18 OCT 2026
# EXPORTS: NUMBER_FORMAT_TYPES, BIGINT_FORMAT_TYPES, get_number_type, escape_ident,
#          escape_literal, field_path, ClauseBuilder
# DEPENDENCIES: None (stdlib only)
# ============================================================================
"""
DDL Utilities - Shared SurrealQL Generation Patterns.

Every identifier that reaches a statement goes through escape_ident and
every value through escape_literal; statements are never assembled from
unescaped user text.

Usage:
    from surreal_schema.schema.ddl_utils import escape_ident, ClauseBuilder

    escape_ident("user")          # user
    escape_ident("user-profile")  # `user-profile`
    ClauseBuilder.exists(ExistsPolicy.IGNORE)   # " IF NOT EXISTS"
"""

import json
import re
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Optional, Sequence, Union
from uuid import UUID

from surreal_schema.contracts import ExistsPolicy, MissingPolicy, SurrealType
from surreal_schema.errors import UnsupportedFormatError
from surreal_schema.models.record_id import RecordId


# ============================================================================
# TYPE MAPPING
# ============================================================================

NUMBER_FORMAT_TYPES = {
    None: SurrealType.NUMBER,
    "safeint": SurrealType.INT,
    "int32": SurrealType.INT,
    "uint32": SurrealType.INT,
    "float32": SurrealType.FLOAT,
    "float64": SurrealType.FLOAT,
}

BIGINT_FORMAT_TYPES = {
    None: SurrealType.INT,
    "int64": SurrealType.INT,
    "uint64": SurrealType.INT,
}


def get_number_type(kind: str, fmt: Optional[str]) -> SurrealType:
    """
    Map a number or bigint sub-format to its SurrealQL type.

    Args:
        kind: "number" or "bigint"
        fmt: Sub-format name, or None for the plain type

    Returns:
        SurrealType atom

    Raises:
        UnsupportedFormatError: If the format has no SurrealQL equivalent
    """
    table = BIGINT_FORMAT_TYPES if kind == "bigint" else NUMBER_FORMAT_TYPES
    if fmt not in table:
        raise UnsupportedFormatError(kind, str(fmt))
    return table[fmt]


# ============================================================================
# ESCAPING
# ============================================================================

_PLAIN_IDENT = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def escape_ident(name: str) -> str:
    """Backtick-quote an identifier unless it is a plain word."""
    if _PLAIN_IDENT.match(name):
        return name
    escaped = name.replace("\\", "\\\\").replace("`", "\\`")
    return f"`{escaped}`"


def _json_default(value: Any) -> Any:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, UUID):
        return str(value)
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, (set, frozenset, tuple)):
        return list(value)
    if isinstance(value, RecordId):
        return str(value)
    raise TypeError(f"Value of type {type(value).__name__} has no SurrealQL literal")


def escape_literal(value: Any) -> str:
    """
    Render a value as a SurrealQL literal.

    Strings are double-quoted with JSON escaping; containers render as
    JSON arrays/objects. None renders as NULL.

    Raises:
        TypeError: If the value has no literal form
    """
    if value is None:
        return "NULL"
    return json.dumps(value, ensure_ascii=False, default=_json_default)


def field_path(segments: Sequence[Union[str, int]]) -> str:
    """Join path segments into a dotted field name, escaping each part."""
    return ".".join("*" if s == "*" else escape_ident(str(s)) for s in segments)


# ============================================================================
# CLAUSE BUILDERS
# ============================================================================

class ClauseBuilder:
    """
    Builders for the optional clauses shared by DEFINE/REMOVE statements.

    Each returns the clause with its leading space, or "" when absent.
    """

    @staticmethod
    def exists(policy: ExistsPolicy) -> str:
        if policy is ExistsPolicy.IGNORE:
            return " IF NOT EXISTS"
        if policy is ExistsPolicy.OVERWRITE:
            return " OVERWRITE"
        return ""

    @staticmethod
    def missing(policy: MissingPolicy) -> str:
        return " IF EXISTS" if policy is MissingPolicy.IGNORE else ""

    @staticmethod
    def comment(text: Optional[str]) -> str:
        return f" COMMENT {escape_literal(text)}" if text else ""

    @staticmethod
    def default(value: Any) -> str:
        return f" DEFAULT {escape_literal(value)}"

    @staticmethod
    def tables(keyword: str, names: Optional[Sequence[str]]) -> str:
        """FROM/TO clause of a relation table; "" means any table."""
        if not names:
            return ""
        return f" {keyword} {' | '.join(escape_ident(n) for n in names)}"


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "NUMBER_FORMAT_TYPES",
    "BIGINT_FORMAT_TYPES",
    "get_number_type",
    "escape_ident",
    "escape_literal",
    "field_path",
    "ClauseBuilder",
]
