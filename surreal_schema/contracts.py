# ============================================================================
# BASE CONTRACTS & ENUMS
# ============================================================================
# STATUS: Foundation - Core enums shared by models, lowering and emitter
# PURPOSE: Define type classifications, table modes and statement policies
# CREATED: 18 OCT 2026
# EXPORTS: SurrealType, TableType, ExistsPolicy, MissingPolicy, StatementKind, IssueCode
# DEPENDENCIES: enum
# ============================================================================
"""
Base contracts for the schema compiler.

These enums cross every boundary of the package:
- Schema nodes (surreal type classification)
- Lowering engine (type atoms)
- Statement emitter (table modes, existence policies)
- Validation (issue codes)
"""

from enum import Enum


# ============================================================================
# TYPE CLASSIFICATION
# ============================================================================

class SurrealType(str, Enum):
    """
    SurrealQL type atoms a schema node can lower to.

    Leaf nodes declare one of these directly; composite nodes
    build parametrized atoms (array<T>, record<t>) from them.
    """
    ANY = "any"
    NONE = "none"
    NULL = "null"
    BOOL = "bool"
    STRING = "string"
    NUMBER = "number"
    INT = "int"
    FLOAT = "float"
    DATETIME = "datetime"
    UUID = "uuid"
    RECORD = "record"
    OBJECT = "object"
    ARRAY = "array"


# ============================================================================
# TABLE ENUMS
# ============================================================================

class TableType(str, Enum):
    """
    Storage mode of a table.

    ANY accepts both normal records and graph edges.
    """
    ANY = "any"
    NORMAL = "normal"
    RELATION = "relation"


class ExistsPolicy(str, Enum):
    """Behavior of DEFINE statements when the resource already exists."""
    ERROR = "error"            # Plain DEFINE, engine raises
    IGNORE = "ignore"          # DEFINE ... IF NOT EXISTS
    OVERWRITE = "overwrite"    # DEFINE ... OVERWRITE


class MissingPolicy(str, Enum):
    """Behavior of REMOVE statements when the resource does not exist."""
    ERROR = "error"
    IGNORE = "ignore"          # REMOVE ... IF EXISTS


class StatementKind(str, Enum):
    """Statements the emitter can produce for a table."""
    DEFINE = "define"
    REMOVE = "remove"
    INFO = "info"
    STRUCTURE = "structure"


# ============================================================================
# VALIDATION ENUMS
# ============================================================================

class IssueCode(str, Enum):
    """Machine-readable kinds of validation issues."""
    INVALID_TYPE = "invalid_type"
    INVALID_VALUE = "invalid_value"
    INVALID_FORMAT = "invalid_format"
    INVALID_UNION = "invalid_union"
    INVALID_KEY = "invalid_key"
    UNRECOGNIZED_KEYS = "unrecognized_keys"
    TOO_SMALL = "too_small"
    TOO_BIG = "too_big"
    CUSTOM = "custom"


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "SurrealType",
    "TableType",
    "ExistsPolicy",
    "MissingPolicy",
    "StatementKind",
    "IssueCode",
]
